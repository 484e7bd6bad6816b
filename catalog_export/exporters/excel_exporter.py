# exporters/excel_exporter.py
"""Excel export implementation."""

import tempfile
from typing import Any, Dict, Iterable, Iterator, List, Optional

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from rich.progress import Progress

from ..core.types import ProductRecord
from .base import BaseExporter, strip_control_characters

SHEET_NAME = "Products"

# spooled output stays in memory up to this size, then moves to disk
SPOOL_MAX_SIZE = 8 * 1024 * 1024
READ_CHUNK_SIZE = 64 * 1024

# list columns are left-aligned, everything else is centred
LEFT_ALIGNED_KEYS = {"categories", "attributes"}


class ExcelExporter(BaseExporter):
    """Export products to a single-sheet XLSX workbook."""

    @property
    def file_extension(self) -> str:
        """Excel file extension."""
        return "xlsx"

    @property
    def content_type(self) -> str:
        return "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

    def record_to_row(self, record: ProductRecord) -> Dict[str, Any]:
        """Map a record onto the spreadsheet column labels, dropping characters worksheets reject."""
        data = self.record_to_dict(record)
        if self.include_details:
            data["active"] = "Yes" if data["active"] else "No"
            data["categories"] = ", ".join(data["categories"])
            data["attributes"] = ", ".join(data["attributes"])
        return {f.label: strip_control_characters(data[f.key]) for f in self.fields}

    def stream(
            self,
            records: Iterable[ProductRecord],
            progress: Optional[Progress] = None
    ) -> Iterator[bytes]:
        """
        Build the workbook and stream it back in fixed-size chunks.

        XLSX is a zip container and openpyxl keeps the whole sheet in memory
        until it is saved, so this is a full-buffer export: the finished
        workbook goes to a spooled temporary file before the first byte is
        produced.
        """
        buffer = tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_SIZE)
        try:
            self._write_workbook(records, buffer, progress)
            buffer.seek(0)
            while True:
                chunk = buffer.read(READ_CHUNK_SIZE)
                if not chunk:
                    break
                yield chunk
        finally:
            buffer.close()

    def _write_workbook(
            self,
            records: Iterable[ProductRecord],
            buffer,
            progress: Optional[Progress]
    ):
        """Hand records to pandas in chunk_size batches on one sheet, then style it."""
        labels = [f.label for f in self.fields]
        task = self._add_task(progress, "[green]Writing Excel file", records)

        try:
            # Always use context manager for ExcelWriter so the workbook is saved
            with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
                rows: List[Dict[str, Any]] = []
                next_row = 0

                for record in records:
                    rows.append(self.record_to_row(record))
                    if len(rows) >= self.chunk_size:
                        next_row = self._write_rows(writer, rows, labels, next_row)
                        if progress and task is not None:
                            progress.advance(task, len(rows))
                        rows = []

                if rows or next_row == 0:
                    self._write_rows(writer, rows, labels, next_row)
                    if progress and task is not None and rows:
                        progress.advance(task, len(rows))

                self._style_sheet(writer.sheets[SHEET_NAME])
        finally:
            self._remove_task(progress, task)

    @staticmethod
    def _write_rows(
            writer: pd.ExcelWriter,
            rows: List[Dict[str, Any]],
            labels: List[str],
            start_row: int
    ) -> int:
        """Append rows below the previous batch; the first batch carries the header."""
        header = start_row == 0
        df = pd.DataFrame(rows, columns=labels)
        df.to_excel(
            writer,
            sheet_name=SHEET_NAME,
            index=False,
            header=header,
            startrow=start_row
        )
        return start_row + len(df) + (1 if header else 0)

    def _style_sheet(self, sheet):
        """Apply header and body styles and column widths."""
        header_font = Font(bold=True, color="FFFFFF", size=12)
        header_fill = PatternFill(fill_type="solid", start_color="333333", end_color="333333")
        header_alignment = Alignment(horizontal="center", vertical="center")

        body_font = Font(color="EEEEEE")
        body_fill = PatternFill(fill_type="solid", start_color="222222", end_color="222222")
        side = Side(style="thin", color="555555")
        body_border = Border(left=side, right=side, top=side, bottom=side)

        for index, export_field in enumerate(self.fields, start=1):
            letter = get_column_letter(index)
            sheet.column_dimensions[letter].width = export_field.width

            cell = sheet[f"{letter}1"]
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = header_alignment

            horizontal = "left" if export_field.key in LEFT_ALIGNED_KEYS else "center"
            body_alignment = Alignment(horizontal=horizontal)
            for (body_cell,) in sheet.iter_rows(min_row=2, min_col=index, max_col=index):
                body_cell.font = body_font
                body_cell.fill = body_fill
                body_cell.border = body_border
                body_cell.alignment = body_alignment
