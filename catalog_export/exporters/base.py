# exporters/base.py
"""Base exporter interface."""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, Iterator, List, Optional

from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from rich.progress import Progress, TaskID

from ..core.types import ProductRecord
from ..utils.date_manager import DateManager


@dataclass(frozen=True)
class ExportField:
    """A serialized product field: output key, spreadsheet label and width."""
    key: str
    label: str
    width: int


BASE_FIELDS = (
    ExportField("id", "ID", 10),
    ExportField("name", "Name", 25),
    ExportField("description", "Description", 60),
    ExportField("price", "Price", 12),
    ExportField("priceCurrency", "Currency", 10),
)

DETAIL_FIELDS = (
    ExportField("addedTime", "Added Time", 20),
    ExportField("lastEditTime", "Last Edit", 20),
    ExportField("active", "Active", 10),
    ExportField("categories", "Categories", 60),
    ExportField("attributes", "Attributes", 60),
)

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def strip_control_characters(value: Any) -> Any:
    """Drop control characters that XML 1.0 and worksheets cannot hold; non-strings pass through."""
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


class BaseExporter(ABC):
    """Abstract base class for product exporters.

    Subclasses produce the serialized document as an iterator of byte
    chunks so the caller can start sending before the whole payload
    exists.
    """

    def __init__(
            self,
            include_details: bool = False,
            chunk_size: int = 500,
            default_currency: str = "USD"
    ):
        """
        Initialize exporter.

        Args:
            include_details: Append timestamps, active flag, categories and attributes
            chunk_size: Records serialized per yielded chunk
            default_currency: Currency code for records without one
        """
        self.include_details = include_details
        self.chunk_size = max(1, chunk_size)
        self.default_currency = default_currency

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Get file extension for this exporter."""
        pass

    @property
    @abstractmethod
    def content_type(self) -> str:
        """Get MIME type of the produced document."""
        pass

    @abstractmethod
    def stream(
            self,
            records: Iterable[ProductRecord],
            progress: Optional[Progress] = None
    ) -> Iterator[bytes]:
        """
        Serialize records lazily.

        Args:
            records: Product records in output order
            progress: Optional progress tracker

        Returns:
            Iterator of encoded byte chunks
        """
        pass

    @property
    def fields(self) -> List[ExportField]:
        """Fields written for every record, in output order."""
        if self.include_details:
            return list(BASE_FIELDS + DETAIL_FIELDS)
        return list(BASE_FIELDS)

    def record_to_dict(self, record: ProductRecord) -> Dict[str, Any]:
        """
        Project a record onto the export fields.

        Categories and attributes are returned as lists; each format
        decides how to render them.
        """
        data = {
            "id": record.id,
            "name": record.name,
            "description": record.description,
            "price": record.price,
            "priceCurrency": record.price_currency or self.default_currency,
        }
        if self.include_details:
            data["addedTime"] = self._format_time(record.added_time)
            data["lastEditTime"] = self._format_time(record.last_edit_time)
            data["active"] = bool(record.active)
            data["categories"] = [c for c in record.categories if c is not None]
            data["attributes"] = [
                f"{name}: {value}" for name, value in record.attributes if name is not None
            ]
        return data

    def get_filename(self, now: Optional[datetime] = None) -> str:
        """Download filename stamped with the export invocation time."""
        return DateManager.format_export_filename(self.file_extension, now)

    def get_full_path(self, output_dir: str, filename: str) -> str:
        """
        Get full file path with extension.

        Args:
            output_dir: Target directory
            filename: Base filename

        Returns:
            Complete file path
        """
        return os.path.join(output_dir, f"{filename}.{self.file_extension}")

    def export(
            self,
            records: Iterable[ProductRecord],
            output_dir: str,
            filename: Optional[str] = None,
            progress: Optional[Progress] = None
    ) -> str:
        """
        Write the serialized records to a file.

        Args:
            records: Product records to export
            output_dir: Directory for the exported file
            filename: Base filename (without extension), timestamped by default
            progress: Optional progress tracker

        Returns:
            Full path to exported file
        """
        os.makedirs(output_dir, exist_ok=True)
        if filename is None:
            filename = os.path.splitext(self.get_filename())[0]
        filepath = self.get_full_path(output_dir, filename)

        with open(filepath, "wb") as f:
            for chunk in self.stream(records, progress):
                f.write(chunk)

        return filepath

    @staticmethod
    def _format_time(value: Optional[datetime]) -> str:
        return value.strftime(TIME_FORMAT) if value else "N/A"

    @staticmethod
    def _add_task(
            progress: Optional[Progress],
            description: str,
            records: Iterable[ProductRecord]
    ) -> Optional[TaskID]:
        """Create a progress task sized to the records when their length is known."""
        if not progress:
            return None
        total = len(records) if hasattr(records, "__len__") else None
        return progress.add_task(description, total=total)

    @staticmethod
    def _remove_task(progress: Optional[Progress], task: Optional[TaskID]):
        if progress and task is not None:
            progress.remove_task(task)
