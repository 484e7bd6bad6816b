# exporters/json_exporter.py
"""JSON export implementation."""

import json
from typing import Any, Dict, Iterable, Iterator, Optional

from rich.progress import Progress

from ..core.types import ProductRecord
from .base import BaseExporter


class JSONExporter(BaseExporter):
    """Exports products as a compact JSON array, one chunk per batch of records."""

    @property
    def file_extension(self) -> str:
        """JSON file extension."""
        return "json"

    @property
    def content_type(self) -> str:
        return "application/json"

    def record_to_dict(self, record: ProductRecord) -> Dict[str, Any]:
        data = super().record_to_dict(record)
        if self.include_details:
            data["categories"] = ", ".join(data["categories"])
            data["attributes"] = ", ".join(data["attributes"])
        return data

    def encode(self, data: Dict[str, Any]) -> str:
        """Encode one object with stable key order and compact separators."""
        return json.dumps(
            data,
            ensure_ascii=False,
            separators=(",", ":"),
            default=str
        )

    def stream(
            self,
            records: Iterable[ProductRecord],
            progress: Optional[Progress] = None
    ) -> Iterator[bytes]:
        """
        Serialize records as a JSON array.

        The opening bracket is held back until the first batch is encoded
        so the first chunk already reflects whether the source is readable.
        """
        task = self._add_task(progress, "[yellow]Writing JSON", records)
        try:
            parts = ["["]
            pending = 0
            first = True

            for record in records:
                encoded = self.encode(self.record_to_dict(record))
                parts.append(encoded if first else "," + encoded)
                first = False
                pending += 1

                if pending >= self.chunk_size:
                    yield "".join(parts).encode("utf-8")
                    if progress and task is not None:
                        progress.advance(task, pending)
                    parts = []
                    pending = 0

            parts.append("]")
            yield "".join(parts).encode("utf-8")
            if progress and task is not None and pending:
                progress.advance(task, pending)
        finally:
            self._remove_task(progress, task)
