# core/types.py
"""Shared type definitions to avoid circular imports."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterator, Optional, Tuple


class ExportFormat(Enum):
    """Serialization targets supported by the exporter."""
    JSON = "json"
    XLSX = "xlsx"
    XML = "xml"

    @classmethod
    def parse(cls, value: str) -> Optional["ExportFormat"]:
        """Resolve a requested format name, accepting ``xls`` for spreadsheets."""
        if not isinstance(value, str):
            return None
        name = value.strip().lower()
        if name == "xls":
            name = "xlsx"
        for member in cls:
            if member.value == name:
                return member
        return None


class FailureKind(Enum):
    """Categorization of export failures for status mapping."""
    UNSUPPORTED_FORMAT = "unsupported_format"
    SERIALIZATION = "serialization"


@dataclass(frozen=True)
class ProductRecord:
    """Read-only projection of a product used for export."""
    id: int
    name: str
    description: str
    price: str
    price_currency: Optional[str] = None
    categories: Tuple[str, ...] = ()
    attributes: Tuple[Tuple[str, str], ...] = ()
    added_time: Optional[datetime] = None
    last_edit_time: Optional[datetime] = None
    active: bool = True


@dataclass
class ExportFailure:
    """Tagged failure returned instead of a stream."""
    kind: FailureKind
    message: str
    status_code: Optional[int] = None

    @property
    def http_status(self) -> int:
        """Status hint when set, otherwise the default for the failure kind."""
        if self.status_code:
            return self.status_code
        if self.kind == FailureKind.UNSUPPORTED_FORMAT:
            return 400
        return 500


@dataclass
class ExportResult:
    """Result of an export request: a byte stream or a failure."""
    format: Optional[ExportFormat] = None
    stream: Optional[Iterator[bytes]] = None
    content_type: Optional[str] = None
    filename: Optional[str] = None
    failure: Optional[ExportFailure] = None

    @property
    def success(self) -> bool:
        return self.failure is None

    @property
    def headers(self) -> dict:
        """Response headers describing the attachment."""
        if not self.filename:
            return {}
        return {"Content-Disposition": f'attachment; filename="{self.filename}"'}


@dataclass
class CleanResult:
    """Rows removed by the maintenance routine."""
    removed_categories: int = 0
    removed_attributes: int = 0
