# core/export_service.py
"""Export orchestration: format selection, stream priming and failure mapping."""

import logging
from datetime import datetime
from typing import Callable, Dict, Iterable, Iterator, Optional, Union

from rich.progress import Progress

from ..config import Config
from ..exporters import BaseExporter, ExcelExporter, JSONExporter, XMLExporter
from .exceptions import ExportError, SerializationError, UnsupportedFormatError
from .types import ExportFailure, ExportFormat, ExportResult, FailureKind, ProductRecord

logger = logging.getLogger(__name__)

RecordSource = Union[Iterable[ProductRecord], Callable[[], Iterable[ProductRecord]]]


class ExportService:
    """Turns a record source into a streamed export or a tagged failure."""

    def __init__(
            self,
            include_details: bool = False,
            chunk_size: int = 500,
            default_currency: str = "USD"
    ):
        """Initialize one exporter per supported format."""
        options = dict(
            include_details=include_details,
            chunk_size=chunk_size,
            default_currency=default_currency,
        )
        self.exporters: Dict[ExportFormat, BaseExporter] = {
            ExportFormat.JSON: JSONExporter(**options),
            ExportFormat.XLSX: ExcelExporter(**options),
            ExportFormat.XML: XMLExporter(**options),
        }

    @classmethod
    def from_config(cls, config: Config) -> "ExportService":
        return cls(
            include_details=config.export_include_details,
            chunk_size=config.export_chunk_size,
            default_currency=config.default_currency,
        )

    def get_exporter(self, requested_format: str) -> BaseExporter:
        """
        Resolve the exporter for a format name.

        Raises:
            UnsupportedFormatError: Format is not json, xlsx (xls) or xml
        """
        export_format = ExportFormat.parse(requested_format)
        if export_format is None:
            raise UnsupportedFormatError(str(requested_format))
        return self.exporters[export_format]

    def export(
            self,
            requested_format: str,
            source: RecordSource,
            now: Optional[datetime] = None
    ) -> ExportResult:
        """
        Start an export.

        The source is only read once the format is known to be supported.
        The first chunk is produced eagerly so encoder and source errors
        surface as a failure instead of a broken stream.

        Args:
            requested_format: json, xlsx (or xls) or xml
            source: Records, or a callable returning them
            now: Invocation time used in the filename

        Returns:
            ExportResult holding either the stream or the failure
        """
        export_format = ExportFormat.parse(requested_format)
        if export_format is None:
            error = UnsupportedFormatError(str(requested_format))
            logger.warning(error.message)
            return ExportResult(failure=ExportFailure(
                kind=FailureKind.UNSUPPORTED_FORMAT,
                message=error.message,
                status_code=error.status_code,
            ))

        exporter = self.exporters[export_format]
        try:
            records = source() if callable(source) else source
            stream = exporter.stream(records)
            first_chunk = next(stream, None)
        except Exception as e:
            logger.error(f"{export_format.value} export failed: {e}", exc_info=True)
            return ExportResult(format=export_format, failure=ExportFailure(
                kind=FailureKind.SERIALIZATION,
                message=str(e) or type(e).__name__,
                status_code=self._status_hint(e),
            ))

        return ExportResult(
            format=export_format,
            stream=self._deliver(stream, first_chunk, export_format),
            content_type=exporter.content_type,
            filename=exporter.get_filename(now),
        )

    def export_to_file(
            self,
            requested_format: str,
            source: RecordSource,
            output_dir: str,
            progress: Optional[Progress] = None
    ) -> str:
        """
        Write an export to disk.

        Raises:
            UnsupportedFormatError: Format is not supported
            SerializationError: Source or encoder failed
        """
        exporter = self.get_exporter(requested_format)
        try:
            records = source() if callable(source) else source
            return exporter.export(records, output_dir, progress=progress)
        except ExportError:
            raise
        except Exception as e:
            raise SerializationError(str(e) or type(e).__name__, self._status_hint(e)) from e

    @staticmethod
    def _deliver(
            stream: Iterator[bytes],
            first_chunk: Optional[bytes],
            export_format: ExportFormat
    ) -> Iterator[bytes]:
        """
        Yield the primed chunk followed by the rest of the stream.

        Once headers are sent an error can no longer change the status,
        so it is logged and the stream ends. Closing this generator (client
        disconnect) closes the exporter stream and releases its writer.
        """
        sent = 0
        try:
            if first_chunk is not None:
                yield first_chunk
                sent += len(first_chunk)
            for chunk in stream:
                yield chunk
                sent += len(chunk)
        except Exception as e:
            logger.error(
                f"{export_format.value} export aborted after {sent} bytes: {e}",
                exc_info=True
            )
        finally:
            stream.close()

    @staticmethod
    def _status_hint(error: Exception) -> Optional[int]:
        status_code = getattr(error, "status_code", None)
        if isinstance(status_code, int) and status_code > 0:
            return status_code
        return None
