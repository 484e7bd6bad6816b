"""Catalog Export - streamed product exports (JSON, XLSX, XML) over HTTP."""

__version__ = "1.0.0"
__description__ = "Product catalog export service with streamed JSON, XLSX and XML downloads"

from .core.export_service import ExportService

__all__ = ['ExportService']
