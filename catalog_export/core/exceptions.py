# core/exceptions.py
"""Exceptions raised by the export pipeline."""

from typing import Optional


class ExportError(Exception):
    """Base class for export failures.

    ``status_code`` is an optional hint the HTTP layer uses verbatim
    instead of the default status for the failure.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UnsupportedFormatError(ExportError):
    """Requested export format is not known."""

    def __init__(self, requested: str):
        super().__init__(f"Unsupported export format: {requested}", status_code=400)
        self.requested = requested


class SerializationError(ExportError):
    """An encoder or the record source failed while producing output."""
