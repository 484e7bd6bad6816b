# core/__init__.py
"""Core export components."""

from .exceptions import ExportError, SerializationError, UnsupportedFormatError
from .maintenance import DatabaseCleaner
from .repository import ProductRepository, record_from_dict
from .types import (
    CleanResult,
    ExportFailure,
    ExportFormat,
    ExportResult,
    FailureKind,
    ProductRecord,
)
from .validation import validate_product

__all__ = [
    'ExportError',
    'SerializationError',
    'UnsupportedFormatError',
    'DatabaseCleaner',
    'ProductRepository',
    'record_from_dict',
    'CleanResult',
    'ExportFailure',
    'ExportFormat',
    'ExportResult',
    'FailureKind',
    'ProductRecord',
    'validate_product',
]
