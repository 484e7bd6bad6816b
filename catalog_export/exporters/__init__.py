# exporters/__init__.py
"""Product export components."""

from .base import BaseExporter, ExportField, BASE_FIELDS, DETAIL_FIELDS, strip_control_characters
from .excel_exporter import ExcelExporter
from .json_exporter import JSONExporter
from .xml_exporter import XMLExporter

__all__ = [
    "BaseExporter",
    "ExportField",
    "BASE_FIELDS",
    "DETAIL_FIELDS",
    "strip_control_characters",
    "ExcelExporter",
    "JSONExporter",
    "XMLExporter",
]
