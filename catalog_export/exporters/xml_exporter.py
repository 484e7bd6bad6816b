# exporters/xml_exporter.py
"""XML export implementation."""

import xml.etree.ElementTree as ET
from typing import Any, Iterable, Iterator, Optional

from rich.progress import Progress

from ..core.types import ProductRecord
from .base import BaseExporter, strip_control_characters

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

# list-valued fields become nested elements named after the singular form
NESTED_ITEM_TAGS = {
    "categories": "category",
    "attributes": "attribute",
}


class XMLExporter(BaseExporter):
    """Exports products as a <products> document with one <product> per record."""

    @property
    def file_extension(self) -> str:
        """XML file extension."""
        return "xml"

    @property
    def content_type(self) -> str:
        return "application/xml"

    def build_element(self, record: ProductRecord) -> ET.Element:
        """Build the <product> element with one child per export field."""
        product = ET.Element("product")
        data = self.record_to_dict(record)

        for export_field in self.fields:
            value = data[export_field.key]
            child = ET.SubElement(product, export_field.key)

            if export_field.key in NESTED_ITEM_TAGS:
                item_tag = NESTED_ITEM_TAGS[export_field.key]
                for item in value:
                    ET.SubElement(child, item_tag).text = strip_control_characters(str(item))
            else:
                child.text = self._to_text(value)

        return product

    def stream(
            self,
            records: Iterable[ProductRecord],
            progress: Optional[Progress] = None
    ) -> Iterator[bytes]:
        """
        Serialize records as an XML document.

        The root tag is only opened once the first record is seen so an
        empty catalog renders as a self-closing <products/>.
        """
        task = self._add_task(progress, "[cyan]Writing XML", records)
        try:
            parts = [XML_DECLARATION]
            pending = 0
            count = 0

            for record in records:
                if count == 0:
                    parts.append("<products>\n")
                element = self.build_element(record)
                parts.append("  " + ET.tostring(element, encoding="unicode") + "\n")
                count += 1
                pending += 1

                if pending >= self.chunk_size:
                    yield "".join(parts).encode("utf-8")
                    if progress and task is not None:
                        progress.advance(task, pending)
                    parts = []
                    pending = 0

            parts.append("</products>\n" if count else "<products/>\n")
            yield "".join(parts).encode("utf-8")
            if progress and task is not None and pending:
                progress.advance(task, pending)
        finally:
            self._remove_task(progress, task)

    @staticmethod
    def _to_text(value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        return strip_control_characters(str(value))
