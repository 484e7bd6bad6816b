import xml.etree.ElementTree as ET

from catalog_export.core import ProductRecord
from catalog_export.exporters import XMLExporter


def export_text(exporter, records):
    return b"".join(exporter.stream(records)).decode("utf-8")


def test_empty_records_export_self_closing_root():
    output = export_text(XMLExporter(), [])

    assert output.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert output.strip().endswith("<products/>")
    root = ET.fromstring(output.encode("utf-8"))
    assert root.tag == "products"
    assert len(root) == 0


def test_products_keep_input_order_and_field_order(records):
    root = ET.fromstring(export_text(XMLExporter(), records).encode("utf-8"))

    assert [product.findtext("id") for product in root] == ["1", "2", "3"]
    for product in root:
        assert [child.tag for child in product] == [
            "id", "name", "description", "price", "priceCurrency",
        ]


def test_widget_values(widget):
    root = ET.fromstring(export_text(XMLExporter(), [widget]).encode("utf-8"))
    product = root.find("product")

    assert product.findtext("name") == "Widget"
    assert product.findtext("description") == "A widget"
    assert product.findtext("price") == "9.99"
    assert product.findtext("priceCurrency") == "USD"


def test_special_characters_are_escaped(records):
    output = export_text(XMLExporter(), records)

    assert "Desk lamp &lt;LED&gt;" in output
    assert "Lamp &amp; arm" in output
    root = ET.fromstring(output.encode("utf-8"))
    assert root[2].findtext("name") == "Desk lamp <LED>"


def test_chunked_output_matches_single_chunk(records):
    chunks = list(XMLExporter(chunk_size=1).stream(records))

    assert len(chunks) > 1
    assert b"".join(chunks) == b"".join(XMLExporter().stream(records))


def test_details_render_nested_lists(records):
    root = ET.fromstring(export_text(XMLExporter(include_details=True), records).encode("utf-8"))
    lamp = root[2]

    assert [c.text for c in lamp.find("categories")] == ["Home", "Clearance"]
    assert [a.text for a in lamp.find("attributes")] == ["Color: White"]
    assert lamp.findtext("active") == "false"
    assert lamp.findtext("lastEditTime") == "2024-12-20 09:05:00"
    assert len(root[0].find("categories")) == 0


def test_control_characters_are_dropped():
    record = ProductRecord(
        id=1,
        name="Tab\x01bed",
        description="Line\x0bfeed\tand tab",
        price="1.00",
        categories=("Home\x02",),
        attributes=(("Color", "Red\x1f"),),
    )

    output = export_text(XMLExporter(include_details=True), [record])
    product = ET.fromstring(output.encode("utf-8")).find("product")

    assert product.findtext("name") == "Tabbed"
    assert product.findtext("description") == "Linefeed\tand tab"
    assert [c.text for c in product.find("categories")] == ["Home"]
    assert [a.text for a in product.find("attributes")] == ["Color: Red"]
