import json

from catalog_export.core import ProductRecord, record_from_dict
from catalog_export.exporters import JSONExporter


def export_bytes(exporter, records):
    return b"".join(exporter.stream(records))


def test_empty_records_export_empty_array():
    assert export_bytes(JSONExporter(), []) == b"[]"


def test_single_widget_exports_exact_document(widget):
    assert export_bytes(JSONExporter(), [widget]) == (
        b'[{"id":1,"name":"Widget","description":"A widget",'
        b'"price":"9.99","priceCurrency":"USD"}]'
    )


def test_records_keep_input_order_and_field_order(records):
    data = json.loads(export_bytes(JSONExporter(), records))

    assert [item["id"] for item in data] == [1, 2, 3]
    for item in data:
        assert list(item) == ["id", "name", "description", "price", "priceCurrency"]


def test_missing_currency_uses_default(records):
    data = json.loads(export_bytes(JSONExporter(default_currency="CZK"), records))

    assert data[2]["priceCurrency"] == "CZK"
    assert data[1]["priceCurrency"] == "EUR"


def test_round_trip_is_byte_identical(records):
    exporter = JSONExporter()
    first = export_bytes(exporter, records)

    parsed = [record_from_dict(item) for item in json.loads(first)]
    second = export_bytes(exporter, parsed)

    assert first == second


def test_chunked_output_matches_single_chunk(records):
    chunks = list(JSONExporter(chunk_size=1).stream(records))

    assert len(chunks) > 1
    assert b"".join(chunks) == export_bytes(JSONExporter(), records)


def test_first_chunk_contains_first_batch(records):
    first = next(JSONExporter(chunk_size=2).stream(records))

    assert first.startswith(b'[{"id":1')
    assert b'"id":2' in first
    assert b'"id":3' not in first


def test_records_violating_constraints_are_serialized():
    odd = ProductRecord(id=7, name="", description="x" * 20000, price=None, price_currency="TOOLONGCODE")

    data = json.loads(export_bytes(JSONExporter(), [odd]))

    assert data[0]["name"] == ""
    assert len(data[0]["description"]) == 20000
    assert data[0]["price"] is None
    assert data[0]["priceCurrency"] == "TOOLONGCODE"


def test_unicode_is_kept_verbatim():
    record = ProductRecord(id=1, name="Čaj", description="Zelený čaj", price="3.50", price_currency="CZK")

    output = export_bytes(JSONExporter(), [record])

    assert "Zelený čaj".encode("utf-8") in output


def test_details_append_extra_fields(records):
    data = json.loads(export_bytes(JSONExporter(include_details=True), records))

    assert list(data[2]) == [
        "id", "name", "description", "price", "priceCurrency",
        "addedTime", "lastEditTime", "active", "categories", "attributes",
    ]
    assert data[2]["categories"] == "Home, Clearance"
    assert data[2]["attributes"] == "Color: White"
    assert data[2]["active"] is False
    assert data[1]["lastEditTime"] == "N/A"
    assert data[1]["addedTime"] == "2024-12-07 10:23:27"
