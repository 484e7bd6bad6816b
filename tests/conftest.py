import io
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from rich.console import Console

from catalog_export.api import create_app
from catalog_export.config import Config
from catalog_export.core import ProductRecord, ProductRepository
from catalog_export.core.export_service import ExportService
from catalog_export.utils import ProgressTracker

API_TOKEN = "test-api-token"

ENV_KEYS = (
    "APP_ENV",
    "MAINTENANCE_MODE",
    "DEFAULT_CURRENCY",
    "EXPORT_CHUNK_SIZE",
    "EXPORT_INCLUDE_DETAILS",
    "EXPORT_DIR",
    "LOG_LEVEL",
)


class CountingRepository(ProductRepository):
    """Repository that records how often the export read it."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.find_all_calls = 0

    def find_all(self):
        self.find_all_calls += 1
        return super().find_all()


class CountingExportService(ExportService):
    """Export service that records how often it was invoked."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = 0

    def export(self, *args, **kwargs):
        self.calls += 1
        return super().export(*args, **kwargs)


@pytest.fixture
def widget():
    return ProductRecord(
        id=1,
        name="Widget",
        description="A widget",
        price="9.99",
        price_currency="USD",
    )


@pytest.fixture
def records(widget):
    return [
        widget,
        ProductRecord(
            id=2,
            name="Garden hose",
            description="Twenty metre hose",
            price="24.50",
            price_currency="EUR",
            categories=("Garden",),
            attributes=(("Size", "20m"), ("Material", "Rubber")),
            added_time=datetime(2024, 12, 7, 10, 23, 27),
            active=True,
        ),
        ProductRecord(
            id=3,
            name="Desk lamp <LED>",
            description="Lamp & arm",
            price="39.00",
            price_currency=None,
            categories=("Home", "Clearance"),
            attributes=(("Color", "White"),),
            added_time=datetime(2024, 12, 19, 15, 0, 34),
            last_edit_time=datetime(2024, 12, 20, 9, 5, 0),
            active=False,
        ),
    ]


@pytest.fixture
def config(monkeypatch, tmp_path):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("API_TOKEN", API_TOKEN)
    monkeypatch.setenv("PRODUCTS_FILE", str(tmp_path / "products.json"))
    monkeypatch.setenv("EXPORT_DIR", str(tmp_path / "exports"))
    return Config()


@pytest.fixture
def repository(records):
    return CountingRepository(products=records)


@pytest.fixture
def export_service():
    return CountingExportService()


@pytest.fixture
def app(config, repository, export_service):
    return create_app(config, repository=repository, export_service=export_service)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"X-API-TOKEN": API_TOKEN}


@pytest.fixture
def tracker():
    return ProgressTracker(Console(file=io.StringIO(), force_terminal=False))
