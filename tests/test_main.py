import json
import os

import pytest

from catalog_export import main as cli
from catalog_export.core import ProductRepository


@pytest.fixture
def products_file(config):
    with open(config.products_file, "w", encoding="utf-8") as f:
        json.dump({
            "categories": ["Electronics", "Clearance"],
            "attributes": ["Color", "Weight"],
            "products": [{
                "id": 1,
                "name": "Widget",
                "description": "A widget",
                "price": "9.99",
                "categories": ["Electronics"],
                "attributes": [{"name": "Color", "value": "Black"}],
            }],
        }, f)
    return config.products_file


def test_clean_removes_and_saves(config, products_file, tracker):
    assert cli.run_clean(config, tracker) == 0

    reloaded = ProductRepository.from_file(products_file)
    assert reloaded.categories == ["Electronics"]
    assert reloaded.attributes == ["Color"]
    assert "Database structure cleaned!" in tracker.console.file.getvalue()


def test_clean_warns_when_nothing_removed(config, products_file, tracker):
    cli.run_clean(config, tracker)
    cli.run_clean(config, tracker)

    output = tracker.console.file.getvalue()
    assert "No unused categories found." in output
    assert "No unused attributes found." in output


def test_export_writes_file(config, products_file, tracker, tmp_path):
    output_dir = str(tmp_path / "out")

    assert cli.run_export(config, "json", output_dir, tracker) == 0

    files = os.listdir(output_dir)
    assert len(files) == 1
    assert files[0].startswith("products-") and files[0].endswith(".json")
    with open(os.path.join(output_dir, files[0]), "rb") as f:
        assert json.loads(f.read())[0]["priceCurrency"] == "USD"


def test_export_unknown_format_fails(config, products_file, tracker, tmp_path):
    assert cli.run_export(config, "pdf", str(tmp_path), tracker) == 1
    assert "Unsupported export format: pdf" in tracker.console.file.getvalue()


def test_main_without_command_prints_usage():
    assert cli.main([]) == 1


def test_main_requires_api_token(monkeypatch):
    monkeypatch.delenv("API_TOKEN", raising=False)
    monkeypatch.setattr(cli.Config, "__init__", _config_without_dotenv)

    assert cli.main(["clean"]) == 1


def _config_without_dotenv(self):
    self._validate_environment()
