# core/repository.py
"""In-memory product catalog used as the export record source."""

import json
import logging
import os
from typing import Any, Dict, Iterable, List, Optional

from ..utils.date_manager import DateManager
from .types import ProductRecord
from .validation import validate_product

logger = logging.getLogger(__name__)


def record_from_dict(data: Dict[str, Any], default_currency: Optional[str] = None) -> ProductRecord:
    """
    Build a ProductRecord from export-style keys.

    Attributes may be given as {"name": ..., "value": ...} objects,
    [name, value] pairs, or "name: value" strings. Raises KeyError when
    the entry has no id.
    """
    attributes = []
    for item in data.get("attributes") or []:
        if isinstance(item, dict):
            attributes.append((item.get("name"), str(item.get("value", ""))))
        elif isinstance(item, str):
            name, _, value = item.partition(":")
            attributes.append((name.strip(), value.strip()))
        else:
            name, value = item
            attributes.append((name, str(value)))

    if data.get("id") is None:
        raise KeyError("id")

    return ProductRecord(
        id=data["id"],
        name=data.get("name"),
        description=data.get("description"),
        price=None if data.get("price") is None else str(data["price"]),
        price_currency=data.get("priceCurrency") or default_currency,
        categories=tuple(data.get("categories") or ()),
        attributes=tuple(attributes),
        added_time=_parse_time(data, "addedTime"),
        last_edit_time=_parse_time(data, "lastEditTime"),
        active=bool(data.get("active", True)),
    )


def _parse_time(data: Dict[str, Any], key: str):
    """Parse a fixture timestamp; unreadable values are logged and left empty."""
    try:
        return DateManager.parse_timestamp(data.get(key))
    except (TypeError, ValueError):
        logger.warning(f"Product {data.get('id')}: unreadable {key} {data.get(key)!r}, leaving it empty")
        return None


def record_to_fixture(record: ProductRecord) -> Dict[str, Any]:
    """Inverse of record_from_dict, used when the catalog is saved."""
    return {
        "id": record.id,
        "name": record.name,
        "description": record.description,
        "price": record.price,
        "priceCurrency": record.price_currency,
        "categories": list(record.categories),
        "attributes": [{"name": name, "value": value} for name, value in record.attributes],
        "addedTime": record.added_time.isoformat(sep=" ") if record.added_time else None,
        "lastEditTime": record.last_edit_time.isoformat(sep=" ") if record.last_edit_time else None,
        "active": record.active,
    }


class ProductRepository:
    """Holds products, categories and attributes keyed by id."""

    def __init__(
            self,
            products: Optional[Iterable[ProductRecord]] = None,
            categories: Optional[Iterable[str]] = None,
            attributes: Optional[Iterable[str]] = None
    ):
        """
        Initialize the catalog.

        Categories and attributes referenced by products are registered
        even when not listed explicitly.
        """
        self._products: Dict[int, ProductRecord] = {}
        self._categories: Dict[int, str] = {}
        self._attributes: Dict[int, str] = {}

        for name in categories or ():
            self.add_category(name)
        for name in attributes or ():
            self.add_attribute(name)
        for product in products or ():
            self.add(product)

    @classmethod
    def from_file(cls, path: str, default_currency: Optional[str] = None) -> "ProductRepository":
        """
        Load a catalog fixture.

        Args:
            path: JSON file with "products", "categories" and "attributes" lists
            default_currency: Currency for products without one

        Returns:
            Populated repository, empty when the file does not exist
        """
        if not os.path.exists(path):
            logger.warning(f"Product fixture not found at {path}, starting with an empty catalog")
            return cls()

        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)

        products = []
        for item in payload.get("products", []):
            try:
                product = record_from_dict(item, default_currency)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping unreadable product entry {item!r}: {e!r}")
                continue
            products.append(product)

            errors = validate_product(product)
            if errors:
                logger.warning(f"Product {product.id} violates constraints: {'; '.join(errors)}")

        repository = cls(
            products=products,
            categories=payload.get("categories", []),
            attributes=payload.get("attributes", []),
        )
        logger.info(f"Loaded {repository.count()} products from {path}")
        return repository

    def save(self, path: str):
        """Write the catalog back to a fixture file."""
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        payload = {
            "categories": self.categories,
            "attributes": self.attributes,
            "products": [record_to_fixture(product) for product in self.find_all()],
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)

    def add(self, product: ProductRecord):
        """Insert or replace a product by id."""
        self._products[product.id] = product
        for name in product.categories:
            if name is not None:
                self.add_category(name)
        for name, _ in product.attributes:
            if name is not None:
                self.add_attribute(name)

    def add_category(self, name: str) -> int:
        return self._register(self._categories, name)

    def add_attribute(self, name: str) -> int:
        return self._register(self._attributes, name)

    def find_all(self) -> List[ProductRecord]:
        """Snapshot of all products ordered by id."""
        return [self._products[key] for key in sorted(self._products)]

    def count(self) -> int:
        return len(self._products)

    @property
    def categories(self) -> List[str]:
        return [self._categories[key] for key in sorted(self._categories)]

    @property
    def attributes(self) -> List[str]:
        return [self._attributes[key] for key in sorted(self._attributes)]

    def remove_unused_categories(self) -> int:
        """Delete categories no product references and return how many were removed."""
        used = {name for product in self._products.values() for name in product.categories}
        return self._remove_unreferenced(self._categories, used)

    def remove_unused_attributes(self) -> int:
        """Delete attributes no product references and return how many were removed."""
        used = {name for product in self._products.values() for name, _ in product.attributes}
        return self._remove_unreferenced(self._attributes, used)

    @staticmethod
    def _register(table: Dict[int, str], name: str) -> int:
        for key, existing in table.items():
            if existing == name:
                return key
        key = max(table, default=0) + 1
        table[key] = name
        return key

    @staticmethod
    def _remove_unreferenced(table: Dict[int, str], used: set) -> int:
        unused = [key for key, name in table.items() if name not in used]
        for key in unused:
            del table[key]
        return len(unused)
