# core/validation.py
"""Creation-time product constraints, checked when the catalog is loaded."""

import re
from typing import List

from .types import ProductRecord

NUMERIC_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

# field name -> (label, min length, max length, required)
LENGTH_RULES = {
    "name": ("name", 2, 80, True),
    "description": ("description", 2, 10240, True),
    "price": ("price", 1, 80, True),
    "price_currency": ("price-currency", 0, 6, False),
}


def validate_product(record: ProductRecord) -> List[str]:
    """Return the constraint violations of a record as "<field>: <message>" strings."""
    errors = []

    for attr, (label, min_length, max_length, required) in LENGTH_RULES.items():
        value = getattr(record, attr)
        if value is None or (isinstance(value, str) and not value.strip()):
            if required:
                errors.append(f"{label}: should not be blank.")
            continue

        length = len(str(value))
        if length < min_length:
            errors.append(f"{label}: should have at least {min_length} characters.")
        elif length > max_length:
            errors.append(f"{label}: should have at most {max_length} characters.")

    if record.price is not None and str(record.price).strip():
        if not NUMERIC_PATTERN.match(str(record.price).strip()):
            errors.append("price: should be numeric.")

    return errors
