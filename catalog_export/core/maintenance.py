# core/maintenance.py
"""Catalog maintenance: removal of orphaned categories and attributes."""

import logging

from .repository import ProductRepository
from .types import CleanResult

logger = logging.getLogger(__name__)


class DatabaseCleaner:
    """Removes categories and attributes that no product references."""

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    def clean(self) -> CleanResult:
        """Run both cleanups and report how many rows each removed."""
        result = CleanResult(
            removed_categories=self.repository.remove_unused_categories(),
            removed_attributes=self.repository.remove_unused_attributes(),
        )
        logger.info(
            f"Catalog cleaned: {result.removed_categories} categories, "
            f"{result.removed_attributes} attributes removed"
        )
        return result
