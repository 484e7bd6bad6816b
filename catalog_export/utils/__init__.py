# utils/__init__.py
"""Utility modules for the catalog export service."""

from .date_manager import DateManager
from .progress_tracker import ProgressTracker

__all__ = [
    'DateManager',
    'ProgressTracker',
]
