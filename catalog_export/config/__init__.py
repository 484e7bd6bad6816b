"""Configuration for the catalog export service."""

from .settings import Config

__all__ = ["Config"]
