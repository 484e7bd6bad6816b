"""HTTP surface of the catalog export service.

Routing, dependency injection and request validation come from FastAPI;
modules here only map export results and errors onto responses.
"""

from .app import create_app

__all__ = ["create_app"]
