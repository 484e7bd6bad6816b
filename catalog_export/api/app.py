import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import Config
from ..core import ProductRepository
from ..core.export_service import ExportService
from .middleware import (
    global_exception_handler,
    http_exception_handler,
    log_requests,
    maintenance_check,
    validation_exception_handler,
)
from .routes import error_router, export_router, system_router

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[Config] = None,
    repository: Optional[ProductRepository] = None,
    export_service: Optional[ExportService] = None,
) -> FastAPI:
    """Build the API application.

    Collaborators default to ones derived from the configuration: the
    catalog is loaded from PRODUCTS_FILE and the export service uses the
    EXPORT_* settings.
    """
    config = config or Config()
    if repository is None:
        repository = ProductRepository.from_file(config.products_file, config.default_currency)
    if export_service is None:
        export_service = ExportService.from_config(config)

    app = FastAPI(title="Catalog Export API", docs_url="/api/doc", openapi_url="/api/doc.json")
    app.state.config = config
    app.state.repository = repository
    app.state.export_service = export_service

    # registered last runs first: logging wraps the maintenance check
    @app.middleware("http")
    async def _maintenance_check(request, call_next):
        return await maintenance_check(request, call_next)

    @app.middleware("http")
    async def _log_requests(request, call_next):
        return await log_requests(request, call_next)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(export_router)
    app.include_router(error_router)
    app.include_router(system_router)

    logger.info(f"API ready with {repository.count()} products (env: {config.app_env})")
    return app
