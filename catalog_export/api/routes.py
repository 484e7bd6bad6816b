import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from .errors import ERROR_MESSAGES, error_response, get_error_message
from .security import verify_access_token


logger = logging.getLogger(__name__)

export_router = APIRouter(
    prefix="/api/product/export",
    tags=["Product export"],
    dependencies=[Depends(verify_access_token)],
)
error_router = APIRouter(tags=["Error"])
system_router = APIRouter(tags=["System"])


def export_products(request: Request, requested_format: str):
    """Stream the catalog in the requested format or render the export failure."""
    service = request.app.state.export_service
    repository = request.app.state.repository

    result = service.export(requested_format, repository.find_all)
    if not result.success:
        failure = result.failure
        logger.error(f"Product export ({requested_format}) failed: {failure.message}")
        return error_response(failure.message, failure.http_status)

    headers = dict(result.headers)
    headers["Cache-Control"] = "max-age=0"
    return StreamingResponse(result.stream, media_type=result.content_type, headers=headers)


@export_router.get("/json")
def get_product_export_json(request: Request):
    """Export products to a JSON file."""
    return export_products(request, "json")


@export_router.get("/xls")
def get_product_export_xls(request: Request):
    """Export products to an XLSX spreadsheet."""
    return export_products(request, "xlsx")


@export_router.get("/xml")
def get_product_export_xml(request: Request):
    """Export products to an XML file."""
    return export_products(request, "xml")


@error_router.get("/error")
async def get_error_by_code(code: Optional[int] = None):
    """Return the fixed error message for a status code (400 when none is given)."""
    if code is None:
        code = 400
    status_code = code if code in ERROR_MESSAGES else 500
    return error_response(get_error_message(code), status_code)


@error_router.get("/error/notfound")
async def get_not_found_error():
    return error_response("This route does not exist!", 404)


@system_router.get("/health")
async def health_check(request: Request):
    """Basic health information; exempt from the token check and maintenance mode."""
    return {
        "status": "healthy",
        "service": "catalog-export-api",
        "products": request.app.state.repository.count(),
        "timestamp": datetime.now().isoformat(),
    }
