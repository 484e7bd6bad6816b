import logging
import time
from typing import Callable

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import default_detail, error_response, get_error_message
from .security import INVALID_TOKEN_MESSAGE, has_valid_token, is_protected_path


logger = logging.getLogger(__name__)

MAINTENANCE_MESSAGE = "Application is under maintenance mode"
MAINTENANCE_EXEMPT_PATHS = {"/health"}


def _request_id(request: Request) -> str:
    return f"{int(time.time() * 1000)}-{id(request)}"


async def log_requests(request: Request, call_next: Callable):
    start_time = time.time()
    request_id = _request_id(request)

    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        # Only log slow requests (>1s) or errors
        if process_time > 1.0 or response.status_code >= 400:
            logger.info(f"[{request_id}] {request.method} {request.url.path} - {response.status_code} - {process_time:.2f}s")
        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(f"[{request_id}] {request.method} {request.url.path} - ERROR: {str(e)} - {process_time:.2f}s")
        raise


async def maintenance_check(request: Request, call_next: Callable):
    if request.app.state.config.maintenance_mode and request.url.path not in MAINTENANCE_EXEMPT_PATHS:
        return error_response(MAINTENANCE_MESSAGE, 503)
    return await call_next(request)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors in the status/message envelope.

    Exceptions raised without a custom detail (router 404/405) use the
    fixed message table. An unmatched /api path answers 401 rather than
    404 unless the caller holds a valid token.
    """
    if exc.status_code == 404 and is_protected_path(request.url.path) and not has_valid_token(request):
        logger.warning(f"Rejected {request.method} {request.url.path}: invalid access token")
        return error_response(INVALID_TOKEN_MESSAGE, 401)

    detail = exc.detail
    if not detail or detail == default_detail(exc.status_code):
        detail = get_error_message(exc.status_code)
    return error_response(str(detail), exc.status_code, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Invalid request to {request.url.path}: {exc.errors()}")
    return error_response(get_error_message(400), 400)


async def global_exception_handler(request: Request, exc: Exception):
    request_id = _request_id(request)
    logger.error(f"[{request_id}] Unhandled exception in {request.method} {request.url.path}: {str(exc)}", exc_info=True)

    return error_response(
        get_error_message(500),
        500,
        cause=str(exc),
        dev_mode=request.app.state.config.is_dev_mode,
    )
