from http import HTTPStatus
from typing import Optional

from fastapi.responses import JSONResponse


ERROR_MESSAGES = {
    400: "Bad request.",
    401: "Unauthorized.",
    403: "Forbidden.",
    404: "This route does not exist.",
    405: "This request method is not allowed.",
    426: "Upgrade required.",
    429: "Too many requests.",
    500: "Internal server error.",
    503: "Service currently unavailable.",
}

UNKNOWN_ERROR_MESSAGE = "Unknown error."


def get_error_message(code: int) -> str:
    return ERROR_MESSAGES.get(code, UNKNOWN_ERROR_MESSAGE)


def default_detail(code: int) -> Optional[str]:
    """Reason phrase Starlette uses when an HTTPException carries no detail."""
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return None


def error_response(
    message: str,
    status_code: int,
    cause: Optional[str] = None,
    dev_mode: bool = False,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """Render the error envelope; in dev mode the underlying cause is appended."""
    if dev_mode and cause and cause != message:
        message = f"{message.rstrip('.')}: {cause}"
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
        headers=headers,
    )
