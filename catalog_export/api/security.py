import logging
import secrets
from typing import Optional

from fastapi import Header, HTTPException, Request


logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid access token."
PROTECTED_PREFIX = "/api"
PUBLIC_PREFIX = "/api/doc"


def is_protected_path(path: str) -> bool:
    """True for /api paths other than the API docs."""
    if path.startswith(PUBLIC_PREFIX):
        return False
    return path == PROTECTED_PREFIX or path.startswith(PROTECTED_PREFIX + "/")


def has_valid_token(request: Request, token: Optional[str] = None) -> bool:
    if token is None:
        token = request.headers.get("X-API-TOKEN")
    expected = request.app.state.config.api_token
    return bool(token) and secrets.compare_digest(token.encode(), expected.encode())


def verify_access_token(
    request: Request,
    x_api_token: Optional[str] = Header(None, alias="X-API-TOKEN"),
) -> None:
    """Reject /api requests whose X-API-TOKEN header does not match API_TOKEN.

    Runs as a route dependency, so method matching (405) happens first.
    Unmatched /api paths are checked in the 404 handler instead.
    """
    if not has_valid_token(request, x_api_token):
        logger.warning(f"Rejected {request.method} {request.url.path}: invalid access token")
        raise HTTPException(status_code=401, detail=INVALID_TOKEN_MESSAGE)
