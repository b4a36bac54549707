"""Caller authentication by shared API key."""

import logging
import secrets
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .errors import ApiError, MisconfiguredError, UnauthorizedError, error_response

logger = logging.getLogger(__name__)


def verify_api_key(provided: Optional[str], expected: Optional[str]) -> None:
    """
    Check a caller-supplied key against the configured one.

    Raises:
        MisconfiguredError: If no key is configured on the server
        UnauthorizedError: If the caller's key is missing or does not match
    """
    if not expected:
        raise MisconfiguredError("API_KEY not set")
    if provided is None or not secrets.compare_digest(
        provided.encode("utf-8"), expected.encode("utf-8")
    ):
        raise UnauthorizedError("Unauthorized")


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Rejects every request that does not carry the configured key."""

    def __init__(self, app, api_key: Optional[str], header_name: str = "x-api-key"):
        super().__init__(app)
        self.api_key = api_key
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next):
        try:
            verify_api_key(request.headers.get(self.header_name), self.api_key)
        except ApiError as e:
            logger.warning(f"Rejected {request.method} {request.url.path}: {e.message}")
            return error_response(e)
        return await call_next(request)
