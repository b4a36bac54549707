"""HTTP surface of the Notion bridge."""

from .auth import ApiKeyMiddleware, verify_api_key
from .errors import (
    ApiError,
    BadRequestError,
    MisconfiguredError,
    PayloadTooLargeError,
    UnauthorizedError,
)
from .server import NotionBridgeServer

__all__ = [
    "ApiKeyMiddleware",
    "verify_api_key",
    "ApiError",
    "BadRequestError",
    "MisconfiguredError",
    "PayloadTooLargeError",
    "UnauthorizedError",
    "NotionBridgeServer",
]
