"""HTTP error taxonomy and JSON error responses."""

from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse


class Utf8JSONResponse(JSONResponse):
    """JSON response that declares its UTF-8 charset explicitly."""

    media_type = "application/json; charset=utf-8"


class ApiError(Exception):
    """Error rendered to the caller as {"ok": false, "error": ...}."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None, **extra: Any):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": False, "error": self.message, **self.extra}


class BadRequestError(ApiError):
    """Missing or malformed request input."""

    status_code = 400


class UnauthorizedError(ApiError):
    """Caller key missing or wrong."""

    status_code = 401


class PayloadTooLargeError(ApiError):
    """Request body over the configured size limit."""

    status_code = 413


class MisconfiguredError(ApiError):
    """Server-side configuration is incomplete."""

    status_code = 500


def error_response(exc: ApiError) -> Utf8JSONResponse:
    """Render an ApiError as a JSON response."""
    return Utf8JSONResponse(status_code=exc.status_code, content=exc.to_dict())
