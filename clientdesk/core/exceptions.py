"""
Error taxonomy and its HTTP rendering.

NotFoundError is fatal for the client view and may carry where the caller
should navigate next; FetchError and UpdateError are store failures. All
of them render as ``{"error": {...}}`` problem details.
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        redirect_to: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.redirect_to = redirect_to
        super().__init__(self.message)

    def to_problem(self, path: str) -> Dict[str, Any]:
        problem = {
            "code": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "path": path,
        }
        if self.redirect_to:
            problem["redirect_to"] = self.redirect_to
        return problem


class NotFoundError(AppError):
    """Requested client does not exist, or could not be read at all."""
    def __init__(
        self,
        message: str = "Entity not found",
        details: Optional[Dict[str, Any]] = None,
        redirect_to: Optional[str] = None,
    ):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details, redirect_to)


class FetchError(AppError):
    """Transport/store failure on a read."""
    def __init__(self, message: str = "Failed to fetch data", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_502_BAD_GATEWAY, details)


class UpdateError(AppError):
    """Transport/store failure on a write; the client may retry."""
    def __init__(self, message: str = "Failed to update data", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_502_BAD_GATEWAY, details)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render application errors as problem details; anything else is a logged 500."""
    path = request.url.path

    if isinstance(exc, AppError):
        logger.warning(
            "Request failed with application error",
            code=exc.__class__.__name__,
            status_code=exc.status_code,
            path=path,
            redirect_to=exc.redirect_to,
        )
        headers = {"X-Redirect-To": exc.redirect_to} if exc.redirect_to else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.to_problem(path)},
            headers=headers,
        )

    logger.exception("Unexpected error occurred", path=path)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "InternalServerError",
                "message": "An unexpected error occurred. Please try again later.",
                "path": path,
            }
        },
    )
