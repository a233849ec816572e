# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for every server instance, plus the errors
# raised while the application starts up.
# Errors should tell HOW to fix, not just WHAT failed.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


class WebcoatException(Exception):
    """
    Base exception for errors returned to HTTP clients.

    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "WEBCOAT_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


class ServiceUnavailableError(WebcoatException):
    """Raised when a backing service (e.g. the database) isn't configured."""

    def __init__(self, service: str):
        super().__init__(
            message=f"Service not available: {service}",
            code="SERVICE_UNAVAILABLE",
            status_code=503,
            suggestion="Check that the application was bootstrapped with this service",
            details={"service": service},
        )


# =============================================================================
# Startup Exceptions
# =============================================================================

class BootstrapError(ApplicationError):
    """Raised when bootstrap/run are called out of order."""

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(message, code="BOOTSTRAP_ERROR", suggestion=suggestion)


class LogSetupError(ApplicationError):
    """Raised when the log file can't be created."""

    def __init__(self, path: str, error: str):
        super().__init__(
            f"Failed to open log file {path}: {error}",
            code="LOG_SETUP_FAILED",
            suggestion="Check that the log directory is writable or set LOG_FILE",
            details={"path": path, "error": error},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def webcoat_exception_handler(
    request: Request,
    exc: WebcoatException
) -> JSONResponse:
    """
    Convert WebcoatException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )
