# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Client-facing messages are deliberately coarse: login failures never say
# whether the email exists, and store failures never leak driver details.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)


class SpendSmartException(Exception):
    """
    Base exception for the SpendSmart API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "SPENDSMART_ERROR",
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
            "message": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Validation Exceptions
# =============================================================================

class ValidationFailedError(SpendSmartException):
    """Raised when a request payload is missing fields or malformed."""

    def __init__(self, errors: list[dict[str, Any]] | None = None):
        super().__init__(
            message="Invalid data",
            code="VALIDATION_ERROR",
            status_code=400,
            details={"errors": errors} if errors else None,
        )


# =============================================================================
# Credential Exceptions
# =============================================================================

class UserAlreadyExistsError(SpendSmartException):
    """Raised on signup when the email is already registered."""

    def __init__(self):
        super().__init__(
            message="User already exists",
            code="USER_EXISTS",
            status_code=400,
            suggestion="Log in with this email instead",
        )


class InvalidCredentialsError(SpendSmartException):
    """Raised on login for an unknown email or a wrong password (same message for both)."""

    def __init__(self):
        super().__init__(
            message="Invalid email or password",
            code="INVALID_CREDENTIALS",
            status_code=400,
        )


# =============================================================================
# Session Exceptions
# =============================================================================

class NotAuthenticatedError(SpendSmartException):
    """Raised by the auth gate when the request has no valid session."""

    def __init__(self):
        super().__init__(
            message="Unauthorized",
            code="UNAUTHORIZED",
            status_code=401,
        )


class LogoutFailedError(SpendSmartException):
    """Raised when the session record could not be removed from storage."""

    def __init__(self):
        super().__init__(
            message="Failed to log out",
            code="LOGOUT_FAILED",
            status_code=500,
            suggestion="Try again later",
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def spendsmart_exception_handler(
    request: Request,
    exc: SpendSmartException
) -> JSONResponse:
    """
    Convert SpendSmartException to JSON response.

    Returns structured error with:
    - message: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request body validation errors.

    Reported as 400 "Invalid data" with a compact per-field error list.
    """
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return await spendsmart_exception_handler(request, ValidationFailedError(errors))


async def store_exception_handler(
    request: Request,
    exc: SupabaseClientError
) -> JSONResponse:
    """
    Handle storage failures.

    The cause is logged server-side; the client gets a generic message.
    """
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "message": "Server error",
            "code": "SERVER_ERROR",
        }
    )
