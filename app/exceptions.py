# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the web app.
# Every error kind maps to one HTTP status; handlers answer with a short
# plain-text body because all clients are browsers posting HTML forms.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import PlainTextResponse, RedirectResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal Server Error"


class SocialboardException(Exception):
    """
    Base exception for Socialboard.

    All custom exceptions inherit from this class.
    Carries the status code and a suggestion for the server log.
    """

    def __init__(
        self,
        message: str,
        code: str = "SOCIALBOARD_ERROR",
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
        """Convert exception to a dict (used for structured log lines)."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Account Exceptions
# =============================================================================

class DuplicateUserError(SocialboardException):
    """Raised when registering with an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(
            message="User already exists",
            code="DUPLICATE_USER",
            status_code=400,
            suggestion="Log in instead, or register with a different email",
            details={"email": email}
        )


class UserNotFoundError(SocialboardException):
    """Raised when logging in with an unknown email."""

    def __init__(self, email: str):
        super().__init__(
            message="User does not exist",
            code="USER_NOT_FOUND",
            status_code=404,
            suggestion="Register an account first",
            details={"email": email}
        )


class InvalidCredentialsError(SocialboardException):
    """Raised when the password does not match the stored hash."""

    def __init__(self, email: str):
        super().__init__(
            message="Invalid credentials",
            code="INVALID_CREDENTIALS",
            status_code=401,
            details={"email": email}
        )


# =============================================================================
# Session Exceptions
# =============================================================================

class InvalidTokenError(SocialboardException):
    """
    Raised when a session token is malformed, expired or forged.

    All token failures collapse into this single kind.
    """

    def __init__(self, reason: str = "invalid token"):
        super().__init__(
            message=f"Invalid session token: {reason}",
            code="INVALID_TOKEN",
            status_code=401,
            suggestion="Log in again to get a fresh session",
        )


class TokenConfigurationError(SocialboardException):
    """Raised when tokens cannot be signed because no secret is configured."""

    def __init__(self):
        super().__init__(
            message="Session tokens cannot be issued: JWT_SECRET is not set",
            code="TOKEN_NOT_CONFIGURED",
            status_code=500,
            suggestion="Set JWT_SECRET in the environment or .env file",
        )


class LoginRequired(Exception):
    """
    Internal signal raised by the session dependency.

    Never shown to clients: the handler turns it into a redirect to the
    login page, clearing the session cookie when the token was rejected.
    """

    def __init__(self, clear_cookie: bool = False):
        super().__init__("login required")
        self.clear_cookie = clear_cookie


# =============================================================================
# Post Exceptions
# =============================================================================

class PostNotFoundError(SocialboardException):
    """Raised when a post ID doesn't exist."""

    def __init__(self, post_id: str):
        super().__init__(
            message="Post not found",
            code="POST_NOT_FOUND",
            status_code=404,
            suggestion="Check that the post_id is correct",
            details={"post_id": post_id}
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class MissingFileError(SocialboardException):
    """Raised when the upload form arrives without a file."""

    def __init__(self, field: str):
        super().__init__(
            message="No file uploaded",
            code="MISSING_FILE",
            status_code=400,
            suggestion=f"Attach an image in the '{field}' field",
            details={"field": field}
        )


class InvalidFileTypeError(SocialboardException):
    """Raised when uploaded file type is not allowed."""

    def __init__(self, filename: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid file type: {filename}",
            code="INVALID_FILE_TYPE",
            status_code=400,
            suggestion=f"Only these file types are supported: {', '.join(allowed)}",
            details={"filename": filename, "allowed_types": allowed}
        )


class FileTooLargeError(SocialboardException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


# =============================================================================
# Datastore Exceptions
# =============================================================================

class StoreFailureError(SocialboardException):
    """Raised when any datastore or storage operation fails."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            message=f"Datastore operation failed: {operation}",
            code="STORE_FAILURE",
            status_code=500,
            suggestion="Check SUPABASE_URL / SUPABASE_SERVICE_KEY and that the tables exist",
            details={"operation": operation, "error": error}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def socialboard_exception_handler(
    request: Request,
    exc: SocialboardException
) -> PlainTextResponse:
    """
    Convert SocialboardException to a plain-text response.

    Server-side failures are logged and answered with a generic message.
    """
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.to_dict()}")
        return PlainTextResponse(GENERIC_ERROR_MESSAGE, status_code=exc.status_code)

    logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}")
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def login_required_handler(
    request: Request,
    exc: LoginRequired
) -> RedirectResponse:
    """Redirect to the login page, dropping a rejected session cookie."""
    response = RedirectResponse(url="/login", status_code=302)
    if exc.clear_cookie:
        response.delete_cookie(request.app.state.context.settings.COOKIE_NAME)
    return response


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> PlainTextResponse:
    """
    Handle form validation errors.

    Missing or malformed form fields and path parameters answer 422.
    """
    logger.info(f"{request.method} {request.url.path} -> 422 validation error: {exc}")
    return PlainTextResponse("Invalid request", status_code=422)
