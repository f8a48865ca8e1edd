"""
Error taxonomy shared by the services.

Services raise these instead of ``HTTPException`` so they stay usable outside
a request; ``main.py`` registers a handler that renders them with
``ResponseWrapper.error``.
"""
from typing import Any, Dict, Optional

from fastapi import status


class AppException(Exception):
    """Base class for every error surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details
        super().__init__(message)


class NotFoundError(AppException):
    """Referenced id does not resolve to a live row."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"


class ConflictError(AppException):
    """Uniqueness violation (duplicate code, second subscription, ...)."""

    status_code = status.HTTP_409_CONFLICT
    error_code = "CONFLICT"


class BadRequestError(AppException):
    """Semantic validation failure."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "BAD_REQUEST"


class UnauthorizedError(AppException):
    """
    Credential, account, tenant, subscription or token failure.

    ``reason`` records which check failed for logging; it is never rendered
    into the response body.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "UNAUTHORIZED"

    def __init__(
        self,
        message: str = "Invalid credentials",
        reason: Optional[str] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message, error_code=error_code)
        self.reason = reason or message


class ForbiddenError(AppException):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = "FORBIDDEN"
