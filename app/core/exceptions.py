"""
Base exception classes for application-wide error handling.

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Input validation failures
    ├── NotFoundError - Resource not found
    ├── PermissionDeniedError - Authorization failures
    ├── ConflictError - State conflicts (duplicates)
    └── ExternalServiceError - Third-party service failures

Usage:
    from core.exceptions import ExternalServiceError

    try:
        response = client.get(url)
    except httpx.HTTPError as exc:
        raise ExternalServiceError(
            "Identity provider unreachable",
            error_code="IDP_UNAVAILABLE",
        ) from exc

Note:
    These exceptions are for domain/business logic errors that are not
    expected in normal flow. Expected failures are returned as
    core.services.ServiceResult instead. DRF handles API-layer exceptions
    (serialization, authentication, etc.).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, metadata, etc.)
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Example:
            {
                "error": "Chat not found",
                "error_code": "CHAT_NOT_FOUND",
                "details": {"chat_id": "..."}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """Input failed business validation."""

    default_error_code: str = "VALIDATION_ERROR"


class NotFoundError(BaseApplicationError):
    """Requested resource does not exist (or is hidden from the caller)."""

    default_error_code: str = "NOT_FOUND"


class PermissionDeniedError(BaseApplicationError):
    """Caller is authenticated but not allowed to perform the action."""

    default_error_code: str = "PERMISSION_DENIED"


class ConflictError(BaseApplicationError):
    """Operation conflicts with current state (duplicate, already exists)."""

    default_error_code: str = "CONFLICT"


class ExternalServiceError(BaseApplicationError):
    """
    A third-party service failed or was unreachable.

    Raised by the identity provider client and push providers so callers
    can decide between failing the request and retrying later.
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
