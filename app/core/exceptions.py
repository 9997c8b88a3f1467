"""
Application exception hierarchy.

Every domain failure raised by the messenger core is a subclass of
BaseApplicationError, so callers can catch one type and still read a
machine-readable error code.

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Rejected input (e.g. disallowed attachment)
    ├── NotFoundError - Record absent or not owned by the caller
    ├── UnauthenticatedError - No valid session
    ├── UnauthorizedError - Valid session, insufficient permission
    ├── PersistenceError - The database rejected a read or write
    ├── TransportError - Publish or subscription signing failed
    └── ProjectionError - Building a display record failed

Usage:
    from core.exceptions import NotFoundError

    raise NotFoundError("Message not found", error_code="MESSAGE_NOT_FOUND")

    try:
        ...
    except BaseApplicationError as e:
        payload = e.to_dict()
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
        details: Additional error context
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
        Convert exception to a response-friendly dictionary.

        Returns:
            Dict with error, error_code and (when present) details keys
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
    """
    Raised when input is rejected before it reaches storage.

    Example:
        raise ValidationError(
            "File extension not allowed",
            error_code="INVALID_EXTENSION",
            details={"extension": "exe"},
        )
    """

    default_error_code: str = "VALIDATION_ERROR"


class NotFoundError(BaseApplicationError):
    """
    Raised when a referenced record does not exist.

    Ownership failures use this class too: a message that exists but was
    sent by someone else is reported as not found to its would-be deleter.
    """

    default_error_code: str = "NOT_FOUND"


class UnauthenticatedError(BaseApplicationError):
    """Raised (or reported) when no valid session is present."""

    default_error_code: str = "UNAUTHENTICATED"


class UnauthorizedError(BaseApplicationError):
    """
    Raised (or reported) when a valid session lacks permission.

    Example:
        # user 5 asking to listen on user 6's private channel
        raise UnauthorizedError(
            "Cannot subscribe to another user's channel",
            details={"requester_id": 5, "target_user_id": 6},
        )
    """

    default_error_code: str = "UNAUTHORIZED"


class PersistenceError(BaseApplicationError):
    """
    Raised when the underlying store rejects a read or write.

    Wraps django.db.DatabaseError; the original exception is chained
    as __cause__.
    """

    default_error_code: str = "PERSISTENCE_ERROR"


class TransportError(BaseApplicationError):
    """
    Raised when the pub/sub transport fails to publish or sign.

    Delivery is at-most-once: nothing catches this to retry.
    """

    default_error_code: str = "TRANSPORT_ERROR"


class ProjectionError(BaseApplicationError):
    """Raised when a display record cannot be built from stored data."""

    default_error_code: str = "PROJECTION_ERROR"
