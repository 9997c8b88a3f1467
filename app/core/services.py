"""
Base service layer patterns.

- ServiceResult: result wrapper for expected failures (authorization
  denials, unauthenticated callers) that must not escape as exceptions
- BaseService: per-service logger

Pattern Comparison:
    - ServiceResult: the caller is expected to branch on the outcome
    - Exceptions (core.exceptions): the caller cannot reasonably continue

Usage:
    from core.services import BaseService, ServiceResult

    class ChannelAuthorizationService(BaseService):
        @classmethod
        def authorize(cls, identity, target_user_id, ...) -> ServiceResult[str]:
            if not identity.is_authenticated:
                return ServiceResult.failure(
                    "Not authenticated", error_code="UNAUTHENTICATED"
                )
            ...
            return ServiceResult.success(token)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from typing import Any

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Error message if failed (None if successful)
        error_code: Machine-readable error code for client handling
        errors: Field-level errors for validation failures
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, list[str]] | None = field(default=None)

    @classmethod
    def ok(cls, data: T) -> ServiceResult[T]:
        """Alias for success()."""
        return cls(success=True, data=data)

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """
        Create a successful result.

        The classmethod doubles as the dataclass default for the ``success``
        field; instances always receive an explicit bool, which shadows it.
        """
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code for client handling
            errors: Field-level errors (for validation failures)
        """
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            errors=errors,
        )

    @classmethod
    def from_exception(
        cls, exc: Exception, error_code: str | None = None
    ) -> ServiceResult[T]:
        """
        Create a failed result from an exception.

        Application errors keep their own message and error code; any other
        exception falls back to its class name.

        Example:
            return ServiceResult.from_exception(UnauthorizedError("Forbidden"))
        """
        message = getattr(exc, "message", None) or str(exc)
        code = error_code or getattr(exc, "error_code", None)
        return cls(
            success=False,
            error=message,
            error_code=code or exc.__class__.__name__.upper(),
        )

    def to_response(self) -> dict[str, Any]:
        """Convert to an API-style response dict."""
        if self.success:
            return {"success": True, "data": self.data}

        response: dict[str, Any] = {
            "success": False,
            "error": self.error,
        }
        if self.error_code:
            response["error_code"] = self.error_code
        if self.errors:
            response["errors"] = self.errors
        return response

    def __bool__(self) -> bool:
        return self.success


class BaseService:
    """
    Base class for stateless service classes.

    Services expose classmethods only and log through a logger named after
    the concrete class, so log lines can be filtered per service.
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Return the logger for this service class."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")
