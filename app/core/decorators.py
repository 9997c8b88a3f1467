"""
Cross-cutting decorators for service code.

Usage:
    from core.decorators import translate_database_errors

    class MessageService(BaseService):
        @classmethod
        @translate_database_errors("create message")
        def create(cls, from_id, to_id, body, attachment=None):
            ...
"""

from __future__ import annotations

import functools
import logging
from typing import Callable

from django.db import DatabaseError

from core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


def translate_database_errors(operation: str, error_code: str | None = None):
    """
    Re-raise django.db.DatabaseError as core.exceptions.PersistenceError.

    No retry is attempted; the original error is chained as __cause__ and
    logged with its traceback.

    Args:
        operation: Short description used in the error message and log
        error_code: Optional error code (defaults to PERSISTENCE_ERROR)

    Example:
        @translate_database_errors("mark messages seen")
        def mark_seen(...):
            ...
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except DatabaseError as exc:
                logger.error(f"Database error during {operation}: {exc}", exc_info=True)
                raise PersistenceError(
                    f"Could not {operation}",
                    error_code=error_code,
                    details={"operation": operation},
                ) from exc

        return wrapper

    return decorator
