"""
Conversion of mutation outcomes into tagged results.

Mutating service functions are written as straight-line code that
raises ``AppError`` subclasses inside ``transaction``; the transaction
rolls back and ``service_result`` turns the exception into a failed
``ServiceResult``.  Storage errors are logged with their traceback and
reported with a generic message and status 500; integer arguments
sqlite3 cannot bind are reported with status 400.
"""

import functools
import logging
import sqlite3
from typing import Any, Callable, TypeVar

from ..core.errors import AppError
from ..schemas.common import ServiceResult

T = TypeVar("T")


def service_result(failure_message: str) -> Callable[[Callable[..., T]], Callable[..., ServiceResult[T]]]:
    """Decorator wrapping a mutation's return value in a ``ServiceResult``."""

    def decorator(func: Callable[..., T]) -> Callable[..., ServiceResult[T]]:
        logger = logging.getLogger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> ServiceResult[T]:
            try:
                data = func(*args, **kwargs)
            except AppError as exc:
                logger.warning("%s: %s", failure_message, exc.message)
                return ServiceResult.fail(exc.message, exc.status_code)
            except OverflowError:
                # Integer parameters outside the SQLite INTEGER range.
                logger.warning("%s: identifier out of range", failure_message)
                return ServiceResult.fail(failure_message, 400)
            except sqlite3.Error:
                logger.exception(failure_message)
                return ServiceResult.fail(failure_message, 500)
            return ServiceResult.ok(data)

        return wrapper

    return decorator
