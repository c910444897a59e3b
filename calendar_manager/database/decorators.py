#!/usr/bin/env python3
"""
decorators.py
--------------------
Decorators stacked on entity manager and CalendarDB methods.

Usage:
    @handle_db_errors                          # store failures -> DatabaseError
    @log_database_operation("create_event")    # timing and outcome in the log
    @validate_metadata(["date"])               # required metadata keys
    def create(self, metadata): ...

The decorated object's ``logger`` attribute may be None.
"""
import time
from functools import wraps
from typing import Any, Callable, Dict, Iterable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from calendar_manager.core.exceptions import DatabaseError
from calendar_manager.core.logging_manager import safe_logger
from calendar_manager.core.validators import DataValidator

# Raised by the sqlite3 driver, unwrapped, when a value cannot be bound
BIND_ERRORS = (OverflowError,)


def _call_summary(args: tuple, kwargs: Dict[str, Any]) -> Dict[str, Any]:
    """Identifiers and metadata keys of a manager call, never the values."""
    summary: Dict[str, Any] = {}
    ids = [a for a in args if isinstance(a, int) and not isinstance(a, bool)]
    if ids:
        summary["ids"] = ids
    metadata = kwargs.get("metadata")
    if metadata is None:
        metadata = next((a for a in args if isinstance(a, dict)), None)
    if metadata:
        summary["fields"] = sorted(metadata)
    return summary


def log_database_operation(operation_name: str):
    """
    Log start (DEBUG), completion (OPERATION) or failure (errors.log)
    of a method, with its duration in milliseconds.

    Exceptions are re-raised unchanged.
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            logger = safe_logger(getattr(self, "logger", None))
            context = {"operation": operation_name, **_call_summary(args, kwargs)}
            logger.log_debug(f"{operation_name} started", context)

            started = time.perf_counter()
            try:
                result = function(self, *args, **kwargs)
            except Exception as e:
                context["duration_ms"] = round((time.perf_counter() - started) * 1000, 3)
                logger.log_error(e, context)
                raise

            context["duration_ms"] = round((time.perf_counter() - started) * 1000, 3)
            logger.log_operation(f"{operation_name}_completed", {**context, "success": True})
            return result

        return wrapper

    return decorator


def validate_metadata(required_fields: Iterable[str]):
    """
    Reject a call whose metadata lacks any of `required_fields`.

    The metadata is the ``metadata`` keyword, else the last positional
    argument.

    Raises:
        ValidationError: Naming the first missing or empty field
    """
    required = list(required_fields)

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            if "metadata" in kwargs:
                metadata = kwargs["metadata"]
            else:
                metadata = args[-1] if args else {}
            DataValidator.validate_required_fields(metadata, required)
            return function(self, *args, **kwargs)

        return wrapper

    return decorator


def handle_db_errors(function: Callable) -> Callable:
    """
    Re-raise store failures as DatabaseError.

    Covers SQLAlchemy errors (integrity violations get their own message)
    and values the driver cannot bind. Other exceptions pass through.
    """

    @wraps(function)
    def wrapper(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except IntegrityError as e:
            raise DatabaseError(f"Data integrity violation: {e}") from e
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database operation failed: {e}") from e
        except BIND_ERRORS as e:
            raise DatabaseError(f"Value out of range for the database: {e}") from e

    return wrapper
