#!/usr/bin/env python3
"""
decorators.py
--------------------
Shared decorators and context managers for database operations.

    - DatabaseOperation: wraps a block, logs completion with timing and
      converts SQLAlchemy failures into DatabaseError subclasses
    - log_database_operation: decorator form of the timing/logging half
    - handle_db_errors: decorator form of the error-conversion half
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from functools import wraps
from types import TracebackType
from typing import Any, Callable, Dict, Optional, Type

# --- Third party imports ---
from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    OperationalError,
    ProgrammingError,
    SQLAlchemyError,
)

# --- Local imports ---
from librarydb.core.exceptions import DatabaseError, SchemaMismatchError
from librarydb.core.logging_manager import CatalogLogger, safe_logger


def convert_db_error(error: SQLAlchemyError) -> DatabaseError:
    """
    Map a SQLAlchemy exception onto the project's error hierarchy.

    Statement preparation and binding failures (missing tables or columns,
    wrong parameter counts) become SchemaMismatchError; everything else
    becomes a plain DatabaseError.
    """
    if isinstance(error, IntegrityError):
        return DatabaseError(f"Data integrity violation: {error}")
    if isinstance(error, (ProgrammingError, InterfaceError)):
        return SchemaMismatchError(f"Statement rejected by schema: {error}")
    if isinstance(error, OperationalError) and "no such" in str(error).lower():
        return SchemaMismatchError(f"Statement rejected by schema: {error}")
    return DatabaseError(f"Database operation failed: {error}")


class DatabaseOperation:
    """
    Context manager for a logged database operation.

    On success logs ``<name>_completed`` with the elapsed time. On failure
    logs the error with context; SQLAlchemy errors are re-raised as
    DatabaseError, anything else propagates unchanged.

    Example:
        with DatabaseOperation(self.logger, "create_entry"):
            self.session.add(master)
            self.session.flush()
    """

    def __init__(
        self,
        logger: Optional[CatalogLogger],
        operation_name: str,
        log_start: bool = False,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.logger = safe_logger(logger)
        self.operation_name = operation_name
        self.log_start = log_start
        self.details = dict(details or {})
        self.start_time: Optional[datetime] = None

    def _elapsed(self) -> float:
        if self.start_time is None:
            return 0.0
        return (datetime.now() - self.start_time).total_seconds()

    def __enter__(self) -> "DatabaseOperation":
        self.start_time = datetime.now()
        if self.log_start:
            self.logger.log_debug(f"Starting {self.operation_name}", self.details or None)
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        duration = self._elapsed()

        if exc is None:
            self.logger.log_operation(
                f"{self.operation_name}_completed",
                {**self.details, "duration_seconds": duration, "success": True},
            )
            return False

        if not isinstance(exc, Exception):
            return False

        self.logger.log_error(
            exc,
            {
                **self.details,
                "operation": self.operation_name,
                "duration_seconds": duration,
            },
        )

        if isinstance(exc, SQLAlchemyError):
            raise convert_db_error(exc) from exc
        return False


def log_database_operation(operation_name: str):
    """
    Decorator to log manager methods with timing and context.

    The wrapped method's instance must expose a ``logger`` attribute.

    Args:
        operation_name: Name of the operation being logged
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            start_time = datetime.now()
            operation_id = f"{operation_name}_{start_time.strftime('%Y%m%d_%H%M%S_%f')}"
            logger = safe_logger(getattr(self, "logger", None))

            logger.log_debug(
                f"Starting {operation_name}",
                {
                    "operation_id": operation_id,
                    "args_count": len(args),
                    "kwargs_keys": list(kwargs.keys()),
                },
            )

            try:
                result = function(self, *args, **kwargs)
            except Exception as e:
                logger.log_error(
                    e,
                    {
                        "operation": operation_name,
                        "operation_id": operation_id,
                        "duration_seconds": (datetime.now() - start_time).total_seconds(),
                    },
                )
                raise

            logger.log_operation(
                f"{operation_name}_completed",
                {
                    "operation_id": operation_id,
                    "duration_seconds": (datetime.now() - start_time).total_seconds(),
                    "success": True,
                },
            )
            return result

        return wrapper

    return decorator


def handle_db_errors(function: Callable) -> Callable:
    """
    Decorator converting SQLAlchemy errors raised by ``function`` into
    DatabaseError subclasses.
    """

    @wraps(function)
    def wrapper(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except SQLAlchemyError as e:
            raise convert_db_error(e) from e

    return wrapper
