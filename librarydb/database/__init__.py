#!/usr/bin/env python3
"""
Library DB Database Package
---------------------------
SQLite persistence for the bibliographic catalog.

- manager: CatalogDB facade (engine, session scope, entry operations)
- managers: session-bound EntryManager
- models: MasterEntry, Book, Article, Publisher, MonthYear
- configs: integrity check definitions
- decorators: logging and error-conversion helpers
"""

from .manager import CatalogDB
from librarydb.core.exceptions import (
    DatabaseError,
    SchemaMismatchError,
    StoreConnectionError,
    ValidationError,
)
from .decorators import (
    DatabaseOperation,
    handle_db_errors,
    log_database_operation,
)

__all__ = [
    # Main manager
    "CatalogDB",
    # Exceptions
    "DatabaseError",
    "StoreConnectionError",
    "SchemaMismatchError",
    "ValidationError",
    # Decorators
    "DatabaseOperation",
    "log_database_operation",
    "handle_db_errors",
]
