#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Library DB project.

This module defines a hierarchy of exceptions used throughout the project
to handle specific error conditions in the store, the forms and the
configuration layer.

Exception Hierarchy:
    Exception (built-in)
    ├── DatabaseError - Base for all database-related errors
    │   ├── StoreConnectionError - Store unreachable or tables missing
    │   └── SchemaMismatchError - Statement/bind failure against the schema
    ├── ValidationError - Data validation failures
    │   └── FieldCountError - Form shorter than the record it fills
    └── ConfigError - Malformed configuration file

Usage:
    from librarydb.core.exceptions import DatabaseError, ValidationError

    try:
        db.create_entry(EntryType.BOOK, lines)
    except ValidationError as e:
        logger.log_warning(f"Invalid form: {e}")
    except DatabaseError as e:
        logger.log_error(e, {"operation": "create_entry"})
"""


class DatabaseError(Exception):
    """
    Base exception for database-related errors.

    Raised when database operations fail due to connection issues,
    statement errors, integrity violations, or other store problems.

    Catch this to handle any database error, or catch specific
    subclasses for more granular error handling.

    Examples:
        >>> raise DatabaseError("Data integrity violation: duplicate cite_key")

    See Also:
        StoreConnectionError, SchemaMismatchError
    """

    pass


class StoreConnectionError(DatabaseError):
    """
    Exception for a store that cannot be opened or is not initialized.

    Raised at startup when:
    - The SQLite file cannot be opened
    - One of the catalog tables is missing (run `libdb init` first)

    This is fatal for the interactive session; it is never retried.

    Examples:
        >>> raise StoreConnectionError("Missing tables: book, article")
    """

    pass


class SchemaMismatchError(DatabaseError):
    """
    Exception for statements the schema cannot accept.

    Raised when preparing or binding a statement fails because a column
    is missing or the table layout differs from the ORM models. Indicates
    a programming or setup error, not a transient condition.

    Examples:
        >>> raise SchemaMismatchError("no such column: book.series")
    """

    pass


class ValidationError(Exception):
    """
    Exception for data validation failures.

    Raised when input data fails validation checks:
    - Unknown entry type
    - Form records with the wrong shape

    Examples:
        >>> raise ValidationError("Unknown entry type: 'thesis'")
    """

    pass


class FieldCountError(ValidationError):
    """
    Exception for a form that has fewer lines than its record has fields.

    Attributes:
        expected: Number of fields the record needs
        received: Number of lines supplied

    Examples:
        >>> raise FieldCountError("Book", expected=9, received=5)
    """

    def __init__(self, record_name: str, expected: int, received: int) -> None:
        self.record_name = record_name
        self.expected = expected
        self.received = received
        super().__init__(
            f"{record_name} form needs {expected} lines, got {received}"
        )


class ConfigError(Exception):
    """
    Exception for configuration loading failures.

    Raised when the YAML configuration file exists but cannot be parsed,
    or when it names an unknown key binding.

    Examples:
        >>> raise ConfigError("Unknown key name 'F99' for binding 'save'")
    """

    pass
