"""
Database Models Package
------------------------

SQLAlchemy ORM models for the Library DB catalog.

- base: Base class and identifier factory
- enums: Enumeration types
- catalog: MasterEntry, Book, Article, Publisher, MonthYear

Usage:
    from librarydb.database.models import Book, MasterEntry, EntryType
"""
# Base classes
from .base import Base, new_id

# Enumerations
from .enums import EntryType

# Catalog models
from .catalog import (
    Article,
    Book,
    CatalogEntry,
    MasterEntry,
    MonthYear,
    Publisher,
    fields_for,
    model_for,
)

__all__ = [
    # Base
    "Base",
    "new_id",
    # Enums
    "EntryType",
    # Models
    "MasterEntry",
    "Book",
    "Article",
    "Publisher",
    "MonthYear",
    "CatalogEntry",
    # Helpers
    "model_for",
    "fields_for",
]
