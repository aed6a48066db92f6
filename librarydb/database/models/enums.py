"""
Enumeration Types
------------------

Enum classes for the catalog models.

Enums:
    - EntryType: Kind of bibliographic entry (book, article)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import List, Union

# --- Local imports ---
from librarydb.core.exceptions import ValidationError


class EntryType(str, Enum):
    """
    Enumeration of entry types stored in master_entries.entry_type.

    - BOOK: Row lives in the `book` table
    - ARTICLE: Row lives in the `article` table
    """

    BOOK = "BOOK"
    ARTICLE = "ARTICLE"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available entry type choices."""
        return [entry_type.value for entry_type in cls]

    @classmethod
    def coerce(cls, value: Union["EntryType", str]) -> "EntryType":
        """
        Resolve an EntryType from an enum member or a case-insensitive name.

        Accepts the plural CLI spellings ("books", "articles") as well.

        Raises:
            ValidationError: If the value names no entry type
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().upper()
        if normalized.endswith("S"):
            normalized = normalized[:-1]
        try:
            return cls(normalized)
        except ValueError:
            raise ValidationError(f"Unknown entry type: {value!r}")

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        return self.value.title()

    @property
    def table_name(self) -> str:
        """Name of the table holding rows of this type."""
        return self.value.lower()
