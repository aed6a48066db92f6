#!/usr/bin/env python3
"""
entry_fields.py
-------------------
Named form records for books and articles.

A form on screen is a list of text lines, one per field, in a fixed order.
These records give each position a name so the persistence layer never
indexes into a bare list:

    Book:    author, title, pages, volume, edition, year, series, publisher, note
    Article: title, journal, volume, pages, note, year, edition, publisher

Usage:
    fields = BookFields.from_lines(text_lines)
    fields.publisher        # form line 8
    fields.to_lines()       # back to form order
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, fields
from typing import ClassVar, List, Sequence, Tuple

# --- Local imports ---
from librarydb.core.exceptions import FieldCountError


@dataclass(frozen=True)
class EntryFields:
    """
    Base class for form records.

    Subclasses declare their fields in form order; every field is a string
    and empty strings are legal.
    """

    RECORD_NAME: ClassVar[str] = "Entry"
    LABELS: ClassVar[Tuple[str, ...]] = ()

    @classmethod
    def field_names(cls) -> List[str]:
        """Field names in form order."""
        return [f.name for f in fields(cls)]

    @classmethod
    def field_count(cls) -> int:
        """Number of lines a complete form has."""
        return len(fields(cls))

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> "EntryFields":
        """
        Build a record from form lines.

        Args:
            lines: Field values in form order

        Returns:
            Record instance

        Raises:
            FieldCountError: If fewer lines than fields are supplied

        Notes:
            Lines past the last field are ignored.
        """
        expected = cls.field_count()
        if len(lines) < expected:
            raise FieldCountError(cls.RECORD_NAME, expected, len(lines))
        return cls(*(str(value) for value in lines[:expected]))

    def to_lines(self) -> List[str]:
        """Field values in form order."""
        return [getattr(self, name) for name in self.field_names()]


@dataclass(frozen=True)
class BookFields(EntryFields):
    """Editable fields of a book, in form order."""

    RECORD_NAME: ClassVar[str] = "Book"
    LABELS: ClassVar[Tuple[str, ...]] = (
        "Author",
        "Title",
        "Pages",
        "Volume",
        "Edition",
        "Year",
        "Series",
        "Publisher",
        "Note",
    )

    author: str = ""
    title: str = ""
    pages: str = ""
    volume: str = ""
    edition: str = ""
    year: str = ""
    series: str = ""
    publisher: str = ""
    note: str = ""


@dataclass(frozen=True)
class ArticleFields(EntryFields):
    """Editable fields of an article, in form order."""

    RECORD_NAME: ClassVar[str] = "Article"
    LABELS: ClassVar[Tuple[str, ...]] = (
        "Title",
        "Journal",
        "Volume",
        "Pages",
        "Note",
        "Year",
        "Edition",
        "Publisher",
    )

    title: str = ""
    journal: str = ""
    volume: str = ""
    pages: str = ""
    note: str = ""
    year: str = ""
    edition: str = ""
    publisher: str = ""
