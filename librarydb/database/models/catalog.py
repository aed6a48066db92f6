"""
Catalog Models
----------------------

Models for the bibliographic catalog.

Models:
    - MasterEntry: One row per cite_key, recording the entry type
    - Book: Book record referencing its MasterEntry, Publisher and MonthYear
    - Article: Article record referencing the same three tables
    - Publisher: Publisher name seeded from the entry form
    - MonthYear: Month/year pair seeded from the entry form

Every identifier is a UUID4 string. A Publisher and a MonthYear row are
written for each created entry; they are never deduplicated and are left
in place when the entry is deleted.
"""
from __future__ import annotations

from typing import ClassVar, Optional, Type, Union

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from librarydb.core.exceptions import ValidationError
from librarydb.dataclasses import ArticleFields, BookFields, EntryFields

from .base import Base, new_id
from .enums import EntryType


class MasterEntry(Base):
    """
    Registry of every entry in the catalog.

    Attributes:
        cite_key: Primary key shared with the Book or Article row
        entry_type: BOOK or ARTICLE
    """

    __tablename__ = "master_entries"

    cite_key: Mapped[str] = mapped_column(String, primary_key=True)
    entry_type: Mapped[EntryType] = mapped_column(
        SQLEnum(
            EntryType,
            values_callable=lambda x: [e.value for e in x],
            native_enum=False,
            length=16,
        ),
        nullable=False,
    )

    @classmethod
    def new(cls, kind: Union[EntryType, str]) -> "MasterEntry":
        """Create a master entry with a fresh cite_key."""
        return cls(cite_key=new_id(), entry_type=EntryType.coerce(kind))

    def __repr__(self) -> str:
        return f"<MasterEntry(cite_key={self.cite_key}, type={self.entry_type.value})>"


class Publisher(Base):
    """
    Publisher row created alongside each entry.

    Attributes:
        publisher_id: Primary key
        publisher: Publisher name as typed in the form
        address: Placeholder address ("n/a")
    """

    __tablename__ = "publisher"

    publisher_id: Mapped[str] = mapped_column(String, primary_key=True)
    publisher: Mapped[Optional[str]] = mapped_column(Text)
    address: Mapped[Optional[str]] = mapped_column(Text)

    @classmethod
    def new(cls, name: str) -> "Publisher":
        """Create a publisher row for a form's publisher field."""
        return cls(publisher_id=new_id(), publisher=name, address="n/a")

    def __repr__(self) -> str:
        return f"<Publisher(id={self.publisher_id}, name={self.publisher!r})>"


class MonthYear(Base):
    """
    Month/year row created alongside each entry.

    Attributes:
        month_year_id: Primary key
        month: Two-digit month, "01" unless set otherwise
        year: Year as text, copied from the form
    """

    __tablename__ = "month_year"

    month_year_id: Mapped[str] = mapped_column(String, primary_key=True)
    month: Mapped[Optional[str]] = mapped_column(String)
    year: Mapped[Optional[str]] = mapped_column(String)

    @classmethod
    def new(cls, year: str, month: str = "01") -> "MonthYear":
        """Create a month/year row for a form's year field."""
        return cls(month_year_id=new_id(), month=month, year=year)

    def __repr__(self) -> str:
        return f"<MonthYear(id={self.month_year_id}, {self.month}/{self.year})>"


class _EntryRow:
    """Shared helpers for rows built from form records."""

    FIELDS: ClassVar[Type[EntryFields]] = EntryFields
    ID_FIELD: ClassVar[str] = ""

    @classmethod
    def from_fields(
        cls,
        fields: EntryFields,
        cite_key: str,
        publisher_id: str,
        month_year_id: str,
    ):
        """
        Create an unsaved row from a form record.

        Raises:
            ValidationError: If the record belongs to another entry type
        """
        if not isinstance(fields, cls.FIELDS):
            raise ValidationError(
                f"{type(fields).__name__} cannot fill a {cls.__name__} row"
            )
        row = cls(
            **{cls.ID_FIELD: new_id()},
            cite_key=cite_key,
            publisher_id=publisher_id,
            month_year_id=month_year_id,
        )
        row.apply_fields(fields)
        return row

    def apply_fields(self, fields: EntryFields) -> None:
        """Overwrite the editable columns; keys are left alone."""
        for name in self.FIELDS.field_names():
            setattr(self, name, getattr(fields, name))

    def to_fields(self) -> EntryFields:
        """Read the editable columns into a form record."""
        return self.FIELDS(
            *(getattr(self, name) or "" for name in self.FIELDS.field_names())
        )

    @property
    def entry_id(self) -> str:
        """Primary key under a type-independent name."""
        return getattr(self, self.ID_FIELD)


class Book(_EntryRow, Base):
    """
    A book in the catalog.

    Attributes:
        book_id: Primary key
        cite_key: Key of the owning MasterEntry
        publisher_id: Publisher row written when the book was created
        month_year_id: MonthYear row written when the book was created
        author, title, pages, volume, edition, year, series, publisher, note:
            Form fields, stored as text
    """

    __tablename__ = "book"

    FIELDS: ClassVar[Type[BookFields]] = BookFields
    ID_FIELD: ClassVar[str] = "book_id"

    book_id: Mapped[str] = mapped_column(String, primary_key=True)
    cite_key: Mapped[str] = mapped_column(
        String, ForeignKey("master_entries.cite_key"), index=True
    )
    publisher_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("publisher.publisher_id")
    )
    month_year_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("month_year.month_year_id")
    )
    author: Mapped[Optional[str]] = mapped_column(Text)
    title: Mapped[Optional[str]] = mapped_column(Text)
    pages: Mapped[Optional[str]] = mapped_column(Text)
    volume: Mapped[Optional[str]] = mapped_column(Text)
    edition: Mapped[Optional[str]] = mapped_column(Text)
    year: Mapped[Optional[str]] = mapped_column(Text)
    series: Mapped[Optional[str]] = mapped_column(Text)
    publisher: Mapped[Optional[str]] = mapped_column(Text)
    note: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Book(cite_key={self.cite_key}, title={self.title!r})>"


class Article(_EntryRow, Base):
    """
    An article in the catalog.

    Attributes:
        cite_key: Key of the owning MasterEntry
        article_id: Primary key
        publisher_id: Publisher row written when the article was created
        month_year_id: MonthYear row written when the article was created
        title, journal, volume, pages, note, year, edition, publisher:
            Form fields, stored as text
    """

    __tablename__ = "article"

    FIELDS: ClassVar[Type[ArticleFields]] = ArticleFields
    ID_FIELD: ClassVar[str] = "article_id"

    cite_key: Mapped[str] = mapped_column(
        String, ForeignKey("master_entries.cite_key"), index=True
    )
    article_id: Mapped[str] = mapped_column(String, primary_key=True)
    publisher_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("publisher.publisher_id")
    )
    month_year_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("month_year.month_year_id")
    )
    title: Mapped[Optional[str]] = mapped_column(Text)
    journal: Mapped[Optional[str]] = mapped_column(Text)
    volume: Mapped[Optional[str]] = mapped_column(Text)
    pages: Mapped[Optional[str]] = mapped_column(Text)
    note: Mapped[Optional[str]] = mapped_column(Text)
    year: Mapped[Optional[str]] = mapped_column(Text)
    edition: Mapped[Optional[str]] = mapped_column(Text)
    publisher: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Article(cite_key={self.cite_key}, title={self.title!r})>"


CatalogEntry = Union[Book, Article]

_MODELS = {
    EntryType.BOOK: Book,
    EntryType.ARTICLE: Article,
}


def model_for(kind: Union[EntryType, str]) -> Type[CatalogEntry]:
    """Return the ORM model holding entries of the given type."""
    return _MODELS[EntryType.coerce(kind)]


def fields_for(kind: Union[EntryType, str]) -> Type[EntryFields]:
    """Return the form record class for the given entry type."""
    return model_for(kind).FIELDS

