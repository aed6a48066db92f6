#!/usr/bin/env python3
"""
entry_manager.py
--------------------
Manager for catalog entry CRUD operations.

An entry is a record group of four rows written together:

    master_entries  one row per cite_key, naming the entry type
    book | article  the editable fields, keyed by its own id
    publisher       seeded from the form's publisher field
    month_year      seeded from the form's year field

The manager works inside a caller-owned session and never commits, so a
group is only persisted when the enclosing session_scope commits. Any
failure part-way through leaves nothing behind once the scope rolls back.

Publisher and MonthYear rows are not shared between entries and are not
touched by update or delete. Update writes a fresh, unreferenced pair;
delete leaves the entry's pair in place. See CatalogDB.prune_orphans for
the explicit cleanup path.

Usage:
    entry_mgr = EntryManager(session, logger)
    cite_key = entry_mgr.create_entry(EntryType.BOOK, BookFields(title="Dune"))
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Union

from sqlalchemy.orm import Session

from librarydb.core.exceptions import ValidationError
from librarydb.core.logging_manager import CatalogLogger
from librarydb.dataclasses import EntryFields
from librarydb.database.decorators import (
    DatabaseOperation,
    handle_db_errors,
    log_database_operation,
)
from librarydb.database.models import (
    CatalogEntry,
    EntryType,
    MasterEntry,
    MonthYear,
    Publisher,
    fields_for,
    model_for,
)
from .base_manager import BaseManager

FieldsInput = Union[EntryFields, Sequence[str]]


class EntryManager(BaseManager):
    """
    Manager for Book and Article record groups.

    Every public method takes the entry type first; ``kind`` may be an
    EntryType or its name ("book", "ARTICLE", "books").
    """

    def __init__(self, session: Session, logger: Optional[CatalogLogger] = None):
        super().__init__(session, logger)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _coerce_fields(kind: EntryType, fields: FieldsInput) -> EntryFields:
        """
        Normalize form input into the record for ``kind``.

        Raises:
            FieldCountError: If a line sequence is too short
            ValidationError: If a record of the other entry type is given
        """
        record = fields_for(kind)
        if isinstance(fields, EntryFields):
            if not isinstance(fields, record):
                raise ValidationError(
                    f"{type(fields).__name__} given for a {kind.display_name} entry"
                )
            return fields
        if isinstance(fields, str):
            raise ValidationError("Form fields must be a sequence of lines")
        return record.from_lines(list(fields))

    def _find(self, kind: EntryType, cite_key: str) -> Optional[CatalogEntry]:
        return self._get_by_field(model_for(kind), "cite_key", cite_key)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @log_database_operation("create_entry")
    def create_entry(self, kind: Union[EntryType, str], fields: FieldsInput) -> str:
        """
        Create a record group from form fields.

        Rows are flushed in order: MasterEntry, the Book/Article row,
        Publisher, MonthYear. The entry row references the other three.

        Args:
            kind: Entry type
            fields: Named record or lines in form order

        Returns:
            The new cite_key

        Raises:
            FieldCountError: If fewer lines than fields are given
            DatabaseError: If any insert fails
        """
        kind = EntryType.coerce(kind)
        record = self._coerce_fields(kind, fields)
        model = model_for(kind)

        with DatabaseOperation(self.logger, "create_entry_rows", details={"kind": kind.value}):
            master = MasterEntry.new(kind)
            publisher = Publisher.new(record.publisher)
            month_year = MonthYear.new(record.year)

            self.session.add(master)
            self.session.flush()

            entry = model.from_fields(
                record,
                cite_key=master.cite_key,
                publisher_id=publisher.publisher_id,
                month_year_id=month_year.month_year_id,
            )
            self.session.add(entry)
            self.session.flush()

            self.session.add(publisher)
            self.session.flush()

            self.session.add(month_year)
            self.session.flush()
            cite_key = master.cite_key

        if self.logger:
            self.logger.log_info(
                f"Created {kind.display_name}",
                {"cite_key": cite_key, "title": record.title},
            )
        return cite_key

    @log_database_operation("update_entry")
    def update_entry(
        self,
        kind: Union[EntryType, str],
        fields: FieldsInput,
        cite_key: str,
    ) -> bool:
        """
        Rewrite the editable columns of an existing entry.

        The entry keeps its primary key, cite_key, publisher_id and
        month_year_id. A new Publisher and MonthYear pair is written from
        the form but nothing references it.

        Args:
            kind: Entry type
            fields: Named record or lines in form order
            cite_key: Entry to update

        Returns:
            True if a row was updated, False if no row matched

        Raises:
            FieldCountError: If fewer lines than fields are given
            DatabaseError: If a statement fails
        """
        kind = EntryType.coerce(kind)
        record = self._coerce_fields(kind, fields)

        with DatabaseOperation(self.logger, "update_entry_rows", details={"cite_key": cite_key}):
            entry = self._find(kind, cite_key)
            if entry is None:
                return False

            entry.apply_fields(record)
            self.session.flush()
            self.session.add(Publisher.new(record.publisher))
            self.session.add(MonthYear.new(record.year))
            self.session.flush()

        if self.logger:
            self.logger.log_info(
                f"Updated {kind.display_name}", {"cite_key": cite_key}
            )
        return True

    @log_database_operation("delete_entry")
    def delete_entry(self, kind: Union[EntryType, str], cite_key: str) -> bool:
        """
        Delete the MasterEntry and the entry row for ``cite_key``.

        Publisher and MonthYear rows are left in place.

        Returns:
            True if any row was removed
        """
        kind = EntryType.coerce(kind)

        with DatabaseOperation(self.logger, "delete_entry_rows", details={"cite_key": cite_key}):
            removed = self._delete_where(MasterEntry, "cite_key", cite_key)
            removed += self._delete_where(model_for(kind), "cite_key", cite_key)
            self.session.flush()

        if self.logger:
            if removed:
                self.logger.log_info(
                    f"Deleted {kind.display_name}",
                    {"cite_key": cite_key, "rows": removed},
                )
            else:
                self.logger.log_warning(
                    f"No {kind.display_name} to delete", {"cite_key": cite_key}
                )
        return removed > 0

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @handle_db_errors
    def get_entry(
        self, kind: Union[EntryType, str], cite_key: str
    ) -> Optional[CatalogEntry]:
        """Return the Book/Article row for ``cite_key``, or None."""
        return self._find(EntryType.coerce(kind), cite_key)

    @handle_db_errors
    def get_fields(
        self, kind: Union[EntryType, str], cite_key: str
    ) -> Optional[EntryFields]:
        """Return the named form record for ``cite_key``, or None."""
        entry = self._find(EntryType.coerce(kind), cite_key)
        return entry.to_fields() if entry is not None else None

    @handle_db_errors
    def select_entry_fields(
        self, kind: Union[EntryType, str], cite_key: str
    ) -> List[str]:
        """
        Return the editable fields in form order.

        The result feeds straight back into update_entry. An empty list
        means no row matched.
        """
        record = self.get_fields(kind, cite_key)
        return record.to_lines() if record is not None else []

    @handle_db_errors
    def list_entries(self, kind: Union[EntryType, str]) -> List[CatalogEntry]:
        """All rows of the entry table, in storage order."""
        return self._get_all(model_for(kind))

    @handle_db_errors
    def count_entries(self, kind: Union[EntryType, str]) -> int:
        """Number of rows in the entry table."""
        return self._count(model_for(kind))
