"""Tests for the CatalogDB facade."""
import pytest
from unittest.mock import MagicMock

from librarydb.core.exceptions import DatabaseError, StoreConnectionError
from librarydb.core.logging_manager import CatalogLogger
from librarydb.database.manager import CatalogDB
from librarydb.database.models import Book, EntryType, MasterEntry, MonthYear, Publisher


class TestSchema:
    """Tests for startup checks and schema creation."""

    def test_check_connection_on_initialized_store(self, test_db):
        test_db.check_connection()

    def test_check_connection_reports_missing_tables(self, empty_db):
        with pytest.raises(StoreConnectionError) as exc_info:
            empty_db.check_connection()

        message = str(exc_info.value)
        assert "Missing tables" in message
        assert "book" in message
        assert "libdb init" in message

    def test_missing_tables(self, empty_db):
        assert set(empty_db.missing_tables()) == {
            "master_entries",
            "book",
            "article",
            "publisher",
            "month_year",
        }

    def test_initialize_schema_reports_created_tables(self, empty_db):
        created = empty_db.initialize_schema()

        assert "book" in created
        assert empty_db.missing_tables() == []
        assert empty_db.initialize_schema() == []

    def test_creates_parent_directory(self, tmp_path):
        db = CatalogDB(tmp_path / "nested" / "dir" / "catalog.db")
        try:
            assert (tmp_path / "nested" / "dir").is_dir()
        finally:
            db.close()

    def test_uses_given_logger(self, tmp_path):
        mock_logger = MagicMock(spec=CatalogLogger)
        db = CatalogDB(tmp_path / "catalog.db", logger=mock_logger)
        try:
            assert db.logger is mock_logger
            mock_logger.log_operation.assert_any_call(
                "database_init_complete", {"success": True}
            )
        finally:
            db.close()

    def test_context_manager_closes(self, tmp_path):
        with CatalogDB(tmp_path / "catalog.db") as db:
            db.initialize_schema()
            assert db.count_entries(EntryType.BOOK) == 0


class TestSessionScope:
    """Tests for session_scope and the entries property."""

    def test_entries_outside_scope_raises(self, test_db):
        with pytest.raises(DatabaseError, match="requires active session"):
            _ = test_db.entries

    def test_entries_inside_scope(self, test_db, book_lines):
        with test_db.session_scope():
            cite_key = test_db.entries.create_entry(EntryType.BOOK, book_lines)

        assert test_db.select_entry_fields(EntryType.BOOK, cite_key) == book_lines

    def test_scope_rolls_back_on_error(self, test_db, book_lines):
        with pytest.raises(RuntimeError):
            with test_db.session_scope():
                test_db.entries.create_entry(EntryType.BOOK, book_lines)
                raise RuntimeError("abort")

        assert test_db.count_entries(EntryType.BOOK) == 0

    def test_manager_released_after_scope(self, test_db):
        with test_db.session_scope():
            pass

        with pytest.raises(DatabaseError):
            _ = test_db.entries


class TestEntryOperations:
    """Per-call transactions through the facade."""

    def test_create_list_count(self, test_db, book_lines, other_book_lines):
        first = test_db.create_entry(EntryType.BOOK, book_lines)
        second = test_db.create_entry(EntryType.BOOK, other_book_lines)

        rows = test_db.list_entries(EntryType.BOOK)

        assert [row.cite_key for row in rows] == [first, second]
        assert all(isinstance(row, Book) for row in rows)
        assert rows[0].title == "Dune"
        assert test_db.count_entries(EntryType.BOOK) == 2

    def test_update_and_get_fields(self, test_db, book_lines):
        cite_key = test_db.create_entry(EntryType.BOOK, book_lines)
        edited = list(book_lines)
        edited[8] = "reread"

        assert test_db.update_entry(EntryType.BOOK, edited, cite_key) is True
        assert test_db.get_fields(EntryType.BOOK, cite_key).note == "reread"

    def test_delete_only_article(self, test_db, article_lines):
        cite_key = test_db.create_entry(EntryType.ARTICLE, article_lines)

        assert test_db.delete_entry(EntryType.ARTICLE, cite_key) is True
        assert test_db.list_entries(EntryType.ARTICLE) == []
        assert test_db.get_entry(EntryType.ARTICLE, cite_key) is None


class TestOrphans:
    """Tests for orphan counting and pruning."""

    def test_fresh_entries_have_no_orphans(self, test_db, book_lines):
        test_db.create_entry(EntryType.BOOK, book_lines)

        assert test_db.count_orphans() == {
            "orphaned_publishers": 0,
            "orphaned_month_years": 0,
        }

    def test_update_and_delete_leave_orphans(self, test_db, book_lines, article_lines):
        book = test_db.create_entry(EntryType.BOOK, book_lines)
        article = test_db.create_entry(EntryType.ARTICLE, article_lines)

        test_db.update_entry(EntryType.BOOK, book_lines, book)
        test_db.delete_entry(EntryType.ARTICLE, article)

        assert test_db.count_orphans() == {
            "orphaned_publishers": 2,
            "orphaned_month_years": 2,
        }

    def test_dry_run_deletes_nothing(self, test_db, article_lines):
        cite_key = test_db.create_entry(EntryType.ARTICLE, article_lines)
        test_db.delete_entry(EntryType.ARTICLE, cite_key)

        assert test_db.prune_orphans(dry_run=True) == {
            "orphaned_publishers": 1,
            "orphaned_month_years": 1,
        }
        assert sum(test_db.count_orphans().values()) == 2

    def test_prune_keeps_referenced_rows(self, test_db, book_lines):
        cite_key = test_db.create_entry(EntryType.BOOK, book_lines)
        test_db.update_entry(EntryType.BOOK, book_lines, cite_key)

        removed = test_db.prune_orphans()

        assert removed == {"orphaned_publishers": 1, "orphaned_month_years": 1}
        assert sum(test_db.count_orphans().values()) == 0
        book = test_db.get_entry(EntryType.BOOK, cite_key)
        with test_db.session_scope() as session:
            assert session.get(Publisher, book.publisher_id) is not None
            assert session.get(MonthYear, book.month_year_id) is not None


class TestCheckIntegrity:
    """Tests for check_integrity."""

    def test_clean_catalog(self, test_db, book_lines):
        test_db.create_entry(EntryType.BOOK, book_lines)

        results = test_db.check_integrity()

        assert set(results) == {"orphan_integrity", "entry_integrity"}
        assert results["entry_integrity"] == {
            "master_entries_without_row": 0,
            "entries_without_master": 0,
        }

    def test_detects_entry_without_master(self, test_db, book_lines):
        cite_key = test_db.create_entry(EntryType.BOOK, book_lines)
        with test_db.session_scope() as session:
            session.delete(session.get(MasterEntry, cite_key))

        results = test_db.check_integrity()

        assert results["entry_integrity"]["entries_without_master"] == 1
