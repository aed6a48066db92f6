"""Tests for database decorators and context managers."""
import pytest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError, SQLAlchemyError

from librarydb.database.decorators import (
    DatabaseOperation,
    convert_db_error,
    handle_db_errors,
    log_database_operation,
)
from librarydb.core.exceptions import DatabaseError, SchemaMismatchError
from librarydb.core.logging_manager import CatalogLogger


class TestDatabaseOperation:
    """Tests for DatabaseOperation context manager."""

    def test_successful_operation(self):
        """DatabaseOperation should log completion on success."""
        mock_logger = MagicMock(spec=CatalogLogger)

        with DatabaseOperation(mock_logger, "test_operation"):
            result = 1 + 1

        assert result == 2
        mock_logger.log_operation.assert_called_once()
        call_args = mock_logger.log_operation.call_args
        assert call_args[0][0] == "test_operation_completed"
        assert call_args[0][1]["success"] is True
        assert call_args[0][1]["duration_seconds"] >= 0

    def test_details_are_logged(self):
        mock_logger = MagicMock(spec=CatalogLogger)

        with DatabaseOperation(mock_logger, "create", details={"kind": "BOOK"}):
            pass

        assert mock_logger.log_operation.call_args[0][1]["kind"] == "BOOK"

    def test_successful_operation_with_none_logger(self):
        """DatabaseOperation should work with None logger (uses NullLogger)."""
        with DatabaseOperation(None, "test_operation"):
            result = 1 + 1

        assert result == 2

    def test_integrity_error_raises_database_error(self):
        """DatabaseOperation should convert IntegrityError to DatabaseError."""
        mock_logger = MagicMock(spec=CatalogLogger)

        with pytest.raises(DatabaseError) as exc_info:
            with DatabaseOperation(mock_logger, "test_operation"):
                raise IntegrityError("statement", {}, Exception("duplicate"))

        assert "Data integrity violation" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, IntegrityError)
        mock_logger.log_error.assert_called_once()

    def test_sqlalchemy_error_raises_database_error(self):
        """DatabaseOperation should convert SQLAlchemyError to DatabaseError."""
        mock_logger = MagicMock(spec=CatalogLogger)

        with pytest.raises(DatabaseError) as exc_info:
            with DatabaseOperation(mock_logger, "test_operation"):
                raise SQLAlchemyError("connection failed")

        assert "Database operation failed" in str(exc_info.value)
        mock_logger.log_error.assert_called_once()

    def test_other_exceptions_propagate(self):
        """DatabaseOperation should propagate non-SQLAlchemy exceptions."""
        mock_logger = MagicMock(spec=CatalogLogger)

        with pytest.raises(ValueError):
            with DatabaseOperation(mock_logger, "test_operation"):
                raise ValueError("invalid value")

        mock_logger.log_error.assert_called_once()
        mock_logger.log_operation.assert_not_called()

    def test_log_start_option(self):
        """DatabaseOperation should log start when log_start=True."""
        mock_logger = MagicMock(spec=CatalogLogger)

        with DatabaseOperation(mock_logger, "test_operation", log_start=True):
            pass

        mock_logger.log_debug.assert_called_once()
        assert "Starting test_operation" in mock_logger.log_debug.call_args[0][0]

    def test_no_log_start_by_default(self):
        """DatabaseOperation should not log start by default."""
        mock_logger = MagicMock(spec=CatalogLogger)

        with DatabaseOperation(mock_logger, "test_operation"):
            pass

        mock_logger.log_debug.assert_not_called()


class TestConvertDbError:
    """Tests for mapping SQLAlchemy errors onto the project hierarchy."""

    def test_programming_error_is_schema_mismatch(self):
        error = ProgrammingError("SELECT", {}, Exception("bad bind"))
        assert isinstance(convert_db_error(error), SchemaMismatchError)

    def test_missing_column_is_schema_mismatch(self):
        error = OperationalError("SELECT", {}, Exception("no such column: book.series"))
        assert isinstance(convert_db_error(error), SchemaMismatchError)

    def test_locked_database_is_plain_database_error(self):
        error = OperationalError("INSERT", {}, Exception("database is locked"))
        converted = convert_db_error(error)
        assert type(converted) is DatabaseError


class _Worker:
    def __init__(self, logger=None):
        self.logger = logger

    @log_database_operation("do_work")
    def work(self, value):
        return value * 2

    @log_database_operation("fail_work")
    def fail(self):
        raise RuntimeError("nope")

    @handle_db_errors
    def query(self):
        raise SQLAlchemyError("broken")


class TestDecorators:
    """Tests for log_database_operation and handle_db_errors."""

    def test_log_database_operation_logs_start_and_completion(self):
        mock_logger = MagicMock(spec=CatalogLogger)

        assert _Worker(mock_logger).work(21) == 42

        assert "Starting do_work" in mock_logger.log_debug.call_args[0][0]
        assert mock_logger.log_operation.call_args[0][0] == "do_work_completed"

    def test_log_database_operation_without_logger(self):
        assert _Worker().work(2) == 4

    def test_log_database_operation_logs_and_reraises(self):
        mock_logger = MagicMock(spec=CatalogLogger)

        with pytest.raises(RuntimeError):
            _Worker(mock_logger).fail()

        mock_logger.log_error.assert_called_once()
        mock_logger.log_operation.assert_not_called()

    def test_handle_db_errors_converts(self):
        with pytest.raises(DatabaseError, match="Database operation failed"):
            _Worker().query()
