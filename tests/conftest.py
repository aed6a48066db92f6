"""
Shared pytest fixtures for Library DB tests.

Provides common fixtures for database testing, sample form data,
and temporary directories.
"""
import pytest
from unittest.mock import MagicMock

from librarydb.core.logging_manager import CatalogLogger


# ----- Temporary Directories -----

@pytest.fixture
def tmp_dir(tmp_path):
    """Provide a temporary directory for test files."""
    return tmp_path


# ----- Sample Form Data -----

@pytest.fixture
def book_lines():
    """Book form lines in form order."""
    return [
        "Frank Herbert",
        "Dune",
        "412",
        "1",
        "1st",
        "1965",
        "Dune Chronicles",
        "Chilton",
        "classic",
    ]


@pytest.fixture
def other_book_lines():
    """A second book, for list and cursor tests."""
    return [
        "Ursula K. Le Guin",
        "The Dispossessed",
        "341",
        "",
        "1st",
        "1974",
        "Hainish Cycle",
        "Harper & Row",
        "",
    ]


@pytest.fixture
def article_lines():
    """Article form lines in form order."""
    return [
        "A Relational Model of Data",
        "Communications of the ACM",
        "13",
        "377-387",
        "seminal",
        "1970",
        "",
        "ACM",
    ]


# ----- Database Fixtures -----

@pytest.fixture
def test_db_path(tmp_dir):
    """Create temporary test database path."""
    return tmp_dir / "test.db"


@pytest.fixture
def mock_logger():
    """CatalogLogger double for asserting on log calls."""
    return MagicMock(spec=CatalogLogger)


@pytest.fixture
def test_db(test_db_path):
    """
    Create test database instance with schema.

    Returns a CatalogDB with every catalog table created.
    Database is torn down after the test.
    """
    from librarydb.database.manager import CatalogDB

    db = CatalogDB(db_path=test_db_path)
    db.initialize_schema()

    yield db

    db.close()
    if test_db_path.exists():
        test_db_path.unlink()


@pytest.fixture
def empty_db(tmp_dir):
    """CatalogDB pointing at a store with no tables."""
    from librarydb.database.manager import CatalogDB

    db = CatalogDB(db_path=tmp_dir / "empty.db")
    yield db
    db.close()


@pytest.fixture
def db_session(test_db):
    """
    Create a database session for tests.

    Provides a session with automatic rollback after test.
    """
    with test_db.session_scope() as session:
        yield session
        session.rollback()


@pytest.fixture
def entry_manager(db_session):
    """Create EntryManager instance for testing."""
    from librarydb.database.managers.entry_manager import EntryManager
    return EntryManager(db_session)
