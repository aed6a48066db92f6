"""
Library DB
==========

Interactive terminal catalog for books and articles, stored in SQLite.

Main Components:
    - database: SQLAlchemy ORM, EntryManager and the CatalogDB facade
    - tui: curses session (input pump, state machine, renderer)
    - core: Logging, configuration, paths, exceptions
    - dataclasses: Named form records for books and articles

Primary Interfaces:
    - librarydb.database.cli: `libdb` command-line interface
    - librarydb.database.manager.CatalogDB: Main database interface

Example Usage:
    >>> from librarydb import CatalogDB, DB_PATH
    >>> db = CatalogDB(DB_PATH)
    >>> db.initialize_schema()
    >>> cite_key = db.create_entry("book", ["A. Author", "My Title", "300",
    ...                                     "1", "2nd", "2024", "Series X",
    ...                                     "Acme Press", "a note"])
    >>> db.select_entry_fields("book", cite_key)[1]
    'My Title'
"""

__version__ = "0.3.0"

# Expose primary interfaces for convenience
from librarydb.database.manager import CatalogDB
from librarydb.core.paths import DATA_DIR, DB_PATH, LOG_DIR

__all__ = [
    "CatalogDB",
    "DATA_DIR",
    "DB_PATH",
    "LOG_DIR",
]
