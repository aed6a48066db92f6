#!/usr/bin/env python3
"""
manager.py
--------------------
Database manager for the Library DB catalog.

Provides the CatalogDB class for interacting with the SQLite store.
Handles:
    - Initialization of the database engine and sessionmaker
    - Transaction management with automatic rollback
    - Entry operations, one transaction per call
    - Startup checks and explicit schema creation
    - Orphan and entry integrity checks

Core Operations:
    Entry Management:
        - create_entry: Create a record group from form fields
        - update_entry: Rewrite an entry's editable fields
        - delete_entry: Remove an entry's master and entry rows
        - select_entry_fields: Editable fields in form order
        - list_entries / count_entries / get_fields

    Maintenance:
        - check_connection: Verify the store is reachable and initialized
        - initialize_schema: Create the catalog tables
        - count_orphans / prune_orphans: Unreferenced Publisher/MonthYear rows
        - check_integrity: Run every integrity check group

Notes
==============
- The interactive session never creates tables; run `libdb init` first
- There is no migration system; the schema is created from the ORM models
- Foreign keys are declared but not enforced (SQLite default)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

# --- Third party ---
from sqlalchemy import Engine, create_engine, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

# --- Local imports ---
from librarydb.core.exceptions import DatabaseError, StoreConnectionError
from librarydb.core.logging_manager import CatalogLogger
from librarydb.dataclasses import EntryFields
from .configs.integrity_check_configs import (
    ALL_INTEGRITY_CHECK_GROUPS,
    ORPHAN_INTEGRITY_CHECKS,
)
from .decorators import DatabaseOperation
from .managers import EntryManager
from .managers.entry_manager import FieldsInput
from .models import Base, CatalogEntry, EntryType


class CatalogDB:
    """
    SQLite-backed catalog store.

    Each entry operation opens its own session_scope, so the rows it writes
    are committed together or not at all.

    Attributes:
        db_path: Resolved path of the SQLite file
        logger: Optional CatalogLogger
        engine: SQLAlchemy engine
        SessionLocal: Session factory
    """

    def __init__(
        self,
        db_path: Union[str, Path],
        log_dir: Optional[Union[str, Path]] = None,
        logger: Optional[CatalogLogger] = None,
    ) -> None:
        """
        Initialize database engine and session factory.

        Args:
            db_path: Path to the SQLite file
            log_dir: Directory for log files (optional)
            logger: Existing logger to use instead of creating one
        """
        self.db_path = Path(db_path).expanduser().resolve()

        # --- Logging ---
        if logger is not None:
            self.logger: Optional[CatalogLogger] = logger
        elif log_dir:
            self.log_dir = Path(log_dir).expanduser().resolve() / "system"
            self.logger = CatalogLogger(self.log_dir, component_name="database")
        else:
            self.logger = None

        self._entry_manager: Optional[EntryManager] = None

        self._setup_engine()

    def _setup_engine(self) -> None:
        """Initialize database engine and session factory."""
        try:
            if self.logger:
                self.logger.log_operation(
                    "database_init_start", {"db_path": str(self.db_path)}
                )

            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            self.engine: Engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                pool_pre_ping=True,
            )

            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
            )

            if self.logger:
                self.logger.log_operation("database_init_complete", {"success": True})

        except Exception as e:
            if self.logger:
                self.logger.log_error(e, {"operation": "database_init"})
            raise StoreConnectionError(f"Database initialization failed: {e}") from e

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a transactional scope around operations with logging.

        The EntryManager is available as ``db.entries`` while the scope is
        open.

        Usage:
            with db.session_scope() as session:
                cite_key = db.entries.create_entry(EntryType.BOOK, lines)
        """
        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        previous = self._entry_manager
        self._entry_manager = EntryManager(session, self.logger)

        if self.logger:
            self.logger.log_debug("session_start", {"session_id": session_id})

        try:
            yield session
            session.commit()
            if self.logger:
                self.logger.log_debug("session_commit", {"session_id": session_id})

        except Exception as e:
            session.rollback()
            if self.logger:
                self.logger.log_error(
                    e, {"operation": "session_rollback", "session_id": session_id}
                )
            raise
        finally:
            self._entry_manager = previous
            session.close()
            if self.logger:
                self.logger.log_debug("session_close", {"session_id": session_id})

    @property
    def entries(self) -> EntryManager:
        """
        Access EntryManager for entry operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        if self._entry_manager is None:
            raise DatabaseError(
                "EntryManager requires active session. "
                "Use within session_scope: "
                "with db.session_scope(): db.entries.create_entry(...)"
            )
        return self._entry_manager

    # -------------------------------------------------------------------------
    # Schema
    # -------------------------------------------------------------------------

    def missing_tables(self) -> List[str]:
        """Names of catalog tables absent from the store."""
        with self.engine.connect() as conn:
            present = set(inspect(conn).get_table_names())
        return [name for name in Base.metadata.tables if name not in present]

    def check_connection(self) -> None:
        """
        Verify the store opens and every catalog table exists.

        Raises:
            StoreConnectionError: If the store is unreachable or uninitialized
        """
        try:
            missing = self.missing_tables()
        except SQLAlchemyError as e:
            if self.logger:
                self.logger.log_error(e, {"operation": "check_connection"})
            raise StoreConnectionError(f"Cannot open {self.db_path}: {e}") from e

        if missing:
            error = StoreConnectionError(
                f"Missing tables in {self.db_path}: {', '.join(sorted(missing))}. "
                "Run 'libdb init' first."
            )
            if self.logger:
                self.logger.log_error(error, {"operation": "check_connection"})
            raise error

        if self.logger:
            self.logger.log_debug("store_ready", {"db_path": str(self.db_path)})

    def initialize_schema(self) -> List[str]:
        """
        Create any missing catalog tables.

        Returns:
            Names of the tables that were created
        """
        with DatabaseOperation(self.logger, "initialize_schema"):
            missing = self.missing_tables()
            Base.metadata.create_all(bind=self.engine)

        if self.logger:
            self.logger.log_operation(
                "schema_created", {"tables_created": missing}
            )
        return missing

    # -------------------------------------------------------------------------
    # Entry Operations
    # -------------------------------------------------------------------------

    def create_entry(self, kind: Union[EntryType, str], fields: FieldsInput) -> str:
        """Create a record group in one transaction; returns the cite_key."""
        with self.session_scope():
            return self.entries.create_entry(kind, fields)

    def update_entry(
        self, kind: Union[EntryType, str], fields: FieldsInput, cite_key: str
    ) -> bool:
        """Update an entry in one transaction; False if nothing matched."""
        with self.session_scope():
            return self.entries.update_entry(kind, fields, cite_key)

    def delete_entry(self, kind: Union[EntryType, str], cite_key: str) -> bool:
        """Delete an entry in one transaction; False if nothing matched."""
        with self.session_scope():
            return self.entries.delete_entry(kind, cite_key)

    def select_entry_fields(self, kind: Union[EntryType, str], cite_key: str) -> List[str]:
        with self.session_scope():
            return self.entries.select_entry_fields(kind, cite_key)

    def get_fields(
        self, kind: Union[EntryType, str], cite_key: str
    ) -> Optional[EntryFields]:
        with self.session_scope():
            return self.entries.get_fields(kind, cite_key)

    def get_entry(
        self, kind: Union[EntryType, str], cite_key: str
    ) -> Optional[CatalogEntry]:
        with self.session_scope():
            return self.entries.get_entry(kind, cite_key)

    def list_entries(self, kind: Union[EntryType, str]) -> List[CatalogEntry]:
        """All rows of the entry table; rows stay readable after the scope."""
        with self.session_scope():
            return self.entries.list_entries(kind)

    def count_entries(self, kind: Union[EntryType, str]) -> int:
        with self.session_scope():
            return self.entries.count_entries(kind)

    # -------------------------------------------------------------------------
    # Integrity
    # -------------------------------------------------------------------------

    def count_orphans(self) -> Dict[str, int]:
        """Count unreferenced Publisher and MonthYear rows."""
        with self.session_scope() as session:
            return {
                check.check_name: check.query_builder(session)
                for check in ORPHAN_INTEGRITY_CHECKS.checks
            }

    def prune_orphans(self, dry_run: bool = False) -> Dict[str, int]:
        """
        Delete unreferenced Publisher and MonthYear rows.

        Args:
            dry_run: Count what would be removed without deleting

        Returns:
            Rows removed (or that would be removed) per check
        """
        if dry_run:
            return self.count_orphans()

        with DatabaseOperation(self.logger, "prune_orphans"):
            with self.session_scope() as session:
                removed = {
                    check.check_name: check.pruner(session)
                    for check in ORPHAN_INTEGRITY_CHECKS.checks
                    if check.pruner is not None
                }

        if self.logger:
            self.logger.log_operation("orphans_pruned", removed)
        return removed

    def check_integrity(self) -> Dict[str, Dict[str, int]]:
        """Run every integrity check group; returns counts per group."""
        with self.session_scope() as session:
            return {
                group.group_name: {
                    check.check_name: check.query_builder(session)
                    for check in group.checks
                }
                for group in ALL_INTEGRITY_CHECK_GROUPS
            }

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self.engine.dispose()

    # ----- Context Manager Support -----
    def __enter__(self) -> "CatalogDB":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        del exc_type, exc_val, exc_tb
        self.close()
