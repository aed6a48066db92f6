#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing common query and write utilities.
Catalog managers inherit from this class.

Key Features:
    - Generic lookups by primary key or column value
    - Generic list and count helpers
    - Bulk delete by column value

Usage:
    class EntryManager(BaseManager):
        def create_entry(self, kind, fields) -> str:
            with DatabaseOperation(self.logger, "create_entry"):
                ...
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from abc import ABC
from typing import Any, List, Optional, Type, TypeVar

# --- Third party imports ---
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

# --- Local imports ---
from librarydb.core.logging_manager import CatalogLogger
from librarydb.database.models import Base

T = TypeVar("T", bound=Base)


class BaseManager(ABC):
    """
    Abstract base manager bound to one SQLAlchemy session.

    Managers never commit; the owning session_scope does.

    Attributes:
        session: SQLAlchemy session for database operations
        logger: Optional logger for operation tracking
    """

    def __init__(self, session: Session, logger: Optional[CatalogLogger] = None):
        """
        Initialize the base manager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
        """
        self.session = session
        self.logger = logger

    # -------------------------------------------------------------------------
    # Generic Query Helpers
    # -------------------------------------------------------------------------

    def _get_by_id(self, model_class: Type[T], entity_id: str) -> Optional[T]:
        """Get an entity by primary key, or None."""
        if not entity_id:
            return None
        return self.session.get(model_class, entity_id)

    def _get_by_field(
        self, model_class: Type[T], field_name: str, value: Any
    ) -> Optional[T]:
        """
        Get the first entity whose column equals a value.

        Args:
            model_class: ORM model class
            field_name: Column name to filter by
            value: Value to look up

        Returns:
            Entity if found, None otherwise
        """
        if value is None:
            return None
        stmt = select(model_class).filter_by(**{field_name: value}).limit(1)
        return self.session.execute(stmt).scalars().first()

    def _get_all(self, model_class: Type[T], **filters: Any) -> List[T]:
        """
        Get all entities of a type in storage order.

        No ORDER BY is applied; SQLite returns rows in rowid order for a
        plain table scan.
        """
        stmt = select(model_class)
        if filters:
            stmt = stmt.filter_by(**filters)
        return list(self.session.execute(stmt).scalars().all())

    def _count(self, model_class: Type[T], **filters: Any) -> int:
        """Count entities with optional equality filters."""
        stmt = select(func.count()).select_from(model_class)
        if filters:
            stmt = stmt.filter_by(**filters)
        return int(self.session.execute(stmt).scalar_one())

    def _delete_where(self, model_class: Type[T], field_name: str, value: Any) -> int:
        """
        Delete every row whose column equals a value.

        Returns:
            Number of rows removed
        """
        stmt = delete(model_class).where(getattr(model_class, field_name) == value)
        result = self.session.execute(stmt)
        return int(result.rowcount or 0)
