"""
Base Classes
------------------------

Foundational ORM classes for the catalog database.

Classes:
    - Base: Declarative base for all SQLAlchemy models
    - new_id: Fresh opaque identifier for primary keys
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import uuid

# --- Third party ---
from sqlalchemy.orm import DeclarativeBase


# --- Base ORM class ---
class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Serves as the declarative base for SQLAlchemy models and provides
    access to the metadata object for table creation.
    """

    pass


def new_id() -> str:
    """Return a random 128-bit identifier rendered as text."""
    return str(uuid.uuid4())
