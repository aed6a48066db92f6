#!/usr/bin/env python3
"""
managers package
--------------------
Session-bound managers for the Library DB catalog.

Available Managers:
    BaseManager: Abstract base class with common utilities
    EntryManager: Manages Book and Article record groups

Usage:
    from librarydb.database.managers import EntryManager

    entry_mgr = EntryManager(session, logger)
"""
from .base_manager import BaseManager
from .entry_manager import EntryManager

__all__ = [
    "BaseManager",
    "EntryManager",
]
