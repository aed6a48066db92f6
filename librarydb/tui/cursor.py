#!/usr/bin/env python3
"""
cursor.py
-------------------
Selection cursor for the book and article lists.

The cursor is an optional index into a list whose length is owned by the
store. Callers read the row count first and pass it in; the lock guards
only the read-modify-write of the index and is never held across a
database call.

Movement wraps in both directions:

    select_down: last -> 0, otherwise +1
    select_up:   0 -> last, otherwise -1

An empty list always clears the selection.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import threading
from typing import Optional


class SelectionCursor:
    """Optional list index with wraparound movement."""

    def __init__(self, selected: Optional[int] = None) -> None:
        self._lock = threading.Lock()
        self._selected = selected

    @property
    def selected(self) -> Optional[int]:
        with self._lock:
            return self._selected

    def select(self, index: Optional[int]) -> None:
        """Set the index directly; None clears the selection."""
        if index is not None and index < 0:
            raise ValueError(f"Selection index must be >= 0, got {index}")
        with self._lock:
            self._selected = index

    def select_down(self, count: int) -> Optional[int]:
        """
        Move to the next row, wrapping to the top.

        No-op while nothing is selected; clears on an empty list.
        """
        with self._lock:
            if count <= 0:
                self._selected = None
            elif self._selected is not None:
                if self._selected >= count - 1:
                    self._selected = 0
                else:
                    self._selected += 1
            return self._selected

    def select_up(self, count: int) -> Optional[int]:
        """
        Move to the previous row, wrapping to the bottom.

        No-op while nothing is selected; clears on an empty list.
        """
        with self._lock:
            if count <= 0:
                self._selected = None
            elif self._selected is not None:
                if self._selected > 0:
                    self._selected -= 1
                else:
                    self._selected = count - 1
            return self._selected

    def ensure_selected(self, count: int) -> Optional[int]:
        """Select the first row of a non-empty list if nothing is selected."""
        with self._lock:
            if count <= 0:
                self._selected = None
            elif self._selected is None:
                self._selected = 0
            elif self._selected > count - 1:
                self._selected = count - 1
            return self._selected

    def after_delete(self, count: int) -> Optional[int]:
        """
        Reposition after the selected row was deleted.

        Args:
            count: Rows remaining after the delete

        Advances by one, wrapping to the top from the last row, and clears
        when the list is now empty.
        """
        with self._lock:
            if count <= 0:
                self._selected = None
            elif self._selected is not None:
                if self._selected >= count - 1:
                    self._selected = 0
                else:
                    self._selected += 1
            return self._selected

    def __repr__(self) -> str:
        return f"<SelectionCursor(selected={self.selected})>"
