#!/usr/bin/env python3
"""
form.py
-------------------
Multi-line text buffer behind the book and article forms.

One line per field, in form order. The buffer knows nothing about
fields; the session turns its lines into a BookFields/ArticleFields
record when saving.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import List, Sequence, Tuple

# --- Local imports ---
from .keys import KeyEvent, KeyKind


class FormBuffer:
    """Editable lines with a (row, col) cursor."""

    def __init__(self, lines: Sequence[str] = ()) -> None:
        self._lines: List[str] = [""]
        self.row = 0
        self.col = 0
        if lines:
            self.set_lines(lines)

    @property
    def cursor(self) -> Tuple[int, int]:
        return self.row, self.col

    def lines(self) -> List[str]:
        """Copy of the current lines."""
        return list(self._lines)

    def set_lines(self, lines: Sequence[str]) -> None:
        """Replace the content; the cursor moves to the end of the first line."""
        self._lines = [str(line) for line in lines] or [""]
        self.row = 0
        self.col = len(self._lines[0])

    def clear(self) -> None:
        self._lines = [""]
        self.row = 0
        self.col = 0

    def is_empty(self) -> bool:
        return self._lines == [""]

    # ---- Editing ----
    def insert(self, text: str) -> None:
        """Insert text at the cursor; embedded newlines split the line."""
        for ch in text:
            if ch == "\n":
                self.newline()
                continue
            line = self._lines[self.row]
            self._lines[self.row] = line[: self.col] + ch + line[self.col :]
            self.col += 1

    def newline(self) -> None:
        line = self._lines[self.row]
        self._lines[self.row] = line[: self.col]
        self._lines.insert(self.row + 1, line[self.col :])
        self.row += 1
        self.col = 0

    def backspace(self) -> None:
        """Delete left of the cursor, joining with the previous line at col 0."""
        if self.col > 0:
            line = self._lines[self.row]
            self._lines[self.row] = line[: self.col - 1] + line[self.col :]
            self.col -= 1
        elif self.row > 0:
            previous = self._lines[self.row - 1]
            self._lines[self.row - 1] = previous + self._lines.pop(self.row)
            self.row -= 1
            self.col = len(previous)

    def delete(self) -> None:
        """Delete under the cursor, joining with the next line at end of line."""
        line = self._lines[self.row]
        if self.col < len(line):
            self._lines[self.row] = line[: self.col] + line[self.col + 1 :]
        elif self.row < len(self._lines) - 1:
            self._lines[self.row] = line + self._lines.pop(self.row + 1)

    def move(self, direction: str) -> None:
        """Move the cursor: left, right, up, down, home or end."""
        if direction == "left":
            if self.col > 0:
                self.col -= 1
            elif self.row > 0:
                self.row -= 1
                self.col = len(self._lines[self.row])
        elif direction == "right":
            if self.col < len(self._lines[self.row]):
                self.col += 1
            elif self.row < len(self._lines) - 1:
                self.row += 1
                self.col = 0
        elif direction == "up":
            if self.row > 0:
                self.row -= 1
                self.col = min(self.col, len(self._lines[self.row]))
        elif direction == "down":
            if self.row < len(self._lines) - 1:
                self.row += 1
                self.col = min(self.col, len(self._lines[self.row]))
        elif direction == "home":
            self.col = 0
        elif direction == "end":
            self.col = len(self._lines[self.row])
        else:
            raise ValueError(f"Unknown direction: {direction!r}")

    def apply_key(self, key: KeyEvent) -> bool:
        """
        Apply a key press.

        Returns:
            True if the key edited or moved, False if it was ignored
        """
        if key.kind is KeyKind.CHAR:
            self.insert(key.value)
        elif key.kind is KeyKind.ENTER:
            self.newline()
        elif key.kind is KeyKind.BACKSPACE:
            self.backspace()
        elif key.kind is KeyKind.DELETE:
            self.delete()
        elif key.kind in (
            KeyKind.LEFT,
            KeyKind.RIGHT,
            KeyKind.UP,
            KeyKind.DOWN,
            KeyKind.HOME,
            KeyKind.END,
        ):
            self.move(key.kind.value)
        else:
            return False
        return True
