#!/usr/bin/env python3
"""
keys.py
-------------------
Key events and the command keymap for the interactive session.

Raw codes from ``curses.window.get_wch`` (a ``str`` for characters, an
``int`` for special keys) are translated into KeyEvent values. Key names
from the configuration file ("F9", "ctrl+u", "up", "q") are parsed into the
same values, so the keymap compares like with like.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import curses
from dataclasses import dataclass, fields
from enum import Enum
from typing import Dict, Optional, Union

# --- Local imports ---
from librarydb.core.config import KeyBindings
from librarydb.core.exceptions import ConfigError


class KeyKind(Enum):
    """Kinds of key press the session distinguishes."""

    CHAR = "char"
    CTRL = "ctrl"
    FUNCTION = "function"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    ENTER = "enter"
    BACKSPACE = "backspace"
    DELETE = "delete"
    TAB = "tab"
    ESC = "esc"


@dataclass(frozen=True)
class KeyEvent:
    """
    A single key press.

    Attributes:
        kind: What sort of key was pressed
        value: The character for CHAR, the lowercase letter for CTRL,
            the number for FUNCTION; empty otherwise
    """

    kind: KeyKind
    value: str = ""

    @classmethod
    def char(cls, ch: str) -> "KeyEvent":
        return cls(KeyKind.CHAR, ch)

    @classmethod
    def ctrl(cls, letter: str) -> "KeyEvent":
        return cls(KeyKind.CTRL, letter.lower())

    @classmethod
    def function(cls, number: int) -> "KeyEvent":
        return cls(KeyKind.FUNCTION, str(number))

    @property
    def label(self) -> str:
        """Short human-readable name, as shown in the help line."""
        if self.kind is KeyKind.CHAR:
            return self.value
        if self.kind is KeyKind.CTRL:
            return f"Ctrl-{self.value.upper()}"
        if self.kind is KeyKind.FUNCTION:
            return f"F{self.value}"
        return self.kind.value.capitalize()


_SPECIAL_CODES: Dict[int, KeyKind] = {
    curses.KEY_UP: KeyKind.UP,
    curses.KEY_DOWN: KeyKind.DOWN,
    curses.KEY_LEFT: KeyKind.LEFT,
    curses.KEY_RIGHT: KeyKind.RIGHT,
    curses.KEY_HOME: KeyKind.HOME,
    curses.KEY_END: KeyKind.END,
    curses.KEY_ENTER: KeyKind.ENTER,
    curses.KEY_BACKSPACE: KeyKind.BACKSPACE,
    curses.KEY_DC: KeyKind.DELETE,
}

_CONTROL_CHARS: Dict[str, KeyKind] = {
    "\n": KeyKind.ENTER,
    "\r": KeyKind.ENTER,
    "\t": KeyKind.TAB,
    "\x08": KeyKind.BACKSPACE,
    "\x7f": KeyKind.BACKSPACE,
    "\x1b": KeyKind.ESC,
}

# Ctrl letters whose codes are claimed above and never arrive as chords
_SHADOWED_CTRL_LETTERS: Dict[str, KeyKind] = {
    chr(ord(ch) + 96): kind for ch, kind in _CONTROL_CHARS.items() if 1 <= ord(ch) <= 26
}


def translate_key(code: Union[str, int, None]) -> Optional[KeyEvent]:
    """
    Translate a raw curses key code into a KeyEvent.

    Args:
        code: Value returned by ``get_wch`` (or ``getch``)

    Returns:
        KeyEvent, or None for codes that are not key presses
        (no input, resize, mouse, unknown special keys)
    """
    if code is None:
        return None

    if isinstance(code, str):
        if len(code) != 1:
            return None
        if code in _CONTROL_CHARS:
            return KeyEvent(_CONTROL_CHARS[code])
        point = ord(code)
        if 1 <= point <= 26:
            return KeyEvent.ctrl(chr(point + 96))
        if point < 32:
            return None
        return KeyEvent.char(code)

    # getch-style integers: plain characters arrive below 256
    if code < 0:
        return None
    if code < 256:
        return translate_key(chr(code))
    if code in _SPECIAL_CODES:
        return KeyEvent(_SPECIAL_CODES[code])
    if curses.KEY_F0 < code <= curses.KEY_F0 + 63:
        return KeyEvent.function(code - curses.KEY_F0)
    return None


_NAMED_KEYS: Dict[str, KeyKind] = {
    kind.value: kind for kind in KeyKind if kind not in (KeyKind.CHAR, KeyKind.CTRL, KeyKind.FUNCTION)
}
_NAMED_KEYS.update({"escape": KeyKind.ESC, "return": KeyKind.ENTER, "del": KeyKind.DELETE})


def parse_key(name: str) -> KeyEvent:
    """
    Parse a configured key name.

    Accepted forms: a single character ("q"), a function key ("F9"),
    a control chord ("ctrl+u", "C-u", "^U") or a named key ("up", "enter").

    Raises:
        ConfigError: If the name cannot be parsed
    """
    text = str(name).strip()
    if len(text) == 1:
        return KeyEvent.char(text)

    lowered = text.lower()
    for prefix in ("ctrl+", "ctrl-", "c-", "^"):
        if lowered.startswith(prefix):
            letter = lowered[len(prefix):]
            if letter in _SHADOWED_CTRL_LETTERS:
                shadow = _SHADOWED_CTRL_LETTERS[letter].name.lower()
                raise ConfigError(
                    f"Key name {name!r} arrives as {shadow!r}; bind {shadow!r} instead"
                )
            if len(letter) == 1 and "a" <= letter <= "z":
                return KeyEvent.ctrl(letter)
            raise ConfigError(f"Unknown key name {name!r}")

    if lowered.startswith("f") and lowered[1:].isdigit():
        number = int(lowered[1:])
        if 1 <= number <= 63:
            return KeyEvent.function(number)

    if lowered in _NAMED_KEYS:
        return KeyEvent(_NAMED_KEYS[lowered])

    raise ConfigError(f"Unknown key name {name!r}")


class Command(Enum):
    """Session commands; values match KeyBindings field names."""

    HOME = "home"
    SHOW_BOOKS = "show_books"
    NEW_BOOK = "new_book"
    LIST_ARTICLES = "list_articles"
    NEW_ARTICLE = "new_article"
    QUIT = "quit"
    ENTER_EDIT = "enter_edit"
    EXIT_EDIT = "exit_edit"
    SAVE = "save"
    UPDATE_SELECTED = "update_selected"
    DELETE_SELECTED = "delete_selected"
    UP = "up"
    DOWN = "down"


class Keymap:
    """Two-way mapping between session commands and key events."""

    def __init__(self, keys: Dict[Command, KeyEvent]) -> None:
        self._keys = dict(keys)
        self._commands: Dict[KeyEvent, Command] = {}
        for command, key in self._keys.items():
            if key in self._commands:
                raise ConfigError(
                    f"Key {key.label!r} bound to both "
                    f"{self._commands[key].value} and {command.value}"
                )
            self._commands[key] = command

    @classmethod
    def from_bindings(cls, bindings: Optional[KeyBindings] = None) -> "Keymap":
        """Build a keymap from configured key names."""
        bindings = bindings or KeyBindings()
        keys = {}
        for f in fields(bindings):
            try:
                keys[Command(f.name)] = parse_key(getattr(bindings, f.name))
            except ConfigError as e:
                raise ConfigError(f"Binding '{f.name}': {e}") from e
        return cls(keys)

    def command_for(self, key: Optional[KeyEvent]) -> Optional[Command]:
        if key is None:
            return None
        return self._commands.get(key)

    def key_for(self, command: Command) -> KeyEvent:
        return self._keys[command]

    def label(self, command: Command) -> str:
        return self._keys[command].label
