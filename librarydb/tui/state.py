#!/usr/bin/env python3
"""
state.py
-------------------
Modal state machine for the interactive session.

The session is always on one Screen and, on the two form screens, in one
of two input sub-modes:

    COMMAND  single keys navigate, save, update and delete
    INPUT    keys edit the active form; only exit-edit and save are commands

SessionState applies one event at a time and never draws. ``frame()``
produces an immutable snapshot for the renderer, pulling rows fresh from
the store on every call.

Store failures during save, update-load and delete are caught, logged and
shown on the status line; the screen and form are left as they were.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

# --- Local imports ---
from librarydb.core.exceptions import DatabaseError, ValidationError
from librarydb.core.logging_manager import CatalogLogger, safe_logger
from librarydb.database import CatalogDB
from librarydb.database.models import EntryType, fields_for
from .cursor import SelectionCursor
from .events import AppEvent
from .form import FormBuffer
from .keys import Command, Keymap


class Screen(Enum):
    """Screens, in menu order; values are the menu titles."""

    HOME = "Home"
    SHOW_BOOKS = "Show Books"
    NEW_BOOK = "Book Add"
    LIST_ARTICLES = "List Articles"
    INSERT_ARTICLE = "Article Add"

    @property
    def title(self) -> str:
        return self.value

    @property
    def is_list(self) -> bool:
        return self in (Screen.SHOW_BOOKS, Screen.LIST_ARTICLES)

    @property
    def is_form(self) -> bool:
        return self in (Screen.NEW_BOOK, Screen.INSERT_ARTICLE)

    @property
    def entry_type(self) -> Optional[EntryType]:
        """Entry type shown or edited on this screen."""
        if self in (Screen.SHOW_BOOKS, Screen.NEW_BOOK):
            return EntryType.BOOK
        if self in (Screen.LIST_ARTICLES, Screen.INSERT_ARTICLE):
            return EntryType.ARTICLE
        return None


class InputMode(Enum):
    COMMAND = "command"
    INPUT = "input"


@dataclass(frozen=True)
class Mode:
    """Current screen and input sub-mode; INPUT exists only on form screens."""

    screen: Screen = Screen.HOME
    input_mode: InputMode = InputMode.COMMAND

    def __post_init__(self) -> None:
        if self.input_mode is InputMode.INPUT and not self.screen.is_form:
            raise ValueError(f"{self.screen.title} has no input sub-mode")

    @property
    def is_command(self) -> bool:
        return self.input_mode is InputMode.COMMAND


MENU_TITLES: Tuple[str, ...] = tuple(screen.title for screen in Screen) + ("Quit",)

_NAVIGATION: Dict[Command, Screen] = {
    Command.HOME: Screen.HOME,
    Command.SHOW_BOOKS: Screen.SHOW_BOOKS,
    Command.NEW_BOOK: Screen.NEW_BOOK,
    Command.LIST_ARTICLES: Screen.LIST_ARTICLES,
    Command.NEW_ARTICLE: Screen.INSERT_ARTICLE,
}

_LIST_FOR_FORM = {
    Screen.SHOW_BOOKS: Screen.NEW_BOOK,
    Screen.LIST_ARTICLES: Screen.INSERT_ARTICLE,
}


@dataclass(frozen=True)
class Frame:
    """
    Everything the renderer needs for one frame.

    Attributes:
        mode: Current screen and input sub-mode
        menu_titles: Titles of the top menu, "Quit" last
        active_menu: Index of the current screen in menu_titles
        body: Free text for the home screen
        list_title: Heading of the list pane
        rows: Titles of the listed entries
        selected: Index of the highlighted row, or None
        detail: Label/value pairs of the highlighted row
        form_title: Heading of the form pane
        form_labels: Field labels in form order
        form_lines: Current form text
        form_cursor: (row, col) of the form cursor
        update_flag: True while the form edits an existing entry
        status: Last status message
        status_is_error: Whether the status reports a failure
        help: One-line key help for the current mode
    """

    mode: Mode
    menu_titles: Tuple[str, ...] = MENU_TITLES
    active_menu: int = 0
    body: Tuple[str, ...] = ()
    list_title: str = ""
    rows: Tuple[str, ...] = ()
    selected: Optional[int] = None
    detail: Tuple[Tuple[str, str], ...] = ()
    form_title: str = ""
    form_labels: Tuple[str, ...] = ()
    form_lines: Tuple[str, ...] = ()
    form_cursor: Tuple[int, int] = (0, 0)
    update_flag: bool = False
    status: str = ""
    status_is_error: bool = False
    help: str = ""


@dataclass
class _Status:
    message: str = ""
    is_error: bool = False


class SessionState:
    """
    Foreground state of the interactive session.

    Attributes:
        mode: Current Mode
        cursors: One SelectionCursor per list screen
        forms: One FormBuffer per form screen
        update_flag: Saving updates ``update_cite_key`` instead of creating
        update_cite_key: Entry loaded by update-selected
        running: Cleared by the quit command
    """

    def __init__(
        self,
        db: CatalogDB,
        keymap: Optional[Keymap] = None,
        logger: Optional[CatalogLogger] = None,
    ) -> None:
        self.db = db
        self.keymap = keymap or Keymap.from_bindings()
        self.logger = logger
        self.mode = Mode()
        self.cursors: Dict[Screen, SelectionCursor] = {
            Screen.SHOW_BOOKS: SelectionCursor(),
            Screen.LIST_ARTICLES: SelectionCursor(),
        }
        self.forms: Dict[Screen, FormBuffer] = {
            Screen.NEW_BOOK: FormBuffer(),
            Screen.INSERT_ARTICLE: FormBuffer(),
        }
        self.update_flag = False
        self.update_cite_key: Optional[str] = None
        self.running = True
        self._status = _Status()

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    @property
    def status(self) -> str:
        return self._status.message

    @property
    def status_is_error(self) -> bool:
        return self._status.is_error

    def _info(self, message: str) -> None:
        self._status = _Status(message, False)

    def _fail(self, operation: str, error: Exception, **context) -> None:
        safe_logger(self.logger).log_error(error, {"operation": operation, **context})
        self._status = _Status(f"{operation} failed: {error}", True)

    # -------------------------------------------------------------------------
    # Event handling
    # -------------------------------------------------------------------------

    def handle(self, event: AppEvent) -> None:
        """Apply one event."""
        if event.is_tick or event.key is None:
            return

        key = event.key
        command = self.keymap.command_for(key)

        if not self.mode.is_command:
            if command is Command.EXIT_EDIT:
                self._exit_edit()
            elif command is Command.SAVE:
                self._save()
            else:
                self.forms[self.mode.screen].apply_key(key)
            return

        if command is None:
            return
        if command in _NAVIGATION:
            self._navigate(_NAVIGATION[command])
        elif command is Command.QUIT:
            self.running = False
        elif command is Command.ENTER_EDIT:
            self._enter_edit()
        elif command is Command.EXIT_EDIT:
            self._exit_edit()
        elif command is Command.SAVE:
            self._save()
        elif command is Command.UPDATE_SELECTED:
            self._update_selected()
        elif command is Command.DELETE_SELECTED:
            self._delete_selected()
        elif command is Command.UP:
            self._move(up=True)
        elif command is Command.DOWN:
            self._move(up=False)

    def _navigate(self, screen: Screen) -> None:
        self.mode = Mode(screen)

    def _enter_edit(self) -> None:
        if self.mode.screen.is_form:
            self.mode = Mode(self.mode.screen, InputMode.INPUT)

    def _exit_edit(self) -> None:
        self.update_flag = False
        self.update_cite_key = None
        self.mode = Mode(self.mode.screen)

    def _save(self) -> None:
        screen = self.mode.screen
        if not screen.is_form:
            return

        kind = screen.entry_type
        form = self.forms[screen]
        self.mode = Mode(screen)

        try:
            record = fields_for(kind).from_lines(form.lines())
            if self.update_flag and self.update_cite_key:
                cite_key = self.update_cite_key
                if not self.db.update_entry(kind, record, cite_key):
                    raise ValidationError(
                        f"{kind.display_name} {cite_key} no longer exists"
                    )
                message = f"Updated {kind.display_name.lower()} {cite_key}"
            else:
                cite_key = self.db.create_entry(kind, record)
                message = f"Saved {kind.display_name.lower()} {cite_key}"
        except (DatabaseError, ValidationError) as e:
            self._fail("Save", e, kind=kind.value)
            return

        form.clear()
        self.update_flag = False
        self.update_cite_key = None
        self._info(message)

    def _selected_cite_key(self, screen: Screen) -> Optional[str]:
        """cite_key of the row under the cursor; None on an empty list."""
        rows = self.db.list_entries(screen.entry_type)
        index = self.cursors[screen].ensure_selected(len(rows))
        if index is None:
            return None
        return rows[index].cite_key

    def _update_selected(self) -> None:
        screen = self.mode.screen
        if not screen.is_list:
            return

        kind = screen.entry_type
        try:
            cite_key = self._selected_cite_key(screen)
            if cite_key is None:
                self._info(f"No {kind.display_name.lower()}s to update")
                return
            lines = self.db.select_entry_fields(kind, cite_key)
        except DatabaseError as e:
            self._fail("Load", e, kind=kind.value)
            return

        if not lines:
            self._info(f"{kind.display_name} {cite_key} no longer exists")
            return

        form_screen = _LIST_FOR_FORM[screen]
        self.forms[form_screen].set_lines(lines)
        self.update_flag = True
        self.update_cite_key = cite_key
        self.mode = Mode(form_screen, InputMode.INPUT)
        self._info(f"Editing {kind.display_name.lower()} {cite_key}")

    def _delete_selected(self) -> None:
        screen = self.mode.screen
        if not screen.is_list:
            return

        kind = screen.entry_type
        try:
            cite_key = self._selected_cite_key(screen)
            if cite_key is None:
                self._info(f"No {kind.display_name.lower()}s to delete")
                return
            removed = self.db.delete_entry(kind, cite_key)
            remaining = self.db.count_entries(kind)
        except DatabaseError as e:
            self._fail("Delete", e, kind=kind.value)
            return

        # The row is gone either way
        self.cursors[screen].after_delete(remaining)
        if not removed:
            self._info(f"{kind.display_name} {cite_key} no longer exists")
            return
        self._info(f"Deleted {kind.display_name.lower()} {cite_key}")

    def _move(self, up: bool) -> None:
        screen = self.mode.screen
        if not screen.is_list:
            return
        try:
            count = self.db.count_entries(screen.entry_type)
        except DatabaseError as e:
            self._fail("Read", e)
            return
        cursor = self.cursors[screen]
        if up:
            cursor.select_up(count)
        else:
            cursor.select_down(count)

    # -------------------------------------------------------------------------
    # Rendering snapshot
    # -------------------------------------------------------------------------

    def _help(self) -> str:
        label = self.keymap.label
        if self.mode.screen.is_form and not self.mode.is_command:
            return f"{label(Command.EXIT_EDIT)} stop editing  {label(Command.SAVE)} save"
        if self.mode.screen.is_form:
            return (
                f"{label(Command.ENTER_EDIT)} edit  {label(Command.SAVE)} save  "
                f"{label(Command.HOME)} home  {label(Command.QUIT)} quit"
            )
        if self.mode.screen.is_list:
            return (
                f"{label(Command.UP)}/{label(Command.DOWN)} move  "
                f"{label(Command.UPDATE_SELECTED)} update  "
                f"{label(Command.DELETE_SELECTED)} delete  "
                f"{label(Command.QUIT)} quit"
            )
        return f"{label(Command.QUIT)} quit"

    def _home_body(self) -> Tuple[str, ...]:
        label = self.keymap.label
        return (
            "Welcome to",
            "",
            "Library DB",
            "",
            f"To return to this Home page press '{label(Command.HOME)}'",
            "",
            f"Press '{label(Command.SHOW_BOOKS)}' to Show a list of books",
            f"Press '{label(Command.NEW_BOOK)}' to add a new Book",
            f"Press '{label(Command.LIST_ARTICLES)}' to show a List of articles",
            f"Press '{label(Command.NEW_ARTICLE)}' to add a new Article",
            "",
            f"Press '{label(Command.ENTER_EDIT)}' on a form to start typing, "
            f"'{label(Command.SAVE)}' to save",
        )

    def frame(self) -> Frame:
        """Snapshot the state for the renderer."""
        screen = self.mode.screen
        parts: Dict[str, object] = {
            "mode": self.mode,
            "active_menu": list(Screen).index(screen),
            "update_flag": self.update_flag,
            "help": self._help(),
        }

        if screen is Screen.HOME:
            parts["body"] = self._home_body()

        elif screen.is_list:
            kind = screen.entry_type
            parts["list_title"] = (
                f"{kind.display_name}s   Delete selected with "
                f"`{self.keymap.label(Command.DELETE_SELECTED)}`"
            )
            try:
                rows = self.db.list_entries(kind)
            except DatabaseError as e:
                self._fail("Read", e)
                rows = []
            selected = self.cursors[screen].ensure_selected(len(rows))
            parts["rows"] = tuple(row.title or "" for row in rows)
            parts["selected"] = selected
            if selected is not None:
                row = rows[selected]
                record = row.to_fields()
                parts["detail"] = (("ID", row.cite_key),) + tuple(
                    zip(record.LABELS, record.to_lines())
                )

        else:
            kind = screen.entry_type
            form = self.forms[screen]
            verb = "Update" if self.update_flag else "New"
            parts["form_title"] = f"{verb} {kind.display_name}"
            parts["form_labels"] = fields_for(kind).LABELS
            parts["form_lines"] = tuple(form.lines())
            parts["form_cursor"] = form.cursor

        parts["status"] = self.status
        parts["status_is_error"] = self.status_is_error
        return Frame(**parts)
