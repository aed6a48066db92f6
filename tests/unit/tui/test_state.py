"""Tests for the session state machine against a real store."""
import pytest
from unittest.mock import MagicMock

from librarydb.core.exceptions import DatabaseError
from librarydb.core.logging_manager import CatalogLogger
from librarydb.database.models import EntryType
from librarydb.tui.events import AppEvent
from librarydb.tui.keys import KeyEvent, KeyKind
from librarydb.tui.state import MENU_TITLES, InputMode, Mode, Screen, SessionState

F2 = KeyEvent.function(2)
F9 = KeyEvent.function(9)
F12 = KeyEvent.function(12)
CTRL_U = KeyEvent.ctrl("u")
CTRL_D = KeyEvent.ctrl("d")
UP = KeyEvent(KeyKind.UP)
DOWN = KeyEvent(KeyKind.DOWN)
ENTER = KeyEvent(KeyKind.ENTER)


def press(state, *keys):
    for key in keys:
        state.handle(AppEvent.input(key))


def type_text(state, text):
    for ch in text:
        press(state, ENTER if ch == "\n" else KeyEvent.char(ch))


@pytest.fixture
def state(test_db):
    return SessionState(test_db)


class TestMode:
    def test_input_only_on_form_screens(self):
        Mode(Screen.NEW_BOOK, InputMode.INPUT)
        with pytest.raises(ValueError):
            Mode(Screen.SHOW_BOOKS, InputMode.INPUT)
        with pytest.raises(ValueError):
            Mode(Screen.HOME, InputMode.INPUT)

    def test_menu_titles(self):
        assert MENU_TITLES == (
            "Home",
            "Show Books",
            "Book Add",
            "List Articles",
            "Article Add",
            "Quit",
        )


class TestNavigation:
    """Command-mode navigation."""

    def test_starts_on_home(self, state):
        assert state.mode == Mode(Screen.HOME)
        assert state.running

    @pytest.mark.parametrize(
        "ch, screen",
        [
            ("s", Screen.SHOW_BOOKS),
            ("b", Screen.NEW_BOOK),
            ("l", Screen.LIST_ARTICLES),
            ("a", Screen.INSERT_ARTICLE),
        ],
    )
    def test_navigation_keys(self, state, ch, screen):
        press(state, KeyEvent.char(ch))
        assert state.mode == Mode(screen)

        press(state, KeyEvent.char("h"))
        assert state.mode == Mode(Screen.HOME)

    def test_quit(self, state):
        press(state, KeyEvent.char("q"))
        assert state.running is False

    def test_ticks_change_nothing(self, state):
        state.handle(AppEvent.tick())
        assert state.mode == Mode(Screen.HOME)
        assert state.running

    def test_enter_edit_only_on_forms(self, state):
        press(state, KeyEvent.char("s"), F2)
        assert state.mode == Mode(Screen.SHOW_BOOKS)

        press(state, KeyEvent.char("b"), F2)
        assert state.mode == Mode(Screen.NEW_BOOK, InputMode.INPUT)


class TestInputMode:
    """Keys in input mode edit the form."""

    def test_navigation_keys_are_typed(self, state):
        press(state, KeyEvent.char("b"), F2)
        type_text(state, "shql")

        assert state.mode == Mode(Screen.NEW_BOOK, InputMode.INPUT)
        assert state.running
        assert state.forms[Screen.NEW_BOOK].lines() == ["shql"]

    def test_exit_edit_returns_to_command_mode(self, state):
        press(state, KeyEvent.char("b"), F2)
        type_text(state, "draft")
        press(state, F12)

        assert state.mode == Mode(Screen.NEW_BOOK)
        assert state.forms[Screen.NEW_BOOK].lines() == ["draft"]

    def test_forms_are_independent(self, state):
        press(state, KeyEvent.char("b"), F2)
        type_text(state, "book text")
        press(state, F12, KeyEvent.char("a"), F2)
        type_text(state, "article text")

        assert state.forms[Screen.NEW_BOOK].lines() == ["book text"]
        assert state.forms[Screen.INSERT_ARTICLE].lines() == ["article text"]


class TestSave:
    """Saving a form."""

    def test_save_creates_book(self, state, test_db, book_lines):
        press(state, KeyEvent.char("b"), F2)
        type_text(state, "\n".join(book_lines))
        press(state, F9)

        assert state.mode == Mode(Screen.NEW_BOOK)
        assert state.forms[Screen.NEW_BOOK].is_empty()
        assert state.status.startswith("Saved book ")
        assert not state.status_is_error

        rows = test_db.list_entries(EntryType.BOOK)
        assert len(rows) == 1
        assert test_db.select_entry_fields(EntryType.BOOK, rows[0].cite_key) == book_lines

    def test_save_from_command_mode(self, state, test_db, article_lines):
        press(state, KeyEvent.char("a"), F2)
        type_text(state, "\n".join(article_lines))
        press(state, F12, F9)

        assert test_db.count_entries(EntryType.ARTICLE) == 1

    def test_short_form_keeps_text(self, state, test_db):
        press(state, KeyEvent.char("b"), F2)
        type_text(state, "Only an author\nand a title")
        press(state, F9)

        assert state.status_is_error
        assert "Save failed" in state.status
        assert state.forms[Screen.NEW_BOOK].lines() == ["Only an author", "and a title"]
        assert state.mode == Mode(Screen.NEW_BOOK)
        assert test_db.count_entries(EntryType.BOOK) == 0

    def test_store_failure_keeps_form(self, test_db, book_lines):
        mock_logger = MagicMock(spec=CatalogLogger)
        state = SessionState(test_db, logger=mock_logger)
        test_db.create_entry = MagicMock(side_effect=DatabaseError("disk full"))

        press(state, KeyEvent.char("b"), F2)
        type_text(state, "\n".join(book_lines))
        press(state, F9)

        assert state.status == "Save failed: disk full"
        assert state.forms[Screen.NEW_BOOK].lines() == book_lines
        mock_logger.log_error.assert_called_once()

    def test_save_on_list_screen_is_noop(self, state, test_db):
        press(state, KeyEvent.char("s"), F9)
        assert test_db.count_entries(EntryType.BOOK) == 0


class TestUpdateSelected:
    """Loading a listed entry into its form and saving it back."""

    def test_update_round_trip(self, state, test_db, book_lines):
        cite_key = test_db.create_entry(EntryType.BOOK, book_lines)

        press(state, KeyEvent.char("s"), CTRL_U)

        assert state.mode == Mode(Screen.NEW_BOOK, InputMode.INPUT)
        assert state.update_flag is True
        assert state.update_cite_key == cite_key
        assert state.forms[Screen.NEW_BOOK].lines() == book_lines

        type_text(state, " (revised)")
        press(state, F9)

        assert state.update_flag is False
        assert state.status == f"Updated book {cite_key}"
        assert test_db.count_entries(EntryType.BOOK) == 1
        assert test_db.get_fields(EntryType.BOOK, cite_key).author == "Frank Herbert (revised)"

    def test_exit_edit_clears_update_flag(self, state, test_db, book_lines):
        test_db.create_entry(EntryType.BOOK, book_lines)

        press(state, KeyEvent.char("s"), CTRL_U, F12)

        assert state.update_flag is False
        assert state.update_cite_key is None
        assert state.mode == Mode(Screen.NEW_BOOK)

    def test_update_on_empty_list(self, state):
        press(state, KeyEvent.char("l"), CTRL_U)

        assert state.mode == Mode(Screen.LIST_ARTICLES)
        assert state.status == "No articles to update"
        assert state.update_flag is False

    def test_update_selects_second_row(self, state, test_db, book_lines, other_book_lines):
        test_db.create_entry(EntryType.BOOK, book_lines)
        second = test_db.create_entry(EntryType.BOOK, other_book_lines)

        press(state, KeyEvent.char("s"))
        state.frame()
        press(state, DOWN, CTRL_U)

        assert state.update_cite_key == second


class TestDeleteSelected:
    """Deleting the highlighted entry."""

    def test_delete_only_article_clears_selection(self, state, test_db, article_lines):
        test_db.create_entry(EntryType.ARTICLE, article_lines)

        press(state, KeyEvent.char("l"))
        assert state.frame().selected == 0
        press(state, CTRL_D)

        assert test_db.list_entries(EntryType.ARTICLE) == []
        assert state.cursors[Screen.LIST_ARTICLES].selected is None
        assert state.frame().selected is None

    def test_delete_advances_cursor(self, state, test_db, book_lines, other_book_lines):
        first = test_db.create_entry(EntryType.BOOK, book_lines)
        test_db.create_entry(EntryType.BOOK, other_book_lines)

        press(state, KeyEvent.char("s"), CTRL_D)

        assert state.status == f"Deleted book {first}"
        assert state.frame().selected == 0
        assert test_db.count_entries(EntryType.BOOK) == 1

    def test_delete_of_vanished_row(self, state, test_db, book_lines):
        cite_key = test_db.create_entry(EntryType.BOOK, book_lines)
        test_db.delete_entry = MagicMock(return_value=False)

        press(state, KeyEvent.char("s"), CTRL_D)

        assert state.status == f"Book {cite_key} no longer exists"
        assert not state.status_is_error
        test_db.delete_entry.assert_called_once_with(EntryType.BOOK, cite_key)

    def test_delete_on_empty_list(self, state):
        press(state, KeyEvent.char("s"), CTRL_D)
        assert state.status == "No books to delete"

    def test_delete_keys_ignored_on_forms(self, state, test_db, book_lines):
        test_db.create_entry(EntryType.BOOK, book_lines)
        press(state, KeyEvent.char("b"), CTRL_D)
        assert test_db.count_entries(EntryType.BOOK) == 1


class TestMovement:
    def test_two_books_wrap(self, state, test_db, book_lines, other_book_lines):
        test_db.create_entry(EntryType.BOOK, book_lines)
        test_db.create_entry(EntryType.BOOK, other_book_lines)

        press(state, KeyEvent.char("s"))
        assert state.frame().selected == 0
        press(state, DOWN)
        assert state.frame().selected == 1
        press(state, DOWN)
        assert state.frame().selected == 0
        press(state, UP)
        assert state.frame().selected == 1


class TestFrame:
    """Render snapshots."""

    def test_home_frame(self, state):
        frame = state.frame()

        assert frame.active_menu == 0
        assert "Library DB" in frame.body
        assert "Press 's' to Show a list of books" in frame.body

    def test_list_frame_detail(self, state, test_db, book_lines):
        cite_key = test_db.create_entry(EntryType.BOOK, book_lines)

        press(state, KeyEvent.char("s"))
        frame = state.frame()

        assert frame.active_menu == 1
        assert frame.rows == ("Dune",)
        assert frame.selected == 0
        assert frame.detail[0] == ("ID", cite_key)
        assert ("Author", "Frank Herbert") in frame.detail
        assert "Ctrl-D" in frame.list_title

    def test_empty_list_frame(self, state):
        press(state, KeyEvent.char("l"))
        frame = state.frame()

        assert frame.rows == ()
        assert frame.selected is None
        assert frame.detail == ()

    def test_form_frame(self, state):
        press(state, KeyEvent.char("a"), F2)
        type_text(state, "Title")
        frame = state.frame()

        assert frame.form_title == "New Article"
        assert frame.form_labels[0] == "Title"
        assert frame.form_lines == ("Title",)
        assert frame.form_cursor == (0, 5)
        assert "F12" in frame.help

    def test_update_form_title(self, state, test_db, book_lines):
        test_db.create_entry(EntryType.BOOK, book_lines)
        press(state, KeyEvent.char("s"), CTRL_U)

        assert state.frame().form_title == "Update Book"
        assert state.frame().update_flag is True
