"""Tests for the render/apply loop and the curses renderer."""
import curses
import queue

import pytest
from unittest.mock import MagicMock

from librarydb.database.models import EntryType
from librarydb.tui.events import AppEvent
from librarydb.tui.input_pump import InputPump
from librarydb.tui.keys import KeyEvent
from librarydb.tui.render import CursesRenderer
from librarydb.tui.session import Session
from librarydb.tui.state import Screen, SessionState


def _fake_pump(running=True):
    pump = MagicMock(spec=InputPump)
    pump.running = running
    pump.error = None
    return pump


class TestSessionLoop:
    """Tests for Session.run."""

    def test_applies_events_until_quit(self, test_db):
        events = queue.Queue()
        for ch in "sbq":
            events.put(AppEvent.input(KeyEvent.char(ch)))
        state = SessionState(test_db)
        frames = []
        pump = _fake_pump()

        Session(state, frames.append, pump, events).run()

        assert state.running is False
        assert state.mode.screen is Screen.NEW_BOOK
        assert [frame.mode.screen for frame in frames] == [
            Screen.HOME,
            Screen.SHOW_BOOKS,
            Screen.NEW_BOOK,
        ]
        pump.start.assert_called_once()
        pump.stop.assert_called_once()

    def test_ticks_only_redraw(self, test_db):
        events = queue.Queue()
        events.put(AppEvent.tick())
        events.put(AppEvent.tick())
        events.put(AppEvent.input(KeyEvent.char("q")))
        frames = []

        Session(SessionState(test_db), frames.append, _fake_pump(), events).run()

        assert len(frames) == 3
        assert all(frame.mode.screen is Screen.HOME for frame in frames)

    def test_dead_pump_ends_session(self, test_db, monkeypatch):
        monkeypatch.setattr("librarydb.tui.session._GET_TIMEOUT", 0.01)
        pump = _fake_pump(running=False)
        pump.error = OSError("terminal gone")

        with pytest.raises(RuntimeError, match="Input pump stopped"):
            Session(SessionState(test_db), lambda frame: None, pump, queue.Queue()).run()

        pump.stop.assert_called_once()


@pytest.fixture
def stdscr(monkeypatch):
    monkeypatch.setattr(curses, "has_colors", lambda: False)
    monkeypatch.setattr(curses, "curs_set", lambda visibility: None)
    window = MagicMock()
    window.getmaxyx.return_value = (24, 80)
    return window


def _drawn_text(window):
    return [call.args[2] for call in window.addstr.call_args_list]


class TestCursesRenderer:
    """Renderer against a fake window."""

    def test_init_sets_nonblocking_input(self, stdscr):
        CursesRenderer(stdscr)

        stdscr.keypad.assert_called_once_with(True)
        stdscr.nodelay.assert_called_once_with(True)

    def test_read_key(self, stdscr):
        renderer = CursesRenderer(stdscr)

        stdscr.get_wch.return_value = "q"
        assert renderer.read_key() == "q"

        stdscr.get_wch.side_effect = curses.error("no input")
        assert renderer.read_key() is None

    def test_draws_home(self, stdscr, test_db):
        CursesRenderer(stdscr).draw(SessionState(test_db).frame())

        text = _drawn_text(stdscr)
        assert " Home " in text
        assert " Quit " in text
        assert "Welcome to" in text
        stdscr.refresh.assert_called_once()

    def test_draws_list_and_detail(self, stdscr, test_db, book_lines):
        test_db.create_entry(EntryType.BOOK, book_lines)
        state = SessionState(test_db)
        state.handle(AppEvent.input(KeyEvent.char("s")))

        CursesRenderer(stdscr).draw(state.frame())

        text = _drawn_text(stdscr)
        assert any("Dune" in item for item in text)
        assert "Frank Herbert" in text

    def test_small_terminal(self, stdscr, test_db):
        stdscr.getmaxyx.return_value = (3, 10)

        CursesRenderer(stdscr).draw(SessionState(test_db).frame())

        assert _drawn_text(stdscr) == ["Terminal "]

    def test_addstr_errors_are_ignored(self, stdscr, test_db):
        stdscr.addstr.side_effect = curses.error("out of bounds")

        CursesRenderer(stdscr).draw(SessionState(test_db).frame())

        stdscr.refresh.assert_called_once()
