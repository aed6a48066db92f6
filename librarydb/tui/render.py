#!/usr/bin/env python3
"""
render.py
-------------------
curses renderer for session frames.

Layout, top to bottom:

    menu      screen titles, the current one highlighted
    content   home text, list + detail panes, or labels + form text
    status    last status message
    footer    key help

Curses is not thread-safe. Drawing and key reads share ``terminal_lock``
so the input pump and the session loop never call into curses at once.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import curses
import threading
from typing import Dict, Optional, Union

# --- Local imports ---
from .state import Frame

_FOOTER = "Library DB"


def _safe_addstr(win: "curses.window", y: int, x: int, s: str, attr: int = 0) -> None:
    try:
        win.addstr(y, x, s, attr)
    except curses.error:
        # Writing the bottom-right cell or past a small terminal's edge
        return


def _init_palette() -> Dict[str, int]:
    palette = {
        "menu": curses.A_NORMAL,
        "menu_active": curses.A_REVERSE | curses.A_BOLD,
        "title": curses.A_BOLD,
        "label": curses.A_BOLD,
        "selected": curses.A_REVERSE,
        "status": curses.A_NORMAL,
        "error": curses.A_BOLD,
        "help": curses.A_DIM,
        "brand": curses.A_BOLD,
    }
    if not curses.has_colors():
        return palette
    try:
        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(1, curses.COLOR_CYAN, -1)
        curses.init_pair(2, curses.COLOR_BLUE, -1)
        curses.init_pair(3, curses.COLOR_RED, -1)
        curses.init_pair(4, curses.COLOR_YELLOW, -1)
    except curses.error:
        return palette
    palette["label"] = curses.color_pair(2) | curses.A_BOLD
    palette["brand"] = curses.color_pair(2) | curses.A_BOLD
    palette["help"] = curses.color_pair(1)
    palette["error"] = curses.color_pair(3) | curses.A_BOLD
    palette["selected"] = curses.color_pair(4) | curses.A_REVERSE
    return palette


class CursesRenderer:
    """
    Draws Frames on a curses screen and reads keys without blocking.

    Attributes:
        stdscr: Screen window from ``curses.wrapper``
        terminal_lock: Serializes every curses call
    """

    def __init__(
        self,
        stdscr: "curses.window",
        terminal_lock: Optional[threading.Lock] = None,
    ) -> None:
        self.stdscr = stdscr
        self.terminal_lock = terminal_lock or threading.Lock()
        with self.terminal_lock:
            stdscr.keypad(True)
            stdscr.nodelay(True)
            self.palette = _init_palette()
        self._cursor_visible: Optional[bool] = None

    # ---- Input ----
    def read_key(self) -> Optional[Union[str, int]]:
        """Return a pending key code, or None when no key is waiting."""
        with self.terminal_lock:
            try:
                return self.stdscr.get_wch()
            except curses.error:
                return None

    # ---- Output ----
    def _set_cursor(self, visible: bool) -> None:
        if visible == self._cursor_visible:
            return
        try:
            curses.curs_set(1 if visible else 0)
        except curses.error:
            # Some terminals cannot change cursor visibility
            pass
        self._cursor_visible = visible

    def draw(self, frame: Frame) -> None:
        """Render one frame."""
        with self.terminal_lock:
            win = self.stdscr
            win.erase()
            height, width = win.getmaxyx()
            if height < 6 or width < 20:
                _safe_addstr(win, 0, 0, "Terminal too small"[: max(0, width - 1)])
                win.refresh()
                return

            self._draw_menu(frame, width)
            content_top, content_bottom = 2, height - 3
            cursor_at = None

            if frame.mode.screen.is_list:
                self._draw_list(frame, content_top, content_bottom, width)
            elif frame.mode.screen.is_form:
                cursor_at = self._draw_form(frame, content_top, content_bottom, width)
            else:
                self._draw_body(frame, content_top, content_bottom, width)

            self._draw_status(frame, height, width)

            editing = not frame.mode.is_command and cursor_at is not None
            self._set_cursor(editing)
            if editing:
                try:
                    win.move(*cursor_at)
                except curses.error:
                    pass
            win.refresh()

    def _draw_menu(self, frame: Frame, width: int) -> None:
        x = 1
        for index, title in enumerate(frame.menu_titles):
            attr = self.palette["menu_active"] if index == frame.active_menu else self.palette["menu"]
            label = f" {title} "
            if x + len(label) >= width:
                break
            _safe_addstr(self.stdscr, 0, x, label, attr)
            x += len(label) + 1
        _safe_addstr(self.stdscr, 1, 0, "─" * (width - 1))

    def _draw_body(self, frame: Frame, top: int, bottom: int, width: int) -> None:
        for offset, line in enumerate(frame.body):
            y = top + 1 + offset
            if y > bottom:
                break
            attr = self.palette["brand"] if line == _FOOTER else 0
            x = max(0, (width - len(line)) // 2)
            _safe_addstr(self.stdscr, y, x, line[: width - 1], attr)

    def _draw_list(self, frame: Frame, top: int, bottom: int, width: int) -> None:
        list_width = max(12, width // 3)
        _safe_addstr(self.stdscr, top, 1, frame.list_title[: width - 2], self.palette["title"])

        visible = bottom - top
        first = 0
        if frame.selected is not None and frame.selected >= visible:
            first = frame.selected - visible + 1
        for offset, title in enumerate(frame.rows[first : first + visible]):
            index = first + offset
            attr = self.palette["selected"] if index == frame.selected else 0
            prefix = ">> " if index == frame.selected else "   "
            _safe_addstr(
                self.stdscr, top + 1 + offset, 1, (prefix + title)[: list_width - 2], attr
            )

        if not frame.detail:
            return
        label_width = max(len(label) for label, _ in frame.detail)
        x = list_width + 2
        for offset, (label, value) in enumerate(frame.detail):
            y = top + 1 + offset
            if y > bottom:
                break
            _safe_addstr(self.stdscr, y, x, f"{label:>{label_width}} ", self.palette["label"])
            _safe_addstr(self.stdscr, y, x + label_width + 1, value[: max(0, width - x - label_width - 2)])

    def _draw_form(self, frame: Frame, top: int, bottom: int, width: int):
        title = frame.form_title
        if not frame.mode.is_command:
            title += "  [editing]"
        _safe_addstr(self.stdscr, top, 1, title[: width - 2], self.palette["title"])

        label_width = max((len(label) for label in frame.form_labels), default=0) + 2
        for offset, label in enumerate(frame.form_labels):
            y = top + 1 + offset
            if y > bottom:
                break
            _safe_addstr(self.stdscr, y, 1, f"{label}: ", self.palette["label"])

        x = label_width + 2
        for offset, line in enumerate(frame.form_lines):
            y = top + 1 + offset
            if y > bottom:
                break
            _safe_addstr(self.stdscr, y, x, line[: max(0, width - x - 1)])

        row, col = frame.form_cursor
        return min(top + 1 + row, bottom), min(x + col, width - 1)

    def _draw_status(self, frame: Frame, height: int, width: int) -> None:
        _safe_addstr(self.stdscr, height - 3, 0, "─" * (width - 1))
        if frame.status:
            attr = self.palette["error"] if frame.status_is_error else self.palette["status"]
            _safe_addstr(self.stdscr, height - 2, 1, frame.status[: width - 2], attr)
        _safe_addstr(self.stdscr, height - 1, 1, frame.help[: width - len(_FOOTER) - 3], self.palette["help"])
        _safe_addstr(
            self.stdscr, height - 1, max(0, width - len(_FOOTER) - 1), _FOOTER, self.palette["brand"]
        )
