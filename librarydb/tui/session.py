#!/usr/bin/env python3
"""
session.py
-------------------
Foreground loop of the interactive session.

Each iteration renders one frame, then blocks on the event queue and
applies exactly one event. The input pump is the only producer; it is
stopped when the loop ends for any reason.

Usage:
    run_session(db, load_config(CONFIG_PATH), logger)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import curses
import queue
import threading
from typing import Callable, Optional

# --- Local imports ---
from librarydb.core.config import AppConfig
from librarydb.core.logging_manager import CatalogLogger, safe_logger
from librarydb.database import CatalogDB
from .events import AppEvent
from .input_pump import InputPump
from .keys import Keymap
from .render import CursesRenderer
from .state import Frame, SessionState

# Longest the loop waits on the queue before checking the pump is alive
_GET_TIMEOUT = 1.0


class Session:
    """
    Render/apply loop around a SessionState.

    Attributes:
        state: State machine receiving events
        draw: Callable rendering a Frame
        pump: Producer of events
        events: Queue shared with the pump
    """

    def __init__(
        self,
        state: SessionState,
        draw: Callable[[Frame], None],
        pump: InputPump,
        events: "queue.Queue[AppEvent]",
        logger: Optional[CatalogLogger] = None,
    ) -> None:
        self.state = state
        self.draw = draw
        self.pump = pump
        self.events = events
        self.logger = logger

    def run(self) -> None:
        """
        Run until the quit command.

        Raises:
            RuntimeError: If the input pump dies while the session runs
        """
        log = safe_logger(self.logger)
        log.log_info("Session started")
        self.pump.start()
        try:
            while self.state.running:
                self.draw(self.state.frame())
                try:
                    event = self.events.get(timeout=_GET_TIMEOUT)
                except queue.Empty:
                    if not self.pump.running:
                        raise RuntimeError("Input pump stopped") from self.pump.error
                    continue
                self.state.handle(event)
        finally:
            self.pump.stop()
            log.log_info("Session ended")


def run_session(
    db: CatalogDB,
    config: Optional[AppConfig] = None,
    logger: Optional[CatalogLogger] = None,
) -> None:
    """
    Run the interactive session on the controlling terminal.

    ``curses.wrapper`` enters raw mode and restores the terminal on exit,
    including when an exception propagates.

    Raises:
        ConfigError: If the key bindings are invalid (before the terminal
            is touched)
    """
    config = config or AppConfig()
    keymap = Keymap.from_bindings(config.keybindings)

    def _main(stdscr: "curses.window") -> None:
        renderer = CursesRenderer(stdscr, threading.Lock())
        events: "queue.Queue[AppEvent]" = queue.Queue(maxsize=config.queue_size)
        pump = InputPump(
            renderer.read_key,
            events,
            tick_interval=config.tick_interval,
            poll_interval=config.poll_interval,
            logger=logger,
        )
        state = SessionState(db, keymap, logger)
        Session(state, renderer.draw, pump, events, logger).run()

    curses.wrapper(_main)
