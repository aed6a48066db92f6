#!/usr/bin/env python3
"""
input_pump.py
-------------------
Background thread that turns terminal input into session events.

The pump polls a non-blocking ``read_key`` callable, forwards each key
press as ``AppEvent.input`` and emits ``AppEvent.tick`` whenever the tick
interval has elapsed. Events go through a bounded ``queue.Queue``; a full
queue blocks the pump, which wakes periodically to notice shutdown.

Usage:
    events = queue.Queue(maxsize=64)
    pump = InputPump(read_key, events, tick_interval=0.2)
    pump.start()
    ...
    pump.stop()
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import queue
import threading
import time
from typing import Any, Callable, Optional

# --- Local imports ---
from librarydb.core.logging_manager import CatalogLogger, safe_logger
from .events import AppEvent
from .keys import KeyEvent, translate_key

# Longest a blocked put waits before re-checking the shutdown flag
_PUT_WAKEUP = 0.1


class InputPump:
    """
    Producer thread for the session event queue.

    Attributes:
        tick_interval: Seconds between Tick events
        poll_interval: Seconds to sleep after a poll that read nothing
        error: Exception that stopped the pump, if any
    """

    def __init__(
        self,
        read_key: Callable[[], Any],
        events: "queue.Queue[AppEvent]",
        tick_interval: float = 0.2,
        poll_interval: float = 0.02,
        translate: Callable[[Any], Optional[KeyEvent]] = translate_key,
        logger: Optional[CatalogLogger] = None,
    ) -> None:
        """
        Args:
            read_key: Non-blocking reader; returns a raw key code or None
            events: Bounded queue shared with the session loop
            tick_interval: Seconds between Tick events
            poll_interval: Sleep after an empty poll
            translate: Raw code to KeyEvent (None drops the code)
            logger: Optional logger
        """
        if tick_interval <= 0 or poll_interval <= 0:
            raise ValueError("Pump intervals must be positive")
        self._read_key = read_key
        self._events = events
        self._translate = translate
        self.tick_interval = tick_interval
        self.poll_interval = poll_interval
        self.logger = logger
        self.error: Optional[BaseException] = None
        self._shutdown = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the pump thread (once)."""
        if self._thread is not None:
            raise RuntimeError("Input pump already started")
        self._thread = threading.Thread(
            target=self._run, name="librarydb-input-pump", daemon=True
        )
        self._thread.start()
        safe_logger(self.logger).log_debug(
            "input_pump_started",
            {"tick_interval": self.tick_interval, "poll_interval": self.poll_interval},
        )

    def stop(self, timeout: Optional[float] = 1.0) -> None:
        """Signal shutdown and wait for the thread to finish."""
        self._shutdown.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            if thread.is_alive():
                safe_logger(self.logger).log_warning(
                    "Input pump did not stop in time", {"timeout": timeout}
                )
        safe_logger(self.logger).log_debug("input_pump_stopped")

    def _put(self, event: AppEvent) -> bool:
        """Enqueue an event; gives up only when shutdown is requested."""
        while not self._shutdown.is_set():
            try:
                self._events.put(event, timeout=_PUT_WAKEUP)
                return True
            except queue.Full:
                continue
        return False

    def _run(self) -> None:
        last_tick = time.monotonic()
        try:
            while not self._shutdown.is_set():
                raw = self._read_key()
                if raw is not None:
                    key = self._translate(raw)
                    if key is not None and not self._put(AppEvent.input(key)):
                        break

                now = time.monotonic()
                if now - last_tick >= self.tick_interval:
                    if not self._put(AppEvent.tick()):
                        break
                    last_tick = now

                if raw is None:
                    self._shutdown.wait(self.poll_interval)
        except Exception as e:
            self.error = e
            safe_logger(self.logger).log_error(e, {"operation": "input_pump"})
