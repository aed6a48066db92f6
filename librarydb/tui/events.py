#!/usr/bin/env python3
"""
events.py
-------------------
Events carried from the input pump to the session loop.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from enum import Enum
from typing import Optional

# --- Local imports ---
from .keys import KeyEvent


class EventKind(Enum):
    INPUT = "input"
    TICK = "tick"


@dataclass(frozen=True)
class AppEvent:
    """
    One item on the event queue: a key press or a periodic tick.

    Ticks carry no key and cause no state change; they let the session
    loop redraw while the user is idle.
    """

    kind: EventKind
    key: Optional[KeyEvent] = None

    @classmethod
    def input(cls, key: KeyEvent) -> "AppEvent":
        return cls(EventKind.INPUT, key)

    @classmethod
    def tick(cls) -> "AppEvent":
        return cls(EventKind.TICK)

    @property
    def is_tick(self) -> bool:
        return self.kind is EventKind.TICK
