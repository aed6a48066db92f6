#!/usr/bin/env python3
"""
config.py
-------------------
YAML-backed configuration for the interactive session.

The configuration file is optional. When it is absent every value falls
back to the defaults below, which reproduce the classic key layout:

    session:
      tick_interval_ms: 200
      poll_interval_ms: 20
      queue_size: 64
    keybindings:
      home: h
      show_books: s
      new_book: b
      list_articles: l
      new_article: a
      quit: q
      enter_edit: F2
      exit_edit: F12
      save: F9
      update_selected: ctrl+u
      delete_selected: ctrl+d
      up: up
      down: down

Key names are resolved by librarydb.tui.keys.parse_key.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

# --- Third party imports ---
import yaml

# --- Local imports ---
from librarydb.core.exceptions import ConfigError


@dataclass(frozen=True)
class KeyBindings:
    """Key names for every session command."""

    home: str = "h"
    show_books: str = "s"
    new_book: str = "b"
    list_articles: str = "l"
    new_article: str = "a"
    quit: str = "q"
    enter_edit: str = "F2"
    exit_edit: str = "F12"
    save: str = "F9"
    update_selected: str = "ctrl+u"
    delete_selected: str = "ctrl+d"
    up: str = "up"
    down: str = "down"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeyBindings":
        """Build bindings from a mapping, keeping defaults for missing names."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown key binding(s): {', '.join(unknown)}")
        return replace(cls(), **{k: str(v) for k, v in data.items()})


@dataclass(frozen=True)
class AppConfig:
    """
    Session configuration.

    Attributes:
        tick_interval_ms: Interval between Tick events from the input pump
        poll_interval_ms: Sleep between empty keyboard polls
        queue_size: Capacity of the event queue between pump and session
        keybindings: Key names for session commands
    """

    tick_interval_ms: int = 200
    poll_interval_ms: int = 20
    queue_size: int = 64
    keybindings: KeyBindings = field(default_factory=KeyBindings)

    @property
    def tick_interval(self) -> float:
        """Tick interval in seconds."""
        return self.tick_interval_ms / 1000.0

    @property
    def poll_interval(self) -> float:
        """Poll interval in seconds."""
        return self.poll_interval_ms / 1000.0

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "AppConfig":
        """
        Build configuration from a parsed YAML document.

        Args:
            data: Mapping with optional 'session' and 'keybindings' sections

        Returns:
            AppConfig instance

        Raises:
            ConfigError: If a section has the wrong shape or a bad value
        """
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("Configuration root must be a mapping")

        session = data.get("session") or {}
        bindings = data.get("keybindings") or {}
        if not isinstance(session, dict) or not isinstance(bindings, dict):
            raise ConfigError("'session' and 'keybindings' must be mappings")

        try:
            tick = int(session.get("tick_interval_ms", cls.tick_interval_ms))
            poll = int(session.get("poll_interval_ms", cls.poll_interval_ms))
            size = int(session.get("queue_size", cls.queue_size))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid session setting: {e}") from e

        if tick <= 0 or poll <= 0 or size <= 0:
            raise ConfigError("Session settings must be positive integers")

        return cls(
            tick_interval_ms=tick,
            poll_interval_ms=poll,
            queue_size=size,
            keybindings=KeyBindings.from_dict(bindings),
        )


def load_config(path: Optional[Union[str, Path]] = None) -> AppConfig:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML file; missing files yield defaults

    Returns:
        AppConfig instance

    Raises:
        ConfigError: If the file exists but cannot be parsed
    """
    if path is None:
        return AppConfig()

    config_path = Path(path).expanduser()
    if not config_path.exists():
        return AppConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse {config_path}: {e}") from e

    return AppConfig.from_dict(data)
