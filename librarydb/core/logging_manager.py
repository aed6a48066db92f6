#!/usr/bin/env python3
"""
logging_manager.py
--------------------
File logging for the catalog store, the interactive session and the CLI.

Each component ('database', 'session', 'cli') writes to its own rotating
``<component>.log``; errors from every component also land in a shared
``errors.log`` with their traceback. Nothing is written to the terminal:
while the session runs, curses owns it, and the CLI reports failures
through ``handle_cli_error`` instead.

Usage:
    logger = CatalogLogger(log_dir / "operations", component_name="cli")
    logger.log_operation("create_entry_completed", {"cite_key": key})

    safe_logger(None).log_info("goes nowhere")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional, Type

# --- Third party imports ---
import click

# --- Local imports ---
from librarydb.core.exceptions import (
    ConfigError,
    FieldCountError,
    SchemaMismatchError,
    StoreConnectionError,
)

_MAX_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 3
_FILE_FORMAT = logging.Formatter(
    "%(asctime)s %(levelname)-7s %(name)s [%(funcName)s:%(lineno)d] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Second line printed under a CLI failure of this type
_CLI_HINTS: Dict[Type[Exception], str] = {
    StoreConnectionError: "Create the catalog with 'libdb init' or pass --db-path.",
    SchemaMismatchError: "The file was not created by 'libdb init'; point --db-path at a catalog.",
    FieldCountError: "Give one argument per field; empty fields are written as \"\".",
    ConfigError: "Fix the keybindings section of the file passed with --config.",
}


def _render(tag: str, message: str, details: Optional[Dict[str, Any]]) -> str:
    if not details:
        return f"{tag} - {message}"
    return f"{tag} - {message}: {json.dumps(details, default=str)}"


class CatalogLogger:
    """
    Per-component catalog logger.

    Attributes:
        log_dir: Directory holding the log files, or None when discarding
        component_name: Component this logger writes for
    """

    def __init__(self, log_dir: Optional[Path], component_name: str = "librarydb") -> None:
        self.log_dir = Path(log_dir) if log_dir is not None else None
        self.component_name = component_name
        self._logger = logging.getLogger(f"librarydb.{component_name}")
        self._logger.propagate = False
        # A component reopened in the same process (tests, repeated CLI runs)
        # must not write every line twice
        self.close()

        if self.log_dir is None:
            self._logger.addHandler(logging.NullHandler())
            self._logger.setLevel(logging.CRITICAL + 1)
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._logger.setLevel(logging.DEBUG)
        self._attach(self.log_dir / f"{component_name}.log", logging.DEBUG)
        self._attach(self.log_dir / "errors.log", logging.ERROR)

    def _attach(self, path: Path, level: int) -> None:
        handler = RotatingFileHandler(
            path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
        )
        handler.setLevel(level)
        handler.setFormatter(_FILE_FORMAT)
        self._logger.addHandler(handler)

    def close(self) -> None:
        """Flush and detach this component's handlers."""
        for handler in list(self._logger.handlers):
            handler.close()
            self._logger.removeHandler(handler)

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Record a completed store operation and its details."""
        self._logger.info(_render("OPERATION", operation, details or {}))

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._logger.debug(_render("DEBUG", message, details))

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._logger.info(_render("INFO", message, details))

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._logger.warning(_render("WARNING", message, details))

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Log an error with its context and the traceback it carries.

        The traceback is taken from the exception itself, so this works
        outside the ``except`` block that caught it (the session reports
        failures after the handler has returned).

        Args:
            error: Exception that occurred
            context: Where it happened, e.g. {"operation": "save", "kind": "book"}
        """
        lines = [f"ERROR - {type(error).__name__}: {error}"]
        if context:
            lines.append("Context: " + ", ".join(f"{k}={v}" for k, v in context.items()))
        self._logger.error(
            "\n".join(lines),
            exc_info=(type(error), error, error.__traceback__),
        )

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log a CLI failure and return the message to print.

        Examples:
            >>> logger.log_cli_error(DatabaseError("Connection failed"))
            '❌ DatabaseError: Connection failed'
        """
        self.log_error(error, context or {"source": "cli"})
        return describe_cli_error(error, show_traceback)


class NullLogger(CatalogLogger):
    """CatalogLogger without a log directory; every record is dropped."""

    def __init__(self) -> None:
        super().__init__(None, component_name="null")


_null_logger = NullLogger()


def safe_logger(logger: Optional[CatalogLogger]) -> CatalogLogger:
    """
    Return the provided logger or the shared NullLogger if None.

    Use:
        safe_logger(self.logger).log_debug("message")
    """
    return logger if logger is not None else _null_logger


def describe_cli_error(error: Exception, show_traceback: bool = False) -> str:
    """
    Format an error for the terminal.

    The first line names the error. A hint follows for failures the user
    can fix from the command line, and the traceback follows when asked.
    """
    message = f"❌ {type(error).__name__}: {error}"
    for error_type, hint in _CLI_HINTS.items():
        if isinstance(error, error_type):
            message += f"\n   {hint}"
            break
    if show_traceback:
        tb = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        message += f"\n\n{tb}"
    return message


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Report a failed CLI command and exit.

    Logs the error with the command name to the CLI log, prints a short
    message to stderr (with the traceback under --verbose) and exits.

    Args:
        ctx: Click context; ``ctx.obj`` may hold "logger" and "verbose"
        error: Exception that occurred
        operation: Command that failed (e.g. 'init', 'add', 'tui')
        additional_context: Extra context such as entry type or cite_key
        exit_code: Exit code for sys.exit()
    """
    obj = ctx.obj or {}
    context = {"operation": operation, **(additional_context or {})}

    message = safe_logger(obj.get("logger")).log_cli_error(
        error, context, show_traceback=obj.get("verbose", False)
    )
    click.echo(message, err=True)
    sys.exit(exit_code)
