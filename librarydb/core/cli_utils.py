#!/usr/bin/env python3
"""
cli_utils.py
-------------------
Shared CLI utilities for Library DB commands.

Functions:
    setup_logger: Initialize CatalogLogger for CLI operations

Usage:
    from librarydb.core.cli_utils import setup_logger

    logger = setup_logger(log_dir, "cli")
"""
from pathlib import Path

from librarydb.core.logging_manager import CatalogLogger


def setup_logger(log_dir: Path, component_name: str) -> CatalogLogger:
    """
    Setup logging for CLI operations.

    Creates the operations log directory if it doesn't exist and initializes
    a CatalogLogger instance for the specified component.

    Args:
        log_dir: Base log directory (typically from paths.LOG_DIR)
        component_name: Component identifier for logging (e.g., 'cli', 'session')

    Returns:
        Configured CatalogLogger instance
    """
    operations_log_dir = Path(log_dir) / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return CatalogLogger(operations_log_dir, component_name=component_name)
