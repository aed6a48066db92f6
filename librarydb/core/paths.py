#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the Library DB project.

All paths are Path objects relative to the project root. The CLI accepts
overrides for every one of them (--db-path, --log-dir, --config).

The project structure:
    ROOT/
    ├── librarydb/     # Package code
    ├── config/        # YAML configuration (key bindings, tick rate)
    ├── data/          # SQLite catalog
    └── logs/          # Application logs
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/librarydb/core/paths.py and navigates up
    the directory tree to find ROOT.
    """
    # paths.py -> core/ -> librarydb/ -> ROOT/
    return Path(__file__).resolve().parent.parent.parent


# ----- Project directory -----
ROOT: Path = _get_project_root()
PACKAGE_DIR = ROOT / "librarydb"

# --- Database ---
DATA_DIR = ROOT / "data"
DB_DIR = DATA_DIR / "bibliographic_db"
DB_PATH = DB_DIR / "bib_data.db"

# --- Configuration ---
CONFIG_DIR = ROOT / "config"
CONFIG_PATH = CONFIG_DIR / "librarydb.yaml"

# ---- Logs ----
LOG_DIR = ROOT / "logs"
