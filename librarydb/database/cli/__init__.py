#!/usr/bin/env python3
"""
Library DB Command-Line Interface
---------------------------------

Main CLI group and shared context setup for catalog commands.

Command Structure:
    - Setup (init)
    - Interactive session (tui)
    - Browse (list, show)
    - Edit (add, delete)
    - Maintenance (orphans, check)

Usage:
    # Create the catalog tables
    libdb init

    # Start the terminal session
    libdb tui

    # Get help for a specific command
    libdb orphans --help
"""
import click
from pathlib import Path

from librarydb.core.cli_utils import setup_logger
from librarydb.core.paths import CONFIG_PATH, DB_PATH, LOG_DIR
from librarydb.database import CatalogDB


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    default=str(DB_PATH),
    help="Path to database file",
)
@click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    help="Path to log directory",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(),
    default=str(CONFIG_PATH),
    help="Path to YAML configuration file",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, db_path, log_dir, config_path, verbose):
    """Library DB catalog manager"""
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = Path(db_path)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["config_path"] = Path(config_path)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(Path(log_dir), "cli")


def get_db(ctx) -> CatalogDB:
    """Get or create database instance from context."""
    if "db" not in ctx.obj:
        ctx.obj["db"] = CatalogDB(
            db_path=ctx.obj["db_path"],
            logger=ctx.obj.get("logger"),
        )
    return ctx.obj["db"]


# Import and register command modules
# These imports must come after CLI group definition
from .setup import init  # noqa: E402
from .session import tui  # noqa: E402
from .query import list_entries, show  # noqa: E402
from .entries import add, delete  # noqa: E402
from .prune import check, orphans  # noqa: E402

cli.add_command(init)
cli.add_command(tui)
cli.add_command(list_entries)
cli.add_command(show)
cli.add_command(add)
cli.add_command(delete)
cli.add_command(orphans)
cli.add_command(check)
