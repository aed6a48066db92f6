"""
Session Commands
----------------

Interactive terminal session.

Commands:
    - tui: Browse and edit the catalog in a curses session
"""
import click

from librarydb.core.cli_utils import setup_logger
from librarydb.core.config import load_config
from librarydb.core.exceptions import ConfigError, DatabaseError
from librarydb.core.logging_manager import handle_cli_error
from . import get_db


@click.command()
@click.pass_context
def tui(ctx):
    """Start the interactive catalog session."""
    # Imported here so the other commands never load curses
    from librarydb.tui.session import run_session

    logger = setup_logger(ctx.obj["log_dir"], "session")
    try:
        config = load_config(ctx.obj["config_path"])
        db = get_db(ctx)
        db.check_connection()
        run_session(db, config, logger)
    except (ConfigError, DatabaseError) as e:
        handle_cli_error(ctx, e, "tui")
    finally:
        logger.close()
