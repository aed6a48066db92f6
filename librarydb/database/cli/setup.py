"""
Setup Commands
--------------

Database initialization.

Commands:
    - init: Create the catalog tables
"""
import click

from librarydb.core.logging_manager import handle_cli_error
from librarydb.core.exceptions import DatabaseError
from . import get_db


@click.command()
@click.pass_context
def init(ctx):
    """Create the catalog tables (safe to re-run)."""
    try:
        db = get_db(ctx)

        click.echo(f"🗄️  Initializing catalog at {db.db_path}...")
        created = db.initialize_schema()
        if created:
            click.echo(f"  Created tables: {', '.join(created)}")
        else:
            click.echo("  All tables already exist")
        click.echo("✅ Database initialized!")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "init")
