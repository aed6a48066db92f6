"""
Edit Commands
-------------

Create and remove entries without the interactive session.

Commands:
    - add: Create an entry from positional fields in form order
    - delete: Remove an entry by cite_key
"""
import sys
import click

from librarydb.core.logging_manager import handle_cli_error
from librarydb.core.exceptions import DatabaseError, ValidationError
from librarydb.database.models import fields_for
from . import get_db


@click.command()
@click.argument("kind", type=click.Choice(["book", "article"], case_sensitive=False))
@click.argument("fields", nargs=-1)
@click.pass_context
def add(ctx, kind, fields):
    """
    Create an entry from FIELDS given in form order.

    \b
    Book:    author title pages volume edition year series publisher note
    Article: title journal volume pages note year edition publisher
    """
    try:
        db = get_db(ctx)
        record = fields_for(kind).from_lines(list(fields))
        cite_key = db.create_entry(kind, record)
        click.echo(f"✅ Created {kind.lower()} {cite_key}")

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "add", additional_context={"kind": kind})


@click.command()
@click.argument("kind", type=click.Choice(["book", "article"], case_sensitive=False))
@click.argument("cite_key")
@click.pass_context
def delete(ctx, kind, cite_key):
    """Delete an entry (its publisher and month/year rows are kept)."""
    try:
        db = get_db(ctx)
        if not db.delete_entry(kind, cite_key):
            click.echo(f"❌ No {kind.lower()} with cite_key {cite_key}", err=True)
            sys.exit(1)
        click.echo(f"🗑️  Deleted {kind.lower()} {cite_key}")

    except DatabaseError as e:
        handle_cli_error(
            ctx, e, "delete", additional_context={"kind": kind, "cite_key": cite_key}
        )
