"""
Browse Commands
---------------

Read-only catalog listings.

Commands:
    - list: Print the cite_key and title of every book or article
    - show: Print the labelled fields of one entry
"""
import sys
import click

from librarydb.core.logging_manager import handle_cli_error
from librarydb.core.exceptions import DatabaseError
from librarydb.database.models import EntryType
from . import get_db


@click.command("list")
@click.argument("kind", type=click.Choice(["books", "articles"], case_sensitive=False))
@click.pass_context
def list_entries(ctx, kind):
    """List every book or article in storage order."""
    try:
        db = get_db(ctx)
        entry_type = EntryType.coerce(kind)
        rows = db.list_entries(entry_type)

        if not rows:
            click.echo(f"No {kind.lower()} in the catalog")
            return

        click.echo(f"\n📚 {entry_type.display_name}s ({len(rows)}):\n")
        for row in rows:
            click.echo(f"  {row.cite_key}  {row.title or '(untitled)'}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "list", additional_context={"kind": kind})


@click.command()
@click.argument("kind", type=click.Choice(["book", "article"], case_sensitive=False))
@click.argument("cite_key")
@click.pass_context
def show(ctx, kind, cite_key):
    """Display the fields of a single entry."""
    try:
        db = get_db(ctx)
        record = db.get_fields(kind, cite_key)
        if record is None:
            click.echo(f"❌ No {kind.lower()} with cite_key {cite_key}", err=True)
            sys.exit(1)

        click.echo(f"\n🔖 {cite_key}")
        width = max(len(label) for label in record.LABELS)
        for label, value in zip(record.LABELS, record.to_lines()):
            click.echo(f"  {label.ljust(width)} : {value}")

    except DatabaseError as e:
        handle_cli_error(
            ctx, e, "show", additional_context={"kind": kind, "cite_key": cite_key}
        )
