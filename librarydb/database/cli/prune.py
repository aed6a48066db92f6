#!/usr/bin/env python3
"""
prune.py
--------
Orphan detection, pruning and integrity reporting.

Updates and deletes leave Publisher and MonthYear rows that no entry
references. They are kept until removed here on request.

Commands:
    - orphans: Report (and optionally remove) orphaned rows
    - check: Run every integrity check

Usage:
    # Count orphaned rows
    libdb orphans

    # Preview removal
    libdb orphans --prune --dry-run

    # Remove them
    libdb orphans --prune
"""
# --- Annotations ---
from __future__ import annotations

# --- Third-party imports ---
import click

# --- Local imports ---
from librarydb.core.logging_manager import handle_cli_error
from librarydb.core.exceptions import DatabaseError
from . import get_db


@click.command()
@click.option("--prune", is_flag=True, help="Delete the orphaned rows")
@click.option("--dry-run", is_flag=True, help="With --prune, only show what would be deleted")
@click.pass_context
def orphans(ctx: click.Context, prune: bool, dry_run: bool) -> None:
    """
    Report Publisher and MonthYear rows no entry references.

    Safe to run repeatedly; pruning is all-or-nothing.
    """
    try:
        db = get_db(ctx)

        counts = db.count_orphans()
        total = sum(counts.values())

        click.echo("\n🔍 Orphaned rows:")
        for name, count in counts.items():
            click.echo(f"  {name}: {count}")

        if not prune:
            return

        if total == 0:
            click.echo("\n✅ Nothing to prune")
            return

        if dry_run:
            click.echo(f"\n🔍 DRY RUN: would delete {total} row(s)")
            return

        removed = db.prune_orphans()
        click.echo(f"\n✅ Deleted {sum(removed.values())} row(s)")

    except DatabaseError as e:
        handle_cli_error(
            ctx, e, "orphans", additional_context={"prune": prune, "dry_run": dry_run}
        )


@click.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Run every integrity check and print the counts."""
    try:
        db = get_db(ctx)
        results = db.check_integrity()

        problems = 0
        for group_name, checks in results.items():
            click.echo(f"\n📋 {group_name}")
            for name, count in checks.items():
                marker = "⚠️ " if count else "✅"
                click.echo(f"  {marker} {name}: {count}")
                if name.startswith("orphaned_"):
                    continue
                problems += count

        if problems:
            click.echo(f"\n⚠️  {problems} integrity problem(s) found")
        else:
            click.echo("\n✅ No integrity problems found")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "check")
