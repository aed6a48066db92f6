#!/usr/bin/env python3
"""
integrity_check_configs.py
---------------------------

Declarative integrity checks for the catalog.

Each check counts offending rows; orphan checks can also delete them.
Checks are grouped so callers can run one group (e.g. the orphan report)
or all of them.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional

from sqlalchemy import delete, func, select, union
from sqlalchemy.orm import Session

from ..models import Article, Book, MasterEntry, MonthYear, Publisher


@dataclass
class IntegrityCheck:
    """
    Configuration for a single integrity check.

    Attributes:
        check_name: Result key (e.g., "orphaned_publishers")
        query_builder: Function that takes a session and returns a count
        description: Human-readable description of what this checks
        pruner: Optional function deleting the offending rows and
            returning how many were removed
    """
    check_name: str
    query_builder: Callable[[Session], int]
    description: str
    pruner: Optional[Callable[[Session], int]] = None


@dataclass
class IntegrityCheckGroup:
    """
    Group of related integrity checks.

    Attributes:
        group_name: Name of the check group (e.g., "orphan_integrity")
        checks: List of IntegrityCheck instances
    """
    group_name: str
    checks: List[IntegrityCheck]


# ========================================
# Orphan Checks
# ========================================

def _referenced_publishers():
    return union(
        select(Book.publisher_id).where(Book.publisher_id.isnot(None)),
        select(Article.publisher_id).where(Article.publisher_id.isnot(None)),
    )


def _referenced_month_years():
    return union(
        select(Book.month_year_id).where(Book.month_year_id.isnot(None)),
        select(Article.month_year_id).where(Article.month_year_id.isnot(None)),
    )


def _count_orphaned_publishers(session: Session) -> int:
    """Count publishers no book or article references."""
    stmt = (
        select(func.count())
        .select_from(Publisher)
        .where(Publisher.publisher_id.not_in(_referenced_publishers()))
    )
    return int(session.execute(stmt).scalar_one())


def _prune_orphaned_publishers(session: Session) -> int:
    stmt = delete(Publisher).where(
        Publisher.publisher_id.not_in(_referenced_publishers())
    )
    return int(session.execute(stmt).rowcount or 0)


def _count_orphaned_month_years(session: Session) -> int:
    """Count month/year rows no book or article references."""
    stmt = (
        select(func.count())
        .select_from(MonthYear)
        .where(MonthYear.month_year_id.not_in(_referenced_month_years()))
    )
    return int(session.execute(stmt).scalar_one())


def _prune_orphaned_month_years(session: Session) -> int:
    stmt = delete(MonthYear).where(
        MonthYear.month_year_id.not_in(_referenced_month_years())
    )
    return int(session.execute(stmt).rowcount or 0)


ORPHAN_INTEGRITY_CHECKS = IntegrityCheckGroup(
    group_name="orphan_integrity",
    checks=[
        IntegrityCheck(
            "orphaned_publishers",
            _count_orphaned_publishers,
            "Publishers left behind by updates and deletes",
            _prune_orphaned_publishers,
        ),
        IntegrityCheck(
            "orphaned_month_years",
            _count_orphaned_month_years,
            "Month/year rows left behind by updates and deletes",
            _prune_orphaned_month_years,
        ),
    ]
)


# ========================================
# Entry Integrity Checks
# ========================================

def _count_masters_without_row(session: Session) -> int:
    """Count master entries with no book or article row."""
    with_rows = union(select(Book.cite_key), select(Article.cite_key))
    stmt = (
        select(func.count())
        .select_from(MasterEntry)
        .where(MasterEntry.cite_key.not_in(with_rows))
    )
    return int(session.execute(stmt).scalar_one())


def _count_rows_without_master(session: Session) -> int:
    """Count book and article rows whose cite_key has no master entry."""
    masters = select(MasterEntry.cite_key)
    total = 0
    for model in (Book, Article):
        stmt = (
            select(func.count())
            .select_from(model)
            .where(model.cite_key.not_in(masters))
        )
        total += int(session.execute(stmt).scalar_one())
    return total


ENTRY_INTEGRITY_CHECKS = IntegrityCheckGroup(
    group_name="entry_integrity",
    checks=[
        IntegrityCheck(
            "master_entries_without_row",
            _count_masters_without_row,
            "Master entries whose book or article row is missing"
        ),
        IntegrityCheck(
            "entries_without_master",
            _count_rows_without_master,
            "Books or articles whose master entry is missing"
        ),
    ]
)


# ========================================
# All Integrity Check Groups
# ========================================

ALL_INTEGRITY_CHECK_GROUPS = [
    ORPHAN_INTEGRITY_CHECKS,
    ENTRY_INTEGRITY_CHECKS,
]
