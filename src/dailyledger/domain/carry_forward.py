"""Carry-forward of closing balances into days without explicit data."""

import logging
from dataclasses import replace
from datetime import date
from typing import Iterable, Optional

from dailyledger.domain.entities import ZERO, AccountSnapshot, DailySnapshot
from dailyledger.domain.totals import rollup

logger = logging.getLogger(__name__)


def find_snapshot(day: date, snapshots: Iterable[DailySnapshot]) -> Optional[DailySnapshot]:
    """Return the explicit snapshot recorded for ``day``, if any."""
    for snapshot in snapshots:
        if snapshot.date == day:
            return snapshot
    return None


def find_previous_snapshot(
    day: date, snapshots: Iterable[DailySnapshot]
) -> Optional[DailySnapshot]:
    """Return the latest snapshot dated strictly before ``day``."""
    previous = [snapshot for snapshot in snapshots if snapshot.date < day]
    if not previous:
        return None
    return max(previous, key=lambda snapshot: snapshot.date)


def carry_account(account: AccountSnapshot) -> AccountSnapshot:
    """Project an account's closing balance as the next day's opening balance."""
    return replace(
        account,
        opening_balance=account.closing_balance,
        inflow_total=ZERO,
        outflow_total=ZERO,
        fees=ZERO,
        note=None,
        inflow_items=(),
        outflow_items=(),
        inflow_base=ZERO,
        outflow_base=ZERO,
    )


def empty_snapshot(day: date) -> DailySnapshot:
    return DailySnapshot(date=day, accounts=(), totals=rollup(()))


def resolve_snapshot(day: date, snapshots: Iterable[DailySnapshot]) -> DailySnapshot:
    """Return the snapshot for ``day``, projecting the closest prior day when missing.

    The projection is rebuilt on every call and never stored, so edits to the
    prior day show up here until ``day`` gets its own saved entry.

    Args:
        day: Day to resolve
        snapshots: Every explicitly saved snapshot, in any order

    Returns:
        The explicit snapshot, a carry-forward projection, or an empty snapshot
        when nothing was recorded before ``day``
    """
    snapshots = tuple(snapshots)
    explicit = find_snapshot(day, snapshots)
    if explicit is not None:
        return explicit

    previous = find_previous_snapshot(day, snapshots)
    if previous is None:
        logger.debug("No data on or before %s; returning empty snapshot", day)
        return empty_snapshot(day)

    logger.debug("Carrying balances from %s forward to %s", previous.date, day)
    accounts = tuple(carry_account(account) for account in previous.accounts)
    return DailySnapshot(
        date=day,
        accounts=accounts,
        totals=rollup(accounts),
        carried_from=previous.date,
    )
