"""Range aggregation: many daily snapshots consolidated into one view."""

import logging
from datetime import date
from typing import Iterable, Optional

from dailyledger.domain.carry_forward import resolve_snapshot
from dailyledger.domain.entities import ZERO, AccountSnapshot, DailySnapshot, RangeView
from dailyledger.domain.errors import ValidationError
from dailyledger.domain.totals import rollup
from dailyledger.utils.date_parser import format_ledger_date

logger = logging.getLogger(__name__)


def format_range_label(start: date, end: date) -> str:
    return f"{format_ledger_date(start)} - {format_ledger_date(end)}"


def single_day_view(day: date, snapshots: Iterable[DailySnapshot]) -> RangeView:
    """Wrap the resolved snapshot of ``day`` as an editable view."""
    snapshot = resolve_snapshot(day, snapshots)
    return RangeView(
        label=format_ledger_date(day),
        start_date=day,
        end_date=day,
        accounts=snapshot.accounts,
        totals=snapshot.totals,
        read_only=False,
    )


def snapshots_in_range(
    start: date, end: date, snapshots: Iterable[DailySnapshot]
) -> list[DailySnapshot]:
    """Return the explicit snapshots dated within ``[start, end]``, oldest first."""
    selected = [snapshot for snapshot in snapshots if start <= snapshot.date <= end]
    return sorted(selected, key=lambda snapshot: snapshot.date)


def merge_accounts(days: list[DailySnapshot]) -> tuple[AccountSnapshot, ...]:
    """Merge the accounts of chronologically sorted days.

    Opening balances come from the first day of the range and closing
    balances from the last; an account missing on either day gets zero there.
    Flows and fees are summed over every day the account appears.
    """
    names: list[str] = []
    for day in days:
        for account in day.accounts:
            if account.name not in names:
                names.append(account.name)

    first = {account.name: account for account in days[0].accounts}
    last = {account.name: account for account in days[-1].accounts}

    merged = []
    for name in names:
        inflow = outflow = fees = ZERO
        flags: frozenset[str] = frozenset()
        for day in days:
            for account in day.accounts:
                if account.name == name:
                    inflow += account.inflow_total
                    outflow += account.outflow_total
                    fees += account.fees
                    flags |= account.sensitive_flags
        opening = first[name].opening_balance if name in first else ZERO
        closing = last[name].closing_balance if name in last else ZERO
        merged.append(
            AccountSnapshot(
                name=name,
                opening_balance=opening,
                inflow_total=inflow,
                outflow_total=outflow,
                fees=fees,
                closing_balance=closing,
                inflow_base=inflow,
                outflow_base=outflow,
                sensitive_flags=flags,
            )
        )
    return tuple(merged)


def aggregate_range(
    start: date,
    end: date,
    snapshots: Iterable[DailySnapshot],
    fallback_date: Optional[date] = None,
) -> RangeView:
    """Consolidate the snapshots between ``start`` and ``end`` (inclusive).

    Args:
        start: First day of the range
        end: Last day of the range
        snapshots: Every explicitly saved snapshot, in any order
        fallback_date: Day shown when the range holds no data (defaults to ``end``)

    Returns:
        A read-only RangeView, or an editable single-day view when
        ``start == end`` or the range is empty

    Raises:
        ValidationError: If ``start`` is after ``end``
    """
    snapshots = tuple(snapshots)
    if start == end:
        return single_day_view(start, snapshots)
    if start > end:
        raise ValidationError(
            f"Start date {format_ledger_date(start)} is after end date {format_ledger_date(end)}"
        )

    days = snapshots_in_range(start, end, snapshots)
    if not days:
        fallback = fallback_date or end
        logger.debug("No data between %s and %s; showing %s", start, end, fallback)
        return single_day_view(fallback, snapshots)

    accounts = merge_accounts(days)
    logger.debug(
        "Aggregated %d day(s) and %d account(s) between %s and %s",
        len(days),
        len(accounts),
        start,
        end,
    )
    return RangeView(
        label=format_range_label(start, end),
        start_date=start,
        end_date=end,
        accounts=accounts,
        totals=rollup(accounts),
        read_only=True,
    )
