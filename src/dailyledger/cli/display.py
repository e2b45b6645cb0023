"""Table rendering for day and range views."""

from decimal import Decimal
from typing import Sequence

import click

from dailyledger.domain.consistency import check_consistency
from dailyledger.domain.entities import AccountSnapshot, Totals
from dailyledger.domain.snapshot import MASK

COLUMNS = (
    ("Opening", "opening_balance"),
    ("Inflow", "inflow_total"),
    ("Outflow", "outflow_total"),
    ("Fees", "fees"),
    ("Closing", "closing_balance"),
)


def format_currency(value: Decimal, hidden: bool = False) -> str:
    """Format an amount the way the ledger's users read it: R$ 1.234,56."""
    if hidden:
        return MASK
    text = f"{abs(value):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    sign = "-" if value < 0 else ""
    return f"{sign}R$ {text}"


def _row(name: str, values: Sequence[str], status: str) -> str:
    cells = "".join(f"{value:>18}" for value in values)
    return f"{name:<22}{cells}  {status}"


def echo_accounts(
    accounts: Sequence[AccountSnapshot],
    totals: Totals,
    private: bool = False,
    show_status: bool = True,
) -> None:
    """Print one row per account with a consistency status, then the totals row.

    With ``private`` set, fields an account marked as sensitive are masked.
    """
    click.echo(_row("Account", [title for title, _ in COLUMNS], "Status" if show_status else ""))
    click.echo("-" * (22 + 18 * len(COLUMNS) + 10))
    for account in accounts:
        values = [
            format_currency(
                getattr(account, field), hidden=private and field in account.sensitive_flags
            )
            for _, field in COLUMNS
        ]
        status = ""
        if show_status:
            result = check_consistency(account)
            status = "OK" if result.is_consistent else f"MISMATCH {format_currency(result.diff)}"
        click.echo(_row(account.name, values, status))
        if account.note:
            click.echo(f"  note: {account.note}")
    click.echo("-" * (22 + 18 * len(COLUMNS) + 10))
    click.echo(_row("Total", [format_currency(getattr(totals, field)) for _, field in COLUMNS], ""))
