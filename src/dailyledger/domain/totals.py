"""Day-level and range-level totals."""

from typing import Iterable

from dailyledger.domain.entities import AccountSnapshot, Totals


def account_totals(account: AccountSnapshot) -> Totals:
    """Project the balance fields of a single account."""
    return Totals(
        opening_balance=account.opening_balance,
        inflow_total=account.inflow_total,
        outflow_total=account.outflow_total,
        fees=account.fees,
        closing_balance=account.closing_balance,
    )


def rollup(accounts: Iterable[AccountSnapshot]) -> Totals:
    """Sum the balance fields of ``accounts``; an empty list yields zeros."""
    totals = Totals.zero()
    for account in accounts:
        totals = totals + account_totals(account)
    return totals
