"""Consistency check between stated and computed closing balances."""

from decimal import Decimal

from dailyledger.domain.entities import AccountSnapshot, ConsistencyResult
from dailyledger.domain.snapshot import compute_closing_balance

# Two cents absorbs rounding noise from repeated additions.
CONSISTENCY_TOLERANCE = Decimal("0.02")


def check_consistency(account: AccountSnapshot) -> ConsistencyResult:
    """Compare ``account.closing_balance`` with opening + inflow - outflow - fees.

    The result is advisory: nothing is corrected and nothing is raised.

    Args:
        account: Account to check

    Returns:
        ConsistencyResult with the absolute difference and whether it is
        strictly below the tolerance
    """
    expected = compute_closing_balance(account)
    diff = abs(expected - account.closing_balance)
    return ConsistencyResult(is_consistent=diff < CONSISTENCY_TOLERANCE, diff=diff)
