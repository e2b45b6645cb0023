"""Tests for range aggregation."""

import pytest
from datetime import date
from decimal import Decimal

from conftest import make_account, make_day
from dailyledger.domain.aggregation import aggregate_range, format_range_label
from dailyledger.domain.errors import ValidationError
from dailyledger.domain.snapshot import toggle_sensitive


@pytest.fixture
def two_days():
    """Two saved days with a gap in between."""
    d1 = make_day(
        date(2026, 1, 1),
        make_account("Caixa", "100", "10", "5", "1"),
        make_account("Banco", "500", "0", "100"),
    )
    d3 = make_day(
        date(2026, 1, 3),
        make_account("Caixa", "104", "20", "0", "2", note="fim"),
        make_account("Cofre", "0", "30"),
    )
    return [d3, d1]


def test_range_merges_accounts(two_days):
    """Test the opening/closing/flow rules of a consolidated range."""
    view = aggregate_range(date(2026, 1, 1), date(2026, 1, 3), two_days)

    assert view.read_only
    assert view.label == "01/01/2026 - 03/01/2026"
    assert [account.name for account in view.accounts] == ["Caixa", "Banco", "Cofre"]

    caixa, banco, cofre = view.accounts
    assert caixa.opening_balance == Decimal("100")
    assert caixa.closing_balance == Decimal("122")
    assert caixa.inflow_total == Decimal("30")
    assert caixa.outflow_total == Decimal("5")
    assert caixa.fees == Decimal("3")
    assert caixa.note is None

    # absent on the last day: closes at zero
    assert banco.opening_balance == Decimal("500")
    assert banco.closing_balance == Decimal("0")
    assert banco.outflow_total == Decimal("100")

    # absent on the first day: opens at zero
    assert cofre.opening_balance == Decimal("0")
    assert cofre.closing_balance == Decimal("30")


def test_range_totals(two_days):
    """Test that range totals roll up the merged accounts."""
    view = aggregate_range(date(2026, 1, 1), date(2026, 1, 3), two_days)
    assert view.totals.opening_balance == Decimal("600")
    assert view.totals.inflow_total == Decimal("60")
    assert view.totals.closing_balance == Decimal("152")


def test_range_uses_only_days_inside(two_days):
    """Test that days outside the range are ignored."""
    view = aggregate_range(date(2026, 1, 2), date(2026, 1, 5), two_days)
    assert [account.name for account in view.accounts] == ["Caixa", "Cofre"]
    assert view.accounts[0].opening_balance == Decimal("104")


def test_same_start_and_end_is_single_day(two_days):
    """Test that a one-day range is the editable day view."""
    view = aggregate_range(date(2026, 1, 3), date(2026, 1, 3), two_days)
    assert not view.read_only
    assert view.label == "03/01/2026"
    assert view.accounts == two_days[0].accounts
    assert view.accounts[0].note == "fim"


def test_single_day_view_carries_forward(two_days):
    """Test that a one-day range on a missing day is the carried projection."""
    view = aggregate_range(date(2026, 1, 2), date(2026, 1, 2), two_days)
    assert not view.read_only
    assert view.accounts[0].opening_balance == Decimal("104")


def test_empty_range_falls_back_to_end(two_days):
    """Test that a range with no saved days shows the end day."""
    view = aggregate_range(date(2026, 1, 10), date(2026, 1, 12), two_days)
    assert not view.read_only
    assert view.start_date == view.end_date == date(2026, 1, 12)
    assert view.accounts[0].opening_balance == Decimal("122")


def test_empty_range_with_explicit_fallback(two_days):
    """Test choosing the fallback day."""
    view = aggregate_range(
        date(2026, 1, 10), date(2026, 1, 12), two_days, fallback_date=date(2026, 1, 1)
    )
    assert view.label == "01/01/2026"


def test_start_after_end_is_rejected(two_days):
    """Test that reversed ranges raise."""
    with pytest.raises(ValidationError, match="after"):
        aggregate_range(date(2026, 1, 3), date(2026, 1, 1), two_days)


def test_sensitive_flags_are_unioned():
    """Test that a field hidden on any day stays hidden in the range."""
    d1 = make_day(date(2026, 1, 1), toggle_sensitive(make_account("Caixa", "1"), "opening_balance"))
    d2 = make_day(date(2026, 1, 2), toggle_sensitive(make_account("Caixa", "1"), "inflow_total"))
    view = aggregate_range(date(2026, 1, 1), date(2026, 1, 2), [d1, d2])
    assert view.accounts[0].sensitive_flags == {"opening_balance", "inflow_total"}


def test_aggregation_does_not_mutate_input(two_days):
    """Test that the inputs are untouched."""
    before = list(two_days)
    aggregate_range(date(2026, 1, 1), date(2026, 1, 3), two_days)
    assert two_days == before


def test_format_range_label():
    """Test the range label format."""
    assert format_range_label(date(2026, 1, 31), date(2026, 2, 1)) == "31/01/2026 - 01/02/2026"
