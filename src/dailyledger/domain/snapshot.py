"""Account snapshot model: closing balance derivation and field edits.

The closing balance is recomputed as

    opening_balance + inflow_total - outflow_total - fees

after every edit except a direct edit of ``closing_balance`` itself, which is
how a user overrides the formula. No override flag is kept: the next edit of
any other field recomputes the balance again.
"""

from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Optional

from dailyledger.domain.entities import ZERO, AccountSnapshot, FlowKind, Transaction
from dailyledger.domain.errors import ValidationError, read_only_total, unknown_field

MONEY_FIELDS = frozenset(
    {
        "opening_balance",
        "inflow_total",
        "outflow_total",
        "fees",
        "closing_balance",
        "inflow_base",
        "outflow_base",
    }
)
ITEM_FIELDS = frozenset({kind.items_field for kind in FlowKind})
EDITABLE_FIELDS = MONEY_FIELDS | ITEM_FIELDS | {"name", "note"}
SENSITIVE_FIELDS = frozenset(
    {"opening_balance", "inflow_total", "outflow_total", "closing_balance"}
)
# Rendered in place of a sensitive value in private output
MASK = "******"
# Amounts are kept in cents, the precision storage holds
CENT = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """Coerce an int, float, str or Decimal amount into a Decimal rounded to cents.

    Half-cents round away from zero, so 10.005 becomes 10.01.
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid amount: {value!r}")
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"Invalid amount: {value!r}")
    if not amount.is_finite():
        raise ValidationError(f"Invalid amount: {value!r}")
    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError(f"Amount out of range: {value!r}")


def sum_items(items: Iterable[Transaction]) -> Decimal:
    return sum((item.value for item in items), ZERO)


def compute_closing_balance(account: AccountSnapshot) -> Decimal:
    """Return the formula closing balance for ``account``."""
    return (
        account.opening_balance
        + account.inflow_total
        - account.outflow_total
        - account.fees
    )


def new_account(
    name: str,
    opening_balance: Any = ZERO,
    inflow_total: Any = ZERO,
    outflow_total: Any = ZERO,
    fees: Any = ZERO,
    note: Optional[str] = None,
    closing_balance: Any = None,
) -> AccountSnapshot:
    """Build an account without itemized transactions.

    The flow totals double as bases. When ``closing_balance`` is omitted it is
    computed from the formula.
    """
    if not name or not name.strip():
        raise ValidationError("Account name is required")
    inflow = to_decimal(inflow_total)
    outflow = to_decimal(outflow_total)
    account = AccountSnapshot(
        name=name.strip(),
        opening_balance=to_decimal(opening_balance),
        inflow_total=inflow,
        outflow_total=outflow,
        fees=to_decimal(fees),
        note=note,
        inflow_base=inflow,
        outflow_base=outflow,
    )
    if closing_balance is None:
        return replace(account, closing_balance=compute_closing_balance(account))
    return replace(account, closing_balance=to_decimal(closing_balance))


def set_field(account: AccountSnapshot, field: str, value: Any) -> AccountSnapshot:
    """Return a copy of ``account`` with one field edited and derived fields updated.

    Args:
        account: Account to edit
        field: Name of the edited field
        value: New value

    Returns:
        New AccountSnapshot

    Raises:
        ValidationError: If the field is unknown, the value is invalid, or a
            flow total is edited while its itemized list is non-empty
    """
    if field not in EDITABLE_FIELDS:
        raise ValidationError(unknown_field(field))

    if field in MONEY_FIELDS:
        value = to_decimal(value)
    elif field in ITEM_FIELDS:
        value = tuple(value)
    elif field == "name":
        if not value or not str(value).strip():
            raise ValidationError("Account name is required")
        value = str(value).strip()

    changes: dict[str, Any] = {field: value}
    for kind in FlowKind:
        if field == kind.items_field:
            changes[kind.total_field] = account.base(kind) + sum_items(value)
        elif field == kind.base_field:
            changes[kind.total_field] = value + sum_items(account.items(kind))
        elif field == kind.total_field:
            if account.items(kind):
                raise ValidationError(read_only_total(field))
            changes[kind.base_field] = value

    updated = replace(account, **changes)
    if field != "closing_balance":
        updated = replace(updated, closing_balance=compute_closing_balance(updated))
    return updated


def apply_edits(
    account: AccountSnapshot, edits: Iterable[tuple[str, Any]]
) -> AccountSnapshot:
    """Apply ``(field, value)`` edits in order, as a user would in the edit dialog."""
    for field, value in edits:
        account = set_field(account, field, value)
    return account


def toggle_sensitive(account: AccountSnapshot, field: str) -> AccountSnapshot:
    """Flip the display-masking flag of ``field``; balances are not recomputed."""
    if field not in SENSITIVE_FIELDS:
        raise ValidationError(
            f"Field '{field}' cannot be hidden. Hideable fields: {', '.join(sorted(SENSITIVE_FIELDS))}"
        )
    return replace(account, sensitive_flags=account.sensitive_flags ^ {field})
