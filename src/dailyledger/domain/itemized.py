"""Itemized transaction lists and their parent flow totals.

A flow total is always ``base + sum(items)``. The base is the lump sum that
was recorded before itemization started and is never changed by adding or
removing items.
"""

import logging
import uuid
from decimal import Decimal
from typing import Any, Iterable, Optional

from dailyledger.domain.entities import ZERO, AccountSnapshot, FlowKind, Transaction
from dailyledger.domain.errors import ValidationError
from dailyledger.domain.snapshot import set_field, to_decimal

logger = logging.getLogger(__name__)


def new_transaction_id() -> str:
    return uuid.uuid4().hex


def add_transaction(
    account: AccountSnapshot, kind: FlowKind, description: str, value: Any
) -> tuple[AccountSnapshot, Transaction]:
    """Append an itemized transaction and recompute totals.

    Args:
        account: Account receiving the transaction
        kind: Inflow or outflow list
        description: Free-text description
        value: Signed amount

    Returns:
        Tuple of (updated account, created transaction)

    Raises:
        ValidationError: If description is empty or value is not an amount
    """
    if not description or not description.strip():
        raise ValidationError("Transaction description is required")
    transaction = Transaction(
        id=new_transaction_id(),
        description=description.strip(),
        value=to_decimal(value),
    )
    items = account.items(kind) + (transaction,)
    return set_field(account, kind.items_field, items), transaction


def remove_transaction(
    account: AccountSnapshot, kind: FlowKind, transaction_id: str
) -> AccountSnapshot:
    """Remove an itemized transaction by id and recompute totals.

    An unknown id leaves the list untouched.
    """
    items = account.items(kind)
    remaining = tuple(item for item in items if item.id != transaction_id)
    if len(remaining) == len(items):
        logger.debug(
            "No %s transaction %s on account %s", kind.value, transaction_id, account.name
        )
        return account
    return set_field(account, kind.items_field, remaining)


def infer_base(
    total: Decimal, items: Iterable[Transaction], stored_base: Optional[Decimal]
) -> Decimal:
    """Infer the manually entered base of a flow total when loading a record.

    Records written before itemization existed have no stored base; for an
    account without items the whole total is the base.
    """
    if not tuple(items):
        return total
    return stored_base if stored_base is not None else ZERO
