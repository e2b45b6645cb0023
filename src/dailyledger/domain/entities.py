"""Domain model entities for dailyledger.

These are pure data classes representing the daily ledger, independent of
the database schema. Every entity is frozen: edits go through the helpers in
``dailyledger.domain.snapshot`` and ``dailyledger.domain.itemized``, which
return new instances instead of mutating loaded state.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

ZERO = Decimal("0")


class FlowKind(Enum):
    """Direction of an itemized money movement."""

    INFLOW = "inflow"
    OUTFLOW = "outflow"

    @property
    def items_field(self) -> str:
        return f"{self.value}_items"

    @property
    def base_field(self) -> str:
        return f"{self.value}_base"

    @property
    def total_field(self) -> str:
        return f"{self.value}_total"


@dataclass(frozen=True)
class Transaction:
    """Itemized transaction inside an account's inflow or outflow list."""

    id: str
    description: str
    value: Decimal


@dataclass(frozen=True)
class AccountSnapshot:
    """One account's position for one day."""

    name: str
    opening_balance: Decimal = ZERO
    inflow_total: Decimal = ZERO
    outflow_total: Decimal = ZERO
    fees: Decimal = ZERO
    closing_balance: Decimal = ZERO
    note: Optional[str] = None
    inflow_items: tuple[Transaction, ...] = ()
    outflow_items: tuple[Transaction, ...] = ()
    inflow_base: Decimal = ZERO
    outflow_base: Decimal = ZERO
    sensitive_flags: frozenset[str] = field(default_factory=frozenset)

    def items(self, kind: FlowKind) -> tuple[Transaction, ...]:
        return getattr(self, kind.items_field)

    def base(self, kind: FlowKind) -> Decimal:
        return getattr(self, kind.base_field)

    def total(self, kind: FlowKind) -> Decimal:
        return getattr(self, kind.total_field)


@dataclass(frozen=True)
class Totals:
    """Pointwise sum of the balance fields of a list of accounts."""

    opening_balance: Decimal = ZERO
    inflow_total: Decimal = ZERO
    outflow_total: Decimal = ZERO
    fees: Decimal = ZERO
    closing_balance: Decimal = ZERO

    @classmethod
    def zero(cls) -> "Totals":
        return cls()

    def __add__(self, other: "Totals") -> "Totals":
        if not isinstance(other, Totals):
            return NotImplemented
        return Totals(
            opening_balance=self.opening_balance + other.opening_balance,
            inflow_total=self.inflow_total + other.inflow_total,
            outflow_total=self.outflow_total + other.outflow_total,
            fees=self.fees + other.fees,
            closing_balance=self.closing_balance + other.closing_balance,
        )


@dataclass(frozen=True)
class DailySnapshot:
    """All accounts for one calendar day.

    ``carried_from`` is set only on read-time projections built by the
    carry-forward resolver and names the day whose closing balances were used.
    """

    date: date
    accounts: tuple[AccountSnapshot, ...] = ()
    totals: Totals = field(default_factory=Totals)
    carried_from: Optional[date] = None

    @property
    def is_projection(self) -> bool:
        return self.carried_from is not None

    def find_account(self, name: str) -> Optional[int]:
        """Return the index of the account called ``name``, or None."""
        for index, account in enumerate(self.accounts):
            if account.name == name:
                return index
        return None


@dataclass(frozen=True)
class RangeView:
    """Consolidated view over one day or a date interval."""

    label: str
    start_date: date
    end_date: date
    accounts: tuple[AccountSnapshot, ...]
    totals: Totals
    read_only: bool = True


@dataclass(frozen=True)
class ConsistencyResult:
    """Outcome of comparing a stated closing balance with the formula."""

    is_consistent: bool
    diff: Decimal


@dataclass(frozen=True)
class BalancePoint:
    """Totals of one explicitly recorded day."""

    date: date
    totals: Totals


@dataclass(frozen=True)
class AuditEntry:
    """Audit log entry."""

    id: int
    timestamp: datetime
    action: str
    entity: str
    description: str
    user: str
