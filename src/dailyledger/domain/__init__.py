"""Domain layer for dailyledger application.

Only the pure reconciliation core is re-exported here. The services in
``dailyledger.domain.ledger`` and ``dailyledger.domain.audit`` depend on the
database layer and are imported from their modules directly.
"""

from dailyledger.domain.entities import (
    AccountSnapshot,
    DailySnapshot,
    FlowKind,
    RangeView,
    Totals,
    Transaction,
)
from dailyledger.domain.aggregation import aggregate_range
from dailyledger.domain.carry_forward import resolve_snapshot
from dailyledger.domain.consistency import check_consistency
from dailyledger.domain.itemized import add_transaction, remove_transaction
from dailyledger.domain.snapshot import apply_edits, set_field
from dailyledger.domain.totals import rollup

__all__ = [
    "AccountSnapshot",
    "DailySnapshot",
    "FlowKind",
    "RangeView",
    "Totals",
    "Transaction",
    "aggregate_range",
    "resolve_snapshot",
    "check_consistency",
    "add_transaction",
    "remove_transaction",
    "apply_edits",
    "set_field",
    "rollup",
]
