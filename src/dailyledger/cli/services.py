"""CLI helpers for building domain services from the click context."""

import click

from dailyledger.domain.audit import AuditService
from dailyledger.domain.entities import FlowKind
from dailyledger.domain.ledger import DEFAULT_USER, LedgerService

FLOW_CHOICE = click.Choice([kind.value for kind in FlowKind], case_sensitive=False)


def get_ledger_service(ctx: click.Context) -> LedgerService:
    """Ledger service bound to the context's database, audited as the context's user."""
    db = ctx.obj["db"]
    return LedgerService(db, audit=AuditService(db), user=ctx.obj.get("user", DEFAULT_USER))
