"""Mapper functions between domain entities, SQLAlchemy models and plain records.

A "record" is the dict form of an account using the persisted field names
(saldo_anterior, entradas, ...). It is what the JSON import reads and what
the ORM columns are named after.
"""

import json
from datetime import datetime, UTC
from decimal import Decimal
from typing import Any, Iterable, Optional

from dailyledger.domain import entities as domain
from dailyledger.domain.itemized import infer_base
from dailyledger.domain.snapshot import SENSITIVE_FIELDS, to_decimal
from dailyledger.domain.totals import rollup
from dailyledger.database.models import (
    AccountEntry as ORMAccountEntry,
    AuditLog as ORMAuditLog,
    DailyEntry as ORMDailyEntry,
)
from dailyledger.utils.date_parser import parse_ledger_date

# Domain field name -> persisted field name
PERSISTED_NAMES = {
    "opening_balance": "saldo_anterior",
    "inflow_total": "entradas",
    "outflow_total": "saidas",
    "fees": "taxas",
    "closing_balance": "saldo_atual",
}
DOMAIN_NAMES = {persisted: field for field, persisted in PERSISTED_NAMES.items()}


def transactions_to_data(items: Iterable[domain.Transaction]) -> list[dict[str, Any]]:
    return [
        {"id": item.id, "description": item.description, "value": float(item.value)}
        for item in items
    ]


def transactions_to_json(items: Iterable[domain.Transaction]) -> str:
    """Serialize itemized transactions as a JSON array of {id, description, value}."""
    return json.dumps(transactions_to_data(items), ensure_ascii=False)


def transactions_from_data(data: Optional[Iterable[dict[str, Any]]]) -> tuple[domain.Transaction, ...]:
    """Build transactions from decoded JSON objects."""
    if not data:
        return ()
    return tuple(
        domain.Transaction(
            id=str(item["id"]),
            description=item.get("description", ""),
            value=to_decimal(item.get("value", 0)),
        )
        for item in data
    )


def transactions_from_json(text: Optional[str]) -> tuple[domain.Transaction, ...]:
    """Parse a stored JSON array of transactions; NULL or empty text means no items."""
    if not text:
        return ()
    return transactions_from_data(json.loads(text, parse_float=Decimal))


def flags_to_json(flags: Iterable[str]) -> Optional[str]:
    persisted = sorted(PERSISTED_NAMES[flag] for flag in flags)
    return json.dumps(persisted) if persisted else None


def flags_from_data(data: Any) -> frozenset[str]:
    """Read sensitive flags from a list of names or a {name: bool} mapping."""
    if not data:
        return frozenset()
    if isinstance(data, dict):
        data = [name for name, hidden in data.items() if hidden]
    names = (DOMAIN_NAMES.get(name, name) for name in data)
    return frozenset(name for name in names if name in SENSITIVE_FIELDS)


def _build_account(
    name: str,
    opening: Any,
    inflow: Any,
    outflow: Any,
    fees: Any,
    closing: Any,
    note: Optional[str],
    inflow_items: tuple[domain.Transaction, ...],
    outflow_items: tuple[domain.Transaction, ...],
    inflow_base: Any,
    outflow_base: Any,
    flags: frozenset[str],
) -> domain.AccountSnapshot:
    inflow_total = to_decimal(inflow or 0)
    outflow_total = to_decimal(outflow or 0)
    return domain.AccountSnapshot(
        name=name,
        opening_balance=to_decimal(opening or 0),
        inflow_total=inflow_total,
        outflow_total=outflow_total,
        fees=to_decimal(fees or 0),
        closing_balance=to_decimal(closing or 0),
        note=note or None,
        inflow_items=inflow_items,
        outflow_items=outflow_items,
        inflow_base=infer_base(
            inflow_total, inflow_items, None if inflow_base is None else to_decimal(inflow_base)
        ),
        outflow_base=infer_base(
            outflow_total, outflow_items, None if outflow_base is None else to_decimal(outflow_base)
        ),
        sensitive_flags=flags,
    )


def account_entry_to_domain(orm_account: ORMAccountEntry) -> domain.AccountSnapshot:
    """Convert SQLAlchemy AccountEntry model to domain AccountSnapshot entity."""
    return _build_account(
        name=orm_account.name,
        opening=orm_account.saldo_anterior,
        inflow=orm_account.entradas,
        outflow=orm_account.saidas,
        fees=orm_account.taxas,
        closing=orm_account.saldo_atual,
        note=orm_account.nota,
        inflow_items=transactions_from_json(orm_account.entradas_detalhadas),
        outflow_items=transactions_from_json(orm_account.saidas_detalhadas),
        inflow_base=orm_account.entradas_base,
        outflow_base=orm_account.saidas_base,
        flags=flags_from_data(
            json.loads(orm_account.campos_sensiveis) if orm_account.campos_sensiveis else None
        ),
    )


def account_to_entry(account: domain.AccountSnapshot, position: int) -> ORMAccountEntry:
    """Convert domain AccountSnapshot entity to a new SQLAlchemy AccountEntry."""
    return ORMAccountEntry(
        position=position,
        name=account.name,
        saldo_anterior=account.opening_balance,
        entradas=account.inflow_total,
        saidas=account.outflow_total,
        taxas=account.fees,
        saldo_atual=account.closing_balance,
        nota=account.note or "",
        entradas_detalhadas=transactions_to_json(account.inflow_items),
        saidas_detalhadas=transactions_to_json(account.outflow_items),
        entradas_base=account.inflow_base,
        saidas_base=account.outflow_base,
        campos_sensiveis=flags_to_json(account.sensitive_flags),
    )


def daily_entry_to_domain(orm_entry: ORMDailyEntry) -> domain.DailySnapshot:
    """Convert SQLAlchemy DailyEntry model to domain DailySnapshot entity."""
    accounts = tuple(account_entry_to_domain(acc) for acc in orm_entry.accounts)
    return domain.DailySnapshot(
        date=parse_ledger_date(orm_entry.date),
        accounts=accounts,
        totals=rollup(accounts),
    )


def audit_log_to_domain(orm_log: ORMAuditLog) -> domain.AuditEntry:
    """Convert SQLAlchemy AuditLog model to domain AuditEntry entity."""
    return domain.AuditEntry(
        id=orm_log.id,
        timestamp=datetime.fromtimestamp(orm_log.timestamp / 1000, UTC),
        action=orm_log.action,
        entity=orm_log.entity,
        description=orm_log.description,
        user=orm_log.user,
    )


def account_to_record(account: domain.AccountSnapshot) -> dict[str, Any]:
    """Convert a domain account to a JSON-ready record with persisted names."""
    return {
        "name": account.name,
        "saldo_anterior": float(account.opening_balance),
        "entradas": float(account.inflow_total),
        "saidas": float(account.outflow_total),
        "taxas": float(account.fees),
        "saldo_atual": float(account.closing_balance),
        "nota": account.note or "",
        "entradas_detalhadas": transactions_to_data(account.inflow_items),
        "saidas_detalhadas": transactions_to_data(account.outflow_items),
        "entradas_base": float(account.inflow_base),
        "saidas_base": float(account.outflow_base),
        "campos_sensiveis": sorted(PERSISTED_NAMES[flag] for flag in account.sensitive_flags),
    }


def account_from_record(record: dict[str, Any]) -> domain.AccountSnapshot:
    """Convert a record with persisted names to a domain account.

    Missing optional keys default to zero/empty; bases are inferred for
    records written before itemization existed.

    Raises:
        ValueError: If the record has no name or holds an invalid amount
    """
    name = record.get("name")
    if not name:
        raise ValueError("Account record is missing 'name'")
    return _build_account(
        name=name,
        opening=record.get("saldo_anterior"),
        inflow=record.get("entradas"),
        outflow=record.get("saidas"),
        fees=record.get("taxas"),
        closing=record.get("saldo_atual"),
        note=record.get("nota"),
        inflow_items=transactions_from_data(record.get("entradas_detalhadas")),
        outflow_items=transactions_from_data(record.get("saidas_detalhadas")),
        inflow_base=record.get("entradas_base"),
        outflow_base=record.get("saidas_base"),
        flags=flags_from_data(record.get("campos_sensiveis") or record.get("sensitive_fields")),
    )
