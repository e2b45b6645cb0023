"""CSV export of saved days, one row per account per day."""

import csv
import logging
from typing import Iterable, TextIO

from dailyledger.domain.entities import AccountSnapshot, DailySnapshot
from dailyledger.domain.snapshot import MASK
from dailyledger.utils.date_parser import format_ledger_date

logger = logging.getLogger(__name__)

EXPORT_FIELDS = ("opening_balance", "inflow_total", "outflow_total", "fees", "closing_balance")

# Header names matching the persisted columns, for spreadsheets built on them
PERSISTED_HEADERS = {
    "date": "data",
    "name": "name",
    "opening_balance": "saldo_anterior",
    "inflow_total": "entradas",
    "outflow_total": "saidas",
    "fees": "taxas",
    "closing_balance": "saldo_atual",
    "note": "nota",
}


def export_headers(persisted_names: bool = False) -> list[str]:
    columns = ["date", "name", *EXPORT_FIELDS, "note"]
    if persisted_names:
        return [PERSISTED_HEADERS[column] for column in columns]
    return columns


def account_row(day: DailySnapshot, account: AccountSnapshot, private: bool = False) -> list[str]:
    """Render one account as CSV cells; amounts use two decimals and a dot."""
    values = []
    for field in EXPORT_FIELDS:
        if private and field in account.sensitive_flags:
            values.append(MASK)
        else:
            values.append(f"{getattr(account, field):.2f}")
    return [format_ledger_date(day.date), account.name, *values, account.note or ""]


def write_csv(
    snapshots: Iterable[DailySnapshot],
    stream: TextIO,
    private: bool = False,
    persisted_names: bool = False,
) -> int:
    """Write ``snapshots`` to ``stream`` as CSV.

    Args:
        snapshots: Days to export, written in the given order
        stream: Text stream opened with ``newline=""``
        private: Mask values marked as sensitive
        persisted_names: Use the persisted column names as headers

    Returns:
        Number of account rows written
    """
    writer = csv.writer(stream)
    writer.writerow(export_headers(persisted_names))
    count = 0
    for day in snapshots:
        for account in day.accounts:
            writer.writerow(account_row(day, account, private=private))
            count += 1
    logger.debug("Exported %d account row(s)", count)
    return count
