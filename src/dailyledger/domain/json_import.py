"""Import of days kept in the legacy local JSON format.

The file is a list of ``{"date": "dd/mm/yyyy", "accounts": [record, ...]}``
objects, where each record uses the persisted field names (see
``dailyledger.database.mappers``).
"""

import json
import logging
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

from dailyledger.database.mappers import account_from_record
from dailyledger.domain.entities import AccountSnapshot
from dailyledger.domain.errors import ValidationError
from dailyledger.domain.ledger import LedgerService
from dailyledger.utils.date_parser import parse_ledger_date

logger = logging.getLogger(__name__)


def parse_legacy_days(data: Any) -> list[tuple[date, list[AccountSnapshot]]]:
    """Convert decoded legacy JSON into ``(day, accounts)`` pairs.

    Raises:
        ValidationError: If the structure, a date or a record is invalid
    """
    if not isinstance(data, list):
        raise ValidationError("Expected a JSON list of days")

    days = []
    for position, entry in enumerate(data, start=1):
        if not isinstance(entry, dict) or "date" not in entry:
            raise ValidationError(f"Day #{position} has no 'date'")
        try:
            day = parse_ledger_date(str(entry["date"]))
        except ValueError as e:
            raise ValidationError(f"Day #{position}: {e}")

        records = entry.get("accounts")
        if records is None:
            records = []
        if not isinstance(records, list):
            raise ValidationError(f"Day {entry['date']}: 'accounts' must be a list")
        try:
            accounts = [account_from_record(record) for record in records]
        except (ValueError, TypeError, AttributeError) as e:
            raise ValidationError(f"Day {entry['date']}: {e}")
        days.append((day, accounts))
    return days


class JSONImportService:
    """Service for importing days from a legacy JSON file."""

    def __init__(self, ledger: LedgerService):
        """Initialize JSON import service.

        Args:
            ledger: Ledger service the days are saved through
        """
        self.ledger = ledger

    def import_file(self, json_file_path: str) -> int:
        """Import every day in a JSON file, replacing existing data for those days.

        All days are validated before any is saved.

        Returns:
            Number of days imported

        Raises:
            ValidationError: If the file is not valid JSON or a day is invalid
            FileNotFoundError: If the file doesn't exist
        """
        text = Path(json_file_path).read_text(encoding="utf-8")
        try:
            data = json.loads(text, parse_float=Decimal)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in {json_file_path}: {e}")

        days = parse_legacy_days(data)
        count = self.ledger.import_days(days)
        logger.info("Imported %d day(s) from %s", count, json_file_path)
        return count
