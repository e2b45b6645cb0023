"""Utility functions for dailyledger."""

from dailyledger.utils.date_parser import parse_date, parse_ledger_date, format_ledger_date
from dailyledger.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_ledger_date", "format_ledger_date", "parse_amount"]
