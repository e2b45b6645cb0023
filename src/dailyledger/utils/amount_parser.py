"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

# "1.234", "12,345,678": one separator kind, used only between groups of three
THOUSANDS_ONLY = re.compile(r"^-?[1-9]\d{0,2}(?:(?:\.\d{3})+|(?:,\d{3})+)$")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Accepts both decimal separators used by the ledger's users:
    - "1234.56", "1,234.56"
    - "1234,56", "1.234,56", "R$ 1.234,56"
    - "-10", "(10,50)" (negative in parentheses)

    When both "." and "," appear, the last one is the decimal separator. A
    single kind of separator that splits the digits into groups of three
    after a non-zero lead ("1.234", "1,234", "1.234.567") groups thousands;
    otherwise it is the decimal separator ("1,5", "0.125").

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = amount_str.strip()

    is_negative = False
    if cleaned.startswith("(") and cleaned.endswith(")"):
        is_negative = True
        cleaned = cleaned[1:-1]

    cleaned = re.sub(r"R\$|[$€£]|\s", "", cleaned)

    if "," in cleaned and "." in cleaned:
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")
    elif THOUSANDS_ONLY.match(cleaned):
        cleaned = re.sub(r"[.,]", "", cleaned)
    elif "," in cleaned:
        cleaned = cleaned.replace(",", ".")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount
