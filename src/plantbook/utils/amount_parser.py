"""Amount and quantity parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

CURRENCY_PATTERN = re.compile(r"(?i)(rs\.?|pkr|inr|[$€£₹])")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "1234.50"
    - "Rs 1,234.50" / "PKR 1234"
    - "(1,234.50)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = CURRENCY_PATTERN.sub("", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount


def parse_quantity(quantity_str: str) -> Decimal:
    """Parse a CFT quantity such as "58,186" or "58186 cft"."""
    cleaned = re.sub(r"(?i)\s*cft$", "", (quantity_str or "").strip())
    return parse_amount(cleaned)


def parse_percent(percent_str: str) -> Decimal:
    """Parse a percentage such as "33.33" or "15%".

    Raises:
        ValueError: If the value is not a number between 0 and 100
    """
    cleaned = (percent_str or "").strip().rstrip("%").strip()
    percent = parse_amount(cleaned)
    if percent < 0 or percent > 100:
        raise ValueError(f"Percentage must be between 0 and 100, got {percent}")
    return percent


def format_percent(percent: Decimal) -> str:
    """Format a percentage without trailing zeros, e.g. 70.0000 as "70"."""
    text = f"{percent:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
