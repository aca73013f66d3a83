"""Numeric input checks shared by the domain services."""

from decimal import Decimal, InvalidOperation

from plantbook.domain.errors import ValidationError

HUNDRED = Decimal("100")


def require_decimal(field: str, value) -> Decimal:
    """Convert a value to a finite Decimal or raise ValidationError."""
    if value is None:
        raise ValidationError(field, "is required")
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(field, f"'{value}' is not a number")
    if not number.is_finite():
        raise ValidationError(field, f"'{value}' is not a finite number")
    return number


def require_non_negative(field: str, value) -> Decimal:
    number = require_decimal(field, value)
    if number < 0:
        raise ValidationError(field, "must not be negative")
    return number


def require_percent(field: str, value) -> Decimal:
    number = require_decimal(field, value)
    if number < 0 or number > HUNDRED:
        raise ValidationError(field, "must be between 0 and 100")
    return number
