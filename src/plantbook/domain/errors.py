"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic.

    Carries the offending field name and the reason so callers can build
    their own messages.
    """

    def __init__(self, field: str, reason: str, message: Optional[str] = None):
        self.field = field
        self.reason = reason
        super().__init__(message or f"Invalid {field}: {reason}")


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def record_not_found(record_id: int) -> str:
    """Return message for missing transaction record."""
    return f"Record {record_id} not found"


def equipment_not_found(equipment_ref) -> str:
    """Return message for missing equipment by ID, code or name."""
    return f"Equipment '{equipment_ref}' not found"


def production_entry_not_found(entry_id: int) -> str:
    """Return message for missing daily production entry."""
    return f"Production entry {entry_id} not found"


def duplicate_production_date(production_date) -> str:
    """Return message when a production entry already exists for a day."""
    return f"Production record already exists for {production_date}"


def duplicate_equipment_code(code: str) -> str:
    """Return message for duplicate equipment code."""
    return f"Equipment with code '{code}' already exists"


def snapshot_not_found(period_label: str) -> str:
    """Return message when no monthly sales snapshot was saved for a period."""
    return f"No monthly sales summary saved for {period_label}"


def duplicate_period(kind: str, month_name: str, year: int) -> str:
    """Return message when a per-month row already exists."""
    return f"{kind} for {month_name} {year} already exists"
