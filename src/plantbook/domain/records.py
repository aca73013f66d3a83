"""Cost record domain service."""

import logging
from datetime import date
from typing import Any, Optional

from plantbook.database.base import Database
from plantbook.domain.entities import ZERO, EquipmentType, RecordCategory, TransactionRecord
from plantbook.domain.errors import (
    NotFoundError,
    ValidationError,
    equipment_not_found,
    record_not_found,
)
from plantbook.domain.periods import parse_salary_month
from plantbook.domain.validation import require_non_negative

logger = logging.getLogger(__name__)


def _category(value) -> RecordCategory:
    try:
        return RecordCategory(value)
    except ValueError:
        choices = ", ".join(category.value for category in RecordCategory)
        raise ValidationError("category", f"'{value}' is not one of: {choices}")


class RecordService:
    """Service for adding, replacing and listing cost records."""

    def __init__(self, db: Database):
        """Initialize record service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_record(
        self,
        category,
        record_date: Optional[date],
        amount,
        misc_expense=ZERO,
        equipment_id: Optional[int] = None,
        description: Optional[str] = None,
        employee_name: Optional[str] = None,
        salary_month: Optional[str] = None,
        expense_category: Optional[str] = None,
    ) -> int:
        """Add a cost record.

        Args:
            category: Record category (e.g. "dumper", "salary")
            record_date: Date of the entry; ignored for salary records
            amount: Entry amount (trip amount for dumpers, net salary for salaries)
            misc_expense: Misc sub-amount; excavator, loader and dumper records only
            equipment_id: Registered equipment the entry is booked against
            description: Optional description or remarks
            employee_name: Employee for salary records
            salary_month: "YYYY-MM" period for salary records
            expense_category: Optional expense category label

        Returns:
            Record ID

        Raises:
            ValidationError: If a field is missing, negative or not allowed for the category
            NotFoundError: If the referenced equipment does not exist
        """
        category = _category(category)
        fields = self._record_fields(
            category,
            record_date=record_date,
            amount=amount,
            misc_expense=misc_expense,
            equipment_id=equipment_id,
            description=description,
            employee_name=employee_name,
            salary_month=salary_month,
            expense_category=expense_category,
        )
        record_id = self.db.create_record(category=category, **fields)
        logger.debug("Added %s record %s for %s", category.value, record_id, fields["record_date"])
        return record_id

    def update_record(
        self,
        record_id: int,
        record_date: Optional[date],
        amount,
        misc_expense=ZERO,
        equipment_id: Optional[int] = None,
        description: Optional[str] = None,
        employee_name: Optional[str] = None,
        salary_month: Optional[str] = None,
        expense_category: Optional[str] = None,
    ) -> None:
        """Replace every editable field of a record. The category stays the same.

        Raises:
            NotFoundError: If the record or referenced equipment does not exist
            ValidationError: If a field is missing, negative or not allowed for the category
        """
        existing = self.db.get_record(record_id)
        if existing is None:
            raise NotFoundError(record_not_found(record_id))

        fields = self._record_fields(
            existing.category,
            record_date=record_date,
            amount=amount,
            misc_expense=misc_expense,
            equipment_id=equipment_id,
            description=description,
            employee_name=employee_name,
            salary_month=salary_month,
            expense_category=expense_category,
        )
        self.db.replace_record(record_id, fields)
        logger.debug("Replaced %s record %s", existing.category.value, record_id)

    def delete_record(self, record_id: int) -> None:
        """Delete a record.

        Raises:
            NotFoundError: If the record does not exist
        """
        if self.db.get_record(record_id) is None:
            raise NotFoundError(record_not_found(record_id))
        self.db.delete_record(record_id)
        logger.debug("Deleted record %s", record_id)

    def get_record(self, record_id: int) -> Optional[TransactionRecord]:
        """Get record by ID.

        Args:
            record_id: Record ID

        Returns:
            Typed record or None if not found
        """
        return self.db.get_record(record_id)

    def list_records(
        self,
        category=None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TransactionRecord]:
        """List records, newest first, with optional category and date filters."""
        if category is not None:
            category = _category(category)
        return self.db.list_records(category=category, start_date=start_date, end_date=end_date)

    def _record_fields(
        self,
        category: RecordCategory,
        record_date: Optional[date],
        amount,
        misc_expense,
        equipment_id: Optional[int],
        description: Optional[str],
        employee_name: Optional[str],
        salary_month: Optional[str],
        expense_category: Optional[str],
    ) -> dict[str, Any]:
        amount = require_non_negative("amount", amount)
        misc_expense = require_non_negative("misc_expense", ZERO if misc_expense is None else misc_expense)
        if misc_expense != 0 and not category.tracks_misc:
            raise ValidationError("misc_expense", f"not allowed for {category.value} records")

        if category == RecordCategory.SALARY:
            record_date = parse_salary_month(salary_month)
            if record_date is None:
                raise ValidationError("salary_month", "must be given as YYYY-MM")
            if not employee_name:
                raise ValidationError("employee_name", "is required for salary records")
        else:
            if record_date is None:
                raise ValidationError("record_date", "is required")
            salary_month = None
            employee_name = None

        equipment_name = self._equipment_name(category, equipment_id)

        return {
            "record_date": record_date,
            "amount": amount,
            "misc_expense": misc_expense,
            "equipment_id": equipment_id,
            "equipment_name": equipment_name,
            "expense_category": expense_category,
            "employee_name": employee_name,
            "salary_month": salary_month,
            "description": description,
        }

    def _equipment_name(self, category: RecordCategory, equipment_id: Optional[int]) -> Optional[str]:
        """Check an equipment reference and return the name to store with the record."""
        expected_type = category.equipment_type
        if expected_type is None:
            if equipment_id is not None:
                raise ValidationError("equipment_id", f"not allowed for {category.value} records")
            return None

        if equipment_id is None:
            if expected_type == EquipmentType.DUMPER:
                raise ValidationError("equipment_id", f"is required for {category.value} records")
            return None

        equipment = self.db.get_equipment(equipment_id)
        if equipment is None:
            raise NotFoundError(equipment_not_found(equipment_id))
        if equipment.equipment_type != expected_type:
            raise ValidationError(
                "equipment_id",
                f"{equipment.equipment_name} is a {equipment.equipment_type.value}, "
                f"expected {expected_type.value}",
            )
        return equipment.equipment_name
