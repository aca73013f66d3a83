"""Equipment register domain service."""

import logging
from typing import Optional

from plantbook.database.base import Database
from plantbook.domain.entities import Equipment, EquipmentType
from plantbook.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_equipment_code,
    equipment_not_found,
)

logger = logging.getLogger(__name__)


def parse_equipment_type(value) -> EquipmentType:
    """Parse an equipment type name, case-insensitively.

    Raises:
        ValidationError: If the name is not a known equipment type
    """
    if isinstance(value, EquipmentType):
        return value
    try:
        return EquipmentType(str(value).strip().upper())
    except ValueError:
        choices = ", ".join(item.value for item in EquipmentType)
        raise ValidationError("equipment_type", f"'{value}' is not one of: {choices}")


class EquipmentService:
    """Service for managing the equipment register."""

    def __init__(self, db: Database):
        """Initialize equipment service.

        Args:
            db: Database instance
        """
        self.db = db

    def register_equipment(self, code: str, name: str, equipment_type) -> int:
        """Register a piece of equipment.

        Args:
            code: Unique equipment code (e.g. "DMP-01")
            name: Display name
            equipment_type: GENERATOR, EXCAVATOR, LOADER or DUMPER

        Returns:
            Equipment ID

        Raises:
            ValidationError: If code or name is empty or the type is unknown
            ConflictError: If the code is already registered
        """
        code = (code or "").strip()
        name = (name or "").strip()
        if not code:
            raise ValidationError("equipment_code", "is required")
        if not name:
            raise ValidationError("equipment_name", "is required")
        equipment_type = parse_equipment_type(equipment_type)

        if self.db.get_equipment_by_code(code) is not None:
            raise ConflictError(duplicate_equipment_code(code))

        equipment_id = self.db.create_equipment(
            equipment_code=code,
            equipment_name=name,
            equipment_type=equipment_type.value,
        )
        logger.debug("Registered %s %s as %s", equipment_type.value, code, equipment_id)
        return equipment_id

    def get_equipment(self, equipment_id: int) -> Optional[Equipment]:
        return self.db.get_equipment(equipment_id)

    def get_equipment_by_code(self, code: str) -> Optional[Equipment]:
        return self.db.get_equipment_by_code(code)

    def list_equipment(self, equipment_type=None) -> list[Equipment]:
        """List registered equipment, optionally of one type."""
        if equipment_type is not None:
            equipment_type = parse_equipment_type(equipment_type).value
        return self.db.list_equipment(equipment_type=equipment_type)

    def list_dumpers(self) -> list[Equipment]:
        """Registered dumpers, in code order."""
        return self.db.list_equipment(equipment_type=EquipmentType.DUMPER.value)

    def rename_equipment(self, equipment_id: int, name: str) -> None:
        """Change the display name of a piece of equipment.

        Records keep the name they were entered with; dumper records are
        attributed by id first, so they still count towards the renamed dumper.

        Raises:
            NotFoundError: If the equipment does not exist
            ValidationError: If the new name is empty
        """
        if self.db.get_equipment(equipment_id) is None:
            raise NotFoundError(equipment_not_found(equipment_id))
        name = (name or "").strip()
        if not name:
            raise ValidationError("equipment_name", "is required")
        self.db.update_equipment(equipment_id, equipment_name=name)

    def delete_equipment(self, equipment_id: int) -> None:
        """Remove a piece of equipment from the register.

        Records booked against it are kept. Dumper records whose dumper is no
        longer registered are reported as unattributed by the aggregation.

        Raises:
            NotFoundError: If the equipment does not exist
        """
        equipment = self.db.get_equipment(equipment_id)
        if equipment is None:
            raise NotFoundError(equipment_not_found(equipment_id))
        self.db.delete_equipment(equipment_id)
        logger.info("Deleted %s %s", equipment.equipment_type.value, equipment.equipment_code)
