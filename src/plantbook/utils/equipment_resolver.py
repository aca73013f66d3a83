"""Utility for resolving equipment references to IDs."""

from typing import Optional

from plantbook.domain.entities import Equipment, EquipmentType
from plantbook.domain.equipment import EquipmentService
from plantbook.domain.errors import NotFoundError, ValidationError, equipment_not_found


def resolve_equipment(
    equipment_service: EquipmentService,
    reference: str | int,
    equipment_type: Optional[EquipmentType] = None,
) -> Equipment:
    """Resolve an equipment ID, code or display name.

    Numeric references are tried as IDs first, then codes and names are
    matched exactly.

    Args:
        equipment_service: EquipmentService instance
        reference: Equipment ID, code or name
        equipment_type: If given, only equipment of this type matches

    Returns:
        Equipment entity

    Raises:
        NotFoundError: If no matching equipment is registered
        ValidationError: If a name matches more than one piece of equipment
    """
    candidates = equipment_service.list_equipment(equipment_type=equipment_type)

    if isinstance(reference, int) or str(reference).strip().isdigit():
        equipment_id = int(reference)
        for equipment in candidates:
            if equipment.id == equipment_id:
                return equipment
        if isinstance(reference, int):
            raise NotFoundError(equipment_not_found(reference))

    text = str(reference).strip()
    for equipment in candidates:
        if equipment.equipment_code == text:
            return equipment

    by_name = [equipment for equipment in candidates if equipment.equipment_name == text]
    if len(by_name) > 1:
        raise ValidationError("equipment", f"name '{text}' is ambiguous, use the code or ID")
    if by_name:
        return by_name[0]

    raise NotFoundError(equipment_not_found(text))
