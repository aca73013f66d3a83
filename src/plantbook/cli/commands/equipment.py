"""Equipment register commands."""

import click
from plantbook.cli.error_handling import handle_domain_error
from plantbook.domain.entities import EquipmentType
from plantbook.domain.equipment import EquipmentService
from plantbook.utils.equipment_resolver import resolve_equipment

EQUIPMENT_TYPES = [item.value for item in EquipmentType]


@click.group()
def equipment_group():
    """Manage the equipment register."""
    pass


@equipment_group.command("add")
@click.argument("code", metavar="CODE")
@click.argument("name", metavar="NAME")
@click.option(
    "--type",
    "equipment_type",
    required=True,
    type=click.Choice(EQUIPMENT_TYPES, case_sensitive=False),
    help="Equipment type",
)
@click.pass_context
def add_equipment(ctx, code: str, name: str, equipment_type: str):
    """Register a piece of equipment.

    Examples:
        plantbook equipment add DMP-01 "Dumper 1" --type dumper
        plantbook equipment add EXC-01 "Excavator PC200" --type excavator
    """
    service = EquipmentService(ctx.obj["db"])
    try:
        equipment_id = service.register_equipment(code=code, name=name, equipment_type=equipment_type)
        click.echo(f"Registered {equipment_type.upper()} '{name}' ({code}, ID: {equipment_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@equipment_group.command("list")
@click.option(
    "--type",
    "equipment_type",
    type=click.Choice(EQUIPMENT_TYPES, case_sensitive=False),
    help="Only list equipment of this type",
)
@click.pass_context
def list_equipment(ctx, equipment_type: str | None):
    """List registered equipment."""
    service = EquipmentService(ctx.obj["db"])

    items = service.list_equipment(equipment_type=equipment_type)
    if not items:
        click.echo("No equipment found.")
        return

    click.echo("\nEquipment:")
    click.echo("-" * 60)
    for item in items:
        status = "" if item.is_active else " (inactive)"
        click.echo(
            f"ID: {item.id:3d} | {item.equipment_code:10s} | "
            f"{item.equipment_type.value:9s} | {item.equipment_name}{status}"
        )


@equipment_group.command("rename")
@click.argument("equipment", metavar="EQUIPMENT")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_equipment(ctx, equipment: str, new_name: str) -> None:
    """Rename a piece of equipment.

    EQUIPMENT can be an ID, code or name.

    Examples:
        plantbook equipment rename DMP-01 "Dumper 1 (Hino)"
    """
    service = EquipmentService(ctx.obj["db"])
    try:
        item = resolve_equipment(service, equipment)
        service.rename_equipment(item.id, new_name)
        click.echo(f"Renamed '{item.equipment_name}' to '{new_name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


@equipment_group.command("delete")
@click.argument("equipment", metavar="EQUIPMENT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_equipment(ctx, equipment: str, yes: bool) -> None:
    """Delete a piece of equipment.

    EQUIPMENT can be an ID, code or name. Records entered against it are
    kept; dumper records of a deleted dumper are reported as unattributed
    in the expense summary.

    Examples:
        plantbook equipment delete DMP-03
    """
    service = EquipmentService(ctx.obj["db"])
    try:
        item = resolve_equipment(service, equipment)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(
        f"Are you sure you want to delete '{item.equipment_name}' (ID: {item.id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_equipment(item.id)
        click.echo(f"Deleted '{item.equipment_name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register equipment commands with main CLI."""
    cli.add_command(equipment_group, name="equipment")
