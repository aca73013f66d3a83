"""Cost record commands."""

import click
from decimal import Decimal
from plantbook.cli.date_filters import period_filter_options, resolve_period_filter
from plantbook.cli.error_handling import handle_domain_error
from plantbook.domain.entities import RecordCategory, TransactionRecord
from plantbook.domain.equipment import EquipmentService
from plantbook.domain.records import RecordService
from plantbook.utils.amount_parser import parse_amount
from plantbook.utils.date_parser import parse_date
from plantbook.utils.equipment_resolver import resolve_equipment

CATEGORIES = [category.value for category in RecordCategory]


@click.group()
def record_group():
    """Manage cost records."""
    pass


def _parse_amount_or_exit(ctx, value: str, label: str) -> Decimal:
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _resolve_equipment_id(ctx, db, category: RecordCategory, equipment: str | None) -> int | None:
    if equipment is None:
        return None
    try:
        item = resolve_equipment(EquipmentService(db), equipment, equipment_type=category.equipment_type)
    except ValueError as e:
        handle_domain_error(ctx, e)
    return item.id


def _current_values(record: TransactionRecord) -> dict:
    """Editable values of a stored record, keyed like RecordService arguments."""
    return {
        "record_date": None if record.category == RecordCategory.SALARY else record.record_date,
        "amount": record.amount,
        "misc_expense": record.misc_amount,
        "equipment_id": getattr(record, "equipment_id", getattr(record, "dumper_id", None)),
        "description": getattr(record, "description", getattr(record, "remarks", None)),
        "employee_name": getattr(record, "employee_name", None),
        "salary_month": getattr(record, "salary_month", None),
        "expense_category": getattr(record, "expense_category", None),
    }


def _describe(record: TransactionRecord) -> str:
    parts = []
    for attr in ("dumper_name", "employee_name", "expense_category", "remarks", "description"):
        value = getattr(record, attr, None)
        if value:
            parts.append(str(value))
    return " | ".join(parts)


@record_group.command("add")
@click.argument("category", type=click.Choice(CATEGORIES, case_sensitive=False))
@click.option("--date", "record_date", help="Entry date (YYYY-MM-DD or 'today', 'yesterday')")
@click.option("--amount", required=True, help="Amount (trip amount for dumpers, net salary for salaries)")
@click.option("--misc", help="Misc expense (excavator, loader and dumper only)")
@click.option("--equipment", help="Equipment ID, code or name")
@click.option("--description", help="Description or remarks")
@click.option("--employee", help="Employee name (salary only)")
@click.option("--salary-month", help="Salary period as YYYY-MM (salary only)")
@click.option("--expense-category", help="Expense category label")
@click.pass_context
def add_record(
    ctx,
    category: str,
    record_date: str | None,
    amount: str,
    misc: str | None,
    equipment: str | None,
    description: str | None,
    employee: str | None,
    salary_month: str | None,
    expense_category: str | None,
):
    """Add a cost record.

    Examples:
        plantbook record add dumper --date 2025-02-14 --amount 12000 --misc 500 --equipment DMP-01
        plantbook record add blasting --date today --amount 45000 --description "Explosives"
        plantbook record add salary --salary-month 2025-02 --employee "Akram" --amount 35000
    """
    db = ctx.obj["db"]
    service = RecordService(db)
    record_category = RecordCategory(category.lower())

    parsed_date = None
    if record_date is not None:
        try:
            parsed_date = parse_date(record_date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    parsed_amount = _parse_amount_or_exit(ctx, amount, "amount")
    parsed_misc = _parse_amount_or_exit(ctx, misc, "misc expense") if misc is not None else Decimal("0")
    equipment_id = _resolve_equipment_id(ctx, db, record_category, equipment)

    try:
        record_id = service.add_record(
            category=record_category,
            record_date=parsed_date,
            amount=parsed_amount,
            misc_expense=parsed_misc,
            equipment_id=equipment_id,
            description=description,
            employee_name=employee,
            salary_month=salary_month,
            expense_category=expense_category,
        )
        click.echo(f"Added {record_category.value} record (ID: {record_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@record_group.command("update")
@click.argument("record_id", type=int)
@click.option("--date", "record_date", help="Entry date (YYYY-MM-DD or 'today', 'yesterday')")
@click.option("--amount", help="Amount")
@click.option("--misc", help="Misc expense (excavator, loader and dumper only)")
@click.option("--equipment", help="Equipment ID, code or name")
@click.option("--description", help="Description or remarks")
@click.option("--employee", help="Employee name (salary only)")
@click.option("--salary-month", help="Salary period as YYYY-MM (salary only)")
@click.option("--expense-category", help="Expense category label")
@click.pass_context
def update_record(
    ctx,
    record_id: int,
    record_date: str | None,
    amount: str | None,
    misc: str | None,
    equipment: str | None,
    description: str | None,
    employee: str | None,
    salary_month: str | None,
    expense_category: str | None,
) -> None:
    """Update a cost record.

    Options that are not given keep their current value.

    Examples:
        plantbook record update 12 --amount 13500
        plantbook record update 12 --equipment DMP-02 --misc 0
    """
    db = ctx.obj["db"]
    service = RecordService(db)

    existing = service.get_record(record_id)
    if existing is None:
        click.echo(f"Error: Record {record_id} not found", err=True)
        ctx.exit(1)

    values = _current_values(existing)
    if record_date is not None:
        try:
            values["record_date"] = parse_date(record_date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)
    if amount is not None:
        values["amount"] = _parse_amount_or_exit(ctx, amount, "amount")
    if misc is not None:
        values["misc_expense"] = _parse_amount_or_exit(ctx, misc, "misc expense")
    if equipment is not None:
        values["equipment_id"] = _resolve_equipment_id(ctx, db, existing.category, equipment)
    if description is not None:
        values["description"] = description
    if employee is not None:
        values["employee_name"] = employee
    if salary_month is not None:
        values["salary_month"] = salary_month
    if expense_category is not None:
        values["expense_category"] = expense_category

    try:
        service.update_record(record_id, **values)
        click.echo(f"Updated record {record_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@record_group.command("delete")
@click.argument("record_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_record(ctx, record_id: int, yes: bool) -> None:
    """Delete a cost record."""
    service = RecordService(ctx.obj["db"])

    if service.get_record(record_id) is None:
        click.echo(f"Error: Record {record_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete record {record_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_record(record_id)
        click.echo(f"Deleted record {record_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@record_group.command("list")
@click.option("--category", type=click.Choice(CATEGORIES, case_sensitive=False), help="Only this category")
@period_filter_options
@click.pass_context
def list_records(ctx, category: str | None, period: str | None, month: str | None, year: int | None):
    """List cost records, newest first.

    Examples:
        plantbook record list --period 2025-02
        plantbook record list --category dumper --year 2025
    """
    service = RecordService(ctx.obj["db"])
    period_filter = resolve_period_filter(ctx, period=period, month=month, year=year)
    start_date, end_date = period_filter.date_range()

    records = service.list_records(
        category=category.lower() if category else None,
        start_date=start_date,
        end_date=end_date,
    )
    records = [record for record in records if period_filter.matches(record.record_date)]
    if not records:
        click.echo("No records found.")
        return

    click.echo(f"\n{'ID':>5s} | {'Date':10s} | {'Category':11s} | {'Amount':>12s} | {'Misc':>10s} | Details")
    click.echo("-" * 80)
    for record in records:
        record_date = record.record_date.isoformat() if record.record_date else "-"
        click.echo(
            f"{record.id:5d} | {record_date:10s} | {record.category.value:11s} | "
            f"{record.amount:12,.2f} | {record.misc_amount:10,.2f} | {_describe(record)}"
        )
    click.echo(f"\n{len(records)} record(s)")


def register_commands(cli):
    """Register record commands with main CLI."""
    cli.add_command(record_group, name="record")
