"""Crusher production commands."""

import click
from plantbook.cli.date_filters import period_filter_options, resolve_period_filter, resolve_single_period
from plantbook.cli.error_handling import handle_domain_error
from plantbook.domain.entities import DEFAULT_ALLOWANCE_PERCENT, MonthlySalesInputs, MonthlySalesSnapshot
from plantbook.domain.production import ProductionService
from plantbook.utils.amount_parser import format_percent, parse_amount, parse_percent, parse_quantity
from plantbook.utils.date_parser import parse_date


@click.group()
def production_group():
    """Record daily production and monthly sales."""
    pass


def _parse_or_exit(ctx, parser, value: str, label: str):
    try:
        return parser(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _echo_snapshot(snapshot: MonthlySalesSnapshot) -> None:
    click.echo(f"\nMonthly sales summary: {snapshot.period.label}")
    click.echo("-" * 60)
    click.echo(f"Net aggregate produced:   {snapshot.net_produced_for_period:>16,.2f} CFT")
    click.echo(f"Total produced (rounded): {snapshot.total_produced_raw:>16,.0f} CFT")
    click.echo(
        f"Allowance ({format_percent(snapshot.allowance_percent)}%):        "
        f"{snapshot.allowance_deduction:>16,.0f} CFT"
    )
    click.echo(f"Total produced:           {snapshot.total_produced:>16,.0f} CFT")
    click.echo(f"Sold at site:             {snapshot.sold_qty:>16,.2f} CFT")
    click.echo(f"Stock at site:            {snapshot.remaining_stock:>16,.2f} CFT")
    click.echo(f"Sold amount:              {snapshot.sold_amount:>16,.2f}")
    click.echo(f"Per CFT selling price:    {snapshot.per_unit_selling_price:>16,.2f}")
    click.echo(f"Approx. stock rate:       {snapshot.approx_stock_rate:>16,.2f}")
    click.echo(f"Stock value:              {snapshot.stock_value:>16,.2f}")
    click.echo(f"Total revenue:            {snapshot.total_revenue:>16,.2f}")


@production_group.command("add")
@click.argument("production_date", metavar="DATE")
@click.option("--gravel", required=True, help="Gravel input in CFT")
@click.option("--clay-percent", help="Clay/dust deduction in percent (default 33.33)")
@click.option("--notes", help="Notes")
@click.pass_context
def add_entry(ctx, production_date: str, gravel: str, clay_percent: str | None, notes: str | None):
    """Record one day's production.

    Examples:
        plantbook production add 2025-02-14 --gravel 58186
        plantbook production add today --gravel 41000 --clay-percent 30
    """
    service = ProductionService(ctx.obj["db"])

    entry_date = _parse_or_exit(ctx, parse_date, production_date, "date")
    gravel_cft = _parse_or_exit(ctx, parse_quantity, gravel, "gravel quantity")
    percent = _parse_or_exit(ctx, parse_percent, clay_percent, "clay percent") if clay_percent else None

    try:
        entry_id = service.add_daily_entry(entry_date, gravel_cft, percent, notes)
        entry = service.get_daily_entry(entry_id)
        click.echo(
            f"Recorded production for {entry.production_date} ({entry.day_name}): "
            f"clay/dust {entry.clay_dust_cft:,.2f} CFT, net {entry.net_aggregate_cft:,.2f} CFT "
            f"(ID: {entry_id})"
        )
    except ValueError as e:
        handle_domain_error(ctx, e)


@production_group.command("update")
@click.argument("entry_id", type=int)
@click.option("--date", "production_date", help="Production date")
@click.option("--gravel", help="Gravel input in CFT")
@click.option("--clay-percent", help="Clay/dust deduction in percent")
@click.option("--notes", help="Notes")
@click.pass_context
def update_entry(
    ctx,
    entry_id: int,
    production_date: str | None,
    gravel: str | None,
    clay_percent: str | None,
    notes: str | None,
) -> None:
    """Update a daily production entry.

    Options that are not given keep their current value.
    """
    service = ProductionService(ctx.obj["db"])

    existing = service.get_daily_entry(entry_id)
    if existing is None:
        click.echo(f"Error: Production entry {entry_id} not found", err=True)
        ctx.exit(1)

    entry_date = _parse_or_exit(ctx, parse_date, production_date, "date") if production_date else existing.production_date
    gravel_cft = _parse_or_exit(ctx, parse_quantity, gravel, "gravel quantity") if gravel else existing.gravel_cft
    percent = (
        _parse_or_exit(ctx, parse_percent, clay_percent, "clay percent")
        if clay_percent
        else existing.clay_dust_percent
    )

    try:
        service.update_daily_entry(
            entry_id,
            entry_date,
            gravel_cft,
            percent,
            notes if notes is not None else existing.notes,
        )
        click.echo(f"Updated production entry {entry_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@production_group.command("delete")
@click.argument("entry_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_entry(ctx, entry_id: int, yes: bool) -> None:
    """Delete a daily production entry."""
    service = ProductionService(ctx.obj["db"])

    if not yes and not click.confirm(f"Are you sure you want to delete production entry {entry_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_daily_entry(entry_id)
        click.echo(f"Deleted production entry {entry_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@production_group.command("list")
@period_filter_options
@click.pass_context
def list_entries(ctx, period: str | None, month: str | None, year: int | None):
    """List daily production entries in date order."""
    service = ProductionService(ctx.obj["db"])
    period_filter = resolve_period_filter(ctx, period=period, month=month, year=year)

    entries = service.list_daily_entries(period_filter)
    if not entries:
        click.echo("No production entries found.")
        return

    click.echo(f"\n{'ID':>5s} | {'Date':10s} | {'Day':9s} | {'Gravel':>12s} | {'Clay %':>7s} | {'Clay/Dust':>12s} | {'Net':>12s}")
    click.echo("-" * 84)
    for entry in entries:
        click.echo(
            f"{entry.id:5d} | {entry.production_date.isoformat():10s} | {entry.day_name:9s} | "
            f"{entry.gravel_cft:12,.2f} | {entry.clay_dust_percent:7.2f} | "
            f"{entry.clay_dust_cft:12,.2f} | {entry.net_aggregate_cft:12,.2f}"
        )


@production_group.command("totals")
@click.argument("period", metavar="PERIOD")
@click.pass_context
def show_totals(ctx, period: str):
    """Show production totals for a month from the current daily entries.

    Examples:
        plantbook production totals 2025-02
    """
    service = ProductionService(ctx.obj["db"])
    resolved = resolve_single_period(ctx, period)

    totals = service.get_live_totals(resolved)
    click.echo(f"\nProduction: {resolved.label} ({totals.entry_count} day(s))")
    click.echo("-" * 60)
    click.echo(f"Gravel input:      {totals.gravel_cft:>16,.2f} CFT")
    click.echo(f"Clay/dust:         {totals.clay_dust_cft:>16,.2f} CFT")
    click.echo(f"Net aggregate:     {totals.net_aggregate_cft:>16,.2f} CFT")

    snapshot = service.get_monthly_snapshot(resolved)
    if snapshot is not None and snapshot.net_produced_for_period != totals.net_aggregate_cft:
        click.echo(
            f"\nNote: the saved sales summary uses {snapshot.net_produced_for_period:,.2f} CFT; "
            "save the sales again to refresh it."
        )


@production_group.command("sales")
@click.argument("period", metavar="PERIOD")
@click.option("--sold-qty", required=True, help="CFT sold at site")
@click.option("--sold-amount", required=True, help="Amount received for the sold CFT")
@click.option("--stock-rate", required=True, help="Approximate value per CFT of unsold stock")
@click.option(
    "--allowance",
    default=str(DEFAULT_ALLOWANCE_PERCENT),
    show_default=True,
    help="Allowance/margin deduction in percent",
)
@click.option(
    "--net-produced",
    help="Net production to use instead of the month's daily entries",
)
@click.pass_context
def save_sales(
    ctx,
    period: str,
    sold_qty: str,
    sold_amount: str,
    stock_rate: str,
    allowance: str,
    net_produced: str | None,
):
    """Save a month's sales and freeze its production figures.

    Saving again for the same month replaces the earlier summary.

    Examples:
        plantbook production sales 2025-02 --sold-qty 20000 --sold-amount 600000 --stock-rate 25
    """
    service = ProductionService(ctx.obj["db"])
    resolved = resolve_single_period(ctx, period)

    inputs = MonthlySalesInputs(
        sold_qty=_parse_or_exit(ctx, parse_quantity, sold_qty, "sold quantity"),
        sold_amount=_parse_or_exit(ctx, parse_amount, sold_amount, "sold amount"),
        approx_stock_rate=_parse_or_exit(ctx, parse_amount, stock_rate, "stock rate"),
        allowance_percent=_parse_or_exit(ctx, parse_percent, allowance, "allowance"),
    )
    if net_produced is not None:
        net = _parse_or_exit(ctx, parse_quantity, net_produced, "net production")
    else:
        net = service.get_live_totals(resolved).net_aggregate_cft

    try:
        snapshot = service.save_monthly_sales(resolved, inputs, net)
    except ValueError as e:
        handle_domain_error(ctx, e)
    _echo_snapshot(snapshot)


@production_group.command("snapshots")
@click.option("--year", type=int, help="Only this year")
@click.pass_context
def list_snapshots(ctx, year: int | None):
    """List saved monthly sales summaries."""
    service = ProductionService(ctx.obj["db"])

    snapshots = service.list_monthly_snapshots(year=year)
    if not snapshots:
        click.echo("No monthly sales summaries found.")
        return

    click.echo(f"\n{'Month':15s} | {'Produced':>12s} | {'Sold':>12s} | {'Stock':>12s} | {'Revenue':>14s}")
    click.echo("-" * 76)
    for snapshot in snapshots:
        click.echo(
            f"{snapshot.period.label:15s} | {snapshot.total_produced:12,.0f} | "
            f"{snapshot.sold_qty:12,.2f} | {snapshot.remaining_stock:12,.2f} | "
            f"{snapshot.total_revenue:14,.2f}"
        )


def register_commands(cli):
    """Register production commands with main CLI."""
    cli.add_command(production_group, name="production")
