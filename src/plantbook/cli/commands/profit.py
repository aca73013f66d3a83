"""Profit sharing commands."""

import click
from plantbook.cli.date_filters import resolve_single_period
from plantbook.cli.error_handling import handle_domain_error
from plantbook.domain.entities import PartnerShares, ProfitSharingResult
from plantbook.domain.profit_sharing import ProfitSharingService
from plantbook.utils.amount_parser import format_percent, parse_percent


@click.group()
def profit_group():
    """Split monthly profit between the partners."""
    pass


def _echo_result(result: ProfitSharingResult) -> None:
    shares = result.shares
    click.echo(f"\nProfit sharing: {result.period.label}")
    click.echo("-" * 60)
    click.echo(f"Total revenue:                 {result.total_revenue:>18,.2f}")
    click.echo(f"Total expense:                 {result.total_expense:>18,.2f}")
    click.echo(f"Net profit:                    {result.net_profit:>18,.2f}")
    click.echo(
        f"Partner A ({format_percent(shares.partner_a_percent)}%):".ljust(31)
        + f"{result.partner_a_amount:>18,.2f}  (sub-partner {result.partner_a_sub_amount:,.2f})"
    )
    click.echo(
        f"Partner B ({format_percent(shares.partner_b_percent)}%):".ljust(31)
        + f"{result.partner_b_amount:>18,.2f}  (sub-partner {result.partner_b_sub_amount:,.2f})"
    )


@profit_group.command("calculate")
@click.argument("period", metavar="PERIOD")
@click.option(
    "--partner-a-share",
    default="50",
    show_default=True,
    envvar="PLANTBOOK_PARTNER_A_SHARE",
    help="Partner A share in percent",
)
@click.option(
    "--partner-b-share",
    default="50",
    show_default=True,
    envvar="PLANTBOOK_PARTNER_B_SHARE",
    help="Partner B share in percent",
)
@click.option("--save", is_flag=True, help="Store the result (replaces an earlier one)")
@click.pass_context
def calculate(ctx, period: str, partner_a_share: str, partner_b_share: str, save: bool):
    """Calculate a month's profit split.

    Revenue comes from the month's saved sales summary and expenses from its
    cost records (misc expenses excluded).

    Examples:
        plantbook profit calculate 2025-02
        plantbook profit calculate 2025-02 --partner-a-share 60 --partner-b-share 40 --save
    """
    service = ProfitSharingService(ctx.obj["db"])
    resolved = resolve_single_period(ctx, period)

    try:
        shares = PartnerShares(
            partner_a_percent=parse_percent(partner_a_share),
            partner_b_percent=parse_percent(partner_b_share),
        )
        result = service.calculate_for_period(resolved, shares)
        _echo_result(result)
        if save:
            service.save(result)
            click.echo(f"\nSaved profit sharing for {resolved.label}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@profit_group.command("list")
@click.option("--year", type=int, help="Only this year")
@click.pass_context
def list_profit(ctx, year: int | None):
    """List saved profit splits."""
    service = ProfitSharingService(ctx.obj["db"])

    records = service.list_records(year=year)
    if not records:
        click.echo("No profit sharing records found.")
        return

    click.echo(f"\n{'Month':15s} | {'Revenue':>14s} | {'Expense':>14s} | {'Net profit':>14s} | {'Partner A':>14s} | {'Partner B':>14s}")
    click.echo("-" * 100)
    for record in records:
        result = record.result
        click.echo(
            f"{result.period.label:15s} | {result.total_revenue:14,.2f} | {result.total_expense:14,.2f} | "
            f"{result.net_profit:14,.2f} | {result.partner_a_amount:14,.2f} | {result.partner_b_amount:14,.2f}"
        )


def register_commands(cli):
    """Register profit sharing commands with main CLI."""
    cli.add_command(profit_group, name="profit")
