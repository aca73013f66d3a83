"""Expense summary commands."""

import click
from decimal import Decimal
from plantbook.cli.date_filters import resolve_single_period
from plantbook.domain.aggregation import AggregationService, MonthlyAggregation
from plantbook.domain.expense_summary import ExpenseSummary, summarize, summarize_year
from plantbook.domain.periods import PeriodFilter


@click.group()
def summary_group():
    """Show expense summaries."""
    pass


def _echo_amounts(title: str, amounts: dict[str, Decimal]) -> None:
    click.echo(f"\n{title}")
    click.echo("-" * 50)
    for label, amount in amounts.items():
        click.echo(f"{label:30s} {amount:>18,.2f}")


def _echo_unattributed(aggregation: MonthlyAggregation) -> None:
    if not aggregation.unattributed:
        return
    ids = ", ".join(str(record.id) for record in aggregation.unattributed)
    click.echo(
        f"\nWarning: {len(aggregation.unattributed)} dumper record(s) match no registered "
        f"dumper and are not included: {ids}",
        err=True,
    )


def _echo_monthly(summary: ExpenseSummary) -> None:
    click.echo(f"\nExpense summary: {summary.period.label}")
    _echo_amounts("By category", summary.per_category)
    _echo_amounts("Groups", summary.groups)
    click.echo(f"{'Total Expenses':30s} {summary.total:>18,.2f}")
    _echo_amounts("Misc expenses (reference, not in Total)", summary.misc)
    click.echo(f"{'Total Misc':30s} {summary.misc_total:>18,.2f}")
    click.echo(f"\n{'Balance (Total + Misc)':30s} {summary.grand_total:>18,.2f}")


@summary_group.command("monthly")
@click.argument("period", metavar="PERIOD")
@click.pass_context
def monthly_summary(ctx, period: str):
    """Show the expense summary of one month.

    Examples:
        plantbook summary monthly 2025-02
        plantbook summary monthly "Feb-25"
    """
    service = AggregationService(ctx.obj["db"])
    resolved = resolve_single_period(ctx, period)

    aggregation = service.aggregate(PeriodFilter(month=resolved.month, year=resolved.year))
    _echo_monthly(summarize(aggregation.bucket_for(resolved), aggregation.dumpers))
    _echo_unattributed(aggregation)


@summary_group.command("yearly")
@click.argument("year", type=int)
@click.pass_context
def yearly_summary(ctx, year: int):
    """Show month-by-month expenses of a year.

    Examples:
        plantbook summary yearly 2025
    """
    service = AggregationService(ctx.obj["db"])

    aggregation = service.aggregate(PeriodFilter(year=year))
    yearly = summarize_year(aggregation, year)
    if not yearly.months:
        click.echo(f"No records found for {year}.")
        return

    click.echo(f"\nExpense summary: {year}")
    click.echo(f"\n{'Month':8s} | {'Total':>16s} | {'Misc':>14s} | {'Balance':>16s}")
    click.echo("-" * 64)
    for month in yearly.months:
        click.echo(
            f"{month.period.key:8s} | {month.total:16,.2f} | "
            f"{month.misc_total:14,.2f} | {month.grand_total:16,.2f}"
        )
    click.echo("-" * 64)
    click.echo(
        f"{'Total':8s} | {yearly.total:16,.2f} | "
        f"{yearly.misc_total:14,.2f} | {yearly.grand_total:16,.2f}"
    )
    click.echo(f"\nMonths: {yearly.month_count}")
    click.echo(f"Average monthly balance: {yearly.average_monthly_grand_total:,.0f}")
    _echo_unattributed(aggregation)


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary_group, name="summary")
