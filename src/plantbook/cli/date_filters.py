"""CLI helpers for month and year filters."""

import click

from plantbook.domain.periods import Period, PeriodFilter, month_number
from plantbook.utils.date_parser import parse_period


def period_filter_options(func):
    """Add --period, --month and --year options to a command."""
    func = click.option("--year", type=int, help="Calendar year, e.g. 2025")(func)
    func = click.option("--month", help="Month name or number, e.g. Feb or 2")(func)
    func = click.option(
        "--period",
        help="Single month: YYYY-MM, 'Feb-25', 'February 2025', this-month or last-month",
    )(func)
    return func


def _month_value(month: str) -> int:
    text = month.strip()
    if text.isdigit():
        value = int(text)
        if not 1 <= value <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {value}")
        return value
    return month_number(text)


def resolve_period_filter(
    ctx,
    *,
    period: str | None,
    month: str | None,
    year: int | None,
) -> PeriodFilter:
    """Resolve CLI options into a PeriodFilter."""
    if period and (month or year):
        click.echo(
            "Error: --period cannot be combined with --month or --year.",
            err=True,
        )
        ctx.exit(1)

    try:
        if period:
            resolved = parse_period(period)
            return PeriodFilter(month=resolved.month, year=resolved.year)
        return PeriodFilter(month=_month_value(month) if month else None, year=year)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def resolve_single_period(ctx, period: str) -> Period:
    """Parse a required PERIOD argument."""
    try:
        return parse_period(period)
    except ValueError as e:
        click.echo(f"Error: Invalid period: {e}", err=True)
        ctx.exit(1)
