"""Production reconciliation domain service.

Production is deducted in two stages. Each day the clay and stone dust share
of the gravel input is removed; once a month the allowance/margin share is
removed from the month's net production before stock and revenue are worked
out. The monthly figures are saved as a frozen snapshot so later edits to
daily entries do not change a month that has already been reported.
"""

import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from plantbook.database.base import Database
from plantbook.database.mappers import snapshot_to_columns
from plantbook.domain.entities import (
    ZERO,
    DEFAULT_CLAY_DUST_PERCENT,
    DailyProductionEntry,
    DailyReconciliation,
    LiveProductionTotals,
    MonthlySalesInputs,
    MonthlySalesSnapshot,
)
from plantbook.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_production_date,
    production_entry_not_found,
)
from plantbook.domain.periods import Period, PeriodFilter
from plantbook.domain.validation import HUNDRED, require_decimal, require_non_negative, require_percent

logger = logging.getLogger(__name__)

FIGURE_PLACES = Decimal("0.0001")


def round_half_up(value: Decimal) -> Decimal:
    """Round to the nearest whole unit, halves away from zero."""
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def quantize_figure(value: Decimal) -> Decimal:
    """Round a stored monthly figure to four decimal places, halves away from zero."""
    return value.quantize(FIGURE_PLACES, rounding=ROUND_HALF_UP)


def reconcile_daily(gravel_cft, clay_dust_percent=None) -> DailyReconciliation:
    """Work out the clay/dust deduction for one day's gravel input.

    Args:
        gravel_cft: Gravel input in CFT, greater than zero
        clay_dust_percent: Deduction rate in percent; defaults to 33.33

    Returns:
        DailyReconciliation with clay_dust_cft + net_aggregate_cft == gravel_cft

    Raises:
        ValidationError: If gravel_cft is not positive or the percent is outside 0-100
    """
    gravel = require_decimal("gravel_cft", gravel_cft)
    if gravel <= 0:
        raise ValidationError("gravel_cft", "must be greater than zero")
    if clay_dust_percent is None:
        percent = DEFAULT_CLAY_DUST_PERCENT
    else:
        percent = require_percent("clay_dust_percent", clay_dust_percent)

    clay_dust_cft = gravel * percent / HUNDRED
    net_aggregate_cft = gravel - clay_dust_cft
    return DailyReconciliation(
        clay_dust_cft=clay_dust_cft,
        aggregate_produced=net_aggregate_cft,
        net_aggregate_cft=net_aggregate_cft,
    )


def reconcile_monthly_sales(
    period: Period, inputs: MonthlySalesInputs, net_produced_for_period
) -> MonthlySalesSnapshot:
    """Reconcile a month's net production against its sales.

    Net production is rounded to whole CFT before the allowance is taken, and
    the allowance deduction is itself rounded. Every other figure is rounded
    to four decimal places, the precision the snapshot is stored with.
    Remaining stock may be negative when more was sold than produced; it is
    reported as is.

    Args:
        period: Month being reconciled
        inputs: Sold quantity and amount, expected stock rate, allowance percent
        net_produced_for_period: Net production figure to freeze in the snapshot

    Returns:
        MonthlySalesSnapshot

    Raises:
        ValidationError: On negative quantities/amounts or a percent outside 0-100
    """
    net_produced = quantize_figure(require_non_negative("net_produced_for_period", net_produced_for_period))
    sold_qty = quantize_figure(require_non_negative("sold_qty", inputs.sold_qty))
    sold_amount = quantize_figure(require_non_negative("sold_amount", inputs.sold_amount))
    approx_stock_rate = quantize_figure(require_non_negative("approx_stock_rate", inputs.approx_stock_rate))
    allowance_percent = quantize_figure(require_percent("allowance_percent", inputs.allowance_percent))

    total_produced_raw = round_half_up(net_produced)
    allowance_deduction = round_half_up(total_produced_raw * allowance_percent / HUNDRED)
    total_produced = total_produced_raw - allowance_deduction
    remaining_stock = total_produced - sold_qty
    per_unit_selling_price = quantize_figure(sold_amount / sold_qty) if sold_qty > 0 else ZERO
    stock_value = quantize_figure(remaining_stock * approx_stock_rate)
    total_revenue = sold_amount + stock_value

    return MonthlySalesSnapshot(
        period=period,
        net_produced_for_period=net_produced,
        sold_qty=sold_qty,
        sold_amount=sold_amount,
        approx_stock_rate=approx_stock_rate,
        allowance_percent=allowance_percent,
        total_produced_raw=total_produced_raw,
        allowance_deduction=allowance_deduction,
        total_produced=total_produced,
        remaining_stock=remaining_stock,
        per_unit_selling_price=per_unit_selling_price,
        stock_value=stock_value,
        total_revenue=total_revenue,
    )


class ProductionService:
    """Service for daily production entries and monthly sales snapshots."""

    def __init__(self, db: Database):
        """Initialize production service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_daily_entry(
        self,
        production_date: Optional[date],
        gravel_cft,
        clay_dust_percent=None,
        notes: Optional[str] = None,
    ) -> int:
        """Record one day's production.

        Args:
            production_date: Production day; one entry per day
            gravel_cft: Gravel input in CFT
            clay_dust_percent: Deduction rate; defaults to 33.33 when missing
            notes: Optional notes

        Returns:
            Entry ID

        Raises:
            ValidationError: If the date is missing or figures are out of range
            ConflictError: If an entry already exists for the date
        """
        if production_date is None:
            raise ValidationError("production_date", "is required")
        if self.db.get_daily_production_by_date(production_date) is not None:
            raise ConflictError(duplicate_production_date(production_date))

        fields = self._entry_fields(production_date, gravel_cft, clay_dust_percent, notes)
        entry_id = self.db.create_daily_production(**fields)
        logger.debug(
            "Recorded production for %s: gravel %s, net %s",
            production_date,
            fields["gravel_cft"],
            fields["net_aggregate_cft"],
        )
        return entry_id

    def update_daily_entry(
        self,
        entry_id: int,
        production_date: Optional[date],
        gravel_cft,
        clay_dust_percent=None,
        notes: Optional[str] = None,
    ) -> None:
        """Replace a daily entry and recompute its derived figures.

        Raises:
            NotFoundError: If the entry does not exist
            ConflictError: If another entry already uses the new date
            ValidationError: If the date is missing or figures are out of range
        """
        if self.db.get_daily_production(entry_id) is None:
            raise NotFoundError(production_entry_not_found(entry_id))
        if production_date is None:
            raise ValidationError("production_date", "is required")

        other = self.db.get_daily_production_by_date(production_date)
        if other is not None and other.id != entry_id:
            raise ConflictError(duplicate_production_date(production_date))

        fields = self._entry_fields(production_date, gravel_cft, clay_dust_percent, notes)
        self.db.replace_daily_production(entry_id, fields)
        logger.debug("Updated production entry %s", entry_id)

    def delete_daily_entry(self, entry_id: int) -> None:
        """Delete a daily entry.

        Raises:
            NotFoundError: If the entry does not exist
        """
        if self.db.get_daily_production(entry_id) is None:
            raise NotFoundError(production_entry_not_found(entry_id))
        self.db.delete_daily_production(entry_id)

    def get_daily_entry(self, entry_id: int) -> Optional[DailyProductionEntry]:
        return self.db.get_daily_production(entry_id)

    def list_daily_entries(self, period_filter: Optional[PeriodFilter] = None) -> list[DailyProductionEntry]:
        """List daily entries in date order, optionally for a month/year."""
        period_filter = period_filter or PeriodFilter()
        start_date, end_date = period_filter.date_range()
        entries = self.db.list_daily_production(start_date=start_date, end_date=end_date)
        return [entry for entry in entries if period_filter.matches(entry.production_date)]

    def get_live_totals(self, period: Period) -> LiveProductionTotals:
        """Sum the current daily entries of a month."""
        entries = self.db.list_daily_production(start_date=period.first_day, end_date=period.last_day)
        return LiveProductionTotals(
            period=period,
            entry_count=len(entries),
            gravel_cft=sum((entry.gravel_cft for entry in entries), ZERO),
            clay_dust_cft=sum((entry.clay_dust_cft for entry in entries), ZERO),
            net_aggregate_cft=sum((entry.net_aggregate_cft for entry in entries), ZERO),
        )

    def save_monthly_sales(
        self, period: Period, inputs: MonthlySalesInputs, net_produced_for_period
    ) -> MonthlySalesSnapshot:
        """Reconcile a month's sales and store the snapshot.

        Saving again for the same year and month overwrites the stored
        snapshot in place, including the frozen net production figure.
        """
        snapshot = reconcile_monthly_sales(period, inputs, net_produced_for_period)
        columns = snapshot_to_columns(snapshot)

        existing = self.db.get_monthly_summary(period.year, period.month_name)
        if existing is None:
            try:
                self.db.create_monthly_summary(columns)
                logger.info("Saved monthly sales summary for %s", period.label)
                return snapshot
            except ConflictError:
                # Another save created the row after our read.
                existing = self.db.get_monthly_summary(period.year, period.month_name)
        self.db.update_monthly_summary(existing.id, columns)
        logger.info("Updated monthly sales summary for %s", period.label)
        return snapshot

    def get_monthly_snapshot(self, period: Period) -> Optional[MonthlySalesSnapshot]:
        """Stored snapshot for a month, or None if none was saved."""
        summary = self.db.get_monthly_summary(period.year, period.month_name)
        return summary.snapshot if summary is not None else None

    def list_monthly_snapshots(self, year: Optional[int] = None) -> list[MonthlySalesSnapshot]:
        """Stored snapshots in chronological order."""
        return [summary.snapshot for summary in self.db.list_monthly_summaries(summary_year=year)]

    def _entry_fields(self, production_date: date, gravel_cft, clay_dust_percent, notes) -> dict:
        reconciliation = reconcile_daily(gravel_cft, clay_dust_percent)
        percent = DEFAULT_CLAY_DUST_PERCENT if clay_dust_percent is None else Decimal(str(clay_dust_percent))
        return {
            "production_date": production_date,
            "day_name": production_date.strftime("%A"),
            "gravel_cft": require_decimal("gravel_cft", gravel_cft),
            "clay_dust_percent": percent,
            "clay_dust_cft": reconciliation.clay_dust_cft,
            "net_aggregate_cft": reconciliation.net_aggregate_cft,
            "notes": notes,
        }
