"""Profit sharing domain service."""

import logging
from decimal import Decimal
from typing import Optional

from plantbook.database.base import Database
from plantbook.database.mappers import profit_sharing_to_columns
from plantbook.domain.aggregation import AggregationService
from plantbook.domain.entities import PartnerShares, ProfitSharingRecord, ProfitSharingResult
from plantbook.domain.errors import ConflictError, NotFoundError, ValidationError, snapshot_not_found
from plantbook.domain.periods import Period
from plantbook.domain.production import quantize_figure
from plantbook.domain.validation import HUNDRED, require_decimal, require_percent

logger = logging.getLogger(__name__)

TWO = Decimal("2")


def validate_shares(shares: PartnerShares) -> PartnerShares:
    """Check that both shares are percentages adding up to exactly 100.

    Returns:
        PartnerShares with Decimal values

    Raises:
        ValidationError: If a share is outside 0-100 or the shares do not sum to 100
    """
    partner_a = require_percent("partner_a_percent", shares.partner_a_percent)
    partner_b = require_percent("partner_b_percent", shares.partner_b_percent)
    if partner_a + partner_b != HUNDRED:
        raise ValidationError(
            "shares",
            f"partner shares must total 100, got {partner_a + partner_b}",
        )
    return PartnerShares(
        partner_a_percent=quantize_figure(partner_a),
        partner_b_percent=quantize_figure(partner_b),
    )


def calculate_profit_sharing(
    period: Period, total_expense, total_revenue, shares: PartnerShares
) -> ProfitSharingResult:
    """Split a month's net profit between the two partners.

    A loss is split the same way, giving negative partner amounts. Each
    partner's sub amount is half of that partner's amount. Amounts are rounded
    to four decimal places; partner B takes the remainder so the two amounts
    always add up to the net profit.

    Args:
        period: Month being settled
        total_expense: Operational expense total of the month
        total_revenue: Total revenue from the month's sales snapshot
        shares: Partner split in percent

    Returns:
        ProfitSharingResult

    Raises:
        ValidationError: If the shares are invalid
    """
    shares = validate_shares(shares)
    expense = quantize_figure(require_decimal("total_expense", total_expense))
    revenue = quantize_figure(require_decimal("total_revenue", total_revenue))

    net_profit = revenue - expense
    partner_a_amount = quantize_figure(net_profit * shares.partner_a_percent / HUNDRED)
    partner_b_amount = net_profit - partner_a_amount

    return ProfitSharingResult(
        period=period,
        total_revenue=revenue,
        total_expense=expense,
        net_profit=net_profit,
        shares=shares,
        partner_a_amount=partner_a_amount,
        partner_b_amount=partner_b_amount,
        partner_a_sub_amount=quantize_figure(partner_a_amount / TWO),
        partner_b_sub_amount=quantize_figure(partner_b_amount / TWO),
    )


class ProfitSharingService:
    """Service for calculating and storing monthly profit splits."""

    def __init__(self, db: Database):
        """Initialize profit sharing service.

        Args:
            db: Database instance
        """
        self.db = db
        self.aggregation = AggregationService(db)

    def calculate_for_period(self, period: Period, shares: Optional[PartnerShares] = None) -> ProfitSharingResult:
        """Calculate a month's split from stored costs and its saved sales snapshot.

        Args:
            period: Month to settle
            shares: Partner split; 50/50 when not given

        Returns:
            ProfitSharingResult (not saved)

        Raises:
            NotFoundError: If no monthly sales snapshot was saved for the month
            ValidationError: If the shares are invalid
        """
        summary = self.db.get_monthly_summary(period.year, period.month_name)
        if summary is None:
            raise NotFoundError(snapshot_not_found(period.label))

        total_expense = self.aggregation.bucket_for(period).total
        return calculate_profit_sharing(
            period,
            total_expense=total_expense,
            total_revenue=summary.snapshot.total_revenue,
            shares=shares or PartnerShares(),
        )

    def save(self, result: ProfitSharingResult) -> None:
        """Store a result, overwriting any earlier one for the same month."""
        columns = profit_sharing_to_columns(result)
        existing = self.db.get_profit_sharing(result.period.year, result.period.month_name)
        if existing is None:
            try:
                self.db.create_profit_sharing(columns)
                logger.info("Saved profit sharing for %s", result.period.label)
                return
            except ConflictError:
                existing = self.db.get_profit_sharing(result.period.year, result.period.month_name)
        self.db.update_profit_sharing(existing.id, columns)
        logger.info("Updated profit sharing for %s", result.period.label)

    def get(self, period: Period) -> Optional[ProfitSharingRecord]:
        return self.db.get_profit_sharing(period.year, period.month_name)

    def list_records(self, year: Optional[int] = None) -> list[ProfitSharingRecord]:
        """Stored profit splits in chronological order."""
        return self.db.list_profit_sharing(period_year=year)
