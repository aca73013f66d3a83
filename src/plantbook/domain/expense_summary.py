"""Expense summary domain service.

Turns monthly buckets into the figures shown on the monthly and yearly
expense summaries: one amount per category (one per dumper), grouped
subtotals and the misc figures kept for reference.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence

from plantbook.database.base import Database
from plantbook.domain.aggregation import AggregationService, MonthlyAggregation, MonthlyBucket
from plantbook.domain.entities import ZERO, Equipment
from plantbook.domain.periods import Period, PeriodFilter
from plantbook.domain.production import round_half_up

GENERAL_MISC_LABEL = "Misc Expenses"
EQUIPMENT_LABELS = ("Generator", "Excavator", "Loaders")
OPERATING_LABELS = ("Blasting", "Langar", "Plant Exp", "HR Salaries")


@dataclass(frozen=True)
class ExpenseSummary:
    """Summary figures for one month."""

    period: Period
    per_category: dict[str, Decimal]
    groups: dict[str, Decimal]
    misc: dict[str, Decimal]
    total: Decimal
    misc_total: Decimal
    grand_total: Decimal


@dataclass(frozen=True)
class YearlySummary:
    """Month rows of one year with their combined figures."""

    year: int
    months: tuple[ExpenseSummary, ...]
    total: Decimal
    misc_total: Decimal
    grand_total: Decimal
    average_monthly_grand_total: Decimal

    @property
    def month_count(self) -> int:
        return len(self.months)


def _dumper_labels(bucket: MonthlyBucket, dumpers: Sequence[Equipment]) -> list[tuple[int, str]]:
    # Fixed category labels are taken first; a dumper sharing one gets its code appended.
    labels: list[tuple[int, str]] = []
    used: set[str] = set(EQUIPMENT_LABELS + OPERATING_LABELS)
    known = {dumper.id: dumper for dumper in dumpers}

    ordered_ids = [dumper.id for dumper in dumpers]
    ordered_ids += [dumper_id for dumper_id in bucket.dumpers if dumper_id not in known]

    for dumper_id in ordered_ids:
        dumper = known.get(dumper_id)
        if dumper is None:
            label = f"Dumper #{dumper_id}"
        else:
            label = dumper.equipment_name
            if label in used:
                label = f"{dumper.equipment_name} ({dumper.equipment_code})"
        used.add(label)
        labels.append((dumper_id, label))
    return labels


def summarize(bucket: MonthlyBucket, dumpers: Sequence[Equipment] = ()) -> ExpenseSummary:
    """Build the summary figures for one month's bucket.

    Args:
        bucket: Aggregated month
        dumpers: Registered dumpers, used for display names and column order

    Returns:
        ExpenseSummary whose ``total`` excludes every misc figure
    """
    dumper_labels = _dumper_labels(bucket, dumpers)

    per_category: dict[str, Decimal] = dict(
        zip(EQUIPMENT_LABELS, (bucket.generator, bucket.excavator, bucket.loaders))
    )
    misc: dict[str, Decimal] = {
        "Excavator Misc": bucket.excavator_misc,
        "Loaders Misc": bucket.loaders_misc,
    }
    for dumper_id, label in dumper_labels:
        totals = bucket.dumpers.get(dumper_id)
        per_category[label] = totals.amount if totals else ZERO
        misc[f"{label} Misc"] = totals.misc if totals else ZERO
    per_category.update(
        zip(OPERATING_LABELS, (bucket.blasting, bucket.langar, bucket.plant_exp, bucket.human_res))
    )
    misc[GENERAL_MISC_LABEL] = bucket.misc_exp

    groups = {
        "Equipment": bucket.generator + bucket.excavator + bucket.loaders,
        "Dumpers": bucket.dumper_total,
        "Blasting": bucket.blasting,
        "Operating": bucket.langar + bucket.plant_exp,
        "HR Salaries": bucket.human_res,
    }

    return ExpenseSummary(
        period=bucket.period,
        per_category=per_category,
        groups=groups,
        misc=misc,
        total=bucket.total,
        misc_total=bucket.misc_total,
        grand_total=bucket.grand_total,
    )


def summarize_year(
    aggregation: MonthlyAggregation, year: int, dumpers: Optional[Sequence[Equipment]] = None
) -> YearlySummary:
    """Summarize every month of a year that has recorded costs.

    Args:
        aggregation: Aggregated records; months of other years are ignored
        year: Calendar year
        dumpers: Registered dumpers; defaults to the ones the aggregation used

    Returns:
        YearlySummary with month rows in ascending order
    """
    if dumpers is None:
        dumpers = aggregation.dumpers

    months = tuple(
        summarize(aggregation.buckets[period], dumpers)
        for period in sorted(aggregation.buckets)
        if period.year == year
    )
    total = sum((month.total for month in months), ZERO)
    misc_total = sum((month.misc_total for month in months), ZERO)
    grand_total = sum((month.grand_total for month in months), ZERO)
    average = round_half_up(grand_total / len(months)) if months else ZERO

    return YearlySummary(
        year=year,
        months=months,
        total=total,
        misc_total=misc_total,
        grand_total=grand_total,
        average_monthly_grand_total=average,
    )


class ExpenseSummaryService:
    """Service for building expense summaries from stored records."""

    def __init__(self, db: Database):
        """Initialize expense summary service.

        Args:
            db: Database instance
        """
        self.db = db
        self.aggregation = AggregationService(db)

    def monthly(self, period: Period) -> ExpenseSummary:
        """Expense summary for one month."""
        return summarize(self.aggregation.bucket_for(period), self.aggregation.list_dumpers())

    def yearly(self, year: int) -> YearlySummary:
        """Expense summary for every month of a year."""
        aggregation = self.aggregation.aggregate(PeriodFilter(year=year))
        return summarize_year(aggregation, year)
