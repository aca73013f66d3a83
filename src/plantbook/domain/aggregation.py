"""Monthly aggregation of cost records.

Every cost record is folded into the bucket of the calendar month its
``record_date`` falls in. Misc sub-amounts of excavator, loader and dumper
records are carried in parallel ``*_misc`` fields and never enter ``total``;
``grand_total`` adds them back. General misc expenses (``misc_exp``) are kept
for reference only and enter neither total.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Sequence

from plantbook.database.base import Database
from plantbook.domain.entities import (
    ZERO,
    Equipment,
    EquipmentType,
    RecordCategory,
    TransactionRecord,
)
from plantbook.domain.periods import Period, PeriodFilter

logger = logging.getLogger(__name__)


def to_amount(value) -> Decimal:
    """Coerce a stored numeric field to Decimal; missing or malformed is zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ZERO
    return amount if amount.is_finite() else ZERO


@dataclass
class DumperTotals:
    """Trip amount and misc amount for one dumper in one month."""

    amount: Decimal = ZERO
    misc: Decimal = ZERO


@dataclass
class MonthlyBucket:
    """Per-category cost figures for one month."""

    period: Period
    generator: Decimal = ZERO
    excavator: Decimal = ZERO
    excavator_misc: Decimal = ZERO
    loaders: Decimal = ZERO
    loaders_misc: Decimal = ZERO
    dumpers: dict[int, DumperTotals] = field(default_factory=dict)
    blasting: Decimal = ZERO
    langar: Decimal = ZERO
    plant_exp: Decimal = ZERO
    human_res: Decimal = ZERO
    misc_exp: Decimal = ZERO

    @property
    def key(self) -> str:
        return self.period.key

    @property
    def dumper_total(self) -> Decimal:
        return sum((totals.amount for totals in self.dumpers.values()), ZERO)

    @property
    def dumper_misc_total(self) -> Decimal:
        return sum((totals.misc for totals in self.dumpers.values()), ZERO)

    @property
    def total(self) -> Decimal:
        """Operational total; excludes every misc field."""
        return (
            self.generator
            + self.excavator
            + self.loaders
            + self.dumper_total
            + self.blasting
            + self.langar
            + self.plant_exp
            + self.human_res
        )

    @property
    def misc_total(self) -> Decimal:
        return self.excavator_misc + self.loaders_misc + self.dumper_misc_total

    @property
    def grand_total(self) -> Decimal:
        return self.total + self.misc_total


class DumperRegistry:
    """Lookup of registered dumpers by id, falling back to display name."""

    def __init__(self, dumpers: Iterable[Equipment]):
        self.dumpers = tuple(dumpers)
        self._by_id = {dumper.id: dumper for dumper in self.dumpers}
        self._by_name = {dumper.equipment_name: dumper for dumper in self.dumpers}

    @property
    def ids(self) -> list[int]:
        return [dumper.id for dumper in self.dumpers]

    def resolve(self, equipment_id: Optional[int], name: Optional[str]) -> Optional[Equipment]:
        if equipment_id is not None and equipment_id in self._by_id:
            return self._by_id[equipment_id]
        if name:
            return self._by_name.get(name)
        return None

    def new_bucket(self, period: Period) -> MonthlyBucket:
        return MonthlyBucket(
            period=period,
            dumpers={dumper_id: DumperTotals() for dumper_id in self.ids},
        )


@dataclass(frozen=True)
class MonthlyAggregation:
    """Result of folding records into monthly buckets."""

    buckets: dict[Period, MonthlyBucket]
    dumpers: tuple[Equipment, ...]
    unattributed: tuple[TransactionRecord, ...] = ()

    def periods(self) -> list[Period]:
        """Bucket periods, newest first."""
        return sorted(self.buckets, reverse=True)

    def bucket_for(self, period: Period) -> MonthlyBucket:
        """Bucket for a period, or an empty one if nothing was recorded."""
        bucket = self.buckets.get(period)
        if bucket is None:
            bucket = DumperRegistry(self.dumpers).new_bucket(period)
        return bucket

    @property
    def total(self) -> Decimal:
        return sum((bucket.total for bucket in self.buckets.values()), ZERO)

    @property
    def grand_total(self) -> Decimal:
        return sum((bucket.grand_total for bucket in self.buckets.values()), ZERO)


def _add_to_bucket(
    bucket: MonthlyBucket, record: TransactionRecord, registry: DumperRegistry
) -> bool:
    """Add one record to its bucket. Returns False on a dumper attribution miss."""
    amount = to_amount(record.amount)
    category = record.category

    if category == RecordCategory.GENERATOR:
        bucket.generator += amount
    elif category == RecordCategory.EXCAVATOR:
        bucket.excavator += amount
        bucket.excavator_misc += to_amount(record.misc_amount)
    elif category == RecordCategory.LOADER:
        bucket.loaders += amount
        bucket.loaders_misc += to_amount(record.misc_amount)
    elif category == RecordCategory.DUMPER:
        dumper = registry.resolve(record.equipment_id, record.dumper_name)
        if dumper is None:
            return False
        totals = bucket.dumpers.setdefault(dumper.id, DumperTotals())
        totals.amount += amount
        totals.misc += to_amount(record.misc_amount)
    elif category == RecordCategory.DUMPER_MISC:
        dumper = registry.resolve(record.dumper_id, record.dumper_name)
        if dumper is None:
            return False
        bucket.dumpers.setdefault(dumper.id, DumperTotals()).misc += amount
    elif category == RecordCategory.BLASTING:
        bucket.blasting += amount
    elif category == RecordCategory.LANGAR:
        bucket.langar += amount
    elif category == RecordCategory.PLANT:
        bucket.plant_exp += amount
    elif category == RecordCategory.MISC:
        bucket.misc_exp += amount
    elif category == RecordCategory.SALARY:
        bucket.human_res += amount
    return True


def aggregate_records(
    records: Iterable[TransactionRecord],
    dumpers: Sequence[Equipment],
    period_filter: Optional[PeriodFilter] = None,
) -> MonthlyAggregation:
    """Bucket cost records by calendar month.

    Args:
        records: Cost records of any category
        dumpers: Currently registered dumpers; one bucket slot is created for each
        period_filter: Optional month/year restriction applied per record

    Returns:
        MonthlyAggregation keyed by Period. Dumper records that match no
        registered dumper are listed in ``unattributed`` and counted nowhere.
        Such a record still opens the bucket for its month, so a month holding
        only unattributed records appears in ``periods()`` with zero totals.
    """
    registry = DumperRegistry(dumpers)
    period_filter = period_filter or PeriodFilter()
    buckets: dict[Period, MonthlyBucket] = {}
    unattributed: list[TransactionRecord] = []

    for record in records:
        record_date: Optional[date] = record.record_date
        if record_date is None:
            continue
        if not period_filter.matches(record_date):
            continue

        period = Period.from_date(record_date)
        bucket = buckets.get(period)
        if bucket is None:
            bucket = buckets[period] = registry.new_bucket(period)

        if not _add_to_bucket(bucket, record, registry):
            unattributed.append(record)

    if unattributed:
        logger.warning(
            "%d dumper record(s) match no registered dumper and were left out of the totals: %s",
            len(unattributed),
            ", ".join(str(record.id) for record in unattributed),
        )

    return MonthlyAggregation(
        buckets=buckets,
        dumpers=registry.dumpers,
        unattributed=tuple(unattributed),
    )


class AggregationService:
    """Service that loads records from the store and aggregates them."""

    def __init__(self, db: Database):
        """Initialize aggregation service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_dumpers(self) -> list[Equipment]:
        return self.db.list_equipment(equipment_type=EquipmentType.DUMPER.value)

    def aggregate(
        self,
        period_filter: Optional[PeriodFilter] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> MonthlyAggregation:
        """Aggregate stored records, optionally restricted to a month/year.

        Args:
            period_filter: Optional month/year filter
            start_date: Optional first record date to load
            end_date: Optional last record date to load

        Returns:
            MonthlyAggregation for the matching records
        """
        period_filter = period_filter or PeriodFilter()
        filter_start, filter_end = period_filter.date_range()
        if filter_start is not None and (start_date is None or filter_start > start_date):
            start_date = filter_start
        if filter_end is not None and (end_date is None or filter_end < end_date):
            end_date = filter_end
        records = self.db.list_records(start_date=start_date, end_date=end_date)
        return aggregate_records(records, self.list_dumpers(), period_filter)

    def bucket_for(self, period: Period) -> MonthlyBucket:
        """Aggregate a single month."""
        aggregation = self.aggregate(PeriodFilter(month=period.month, year=period.year))
        return aggregation.bucket_for(period)
