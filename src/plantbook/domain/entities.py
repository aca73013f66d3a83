"""Domain model entities for plantbook.

These are pure data classes representing business concepts, independent of
database schema. Transaction records keep the date field name each kind of
entry uses in the plant's registers (operation date, trip date, purchase date
and so on) and expose it uniformly through ``record_date``.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Optional

from plantbook.domain.periods import Period, parse_salary_month

ZERO = Decimal("0")
DEFAULT_CLAY_DUST_PERCENT = Decimal("33.33")
DEFAULT_ALLOWANCE_PERCENT = Decimal("15")


class EquipmentType(str, Enum):
    """Kinds of equipment kept in the equipment register."""

    GENERATOR = "GENERATOR"
    EXCAVATOR = "EXCAVATOR"
    LOADER = "LOADER"
    DUMPER = "DUMPER"


class RecordCategory(str, Enum):
    """Categories of cost records held by the record store."""

    GENERATOR = "generator"
    EXCAVATOR = "excavator"
    LOADER = "loader"
    DUMPER = "dumper"
    DUMPER_MISC = "dumper_misc"
    BLASTING = "blasting"
    LANGAR = "langar"
    PLANT = "plant"
    MISC = "misc"
    SALARY = "salary"

    @property
    def tracks_misc(self) -> bool:
        """Whether records of this category carry a misc sub-amount."""
        return self in (RecordCategory.EXCAVATOR, RecordCategory.LOADER, RecordCategory.DUMPER)

    @property
    def equipment_type(self) -> Optional[EquipmentType]:
        """Equipment type a record of this category refers to, if any."""
        return {
            RecordCategory.GENERATOR: EquipmentType.GENERATOR,
            RecordCategory.EXCAVATOR: EquipmentType.EXCAVATOR,
            RecordCategory.LOADER: EquipmentType.LOADER,
            RecordCategory.DUMPER: EquipmentType.DUMPER,
            RecordCategory.DUMPER_MISC: EquipmentType.DUMPER,
        }.get(self)


@dataclass(frozen=True)
class Equipment:
    """Equipment register entry."""

    id: int
    equipment_code: str
    equipment_name: str
    equipment_type: EquipmentType
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class ExpenseCategory:
    """Reference label for langar, plant and misc expense entries."""

    id: int
    category_code: str
    category_name: str
    description: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class TransactionRecord:
    """Base for every dated cost record."""

    category: ClassVar[RecordCategory]
    date_field: ClassVar[str]

    id: int
    amount: Decimal

    @property
    def record_date(self) -> Optional[date]:
        """Date that decides which month the record is counted in."""
        return getattr(self, self.date_field)

    @property
    def misc_amount(self) -> Decimal:
        return ZERO


@dataclass(frozen=True)
class GeneratorOperation(TransactionRecord):
    category: ClassVar[RecordCategory] = RecordCategory.GENERATOR
    date_field: ClassVar[str] = "operation_date"

    operation_date: Optional[date] = None
    equipment_id: Optional[int] = None
    remarks: Optional[str] = None


@dataclass(frozen=True)
class ExcavatorOperation(TransactionRecord):
    category: ClassVar[RecordCategory] = RecordCategory.EXCAVATOR
    date_field: ClassVar[str] = "operation_date"

    operation_date: Optional[date] = None
    equipment_id: Optional[int] = None
    misc_expense: Decimal = ZERO
    remarks: Optional[str] = None

    @property
    def misc_amount(self) -> Decimal:
        return self.misc_expense


@dataclass(frozen=True)
class LoaderOperation(TransactionRecord):
    category: ClassVar[RecordCategory] = RecordCategory.LOADER
    date_field: ClassVar[str] = "operation_date"

    operation_date: Optional[date] = None
    equipment_id: Optional[int] = None
    misc_expense: Decimal = ZERO
    remarks: Optional[str] = None

    @property
    def misc_amount(self) -> Decimal:
        return self.misc_expense


@dataclass(frozen=True)
class DumperOperation(TransactionRecord):
    """Dumper trip entry; ``amount`` is the trip amount."""

    category: ClassVar[RecordCategory] = RecordCategory.DUMPER
    date_field: ClassVar[str] = "trip_date"

    trip_date: Optional[date] = None
    equipment_id: Optional[int] = None
    dumper_name: Optional[str] = None
    misc_expense: Decimal = ZERO
    remarks: Optional[str] = None

    @property
    def misc_amount(self) -> Decimal:
        return self.misc_expense


@dataclass(frozen=True)
class DumperMiscExpense(TransactionRecord):
    """Stand-alone misc expense booked against a dumper."""

    category: ClassVar[RecordCategory] = RecordCategory.DUMPER_MISC
    date_field: ClassVar[str] = "expense_date"

    expense_date: Optional[date] = None
    dumper_id: Optional[int] = None
    dumper_name: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class BlastingMaterialPurchase(TransactionRecord):
    category: ClassVar[RecordCategory] = RecordCategory.BLASTING
    date_field: ClassVar[str] = "purchase_date"

    purchase_date: Optional[date] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class LangarExpense(TransactionRecord):
    category: ClassVar[RecordCategory] = RecordCategory.LANGAR
    date_field: ClassVar[str] = "expense_date"

    expense_date: Optional[date] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class PlantExpense(TransactionRecord):
    category: ClassVar[RecordCategory] = RecordCategory.PLANT
    date_field: ClassVar[str] = "expense_date"

    expense_date: Optional[date] = None
    expense_category: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class MiscExpense(TransactionRecord):
    category: ClassVar[RecordCategory] = RecordCategory.MISC
    date_field: ClassVar[str] = "expense_date"

    expense_date: Optional[date] = None
    expense_category: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class SalaryRecord(TransactionRecord):
    """Salary paid for a "YYYY-MM" period; ``amount`` is the net salary."""

    category: ClassVar[RecordCategory] = RecordCategory.SALARY
    date_field: ClassVar[str] = "salary_month"

    salary_month: Optional[str] = None
    employee_name: Optional[str] = None

    @property
    def record_date(self) -> Optional[date]:
        return parse_salary_month(self.salary_month)


RECORD_TYPES: dict[RecordCategory, type[TransactionRecord]] = {
    record_type.category: record_type
    for record_type in (
        GeneratorOperation,
        ExcavatorOperation,
        LoaderOperation,
        DumperOperation,
        DumperMiscExpense,
        BlastingMaterialPurchase,
        LangarExpense,
        PlantExpense,
        MiscExpense,
        SalaryRecord,
    )
}


@dataclass(frozen=True)
class DailyProductionEntry:
    """One day's crusher production."""

    id: int
    production_date: date
    day_name: str
    gravel_cft: Decimal
    clay_dust_percent: Decimal
    clay_dust_cft: Decimal
    net_aggregate_cft: Decimal
    notes: Optional[str]


@dataclass(frozen=True)
class DailyReconciliation:
    """Derived daily figures for a gravel input."""

    clay_dust_cft: Decimal
    aggregate_produced: Decimal
    net_aggregate_cft: Decimal


@dataclass(frozen=True)
class LiveProductionTotals:
    """Production totals recomputed from the current daily entries.

    Never stored; compare with ``MonthlySalesSnapshot``, which freezes the net
    production figure at the time a month's sales were saved.
    """

    period: Period
    entry_count: int
    gravel_cft: Decimal
    clay_dust_cft: Decimal
    net_aggregate_cft: Decimal


@dataclass(frozen=True)
class MonthlySalesInputs:
    """Operator-entered sales figures for one month."""

    sold_qty: Decimal
    sold_amount: Decimal
    approx_stock_rate: Decimal
    allowance_percent: Decimal = DEFAULT_ALLOWANCE_PERCENT


@dataclass(frozen=True)
class MonthlySalesSnapshot:
    """Frozen monthly production -> sales -> stock reconciliation."""

    period: Period
    net_produced_for_period: Decimal
    sold_qty: Decimal
    sold_amount: Decimal
    approx_stock_rate: Decimal
    allowance_percent: Decimal
    total_produced_raw: Decimal
    allowance_deduction: Decimal
    total_produced: Decimal
    remaining_stock: Decimal
    per_unit_selling_price: Decimal
    stock_value: Decimal
    total_revenue: Decimal


@dataclass(frozen=True)
class MonthlyProductionSummary:
    """Stored monthly sales snapshot, one per (year, month name)."""

    id: int
    summary_year: int
    summary_month: str
    snapshot: MonthlySalesSnapshot
    updated_at: datetime


@dataclass(frozen=True)
class PartnerShares:
    """Profit split between the two partners, in percent."""

    partner_a_percent: Decimal = Decimal("50")
    partner_b_percent: Decimal = Decimal("50")


@dataclass(frozen=True)
class ProfitSharingResult:
    """Profit split for one month."""

    period: Period
    total_revenue: Decimal
    total_expense: Decimal
    net_profit: Decimal
    shares: PartnerShares
    partner_a_amount: Decimal
    partner_b_amount: Decimal
    partner_a_sub_amount: Decimal
    partner_b_sub_amount: Decimal


@dataclass(frozen=True)
class ProfitSharingRecord:
    """Stored profit split, one per (period_month, period_year)."""

    id: int
    period_month: str
    period_year: int
    result: ProfitSharingResult
    updated_at: datetime
