"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic. All record categories share one
table; ``record_to_domain`` rebuilds the category-specific entity from it.
"""

from decimal import Decimal

from plantbook.domain import entities as domain
from plantbook.domain.entities import RecordCategory
from plantbook.domain.periods import Period
from plantbook.database.models import (
    Equipment as ORMEquipment,
    ExpenseCategory as ORMExpenseCategory,
    TransactionRecord as ORMTransactionRecord,
    DailyProduction as ORMDailyProduction,
    MonthlyProductionSummary as ORMMonthlyProductionSummary,
    ProfitSharing as ORMProfitSharing,
)


def _decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    return value if isinstance(value, Decimal) else Decimal(str(value))


def equipment_to_domain(orm_equipment: ORMEquipment) -> domain.Equipment:
    """Convert SQLAlchemy Equipment model to domain Equipment entity."""
    return domain.Equipment(
        id=orm_equipment.id,
        equipment_code=orm_equipment.equipment_code,
        equipment_name=orm_equipment.equipment_name,
        equipment_type=domain.EquipmentType(orm_equipment.equipment_type),
        is_active=orm_equipment.is_active,
        created_at=orm_equipment.created_at,
    )


def expense_category_to_domain(orm_category: ORMExpenseCategory) -> domain.ExpenseCategory:
    """Convert SQLAlchemy ExpenseCategory model to domain ExpenseCategory entity."""
    return domain.ExpenseCategory(
        id=orm_category.id,
        category_code=orm_category.category_code,
        category_name=orm_category.category_name,
        description=orm_category.description,
        created_at=orm_category.created_at,
    )


def record_to_domain(orm_record: ORMTransactionRecord) -> domain.TransactionRecord:
    """Convert a transaction_records row to its category-specific entity."""
    category = RecordCategory(orm_record.category)
    amount = _decimal(orm_record.amount)
    misc = _decimal(orm_record.misc_expense)

    if category == RecordCategory.GENERATOR:
        return domain.GeneratorOperation(
            id=orm_record.id,
            amount=amount,
            operation_date=orm_record.record_date,
            equipment_id=orm_record.equipment_id,
            remarks=orm_record.description,
        )
    if category == RecordCategory.EXCAVATOR:
        return domain.ExcavatorOperation(
            id=orm_record.id,
            amount=amount,
            operation_date=orm_record.record_date,
            equipment_id=orm_record.equipment_id,
            misc_expense=misc,
            remarks=orm_record.description,
        )
    if category == RecordCategory.LOADER:
        return domain.LoaderOperation(
            id=orm_record.id,
            amount=amount,
            operation_date=orm_record.record_date,
            equipment_id=orm_record.equipment_id,
            misc_expense=misc,
            remarks=orm_record.description,
        )
    if category == RecordCategory.DUMPER:
        return domain.DumperOperation(
            id=orm_record.id,
            amount=amount,
            trip_date=orm_record.record_date,
            equipment_id=orm_record.equipment_id,
            dumper_name=orm_record.equipment_name,
            misc_expense=misc,
            remarks=orm_record.description,
        )
    if category == RecordCategory.DUMPER_MISC:
        return domain.DumperMiscExpense(
            id=orm_record.id,
            amount=amount,
            expense_date=orm_record.record_date,
            dumper_id=orm_record.equipment_id,
            dumper_name=orm_record.equipment_name,
            description=orm_record.description,
        )
    if category == RecordCategory.BLASTING:
        return domain.BlastingMaterialPurchase(
            id=orm_record.id,
            amount=amount,
            purchase_date=orm_record.record_date,
            description=orm_record.description,
        )
    if category == RecordCategory.LANGAR:
        return domain.LangarExpense(
            id=orm_record.id,
            amount=amount,
            expense_date=orm_record.record_date,
            description=orm_record.description,
        )
    if category in (RecordCategory.PLANT, RecordCategory.MISC):
        record_type = domain.PlantExpense if category == RecordCategory.PLANT else domain.MiscExpense
        return record_type(
            id=orm_record.id,
            amount=amount,
            expense_date=orm_record.record_date,
            expense_category=orm_record.expense_category,
            description=orm_record.description,
        )
    return domain.SalaryRecord(
        id=orm_record.id,
        amount=amount,
        salary_month=orm_record.salary_month,
        employee_name=orm_record.employee_name,
    )


def daily_production_to_domain(orm_entry: ORMDailyProduction) -> domain.DailyProductionEntry:
    """Convert SQLAlchemy DailyProduction model to domain entity."""
    return domain.DailyProductionEntry(
        id=orm_entry.id,
        production_date=orm_entry.production_date,
        day_name=orm_entry.day_name,
        gravel_cft=_decimal(orm_entry.gravel_cft),
        clay_dust_percent=_decimal(orm_entry.clay_dust_percent),
        clay_dust_cft=_decimal(orm_entry.clay_dust_cft),
        net_aggregate_cft=_decimal(orm_entry.net_aggregate_cft),
        notes=orm_entry.notes,
    )


def monthly_summary_to_domain(
    orm_summary: ORMMonthlyProductionSummary,
) -> domain.MonthlyProductionSummary:
    """Convert SQLAlchemy MonthlyProductionSummary model to domain entity."""
    period = Period.from_month_name(orm_summary.summary_year, orm_summary.summary_month)
    snapshot = domain.MonthlySalesSnapshot(
        period=period,
        net_produced_for_period=_decimal(orm_summary.total_net_aggregate_cft),
        sold_qty=_decimal(orm_summary.sold_at_site_cft),
        sold_amount=_decimal(orm_summary.sold_at_site_amount),
        approx_stock_rate=_decimal(orm_summary.approx_per_cft_cost),
        allowance_percent=_decimal(orm_summary.allowance_percent),
        total_produced_raw=_decimal(orm_summary.total_produced_raw),
        allowance_deduction=_decimal(orm_summary.allowance_deduction),
        total_produced=_decimal(orm_summary.total_produced),
        remaining_stock=_decimal(orm_summary.stock_at_site_cft),
        per_unit_selling_price=_decimal(orm_summary.per_cft_cost),
        stock_value=_decimal(orm_summary.cost_of_stocked_material),
        total_revenue=_decimal(orm_summary.total_revenue),
    )
    return domain.MonthlyProductionSummary(
        id=orm_summary.id,
        summary_year=orm_summary.summary_year,
        summary_month=orm_summary.summary_month,
        snapshot=snapshot,
        updated_at=orm_summary.updated_at,
    )


def snapshot_to_columns(snapshot: domain.MonthlySalesSnapshot) -> dict:
    """Flatten a monthly sales snapshot into monthly_production_summary columns."""
    return {
        "summary_month": snapshot.period.month_name,
        "summary_year": snapshot.period.year,
        "total_net_aggregate_cft": snapshot.net_produced_for_period,
        "sold_at_site_cft": snapshot.sold_qty,
        "sold_at_site_amount": snapshot.sold_amount,
        "approx_per_cft_cost": snapshot.approx_stock_rate,
        "allowance_percent": snapshot.allowance_percent,
        "total_produced_raw": snapshot.total_produced_raw,
        "allowance_deduction": snapshot.allowance_deduction,
        "total_produced": snapshot.total_produced,
        "stock_at_site_cft": snapshot.remaining_stock,
        "per_cft_cost": snapshot.per_unit_selling_price,
        "cost_of_stocked_material": snapshot.stock_value,
        "total_revenue": snapshot.total_revenue,
    }


def profit_sharing_to_domain(orm_record: ORMProfitSharing) -> domain.ProfitSharingRecord:
    """Convert SQLAlchemy ProfitSharing model to domain entity."""
    period = Period.from_month_name(orm_record.period_year, orm_record.period_month)
    result = domain.ProfitSharingResult(
        period=period,
        total_revenue=_decimal(orm_record.total_revenue),
        total_expense=_decimal(orm_record.total_expense),
        net_profit=_decimal(orm_record.net_profit),
        shares=domain.PartnerShares(
            partner_a_percent=_decimal(orm_record.partner_a_percent),
            partner_b_percent=_decimal(orm_record.partner_b_percent),
        ),
        partner_a_amount=_decimal(orm_record.partner_a_amount),
        partner_b_amount=_decimal(orm_record.partner_b_amount),
        partner_a_sub_amount=_decimal(orm_record.partner_a_sub_amount),
        partner_b_sub_amount=_decimal(orm_record.partner_b_sub_amount),
    )
    return domain.ProfitSharingRecord(
        id=orm_record.id,
        period_month=orm_record.period_month,
        period_year=orm_record.period_year,
        result=result,
        updated_at=orm_record.updated_at,
    )


def profit_sharing_to_columns(result: domain.ProfitSharingResult) -> dict:
    """Flatten a profit sharing result into profit_sharing columns."""
    return {
        "period_month": result.period.month_name,
        "period_year": result.period.year,
        "total_revenue": result.total_revenue,
        "total_expense": result.total_expense,
        "net_profit": result.net_profit,
        "partner_a_percent": result.shares.partner_a_percent,
        "partner_b_percent": result.shares.partner_b_percent,
        "partner_a_amount": result.partner_a_amount,
        "partner_b_amount": result.partner_b_amount,
        "partner_a_sub_amount": result.partner_a_sub_amount,
        "partner_b_sub_amount": result.partner_b_sub_amount,
    }
