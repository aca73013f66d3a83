"""Tests for monthly aggregation of cost records."""

import logging
import pytest
from datetime import date, datetime, UTC
from decimal import Decimal

from plantbook.domain.aggregation import aggregate_records, to_amount
from plantbook.domain.entities import (
    BlastingMaterialPurchase,
    DumperMiscExpense,
    DumperOperation,
    Equipment,
    EquipmentType,
    ExcavatorOperation,
    GeneratorOperation,
    LangarExpense,
    LoaderOperation,
    MiscExpense,
    PlantExpense,
    SalaryRecord,
)
from plantbook.domain.periods import Period, PeriodFilter


def _dumper(dumper_id, name):
    return Equipment(
        id=dumper_id,
        equipment_code=f"DMP-{dumper_id:02d}",
        equipment_name=name,
        equipment_type=EquipmentType.DUMPER,
        is_active=True,
        created_at=datetime.now(UTC),
    )


@pytest.fixture
def dumpers():
    return [_dumper(1, "Dumper 1"), _dumper(2, "Dumper 2")]


@pytest.fixture
def february_records():
    day = date(2025, 2, 10)
    return [
        GeneratorOperation(id=1, amount=Decimal("700"), operation_date=day),
        ExcavatorOperation(id=2, amount=Decimal("1000"), operation_date=day, misc_expense=Decimal("200")),
        LoaderOperation(id=3, amount=Decimal("500"), operation_date=day, misc_expense=Decimal("50")),
        DumperOperation(id=4, amount=Decimal("800"), trip_date=day, equipment_id=1, misc_expense=Decimal("100")),
        DumperMiscExpense(id=5, amount=Decimal("30"), expense_date=day, dumper_id=2),
        BlastingMaterialPurchase(id=6, amount=Decimal("4000"), purchase_date=day),
        LangarExpense(id=7, amount=Decimal("300"), expense_date=day),
        PlantExpense(id=8, amount=Decimal("600"), expense_date=day),
        MiscExpense(id=9, amount=Decimal("999"), expense_date=day),
        SalaryRecord(id=10, amount=Decimal("35000"), salary_month="2025-02", employee_name="Akram"),
    ]


class TestAggregateRecords:
    """Tests for aggregate_records."""

    def test_bucket_figures(self, february_records, dumpers):
        aggregation = aggregate_records(february_records, dumpers)
        bucket = aggregation.bucket_for(Period(2025, 2))

        assert bucket.key == "Feb-25"
        assert bucket.generator == Decimal("700")
        assert bucket.excavator == Decimal("1000")
        assert bucket.excavator_misc == Decimal("200")
        assert bucket.loaders == Decimal("500")
        assert bucket.loaders_misc == Decimal("50")
        assert bucket.dumpers[1].amount == Decimal("800")
        assert bucket.dumpers[1].misc == Decimal("100")
        assert bucket.dumpers[2].amount == Decimal("0")
        assert bucket.dumpers[2].misc == Decimal("30")
        assert bucket.blasting == Decimal("4000")
        assert bucket.langar == Decimal("300")
        assert bucket.plant_exp == Decimal("600")
        assert bucket.human_res == Decimal("35000")
        assert bucket.misc_exp == Decimal("999")

    def test_total_excludes_every_misc_amount(self, february_records, dumpers):
        bucket = aggregate_records(february_records, dumpers).bucket_for(Period(2025, 2))

        assert bucket.total == Decimal("42900")
        assert bucket.misc_total == Decimal("380")
        assert bucket.grand_total == Decimal("43280")

    def test_misc_expense_records_are_reference_only(self, dumpers):
        records = [MiscExpense(id=1, amount=Decimal("5000"), expense_date=date(2025, 3, 1))]
        bucket = aggregate_records(records, dumpers).bucket_for(Period(2025, 3))

        assert bucket.misc_exp == Decimal("5000")
        assert bucket.total == Decimal("0")
        assert bucket.grand_total == Decimal("0")

    def test_totals_conserve_recorded_amounts(self, february_records, dumpers):
        later = [
            GeneratorOperation(id=11, amount=Decimal("125.50"), operation_date=date(2025, 3, 2)),
            DumperOperation(id=12, amount=Decimal("410"), trip_date=date(2024, 12, 31), equipment_id=2),
        ]
        records = february_records + later
        aggregation = aggregate_records(records, dumpers)

        expected = sum(
            (record.amount for record in records if record.category.value not in ("misc", "dumper_misc")),
            Decimal("0"),
        )
        assert aggregation.total == expected

    def test_every_bucket_lists_every_registered_dumper(self, dumpers):
        records = [GeneratorOperation(id=1, amount=Decimal("10"), operation_date=date(2025, 1, 5))]
        bucket = aggregate_records(records, dumpers).bucket_for(Period(2025, 1))

        assert set(bucket.dumpers) == {1, 2}

    def test_dumper_attributed_by_id_after_rename(self, dumpers):
        renamed = [_dumper(1, "Dumper 1 (Hino)"), dumpers[1]]
        records = [
            DumperOperation(
                id=1, amount=Decimal("900"), trip_date=date(2025, 2, 1), equipment_id=1, dumper_name="Dumper 1"
            )
        ]
        aggregation = aggregate_records(records, renamed)

        assert aggregation.bucket_for(Period(2025, 2)).dumpers[1].amount == Decimal("900")
        assert aggregation.unattributed == ()

    def test_dumper_attributed_by_name_without_id(self, dumpers):
        records = [
            DumperOperation(id=1, amount=Decimal("450"), trip_date=date(2025, 2, 1), dumper_name="Dumper 2")
        ]
        bucket = aggregate_records(records, dumpers).bucket_for(Period(2025, 2))

        assert bucket.dumpers[2].amount == Decimal("450")

    def test_unmatched_dumper_records_are_reported(self, dumpers, caplog):
        records = [
            DumperOperation(id=7, amount=Decimal("600"), trip_date=date(2025, 2, 1), equipment_id=99, dumper_name="Ghost"),
            DumperMiscExpense(id=8, amount=Decimal("40"), expense_date=date(2025, 2, 1), dumper_name="Ghost"),
        ]
        with caplog.at_level(logging.WARNING, logger="plantbook.domain.aggregation"):
            aggregation = aggregate_records(records, dumpers)

        assert [record.id for record in aggregation.unattributed] == [7, 8]
        bucket = aggregation.bucket_for(Period(2025, 2))
        assert bucket.grand_total == Decimal("0")
        assert "2 dumper record(s)" in caplog.text

    def test_month_of_only_unattributed_records_has_zero_totals(self, dumpers):
        records = [DumperOperation(id=1, amount=Decimal("640"), trip_date=date(2025, 4, 2), equipment_id=99)]

        aggregation = aggregate_records(records, dumpers)

        assert aggregation.periods() == [Period(2025, 4)]
        assert aggregation.bucket_for(Period(2025, 4)).grand_total == Decimal("0")
        assert [record.id for record in aggregation.unattributed] == [1]

    def test_month_only_filter_spans_years(self, dumpers):
        records = [
            GeneratorOperation(id=1, amount=Decimal("100"), operation_date=date(2024, 2, 3)),
            GeneratorOperation(id=2, amount=Decimal("200"), operation_date=date(2025, 2, 3)),
            GeneratorOperation(id=3, amount=Decimal("400"), operation_date=date(2025, 3, 3)),
        ]
        aggregation = aggregate_records(records, dumpers, PeriodFilter(month=2))

        assert aggregation.periods() == [Period(2025, 2), Period(2024, 2)]
        assert aggregation.total == Decimal("300")

    def test_month_and_year_filter(self, dumpers):
        records = [
            GeneratorOperation(id=1, amount=Decimal("100"), operation_date=date(2024, 2, 3)),
            GeneratorOperation(id=2, amount=Decimal("200"), operation_date=date(2025, 2, 3)),
        ]
        aggregation = aggregate_records(records, dumpers, PeriodFilter(month=2, year=2025))

        assert aggregation.periods() == [Period(2025, 2)]

    def test_records_without_usable_date_are_dropped(self, dumpers):
        records = [
            SalaryRecord(id=1, amount=Decimal("1000"), salary_month="not-a-month", employee_name="X"),
            GeneratorOperation(id=2, amount=Decimal("50"), operation_date=None),
        ]
        aggregation = aggregate_records(records, dumpers)

        assert aggregation.buckets == {}
        assert aggregation.total == Decimal("0")

    def test_periods_newest_first_across_decade(self, dumpers):
        records = [
            GeneratorOperation(id=1, amount=Decimal("1"), operation_date=date(2029, 12, 31)),
            GeneratorOperation(id=2, amount=Decimal("1"), operation_date=date(2030, 1, 1)),
            GeneratorOperation(id=3, amount=Decimal("1"), operation_date=date(2029, 11, 15)),
        ]
        aggregation = aggregate_records(records, dumpers)

        assert [period.key for period in aggregation.periods()] == ["Jan-30", "Dec-29", "Nov-29"]

    def test_missing_bucket_is_empty(self, dumpers):
        bucket = aggregate_records([], dumpers).bucket_for(Period(2025, 6))

        assert bucket.total == Decimal("0")
        assert set(bucket.dumpers) == {1, 2}


class TestToAmount:
    """Tests for numeric coercion of stored amounts."""

    @pytest.mark.parametrize("value", [None, "abc", "NaN", float("inf")])
    def test_unusable_values_are_zero(self, value):
        assert to_amount(value) == Decimal("0")

    def test_numeric_values(self):
        assert to_amount("12.50") == Decimal("12.50")
        assert to_amount(3) == Decimal("3")


class TestAggregationService:
    """Tests for AggregationService reading from the store."""

    def test_aggregate_stored_records(self, aggregation_service, record_service, sample_equipment):
        dumper = sample_equipment["dumper_1"]
        record_service.add_record("dumper", date(2025, 2, 3), Decimal("1200"), misc_expense=Decimal("75"), equipment_id=dumper.id)
        record_service.add_record("blasting", date(2025, 2, 4), Decimal("5000"))
        record_service.add_record("plant", date(2025, 3, 4), Decimal("800"))

        bucket = aggregation_service.bucket_for(Period(2025, 2))

        assert bucket.dumpers[dumper.id].amount == Decimal("1200")
        assert bucket.dumpers[dumper.id].misc == Decimal("75")
        assert bucket.total == Decimal("6200")
        assert bucket.plant_exp == Decimal("0")

    def test_deleted_dumper_records_become_unattributed(
        self, aggregation_service, record_service, equipment_service, sample_equipment
    ):
        dumper = sample_equipment["dumper_2"]
        record_id = record_service.add_record("dumper", date(2025, 2, 3), Decimal("640"), equipment_id=dumper.id)
        equipment_service.delete_equipment(dumper.id)

        aggregation = aggregation_service.aggregate(PeriodFilter(month=2, year=2025))

        assert [record.id for record in aggregation.unattributed] == [record_id]
        assert aggregation.total == Decimal("0")

    def test_aggregate_date_bounds(self, aggregation_service, record_service):
        record_service.add_record("langar", date(2025, 1, 20), Decimal("100"))
        record_service.add_record("langar", date(2025, 2, 10), Decimal("200"))
        record_service.add_record("langar", date(2025, 3, 5), Decimal("400"))

        aggregation = aggregation_service.aggregate(start_date=date(2025, 2, 1), end_date=date(2025, 3, 31))
        assert aggregation.periods() == [Period(2025, 3), Period(2025, 2)]

        narrowed = aggregation_service.aggregate(PeriodFilter(year=2025), end_date=date(2025, 1, 31))
        assert narrowed.periods() == [Period(2025, 1)]
