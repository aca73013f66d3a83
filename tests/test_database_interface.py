"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from plantbook.database.factories import create_sqlite_database
from plantbook.domain import entities
from plantbook.domain.entities import RecordCategory
from plantbook.domain.errors import ConflictError


def _summary_columns(year, month):
    columns = {
        name: Decimal("0")
        for name in (
            "total_net_aggregate_cft",
            "sold_at_site_cft",
            "sold_at_site_amount",
            "approx_per_cft_cost",
            "total_produced_raw",
            "allowance_deduction",
            "total_produced",
            "stock_at_site_cft",
            "per_cft_cost",
            "cost_of_stocked_material",
            "total_revenue",
        )
    }
    columns.update(summary_month=month, summary_year=year, allowance_percent=Decimal("15"))
    return columns


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_equipment_returns_domain_model(self, temp_db):
        equipment_id = temp_db.create_equipment("DMP-01", "Dumper 1", "DUMPER")

        equipment = temp_db.get_equipment(equipment_id)

        assert isinstance(equipment, entities.Equipment)
        assert equipment.equipment_type == entities.EquipmentType.DUMPER
        assert equipment.is_active is True
        assert isinstance(equipment.created_at, datetime)
        assert temp_db.get_equipment_by_code("DMP-01").id == equipment_id

    def test_update_equipment(self, temp_db):
        equipment_id = temp_db.create_equipment("LDR-01", "Loader", "LOADER")

        temp_db.update_equipment(equipment_id, equipment_name="Loader 950", is_active=False)

        equipment = temp_db.get_equipment(equipment_id)
        assert equipment.equipment_name == "Loader 950"
        assert equipment.is_active is False

    def test_update_missing_equipment_raises(self, temp_db):
        with pytest.raises(ValueError):
            temp_db.update_equipment(99, equipment_name="x")

    @pytest.mark.parametrize(
        "category,expected_type",
        [
            (RecordCategory.GENERATOR, entities.GeneratorOperation),
            (RecordCategory.EXCAVATOR, entities.ExcavatorOperation),
            (RecordCategory.LOADER, entities.LoaderOperation),
            (RecordCategory.DUMPER, entities.DumperOperation),
            (RecordCategory.DUMPER_MISC, entities.DumperMiscExpense),
            (RecordCategory.BLASTING, entities.BlastingMaterialPurchase),
            (RecordCategory.LANGAR, entities.LangarExpense),
            (RecordCategory.PLANT, entities.PlantExpense),
            (RecordCategory.MISC, entities.MiscExpense),
        ],
    )
    def test_records_map_to_category_types(self, temp_db, category, expected_type):
        record_id = temp_db.create_record(category=category, record_date=date(2025, 2, 1), amount=Decimal("10.50"))

        record = temp_db.get_record(record_id)

        assert isinstance(record, expected_type)
        assert record.category == category
        assert record.record_date == date(2025, 2, 1)
        assert record.amount == Decimal("10.50")

    def test_list_records_filters(self, temp_db):
        temp_db.create_record(category="plant", record_date=date(2025, 1, 31), amount=Decimal("1"))
        temp_db.create_record(category="plant", record_date=date(2025, 2, 1), amount=Decimal("2"))
        temp_db.create_record(category="langar", record_date=date(2025, 2, 2), amount=Decimal("3"))

        february = temp_db.list_records(start_date=date(2025, 2, 1), end_date=date(2025, 2, 28))
        plant = temp_db.list_records(category=RecordCategory.PLANT)

        assert [record.amount for record in february] == [Decimal("3"), Decimal("2")]
        assert len(plant) == 2

    def test_replace_record_clears_unset_fields(self, temp_db):
        record_id = temp_db.create_record(
            category="plant", record_date=date(2025, 2, 1), amount=Decimal("5"), description="old"
        )

        temp_db.replace_record(record_id, {"record_date": date(2025, 2, 3), "amount": Decimal("7")})

        record = temp_db.get_record(record_id)
        assert record.amount == Decimal("7")
        assert record.description is None

    def test_daily_production_round_trip(self, temp_db):
        entry_id = temp_db.create_daily_production(
            production_date=date(2025, 2, 14),
            day_name="Friday",
            gravel_cft=Decimal("58186"),
            clay_dust_percent=Decimal("33.33"),
            clay_dust_cft=Decimal("19393.3938"),
            net_aggregate_cft=Decimal("38792.6062"),
        )

        entry = temp_db.get_daily_production_by_date(date(2025, 2, 14))

        assert isinstance(entry, entities.DailyProductionEntry)
        assert entry.id == entry_id
        assert entry.clay_dust_cft + entry.net_aggregate_cft == entry.gravel_cft

    def test_monthly_summaries_listed_chronologically(self, temp_db):
        for year, month in ((2025, "March"), (2024, "December"), (2025, "January")):
            temp_db.create_monthly_summary(_summary_columns(year, month))

        summaries = temp_db.list_monthly_summaries()

        assert [(s.summary_year, s.summary_month) for s in summaries] == [
            (2024, "December"),
            (2025, "January"),
            (2025, "March"),
        ]
        assert isinstance(summaries[0].snapshot, entities.MonthlySalesSnapshot)

    def test_duplicate_monthly_summary_raises_conflict(self, temp_db):
        temp_db.create_monthly_summary(_summary_columns(2025, "February"))

        with pytest.raises(ConflictError, match="February 2025 already exists"):
            temp_db.create_monthly_summary(_summary_columns(2025, "February"))

        assert len(temp_db.list_monthly_summaries()) == 1


def test_factory_uses_environment_path(tmp_path, monkeypatch):
    db_path = tmp_path / "env.db"
    monkeypatch.setenv("PLANTBOOK_DB_PATH", str(db_path))

    db = create_sqlite_database()
    db.create_equipment("GEN-01", "Generator", "GENERATOR")
    db.disconnect()

    assert db_path.exists()
