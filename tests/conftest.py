"""Shared pytest fixtures for plantbook tests."""

import tempfile
import os
import pytest

from plantbook.database.factories import create_sqlite_database
from plantbook.domain.aggregation import AggregationService
from plantbook.domain.category import ExpenseCategoryService
from plantbook.domain.equipment import EquipmentService
from plantbook.domain.production import ProductionService
from plantbook.domain.profit_sharing import ProfitSharingService
from plantbook.domain.records import RecordService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def equipment_service(temp_db):
    return EquipmentService(temp_db)


@pytest.fixture
def record_service(temp_db):
    return RecordService(temp_db)


@pytest.fixture
def production_service(temp_db):
    return ProductionService(temp_db)


@pytest.fixture
def aggregation_service(temp_db):
    return AggregationService(temp_db)


@pytest.fixture
def profit_sharing_service(temp_db):
    return ProfitSharingService(temp_db)


@pytest.fixture
def expense_category_service(temp_db):
    return ExpenseCategoryService(temp_db)


@pytest.fixture
def sample_equipment(equipment_service):
    """Register one generator, excavator and loader plus two dumpers."""
    ids = {
        "generator": equipment_service.register_equipment("GEN-01", "Generator 250kVA", "GENERATOR"),
        "excavator": equipment_service.register_equipment("EXC-01", "Excavator PC200", "EXCAVATOR"),
        "loader": equipment_service.register_equipment("LDR-01", "Loader 950", "LOADER"),
        "dumper_1": equipment_service.register_equipment("DMP-01", "Dumper 1", "DUMPER"),
        "dumper_2": equipment_service.register_equipment("DMP-02", "Dumper 2", "DUMPER"),
    }
    return {key: equipment_service.get_equipment(value) for key, value in ids.items()}


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
