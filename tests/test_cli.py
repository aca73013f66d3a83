"""Integration tests for the plantbook command line."""

import pytest

from plantbook.cli.main import cli


@pytest.fixture
def invoke(cli_runner, temp_db):
    """Invoke the CLI against the temporary database."""

    def _invoke(*args, **kwargs):
        return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)

    return _invoke


def _id_from(output: str) -> str:
    # Lines look like "Added dumper record (ID: 3)"
    for line in output.split("\n"):
        if "ID:" in line:
            return line.split("ID:")[1].strip().rstrip(")")
    raise AssertionError(f"no ID in output: {output!r}")


def test_month_end_workflow(invoke):
    """Equipment, records, production, sales, summary and profit split."""
    result = invoke("equipment", "add", "DMP-01", "Dumper 1", "--type", "dumper")
    assert result.exit_code == 0
    assert "Registered DUMPER 'Dumper 1' (DMP-01, ID: 1)" in result.output

    result = invoke(
        "record", "add", "dumper",
        "--date", "2025-02-14", "--amount", "Rs 12,000", "--misc", "500", "--equipment", "DMP-01",
    )
    assert result.exit_code == 0
    assert "Added dumper record" in result.output

    result = invoke("record", "add", "blasting", "--date", "2025-02-03", "--amount", "388000")
    assert result.exit_code == 0
    result = invoke(
        "record", "add", "salary", "--salary-month", "2025-02", "--employee", "Crew", "--amount", "300000"
    )
    assert result.exit_code == 0

    result = invoke("production", "add", "2025-02-14", "--gravel", "58186")
    assert result.exit_code == 0
    assert "(Friday)" in result.output
    assert "net 38,792.61 CFT" in result.output

    result = invoke(
        "production", "sales", "2025-02",
        "--sold-qty", "20000", "--sold-amount", "600000", "--stock-rate", "25", "--net-produced", "38795",
    )
    assert result.exit_code == 0
    assert "924,400.00" in result.output

    result = invoke("summary", "monthly", "Feb-25")
    assert result.exit_code == 0
    assert "Dumper 1" in result.output
    assert "700,000.00" in result.output
    assert "700,500.00" in result.output

    result = invoke("profit", "calculate", "2025-02", "--save")
    assert result.exit_code == 0
    assert "224,400.00" in result.output
    assert "112,200.00" in result.output
    assert "Saved profit sharing for February 2025" in result.output

    result = invoke("profit", "list", "--year", "2025")
    assert result.exit_code == 0
    assert "February 2025" in result.output


def test_record_list_and_update(invoke):
    result = invoke("record", "add", "plant", "--date", "2025-02-01", "--amount", "1500", "--description", "Belts")
    record_id = _id_from(result.output)
    invoke("record", "add", "langar", "--date", "2025-03-01", "--amount", "200")

    result = invoke("record", "update", record_id, "--amount", "1750")
    assert result.exit_code == 0
    assert f"Updated record {record_id}" in result.output

    result = invoke("record", "list", "--period", "2025-02")
    assert result.exit_code == 0
    assert "1,750.00" in result.output
    assert "Belts" in result.output
    assert "langar" not in result.output
    assert "1 record(s)" in result.output


def test_record_delete(invoke):
    record_id = _id_from(invoke("record", "add", "misc", "--date", "2025-02-01", "--amount", "10").output)

    result = invoke("record", "delete", record_id, "--yes")
    assert result.exit_code == 0

    result = invoke("record", "list")
    assert "No records found." in result.output


def test_record_validation_errors(invoke):
    result = invoke("record", "add", "generator", "--date", "2025-02-01", "--amount", "100", "--misc", "5")
    assert result.exit_code == 1
    assert "misc_expense" in result.output

    result = invoke("record", "add", "plant", "--date", "someday", "--amount", "100")
    assert result.exit_code == 1
    assert "Invalid date format" in result.output

    result = invoke("record", "add", "dumper", "--date", "2025-02-01", "--amount", "100", "--equipment", "DMP-99")
    assert result.exit_code == 1


def test_duplicate_production_day(invoke):
    assert invoke("production", "add", "2025-02-14", "--gravel", "1000").exit_code == 0

    result = invoke("production", "add", "2025-02-14", "--gravel", "2000")
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_production_totals_and_snapshots(invoke):
    invoke("production", "add", "2025-02-01", "--gravel", "1000", "--clay-percent", "20")
    invoke("production", "add", "2025-02-02", "--gravel", "500", "--clay-percent", "10%")

    result = invoke("production", "totals", "2025-02")
    assert result.exit_code == 0
    assert "(2 day(s))" in result.output
    assert "1,250.00" in result.output

    result = invoke("production", "sales", "2025-02", "--sold-qty", "0", "--sold-amount", "0", "--stock-rate", "25")
    assert result.exit_code == 0

    invoke("production", "add", "2025-02-03", "--gravel", "100")
    result = invoke("production", "totals", "2025-02")
    assert "save the sales again" in result.output

    result = invoke("production", "snapshots")
    assert result.exit_code == 0
    assert "February 2025" in result.output


def test_profit_requires_saved_sales(invoke):
    result = invoke("profit", "calculate", "2025-02")

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_profit_shares_from_environment(invoke):
    invoke("production", "sales", "2025-02", "--sold-qty", "0", "--sold-amount", "0", "--stock-rate", "0",
           "--net-produced", "0")
    invoke("record", "add", "plant", "--date", "2025-02-01", "--amount", "0")

    result = invoke(
        "profit", "calculate", "2025-02",
        env={"PLANTBOOK_PARTNER_A_SHARE": "70", "PLANTBOOK_PARTNER_B_SHARE": "20"},
    )
    assert result.exit_code == 1
    assert "must total 100" in result.output

    result = invoke(
        "profit", "calculate", "2025-02",
        env={"PLANTBOOK_PARTNER_A_SHARE": "70", "PLANTBOOK_PARTNER_B_SHARE": "30"},
    )
    assert result.exit_code == 0
    assert "Partner A (70%)" in result.output


def test_summary_warns_about_unattributed_dumper_records(invoke):
    invoke("equipment", "add", "DMP-01", "Dumper 1", "--type", "dumper")
    invoke("record", "add", "dumper", "--date", "2025-02-01", "--amount", "900", "--equipment", "DMP-01")
    assert invoke("equipment", "delete", "DMP-01", "--yes").exit_code == 0

    result = invoke("summary", "monthly", "2025-02")
    assert result.exit_code == 0
    assert "match no registered dumper" in result.output


def test_summary_yearly(invoke):
    invoke("record", "add", "langar", "--date", "2025-01-10", "--amount", "100")
    invoke("record", "add", "langar", "--date", "2025-03-10", "--amount", "300")

    result = invoke("summary", "yearly", "2025")
    assert result.exit_code == 0
    assert "Jan-25" in result.output
    assert "Mar-25" in result.output
    assert "Months: 2" in result.output
    assert "Average monthly balance: 200" in result.output

    result = invoke("summary", "yearly", "2019")
    assert "No records found for 2019." in result.output


def test_equipment_and_category_listing(invoke):
    invoke("equipment", "add", "LDR-01", "Loader 950", "--type", "LOADER")
    invoke("equipment", "add", "DMP-01", "Dumper 1", "--type", "dumper")
    invoke("category", "add", "FUEL", "Fuel", "--description", "Diesel")

    result = invoke("equipment", "list", "--type", "loader")
    assert result.exit_code == 0
    assert "Loader 950" in result.output
    assert "Dumper 1" not in result.output

    result = invoke("equipment", "rename", "DMP-01", "Dumper 1 (Hino)")
    assert result.exit_code == 0

    result = invoke("category", "list")
    assert "Fuel - Diesel" in result.output

    result = invoke("category", "add", "FUEL", "Fuel again")
    assert result.exit_code == 1


def test_period_option_conflict(invoke):
    result = invoke("record", "list", "--period", "2025-02", "--year", "2025")

    assert result.exit_code == 1
    assert "cannot be combined" in result.output
