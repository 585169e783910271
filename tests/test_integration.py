"""Integration tests for end-to-end workflows."""

import csv
import json

from drivetally import __version__
from drivetally.cli.main import cli
from drivetally.domain.records import RECORDS_KEY


def _run(cli_runner, db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", db.database_path, *args], **kwargs)


def _record_id(output: str) -> str:
    for line in output.split("\n"):
        if "(ID: " in line:
            return line.split("(ID: ")[1].rstrip(")")
    raise AssertionError(f"No record id in output:\n{output}")


def _add_week(cli_runner, db):
    days = [
        ("2024-02-27", "310.50", "180", "8", None),
        ("2024-02-29", "180", "90", None, "15"),
        ("2024-03-02", "250", "150", "7", None),
        ("2024-03-03", "120", "60", "4", "5"),
        ("2024-03-15", "400", "220", "10", None),
    ]
    for day, earnings, km, hours, costs in days:
        args = ["add", "--date", day, "--earnings", earnings, "--km", km]
        if hours:
            args += ["--hours", hours]
        if costs:
            args += ["--costs", costs]
        result = _run(cli_runner, db, *args)
        assert result.exit_code == 0, result.output


def test_calc_does_not_save(cli_runner, temp_db):
    result = _run(
        cli_runner, temp_db, "calc", "--earnings", "310.50", "--km", "180", "--hours", "8"
    )

    assert result.exit_code == 0
    assert "$175.50" in result.output
    assert "$21.94" in result.output

    result = _run(cli_runner, temp_db, "history")
    assert "No records found." in result.output


def test_calc_rejects_zero_km(cli_runner, temp_db):
    result = _run(cli_runner, temp_db, "calc", "--earnings", "100", "--km", "0")

    assert result.exit_code == 1
    assert "Km driven must be greater than zero" in result.output


def test_version(cli_runner):
    result = cli_runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert f"drivetally, version {__version__}" in result.output


def test_verbose_logs_failed_command(cli_runner, temp_db):
    result = _run(cli_runner, temp_db, "--verbose", "calc", "--earnings", "100", "--km", "0")

    assert result.exit_code == 1
    assert "command_failed" in result.output
    assert "InvalidInputError" in result.output


def test_record_workflow(cli_runner, temp_db):
    """Add, show, edit, overwrite and delete a record."""
    result = _run(
        cli_runner, temp_db,
        "add", "--date", "2024-03-01", "--earnings", "200", "--km", "100", "--hours", "5",
    )
    assert result.exit_code == 0
    assert "Record saved for 2024-03-01" in result.output
    record_id = _record_id(result.output)

    result = _run(cli_runner, temp_db, "show", record_id)
    assert result.exit_code == 0
    assert "Hours worked: 5" in result.output
    assert "$125.00" in result.output

    result = _run(cli_runner, temp_db, "edit", record_id, "--hours", "", "--costs", "10")
    assert result.exit_code == 0
    assert "Record updated for 2024-03-01" in result.output

    result = _run(cli_runner, temp_db, "show", record_id)
    assert "Hours worked: -" in result.output
    assert "Additional costs: $10.00" in result.output

    # A second record on the same date asks before replacing
    result = _run(
        cli_runner, temp_db,
        "add", "--date", "2024-03-01", "--earnings", "50", "--km", "20",
        input="n\n",
    )
    assert result.exit_code == 0
    assert "already exists for 2024-03-01" in result.output
    assert "Cancelled." in result.output

    result = _run(
        cli_runner, temp_db,
        "add", "--date", "2024-03-01", "--earnings", "50", "--km", "20", "--yes",
    )
    assert "Record overwritten for 2024-03-01" in result.output
    new_id = _record_id(result.output)

    result = _run(cli_runner, temp_db, "show", record_id)
    assert result.exit_code == 1
    assert "not found" in result.output

    result = _run(cli_runner, temp_db, "delete", new_id, "--yes")
    assert result.exit_code == 0
    assert "Deleted record for 2024-03-01" in result.output


def test_history_most_recent_first(cli_runner, temp_db):
    _add_week(cli_runner, temp_db)

    result = _run(cli_runner, temp_db, "history", "--limit", "2")

    assert result.exit_code == 0
    lines = [line for line in result.output.split("\n") if line.startswith("2024-")]
    assert [line[:10] for line in lines] == ["2024-03-15", "2024-03-03"]


def test_history_skips_stored_record_with_zero_km(cli_runner, temp_db):
    stored = {
        "id": "a",
        "date": "2024-03-01",
        "totalEarnings": "200",
        "kmDriven": "0",
        "hoursWorked": None,
        "additionalCosts": None,
    }
    temp_db.set_value(RECORDS_KEY, json.dumps([stored]))

    result = _run(cli_runner, temp_db, "history")

    assert result.exit_code == 0
    assert "No records found." in result.output


def test_settings_workflow(cli_runner, temp_db):
    result = _run(cli_runner, temp_db, "settings", "show")
    assert "0.75" in result.output

    result = _run(
        cli_runner, temp_db,
        "settings", "derive", "--refuel-amount", "250", "--km-since-refuel", "450", "--save",
    )
    assert result.exit_code == 0
    assert "Derived cost per km: 0.56" in result.output
    assert "Saved." in result.output

    result = _run(cli_runner, temp_db, "calc", "--earnings", "100", "--km", "100")
    assert "$44.00" in result.output

    result = _run(cli_runner, temp_db, "settings", "set-cost", "--", "-1")
    assert result.exit_code == 1


def test_derive_errors(cli_runner, temp_db):
    result = _run(cli_runner, temp_db, "settings", "derive", "--refuel-amount", "250")
    assert result.exit_code == 1
    assert "at least one section" in result.output

    result = _run(
        cli_runner, temp_db,
        "settings", "derive", "--insurance", "200", "--monthly-km", "4000",
    )
    assert result.exit_code == 1
    assert "premium feature" in result.output

    _run(cli_runner, temp_db, "premium", "activate")
    result = _run(cli_runner, temp_db, "settings", "derive", "--insurance", "200")
    assert result.exit_code == 1
    assert "monthly km is required" in result.output

    result = _run(
        cli_runner, temp_db,
        "settings", "derive", "--insurance=-200", "--monthly-km", "4000",
    )
    assert result.exit_code == 1
    assert "Insurance must not be negative" in result.output


def test_reports_need_premium(cli_runner, temp_db):
    _add_week(cli_runner, temp_db)

    result = _run(cli_runner, temp_db, "summary")
    assert result.exit_code == 1
    assert "premium activate" in result.output

    result = _run(cli_runner, temp_db, "premium", "activate")
    assert "Premium activated." in result.output
    assert "Premium: active" in _run(cli_runner, temp_db, "premium", "status").output

    result = _run(cli_runner, temp_db, "summary", "--period", "monthly")
    assert result.exit_code == 0
    assert "2024-02" in result.output
    assert "$273.00" in result.output
    assert "$715.50" in result.output

    result = _run(cli_runner, temp_db, "summary", "--period", "weekly")
    assert "2024-02-25" in result.output

    result = _run(
        cli_runner, temp_db,
        "report", "--metric", "gross_earnings",
        "--start-date", "2024-03-01", "--end-date", "2024-03-31",
    )
    assert result.exit_code == 0
    assert "$250.00" in result.output
    assert "$310.50" not in result.output

    result = _run(
        cli_runner, temp_db,
        "report", "--start-date", "2023-01-01", "--end-date", "2023-01-31",
    )
    assert "No records found in this range." in result.output


def test_export(cli_runner, temp_db, tmp_path):
    _add_week(cli_runner, temp_db)
    _run(cli_runner, temp_db, "premium", "activate")
    out_file = tmp_path / "history.csv"

    result = _run(cli_runner, temp_db, "export", "-o", str(out_file), "--start-date", "2024-03-01")

    assert result.exit_code == 0
    assert "Exported 3 record(s)" in result.output
    with open(out_file, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0][0] == "date"
    assert [row[0] for row in rows[1:]] == ["2024-03-02", "2024-03-03", "2024-03-15"]


def test_analyze(cli_runner, temp_db, fake_generator, failing_generator):
    _add_week(cli_runner, temp_db)

    result = _run(cli_runner, temp_db, "analyze", obj={"text_generator": fake_generator})
    assert result.exit_code == 1
    assert "premium feature" in result.output

    _run(cli_runner, temp_db, "premium", "activate")
    result = _run(cli_runner, temp_db, "analyze", obj={"text_generator": fake_generator})
    assert result.exit_code == 0
    assert "Good week." in result.output
    assert len(fake_generator.prompts) == 1

    result = _run(cli_runner, temp_db, "analyze", obj={"text_generator": failing_generator})
    assert result.exit_code == 1
    assert "service unavailable" in result.output


def test_free_tier_limit(cli_runner, temp_db):
    for day in range(1, 16):
        result = _run(
            cli_runner, temp_db,
            "add", "--date", f"2024-01-{day:02d}", "--earnings", "100", "--km", "50",
        )
        assert result.exit_code == 0

    result = _run(
        cli_runner, temp_db, "add", "--date", "2024-01-16", "--earnings", "100", "--km", "50"
    )

    assert result.exit_code == 1
    assert "limit of 15 records" in result.output
