"""Shared pytest fixtures for drivetally tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from drivetally.database.factories import create_sqlite_database
from drivetally.domain.analysis import TextGenerator
from drivetally.domain.entities import RunRecord
from drivetally.domain.errors import ServiceError
from drivetally.domain.records import RecordService
from drivetally.domain.reports import ReportService
from drivetally.domain.settings import EntitlementService, SettingsService
from drivetally.logging_config import configure_logging


@pytest.fixture(autouse=True)
def reset_logging():
    """Point logging back at the real stderr after a CLI run replaced it."""
    yield
    configure_logging()


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
def record_service(temp_db):
    """Create a RecordService with a temporary database."""
    return RecordService(temp_db)


@pytest.fixture
def settings_service(temp_db):
    """Create a SettingsService with a temporary database."""
    return SettingsService(temp_db)


@pytest.fixture
def entitlement_service(temp_db):
    """Create an EntitlementService with a temporary database."""
    return EntitlementService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def premium(entitlement_service):
    """Unlock premium features."""
    return entitlement_service.set_premium(True)


def _make_record(
    record_id: str,
    day: date,
    earnings: str = "200",
    km: str = "100",
    hours: str | None = None,
    costs: str | None = None,
) -> RunRecord:
    """Build a RunRecord from short string arguments."""
    return RunRecord(
        id=record_id,
        date=day,
        total_earnings=Decimal(earnings),
        km_driven=Decimal(km),
        hours_worked=Decimal(hours) if hours is not None else None,
        additional_costs=Decimal(costs) if costs is not None else None,
    )


@pytest.fixture
def make_record():
    """Factory for RunRecord instances."""
    return _make_record


@pytest.fixture
def sample_records():
    """Five records across two months, deliberately out of date order."""
    return [
        _make_record("r3", date(2024, 3, 2), earnings="250", km="150", hours="7"),
        _make_record("r1", date(2024, 2, 27), earnings="310.50", km="180", hours="8"),
        _make_record("r2", date(2024, 2, 29), earnings="180", km="90", costs="15"),
        _make_record("r4", date(2024, 3, 3), earnings="120", km="60", hours="4", costs="5"),
        _make_record("r5", date(2024, 3, 15), earnings="400", km="220", hours="10"),
    ]


class FakeTextGenerator(TextGenerator):
    """Text generator returning a canned answer and remembering prompts."""

    def __init__(self, answer: str = "## Summary\nGood week.", fail: bool = False):
        self.answer = answer
        self.fail = fail
        self.prompts: list[str] = []

    def summarize(self, formatted_text: str) -> str:
        self.prompts.append(formatted_text)
        if self.fail:
            raise ServiceError("service unavailable")
        return self.answer


@pytest.fixture
def fake_generator():
    """A text generator that never touches the network."""
    return FakeTextGenerator()


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def failing_generator():
    """A text generator that always fails."""
    return FakeTextGenerator(fail=True)
