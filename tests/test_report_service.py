"""Tests for ReportService."""

from datetime import date
from decimal import Decimal

import pytest

from drivetally.domain.entities import PeriodType, ReportMetric
from drivetally.domain.errors import FeatureLockedError


@pytest.fixture
def saved_records(record_service, sample_records, premium):
    for record in sample_records:
        record_service.save_record(record)
    return sample_records


def test_reports_are_premium(report_service):
    with pytest.raises(FeatureLockedError):
        report_service.periodic_summary(PeriodType.MONTHLY)
    with pytest.raises(FeatureLockedError):
        report_service.metric_series(date(2024, 1, 1), date(2024, 12, 31), ReportMetric.NET_PROFIT)
    with pytest.raises(FeatureLockedError):
        report_service.export_rows()


def test_periodic_summary(report_service, saved_records):
    buckets = report_service.periodic_summary(PeriodType.MONTHLY)

    assert [(b.key, b.net_profit) for b in buckets] == [
        ("2024-02", Decimal("273.00")),
        ("2024-03", Decimal("442.50")),
    ]


def test_summary_follows_saved_rate(report_service, settings_service, saved_records):
    settings_service.save_cost_per_km("0")

    (bucket,) = report_service.periodic_summary(PeriodType.ANNUAL)

    assert bucket.net_profit == Decimal("1240.50")


def test_metric_series(report_service, saved_records):
    points = report_service.metric_series(
        date(2024, 3, 1), date(2024, 3, 31), ReportMetric.GROSS_EARNINGS
    )

    assert [p.value for p in points] == [Decimal("250"), Decimal("120"), Decimal("400")]


def test_export_rows_with_range(report_service, saved_records):
    rows = report_service.export_rows(start_date=date(2024, 3, 3))

    assert [row.date for row in rows] == [date(2024, 3, 3), date(2024, 3, 15)]


def test_export_rows_all(report_service, saved_records):
    assert len(report_service.export_rows()) == 5
