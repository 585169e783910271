"""Tests for date-range filtering into metric series."""

from datetime import date, datetime
from decimal import Decimal

from drivetally.domain.entities import ReportMetric
from drivetally.domain.report_filter import filter_records, records_in_range

RATE = Decimal("0.75")


def test_bounds_are_inclusive(sample_records):
    selected = records_in_range(sample_records, date(2024, 2, 29), date(2024, 3, 3))

    assert [r.id for r in selected] == ["r2", "r3", "r4"]


def test_result_is_sorted(sample_records):
    selected = records_in_range(sample_records, date(2024, 1, 1), date(2024, 12, 31))

    assert [r.date for r in selected] == sorted(r.date for r in sample_records)


def test_datetime_bounds_use_calendar_day(sample_records):
    selected = records_in_range(
        sample_records,
        datetime(2024, 3, 15, 18, 30),
        datetime(2024, 3, 15, 0, 0),
    )

    assert [r.id for r in selected] == ["r5"]


def test_empty_range(sample_records):
    assert filter_records(
        sample_records, date(2023, 1, 1), date(2023, 12, 31), ReportMetric.NET_PROFIT, RATE
    ) == []


def test_net_profit_series(sample_records):
    points = filter_records(
        sample_records, date(2024, 2, 1), date(2024, 2, 29), ReportMetric.NET_PROFIT, RATE
    )

    assert [(p.date, p.value) for p in points] == [
        (date(2024, 2, 27), Decimal("175.50")),
        (date(2024, 2, 29), Decimal("97.50")),
    ]


def test_per_km_metrics(sample_records):
    start, end = date(2024, 2, 27), date(2024, 2, 27)

    (profit,) = filter_records(sample_records, start, end, ReportMetric.PROFIT_PER_KM, RATE)
    (gross,) = filter_records(sample_records, start, end, ReportMetric.GROSS_EARNINGS, RATE)
    (gross_per_km,) = filter_records(
        sample_records, start, end, ReportMetric.GROSS_EARNINGS_PER_KM, RATE
    )

    assert profit.value == Decimal("0.975")
    assert gross.value == Decimal("310.50")
    assert gross_per_km.value == Decimal("1.725")


def test_metric_given_as_string(sample_records):
    points = filter_records(
        sample_records, date(2024, 3, 15), date(2024, 3, 15), "gross_earnings", RATE
    )

    assert points[0].value == Decimal("400")


def test_filtering_is_idempotent(sample_records):
    start, end = date(2024, 2, 28), date(2024, 3, 10)
    once = records_in_range(sample_records, start, end)

    assert records_in_range(once, start, end) == once


def test_input_not_modified(sample_records):
    before = list(sample_records)

    records_in_range(sample_records, date(2024, 3, 1), date(2024, 3, 31))

    assert sample_records == before
