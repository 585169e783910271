"""Date-range filtering of records into metric series."""

from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Iterable, Union

from drivetally.domain.calculator import compute
from drivetally.domain.entities import (
    CalculationResult,
    ReportMetric,
    ReportPoint,
    RunRecord,
)
from drivetally.utils.date_parser import to_day

_METRIC_VALUES: dict[ReportMetric, Callable[[CalculationResult], Decimal]] = {
    ReportMetric.NET_PROFIT: lambda result: result.net_profit,
    ReportMetric.PROFIT_PER_KM: lambda result: result.profit_per_km,
    ReportMetric.GROSS_EARNINGS: lambda result: result.total_earnings,
    ReportMetric.GROSS_EARNINGS_PER_KM: lambda result: result.gross_earnings_per_km,
}


def records_in_range(
    records: Iterable[RunRecord],
    start_date: Union[date, datetime],
    end_date: Union[date, datetime],
) -> list[RunRecord]:
    """Records dated within [start_date, end_date], oldest first.

    Bounds are compared as calendar days; any time of day is dropped.
    """
    start = to_day(start_date)
    end = to_day(end_date)
    selected = [r for r in records if start <= to_day(r.date) <= end]
    return sorted(selected, key=lambda r: r.date)


def filter_records(
    records: Iterable[RunRecord],
    start_date: Union[date, datetime],
    end_date: Union[date, datetime],
    metric: ReportMetric,
    cost_per_km: Decimal,
) -> list[ReportPoint]:
    """Map records in a date range to a series of metric values.

    Values are recomputed for every record with the given cost per km. An
    empty range gives an empty list.
    """
    value_of = _METRIC_VALUES[ReportMetric(metric)]
    return [
        ReportPoint(date=record.date, value=value_of(compute(record, cost_per_km)))
        for record in records_in_range(records, start_date, end_date)
    ]
