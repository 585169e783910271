"""Periodic aggregation of run records."""

from decimal import Decimal
from typing import Iterable

from drivetally.domain.calculator import record_costs
from drivetally.domain.entities import PeriodBucket, PeriodType, RunRecord
from drivetally.utils.date_parser import week_start


def period_key(record: RunRecord, period_type: PeriodType) -> str:
    """Label of the period a record belongs to.

    Weekly keys are the ISO date of the Sunday starting the week, monthly keys
    are ``YYYY-MM`` and annual keys ``YYYY``.
    """
    period_type = PeriodType(period_type)
    if period_type == PeriodType.WEEKLY:
        return week_start(record.date).isoformat()
    if period_type == PeriodType.MONTHLY:
        return record.date.strftime("%Y-%m")
    return record.date.strftime("%Y")


def aggregate(
    records: Iterable[RunRecord], period_type: PeriodType, cost_per_km: Decimal
) -> list[PeriodBucket]:
    """Group records into period buckets.

    Records are sorted by date and folded in order, so buckets come out in the
    order their period first appears. Net profit and profit per km are
    derived from the totals on the bucket, not accumulated.

    Args:
        records: Records to aggregate
        period_type: Weekly, monthly or annual
        cost_per_km: Vehicle cost per km used for every record

    Returns:
        List of PeriodBucket, oldest period first
    """
    totals: dict[str, dict[str, Decimal]] = {}
    counts: dict[str, int] = {}

    for record in sorted(records, key=lambda r: r.date):
        key = period_key(record, period_type)
        bucket = totals.setdefault(
            key,
            {
                "earnings": Decimal("0"),
                "costs": Decimal("0"),
                "km": Decimal("0"),
            },
        )
        bucket["earnings"] += record.total_earnings
        bucket["costs"] += record_costs(record, cost_per_km)
        bucket["km"] += record.km_driven
        counts[key] = counts.get(key, 0) + 1

    return [
        PeriodBucket(
            key=key,
            total_earnings=data["earnings"],
            total_costs=data["costs"],
            total_km=data["km"],
            record_count=counts[key],
        )
        for key, data in totals.items()
    ]
