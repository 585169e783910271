"""History export as CSV."""

import csv
from decimal import Decimal
from typing import Iterable, TextIO

from drivetally.domain.calculator import net_profit
from drivetally.domain.cost_model import round_for_display
from drivetally.domain.entities import ExportRow, RunRecord

EXPORT_HEADER = ["date", "earnings", "km", "hours", "costs", "net_profit"]


def build_export_rows(
    records: Iterable[RunRecord], cost_per_km: Decimal
) -> list[ExportRow]:
    """Build export rows, oldest record first."""
    return [
        ExportRow(
            date=record.date,
            earnings=record.total_earnings,
            km=record.km_driven,
            hours=record.hours_worked,
            costs=record.additional_costs,
            net_profit=net_profit(record, cost_per_km),
        )
        for record in sorted(records, key=lambda r: r.date)
    ]


def _format_optional(value) -> str:
    return "" if value is None else str(value)


def write_csv(rows: Iterable[ExportRow], stream: TextIO) -> int:
    """Write rows as CSV to a text stream.

    Net profit is written rounded to cents; stored inputs are written as
    entered. Absent hours and costs are left empty.

    Returns:
        Number of data rows written
    """
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    count = 0
    for row in rows:
        writer.writerow(
            [
                row.date.isoformat(),
                str(row.earnings),
                str(row.km),
                _format_optional(row.hours),
                _format_optional(row.costs),
                str(round_for_display(row.net_profit)),
            ]
        )
        count += 1
    return count
