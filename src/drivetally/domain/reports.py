"""Report domain service: periodic summaries, metric series and export."""

from datetime import date
from typing import Optional

from drivetally.database.base import Database
from drivetally.domain.aggregation import aggregate
from drivetally.domain.entities import (
    ExportRow,
    PeriodBucket,
    PeriodType,
    ReportMetric,
    ReportPoint,
)
from drivetally.domain.export import build_export_rows
from drivetally.domain.records import RecordService
from drivetally.domain.report_filter import filter_records, records_in_range


class ReportService:
    """Service for historical views over stored records."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db
        self.record_service = RecordService(db)

    def _require_reports(self, feature: str) -> None:
        self.record_service.entitlement_service.get_entitlements().require(
            "reports", feature
        )

    def periodic_summary(self, period_type: PeriodType) -> list[PeriodBucket]:
        """Weekly, monthly or annual totals, oldest period first."""
        self._require_reports("Periodic summaries")
        cost_per_km = self.record_service.settings_service.get_settings().cost_per_km
        return aggregate(self.record_service.list_records(), period_type, cost_per_km)

    def metric_series(
        self, start_date: date, end_date: date, metric: ReportMetric
    ) -> list[ReportPoint]:
        """Metric values for each record in an inclusive date range."""
        self._require_reports("Reports")
        cost_per_km = self.record_service.settings_service.get_settings().cost_per_km
        return filter_records(
            self.record_service.list_records(), start_date, end_date, metric, cost_per_km
        )

    def export_rows(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[ExportRow]:
        """Rows for export, optionally limited to a date range."""
        self._require_reports("Export")
        records = self.record_service.list_records()
        if start_date is not None or end_date is not None:
            records = records_in_range(
                records, start_date or date.min, end_date or date.max
            )
        cost_per_km = self.record_service.settings_service.get_settings().cost_per_km
        return build_export_rows(records, cost_per_km)
