"""Domain layer for drivetally application."""

from drivetally.domain.records import RecordService
from drivetally.domain.reports import ReportService
from drivetally.domain.settings import EntitlementService, SettingsService
from drivetally.domain.analysis import AnalysisService

__all__ = [
    "RecordService",
    "ReportService",
    "SettingsService",
    "EntitlementService",
    "AnalysisService",
]
