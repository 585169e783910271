"""Performance analysis through an external text generation service.

The service only ever receives a plain-text digest of the records and returns
free text. No numbers from its answer are read back into the application.
"""

from abc import ABC, abstractmethod
from typing import Iterable

import structlog

from drivetally.database.base import Database
from drivetally.domain.entities import RunRecord
from drivetally.domain.errors import InsufficientDataError, ServiceError
from drivetally.domain.records import RecordService

MIN_RECORDS_FOR_ANALYSIS = 5

logger = structlog.get_logger(__name__)

PROMPT_TEMPLATE = """You are a financial analyst who helps rideshare and delivery drivers get more out of their work.
Analyse the following run records from one driver and give actionable insights.

**Data:**
{digest}

**Your task:**
1. **Performance summary:** Report total earnings, average earnings per day and average net profit per km.
2. **Most profitable days:** Point out which weekdays or dates were the most profitable.
3. **Suggestions:** Give 2-3 practical, specific tips for this driver to raise profits, such as focusing on peak hours if the data suggests it or reducing km per unit of earnings.
4. **Conclusion:** End with a short note of encouragement.

Be clear and concise and use markdown headings and lists."""


class TextGenerator(ABC):
    """External service that turns a prompt into prose."""

    @abstractmethod
    def summarize(self, formatted_text: str) -> str:
        """Return generated text for the prompt.

        Raises:
            ServiceError: On network, authentication or service failure
        """
        pass


def format_record_line(record: RunRecord) -> str:
    """One digest line: date, earnings, km and hours (or N/A)."""
    hours = f"{record.hours_worked:.1f}" if record.hours_worked else "N/A"
    return (
        f"Date: {record.date.isoformat()}, Earnings: {record.total_earnings:.2f}, "
        f"KM: {record.km_driven}, Hours: {hours}"
    )


def format_records_for_prompt(records: Iterable[RunRecord]) -> str:
    """Digest of records, oldest first, one per line."""
    return "\n".join(
        format_record_line(record) for record in sorted(records, key=lambda r: r.date)
    )


def build_prompt(records: Iterable[RunRecord]) -> str:
    """Full prompt sent to the text generator."""
    return PROMPT_TEMPLATE.format(digest=format_records_for_prompt(records))


class AnalysisService:
    """Service for AI performance analysis of stored records."""

    def __init__(self, db: Database, generator: TextGenerator):
        """Initialize analysis service.

        Args:
            db: Database instance
            generator: Text generation backend
        """
        self.db = db
        self.generator = generator
        self.record_service = RecordService(db)

    def analyze(self) -> str:
        """Ask the text generator for an analysis of all stored records.

        Raises:
            FeatureLockedError: If AI analysis is not unlocked
            InsufficientDataError: If fewer than five records are stored
            ServiceError: If the text generator fails
        """
        self.record_service.entitlement_service.get_entitlements().require(
            "ai_analysis", "AI analysis"
        )
        records = self.record_service.list_records()
        if len(records) < MIN_RECORDS_FOR_ANALYSIS:
            raise InsufficientDataError(
                f"At least {MIN_RECORDS_FOR_ANALYSIS} records are needed for an "
                f"analysis, found {len(records)}"
            )

        prompt = build_prompt(records)
        try:
            return self.generator.summarize(prompt)
        except ServiceError:
            logger.warning("analysis_failed", record_count=len(records))
            raise
