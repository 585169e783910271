"""Run record domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import uuid4

import structlog

from drivetally.database.base import Database
from drivetally.database import mappers
from drivetally.domain.calculator import (
    compute_values,
    net_profit,
    optional_number,
    require_number,
)
from drivetally.domain.entities import (
    CalculationResult,
    HistoryEntry,
    RunRecord,
    UpsertOutcome,
)
from drivetally.domain.entitlements import FREE_RECORD_LIMIT
from drivetally.domain.errors import (
    CapacityExceededError,
    InvalidInputError,
    NotFoundError,
    capacity_exceeded,
    must_not_be_negative,
    record_not_found,
)
from drivetally.domain.record_store import RecordStore, UpsertPlan
from drivetally.domain.settings import EntitlementService, SettingsService
from drivetally.utils.amount_parser import Number

RECORDS_KEY = "records"
HISTORY_LIMIT = 15

logger = structlog.get_logger(__name__)


def new_record_id() -> str:
    """Generate an opaque record identifier."""
    return uuid4().hex


class RecordService:
    """Service for calculating, saving and listing run records."""

    def __init__(self, db: Database):
        """Initialize record service.

        Args:
            db: Database instance
        """
        self.db = db
        self.settings_service = SettingsService(db)
        self.entitlement_service = EntitlementService(db)

    def load_store(self) -> RecordStore:
        """Load the stored records into a RecordStore."""
        records = self.db.load(RECORDS_KEY, [], mappers.records_from_payload)
        return RecordStore(records)

    def _persist(self, store: RecordStore) -> None:
        self.db.save(RECORDS_KEY, store.records, mappers.records_to_payload)

    def calculate(
        self,
        total_earnings: Optional[Number],
        km_driven: Optional[Number],
        hours_worked: Optional[Number] = None,
        additional_costs: Optional[Number] = None,
    ) -> CalculationResult:
        """Calculate results at the saved cost per km without storing anything.

        Raises:
            InvalidInputError: If earnings or km are invalid
        """
        cost_per_km = self.settings_service.get_settings().cost_per_km
        return compute_values(
            total_earnings, km_driven, hours_worked, additional_costs, cost_per_km
        )

    def build_record(
        self,
        day: date,
        total_earnings: Optional[Number],
        km_driven: Optional[Number],
        hours_worked: Optional[Number] = None,
        additional_costs: Optional[Number] = None,
        record_id: Optional[str] = None,
    ) -> RunRecord:
        """Validate inputs and build a record.

        Absent hours and costs stay None on the record.

        Raises:
            InvalidInputError: If a field is invalid
        """
        # Runs the same checks a calculation would
        self.calculate(total_earnings, km_driven, hours_worked, additional_costs)

        earnings = require_number(total_earnings, "Total earnings")
        if earnings < 0:
            raise InvalidInputError(must_not_be_negative("Total earnings"))

        return RunRecord(
            id=record_id or new_record_id(),
            date=day,
            total_earnings=earnings,
            km_driven=require_number(km_driven, "Km driven"),
            hours_worked=optional_number(hours_worked, "Hours worked"),
            additional_costs=optional_number(additional_costs, "Additional costs"),
        )

    def plan_save(self, record: RunRecord) -> UpsertPlan:
        """Tell the caller whether saving would update, replace or insert."""
        return self.load_store().plan(record)

    def save_record(self, record: RunRecord) -> UpsertOutcome:
        """Save a record, replacing any other record on the same date.

        Raises:
            CapacityExceededError: If this is a new record, the free limit is
                reached and unlimited records are not unlocked
        """
        store = self.load_store()
        plan = store.plan(record)

        if plan.is_new_insert and len(store) >= FREE_RECORD_LIMIT:
            entitlements = self.entitlement_service.get_entitlements()
            if not entitlements.unlimited_records:
                logger.warning("record_limit_reached", count=len(store))
                raise CapacityExceededError(capacity_exceeded(FREE_RECORD_LIMIT))

        outcome = store.upsert(record)
        self._persist(store)

        if plan.conflict is not None:
            logger.info(
                "record_overwritten",
                record_id=record.id,
                replaced_id=plan.conflict.id,
                date=record.date.isoformat(),
            )
        else:
            logger.info("record_saved", record_id=record.id, outcome=outcome.value)
        return outcome

    def delete_record(self, record_id: str) -> None:
        """Delete a record.

        Raises:
            NotFoundError: If the record doesn't exist
        """
        store = self.load_store()
        store.delete(record_id)
        self._persist(store)
        logger.info("record_deleted", record_id=record_id)

    def get_record(self, record_id: str) -> Optional[RunRecord]:
        """Get record by ID."""
        return self.load_store().get(record_id)

    def require_record(self, record_id: str) -> RunRecord:
        """Get record by ID, raising NotFoundError if missing."""
        record = self.get_record(record_id)
        if record is None:
            raise NotFoundError(record_not_found(record_id))
        return record

    def list_records(self) -> list[RunRecord]:
        """List all records in storage order."""
        return list(self.load_store().records)

    def recent_history(self, limit: int = HISTORY_LIMIT) -> list[HistoryEntry]:
        """Most recent records first, each with its net profit.

        Net profit uses the current cost per km, not the one in effect when
        the record was saved.
        """
        cost_per_km: Decimal = self.settings_service.get_settings().cost_per_km
        records = sorted(self.list_records(), key=lambda r: r.date, reverse=True)
        return [
            HistoryEntry(record=record, net_profit=net_profit(record, cost_per_km))
            for record in records[:limit]
        ]
