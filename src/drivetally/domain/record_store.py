"""In-memory collection of run records with one record per day."""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from drivetally.domain.entities import RunRecord, UpsertOutcome
from drivetally.domain.errors import NotFoundError, record_not_found


@dataclass(frozen=True)
class UpsertPlan:
    """What saving a record would do, computed before touching the store."""

    is_update: bool
    conflict: Optional[RunRecord]

    @property
    def is_new_insert(self) -> bool:
        """True if saving would grow the collection."""
        return not self.is_update and self.conflict is None

    @property
    def outcome(self) -> UpsertOutcome:
        if self.conflict is not None:
            return UpsertOutcome.REPLACED
        if self.is_update:
            return UpsertOutcome.UPDATED
        return UpsertOutcome.INSERTED


class RecordStore:
    """Ordered collection of records keyed by id, unique by date.

    Insertion order is preserved; updates keep a record's position. Saving a
    record for a date that already belongs to another record removes that
    other record first, so two records never share a date.
    """

    def __init__(self, records: Iterable[RunRecord] = ()):
        self._records: list[RunRecord] = []
        for record in records:
            self.upsert(record)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(list(self._records))

    @property
    def records(self) -> tuple[RunRecord, ...]:
        """Snapshot of the records in insertion order."""
        return tuple(self._records)

    def get(self, record_id: str) -> Optional[RunRecord]:
        """Get record by ID."""
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def find_by_date(
        self, day: date, excluding_id: Optional[str] = None
    ) -> Optional[RunRecord]:
        """Find the record for a date, ignoring the record with ``excluding_id``."""
        for record in self._records:
            if record.date == day and record.id != excluding_id:
                return record
        return None

    def plan(self, record: RunRecord) -> UpsertPlan:
        """Describe what ``upsert`` would do with this record."""
        return UpsertPlan(
            is_update=self.get(record.id) is not None,
            conflict=self.find_by_date(record.date, excluding_id=record.id),
        )

    def upsert(self, record: RunRecord) -> UpsertOutcome:
        """Insert or update a record.

        A different record on the same date is deleted before the new one is
        stored. A record with the same id is replaced in place.

        Returns:
            INSERTED, UPDATED or REPLACED
        """
        plan = self.plan(record)
        if plan.conflict is not None:
            self.delete(plan.conflict.id)

        for index, existing in enumerate(self._records):
            if existing.id == record.id:
                self._records[index] = record
                break
        else:
            self._records.append(record)

        return plan.outcome

    def delete(self, record_id: str) -> None:
        """Delete a record.

        Raises:
            NotFoundError: If no record has this id
        """
        for index, record in enumerate(self._records):
            if record.id == record_id:
                del self._records[index]
                return
        raise NotFoundError(record_not_found(record_id))
