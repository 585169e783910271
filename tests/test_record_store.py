"""Tests for the in-memory record store."""

from datetime import date

import pytest

from drivetally.domain.entities import UpsertOutcome
from drivetally.domain.errors import NotFoundError
from drivetally.domain.record_store import RecordStore


class TestRecordStore:
    """Tests for upsert, delete and date uniqueness."""

    def test_insert_appends(self, make_record):
        store = RecordStore()
        first = make_record("a", date(2024, 3, 1))
        second = make_record("b", date(2024, 2, 1))

        assert store.upsert(first) == UpsertOutcome.INSERTED
        assert store.upsert(second) == UpsertOutcome.INSERTED
        assert [r.id for r in store] == ["a", "b"]

    def test_update_keeps_position(self, make_record):
        store = RecordStore(
            [
                make_record("a", date(2024, 3, 1)),
                make_record("b", date(2024, 3, 2)),
                make_record("c", date(2024, 3, 3)),
            ]
        )

        outcome = store.upsert(make_record("b", date(2024, 3, 2), earnings="999"))

        assert outcome == UpsertOutcome.UPDATED
        assert [r.id for r in store] == ["a", "b", "c"]
        assert store.get("b").total_earnings == 999

    def test_update_can_move_date(self, make_record):
        store = RecordStore([make_record("a", date(2024, 3, 1))])

        assert store.upsert(make_record("a", date(2024, 3, 9))) == UpsertOutcome.UPDATED
        assert store.find_by_date(date(2024, 3, 1)) is None
        assert store.find_by_date(date(2024, 3, 9)).id == "a"

    def test_same_date_replaces_other_record(self, make_record):
        store = RecordStore(
            [make_record("a", date(2024, 3, 1)), make_record("b", date(2024, 3, 2))]
        )

        outcome = store.upsert(make_record("c", date(2024, 3, 1), earnings="50"))

        assert outcome == UpsertOutcome.REPLACED
        assert len(store) == 2
        assert store.get("a") is None
        assert store.find_by_date(date(2024, 3, 1)).id == "c"

    def test_update_onto_taken_date_replaces(self, make_record):
        store = RecordStore(
            [make_record("a", date(2024, 3, 1)), make_record("b", date(2024, 3, 2))]
        )

        outcome = store.upsert(make_record("b", date(2024, 3, 1)))

        assert outcome == UpsertOutcome.REPLACED
        assert [r.id for r in store] == ["b"]

    def test_dates_stay_unique(self, make_record):
        store = RecordStore()
        for index in range(10):
            store.upsert(make_record(f"r{index}", date(2024, 3, 1 + index % 3)))

        dates = [r.date for r in store]
        assert len(dates) == len(set(dates)) == 3

    def test_constructor_dedupes_dates(self, make_record):
        store = RecordStore(
            [make_record("a", date(2024, 3, 1)), make_record("b", date(2024, 3, 1))]
        )

        assert [r.id for r in store] == ["b"]

    def test_delete(self, make_record):
        store = RecordStore([make_record("a", date(2024, 3, 1))])

        store.delete("a")

        assert len(store) == 0

    def test_delete_missing(self):
        with pytest.raises(NotFoundError, match="ghost"):
            RecordStore().delete("ghost")

    def test_records_is_a_snapshot(self, make_record):
        store = RecordStore([make_record("a", date(2024, 3, 1))])
        snapshot = store.records

        store.upsert(make_record("b", date(2024, 3, 2)))

        assert len(snapshot) == 1
        assert len(store.records) == 2


class TestUpsertPlan:
    """Tests for planning a save before doing it."""

    def test_plan_new(self, make_record):
        store = RecordStore([make_record("a", date(2024, 3, 1))])

        plan = store.plan(make_record("b", date(2024, 3, 2)))

        assert plan.is_new_insert
        assert plan.conflict is None
        assert plan.outcome == UpsertOutcome.INSERTED

    def test_plan_update(self, make_record):
        store = RecordStore([make_record("a", date(2024, 3, 1))])

        plan = store.plan(make_record("a", date(2024, 3, 1), earnings="5"))

        assert not plan.is_new_insert
        assert plan.outcome == UpsertOutcome.UPDATED

    def test_plan_conflict_does_not_change_store(self, make_record):
        existing = make_record("a", date(2024, 3, 1))
        store = RecordStore([existing])

        plan = store.plan(make_record("b", date(2024, 3, 1)))

        assert plan.conflict == existing
        assert not plan.is_new_insert
        assert plan.outcome == UpsertOutcome.REPLACED
        assert store.records == (existing,)
