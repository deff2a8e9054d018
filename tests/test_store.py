"""
Tests for the ShowStore

All tests run against the in-memory backend.
"""

import json
from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import pytest

from roadshow.audit import AuditLogger
from roadshow.config import RateSettings
from roadshow.models.audit import AuditEventType
from roadshow.models.show import Show, ShowInput
from roadshow.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    ShowPersistenceAdapter,
)
from roadshow.store import (
    SAVE_FAILED_MESSAGE,
    ShowStore,
    create_key_value_store,
    create_store,
)


KEY = "roadshow-savings-data"


@pytest.fixture
def rates():
    return RateSettings(
        room_rate_per_night=100,
        meeting_rate_per_day=100,
        commission_rate=0.20,
    )


@pytest.fixture
def backend():
    return InMemoryKeyValueStore()


class FakeClock:
    """Returns a new timestamp one minute later on every call."""

    def __init__(self):
        self.now = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        self.now += timedelta(minutes=1)
        return self.now


def make_store(backend, rates, **kwargs):
    return ShowStore(
        persistence=ShowPersistenceAdapter(backend, key=KEY),
        rates=rates,
        audit_logger=kwargs.pop("audit_logger", AuditLogger()),
        **kwargs,
    )


def stored_shows(backend):
    return ShowPersistenceAdapter(backend, key=KEY).load()


def show_input(destination="Chicago", nights=2, meeting_days=1, room=150, meeting=50):
    return ShowInput(
        destination=destination,
        nights=nights,
        meeting_days=meeting_days,
        actual_room_cost=room,
        actual_meeting_cost=meeting,
    )


class TestShowStoreLoading:
    """Tests for initial load."""

    def test_starts_empty_without_data(self, backend, rates):
        store = make_store(backend, rates)
        assert store.shows == ()
        assert len(store) == 0
        assert store.totals.show_count == 0
        assert store.error is None

    def test_loads_existing_shows(self, backend, rates):
        existing = [Show(destination="A"), Show(destination="B")]
        ShowPersistenceAdapter(backend, key=KEY).save(existing)
        store = make_store(backend, rates)
        assert list(store.shows) == existing

    def test_corrupt_data_falls_back_to_empty(self, rates):
        backend = InMemoryKeyValueStore({KEY: "{definitely not json"})
        logger = AuditLogger()
        store = make_store(backend, rates, audit_logger=logger)

        assert store.shows == ()
        assert store.error is None
        assert logger.recent_events()[0].event_type == AuditEventType.LOAD_FAILED

    def test_unreadable_file_falls_back_to_empty(self, tmp_path, rates):
        (tmp_path / f"{KEY}.json").mkdir()
        store = make_store(JsonFileKeyValueStore(tmp_path), rates)
        assert store.shows == ()

    def test_corrupt_data_is_backed_up_before_next_save(self, rates):
        backend = InMemoryKeyValueStore({KEY: "[{broken"})
        logger = AuditLogger()
        store = make_store(backend, rates, audit_logger=logger)

        store.create(show_input())

        assert backend.get(f"{KEY}.unreadable") == "[{broken"
        load_failed = logger.recent_events()[-1]
        assert load_failed.event_type == AuditEventType.LOAD_FAILED
        assert load_failed.details["backup_key"] == f"{KEY}.unreadable"

    def test_backup_failure_is_reported_in_audit(self, rates):
        backend = InMemoryKeyValueStore({KEY: "[{broken"}, quota_bytes=10)
        logger = AuditLogger()
        store = make_store(backend, rates, audit_logger=logger)

        assert store.shows == ()
        load_failed = logger.recent_events()[0]
        assert load_failed.details["backup_key"] is None
        assert "back up" in load_failed.error_message

    def test_browser_history_with_fractions_is_kept(self, rates):
        blob = json.dumps([{
            "destination": "Boston",
            "nights": 2.5,
            "meetingDays": 1,
            "actualRoomCost": 200,
            "actualMeetingCost": 0,
            "notes": "n" * 6000,
            "id": str(uuid4()),
            "createdAt": "2024-02-01T12:00:00.000Z",
        }])
        backend = InMemoryKeyValueStore({KEY: blob})
        store = make_store(backend, rates)

        store.create(show_input("New"))

        assert [s.destination for s in stored_shows(backend)] == ["New", "Boston"]
        assert store.totals.total_budgeted == 350 + 300


class TestShowStoreCreate:
    """Tests for create."""

    def test_create_prepends(self, backend, rates):
        store = make_store(backend, rates)
        first = store.create(show_input("First"))
        second = store.create(show_input("Second"))
        assert [s.id for s in store.shows] == [second.id, first.id]

    def test_create_assigns_identity(self, backend, rates):
        clock = FakeClock()
        store = make_store(backend, rates, clock=clock)
        show = store.create(show_input())
        assert isinstance(show.id, UUID)
        assert show.created_at == clock.now
        assert show.destination == "Chicago"

    def test_create_ids_are_distinct(self, backend, rates):
        store = make_store(backend, rates)
        ids = {store.create(show_input(f"Show {i}")).id for i in range(20)}
        assert len(ids) == 20

    def test_create_skips_colliding_ids(self, backend, rates):
        a, b = uuid4(), uuid4()
        ids = iter([a, a, b])
        store = make_store(backend, rates, id_factory=lambda: next(ids))
        assert store.create(show_input("One")).id == a
        assert store.create(show_input("Two")).id == b

    def test_deleted_ids_are_never_reused(self, backend, rates):
        a, c = uuid4(), uuid4()
        ids = iter([a, a, c])
        store = make_store(backend, rates, id_factory=lambda: next(ids))
        store.create(show_input("One"))
        store.delete(a)
        assert store.create(show_input("Two")).id == c

    def test_loaded_ids_are_never_reused(self, backend, rates):
        existing = Show(destination="Existing")
        ShowPersistenceAdapter(backend, key=KEY).save([existing])
        fresh = uuid4()
        ids = iter([existing.id, fresh])
        store = make_store(backend, rates, id_factory=lambda: next(ids))
        assert store.create(show_input()).id == fresh

    def test_create_persists_full_list(self, backend, rates):
        store = make_store(backend, rates)
        store.create(show_input("First"))
        store.create(show_input("Second"))
        assert stored_shows(backend) == list(store.shows)

    def test_create_updates_totals(self, backend, rates):
        store = make_store(backend, rates)
        store.create(show_input(nights=2, meeting_days=1, room=150, meeting=50))
        assert store.totals.show_count == 1
        assert store.totals.total_budgeted == 300
        assert store.totals.total_spent == 200
        assert store.totals.total_savings == 100
        assert store.totals.total_commission == pytest.approx(20)


class TestShowStoreUpdate:
    """Tests for update."""

    def test_update_preserves_identity_and_position(self, backend, rates):
        store = make_store(backend, rates, clock=FakeClock())
        first = store.create(show_input("First"))
        store.create(show_input("Second"))

        updated = store.update(first.id, show_input("Renamed", nights=5))

        assert updated.id == first.id
        assert updated.created_at == first.created_at
        assert updated.destination == "Renamed"
        assert updated.nights == 5
        assert [s.destination for s in store.shows] == ["Second", "Renamed"]

    def test_update_replaces_all_editable_fields(self, backend, rates):
        store = make_store(backend, rates)
        show = store.create(
            ShowInput(destination="X", nights=3, notes="old note", actual_room_cost=99)
        )
        updated = store.update(show.id, ShowInput(destination="Y"))
        assert updated.nights == 0
        assert updated.notes == ""
        assert updated.actual_room_cost == 0

    def test_update_persists(self, backend, rates):
        store = make_store(backend, rates)
        show = store.create(show_input("Before"))
        store.update(show.id, show_input("After"))
        assert stored_shows(backend)[0].destination == "After"

    def test_update_unknown_id_is_noop(self, backend, rates):
        store = make_store(backend, rates)
        store.create(show_input("Only"))
        blob_before = backend.get(KEY)

        assert store.update(uuid4(), show_input("Ghost")) is None
        assert [s.destination for s in store.shows] == ["Only"]
        assert backend.get(KEY) == blob_before

    def test_update_recomputes_totals(self, backend, rates):
        store = make_store(backend, rates)
        show = store.create(show_input(nights=2, meeting_days=1, room=150, meeting=50))
        store.update(show.id, show_input(nights=1, meeting_days=1, room=300, meeting=0))
        assert store.totals.total_savings == -100
        assert store.totals.total_commission == 0


class TestShowStoreDelete:
    """Tests for delete."""

    def test_delete_removes_only_match(self, backend, rates):
        store = make_store(backend, rates)
        keep = store.create(show_input("Keep"))
        drop = store.create(show_input("Drop"))

        assert store.delete(drop.id) is True
        assert [s.id for s in store.shows] == [keep.id]
        assert stored_shows(backend) == [keep]

    def test_delete_unknown_id_is_noop(self, backend, rates):
        store = make_store(backend, rates)
        store.create(show_input("Only"))
        blob_before = backend.get(KEY)

        assert store.delete(uuid4()) is False
        assert len(store) == 1
        assert backend.get(KEY) == blob_before

    def test_delete_recomputes_totals(self, backend, rates):
        store = make_store(backend, rates)
        show = store.create(show_input())
        store.delete(show.id)
        assert store.totals.show_count == 0
        assert store.totals.total_budgeted == 0

    def test_get_after_delete_returns_none(self, backend, rates):
        store = make_store(backend, rates)
        show = store.create(show_input())
        assert store.get(show.id) == show
        store.delete(show.id)
        assert store.get(show.id) is None


class TestShowStoreSaveFailures:
    """Tests for what happens when storage rejects a save."""

    def test_failed_save_keeps_change_in_memory(self, rates):
        backend = InMemoryKeyValueStore(quota_bytes=10)
        store = make_store(backend, rates)

        show = store.create(show_input())

        assert store.get(show.id) == show
        assert store.totals.show_count == 1
        assert store.error == SAVE_FAILED_MESSAGE
        assert backend.get(KEY) is None

    def test_failed_save_is_audited(self, rates):
        logger = AuditLogger()
        store = make_store(InMemoryKeyValueStore(quota_bytes=10), rates, audit_logger=logger)
        store.create(show_input())
        event_types = [e.event_type for e in logger.recent_events()]
        assert AuditEventType.SAVE_FAILED in event_types
        assert AuditEventType.SAVE_SUCCEEDED not in event_types

    def test_dismiss_error(self, rates):
        store = make_store(InMemoryKeyValueStore(quota_bytes=10), rates)
        store.create(show_input())
        store.dismiss_error()
        assert store.error is None

    def test_error_stays_until_dismissed(self, rates):
        backend = InMemoryKeyValueStore(quota_bytes=10)
        store = make_store(backend, rates)
        show = store.create(show_input())
        store.delete(show.id)
        # the empty list fits, so storage has caught up
        assert backend.get(KEY) == "[]"
        assert store.error == SAVE_FAILED_MESSAGE


class TestShowStoreMetrics:
    """Tests for derived figures exposed by the store."""

    def test_metrics_for_scenario(self, backend, rates):
        store = make_store(backend, rates)
        show = store.create(show_input(nights=2, meeting_days=1, room=150, meeting=50))
        metrics = store.metrics_for(show)
        assert metrics.total_budget == 300
        assert metrics.actual_spend == 200
        assert metrics.savings == 100
        assert metrics.commission == pytest.approx(20.00)

    def test_rate_change_applies_retroactively(self, backend, rates):
        store = make_store(backend, rates)
        store.create(show_input(nights=2, meeting_days=1, room=150, meeting=50))

        richer = RateSettings(
            room_rate_per_night=200,
            meeting_rate_per_day=100,
            commission_rate=0.20,
        )
        reopened = make_store(backend, richer)
        assert reopened.totals.total_budgeted == 500
        assert reopened.totals.total_savings == 300


class TestStoreFactory:
    """Tests for the wiring helpers."""

    def test_create_key_value_store_memory(self):
        assert isinstance(create_key_value_store("memory"), InMemoryKeyValueStore)

    def test_create_key_value_store_file(self, tmp_path):
        kv = create_key_value_store("file", data_dir=str(tmp_path))
        assert isinstance(kv, JsonFileKeyValueStore)
        assert kv.data_dir == tmp_path

    def test_create_key_value_store_unknown(self):
        with pytest.raises(ValueError):
            create_key_value_store("cloud")

    def test_create_store_uses_given_backend(self, backend):
        store = create_store(backend)
        store.create(show_input())
        assert len(stored_shows(backend)) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
