from datetime import datetime, timezone

import pytest

from podrun.core.errors import RemoteError, ValidationError
from podrun.journal.mood import MoodCapture, parse_mood
from podrun.schemas.run import Mood
from podrun.tracker.session import RunSession, RunSessionTracker, RunStatus

FIXED_NOW = datetime(2025, 6, 1, 7, 30, tzinfo=timezone.utc)


class FakeStore:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.inserted = []

    def insert_run(self, record):
        if self.fail:
            raise RemoteError("Failed to save run")
        self.inserted.append(record)
        return {"id": len(self.inserted)}


def stopped_session(ticks: int = 10) -> RunSession:
    tracker = RunSessionTracker()
    tracker.start()
    for _ in range(ticks):
        tracker.tick()
    return tracker.stop()


def make_capture(store=None, snapshot=None, **kwargs) -> MoodCapture:
    return MoodCapture(
        snapshot=snapshot or stopped_session(),
        location="Central Park Loop",
        user_id="user-1",
        store=store or FakeStore(),
        clock=lambda: FIXED_NOW,
        **kwargs,
    )


@pytest.mark.parametrize("note", [None, "", "Beautiful sunrise run!"])
def test_submit_without_mood_fails_regardless_of_note(note):
    store = FakeStore()
    capture = make_capture(store)
    with pytest.raises(ValidationError, match="select your mood"):
        capture.submit(note=note)
    assert store.inserted == []


def test_unknown_mood_is_rejected():
    with pytest.raises(ValidationError):
        parse_mood("grumpy")
    with pytest.raises(ValidationError):
        parse_mood("   ")
    assert parse_mood(" Happy ") is Mood.happy


def test_submit_builds_record_from_frozen_session():
    store = FakeStore()
    completed = []
    capture = make_capture(store, on_complete=completed.append)

    record = capture.submit(mood="energized", note="  Felt great  ")

    assert record.distance_km == 0.05
    assert record.duration_seconds == 10
    assert record.pace == "3:20"
    assert record.calories == 3
    assert record.steps == 65
    assert record.mood is Mood.energized
    assert record.note == "Felt great"
    assert record.location == "Central Park Loop"
    assert record.user_id == "user-1"
    assert record.created_at == FIXED_NOW
    assert store.inserted == [record]
    assert completed == [record]
    assert capture.saved == {"id": 1}


def test_record_is_immutable():
    record = make_capture().submit(mood="happy")
    with pytest.raises(Exception):
        record.distance_km = 10.0


def test_blank_note_is_stored_as_none():
    record = make_capture().submit(mood=Mood.peaceful, note="   ")
    assert record.note is None


def test_selected_mood_is_used_on_submit():
    capture = make_capture()
    capture.select_mood("grateful")
    assert capture.submit().mood is Mood.grateful


def test_record_is_created_exactly_once():
    store = FakeStore()
    capture = make_capture(store)
    capture.submit(mood="happy")
    with pytest.raises(ValidationError):
        capture.submit(mood="happy")
    assert len(store.inserted) == 1


def test_running_session_cannot_be_journaled():
    snapshot = RunSession(status=RunStatus.running, elapsed_seconds=5, distance_km=0.025)
    with pytest.raises(ValidationError):
        make_capture(snapshot=snapshot).submit(mood="happy")


def test_store_failure_surfaces_and_allows_retry():
    store = FakeStore(fail=True)
    capture = make_capture(store)
    with pytest.raises(RemoteError):
        capture.submit(mood="accomplished")
    assert capture.record is None

    store.fail = False
    record = capture.submit()
    assert record.mood is Mood.accomplished
    assert len(store.inserted) == 1


def test_calorie_rate_is_configurable():
    record = make_capture(snapshot=stopped_session(400), calories_per_km=100).submit(mood="happy")
    # 400 ticks -> 2.0 km
    assert record.distance_km == 2.0
    assert record.calories == 200
    assert record.steps == 2600
