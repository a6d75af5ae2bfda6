from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from podrun.core.errors import RemoteError
from podrun.models.profile import Profile
from podrun.schemas.run import Mood, RunRecord
from podrun.store import RunStore


def make_record(user_id="user-1", created_at=None, distance_km=5.2, mood=Mood.happy):
    return RunRecord(
        distance_km=distance_km,
        duration_seconds=1935,
        pace="6:12",
        location="Central Park Loop",
        mood=mood,
        note="Sunrise loop",
        calories=338,
        steps=6760,
        user_id=user_id,
        created_at=created_at or datetime.now(timezone.utc),
    )


def test_insert_and_select_runs(db):
    store = RunStore(db)
    older = datetime.now(timezone.utc) - timedelta(days=1)
    store.insert_run(make_record(created_at=older, distance_km=3.1))
    saved = store.insert_run(make_record())
    store.insert_run(make_record(user_id="someone-else"))

    assert saved.id is not None
    assert saved.journal_note == "Sunrise loop"
    assert saved.mood == "happy"

    runs = store.select_runs("user-1")
    assert [float(r.distance) for r in runs] == [5.2, 3.1]


def test_select_profile(db):
    db.add(Profile(id="user-1", first_name="Alex", last_name="Chen"))
    db.commit()
    store = RunStore(db)
    assert store.select_profile("user-1").first_name == "Alex"
    assert store.select_profile("nobody") is None


def test_database_failure_becomes_remote_error(db, monkeypatch):
    def broken_commit():
        raise OperationalError("INSERT", {}, Exception("connection lost"))

    monkeypatch.setattr(db, "commit", broken_commit)
    with pytest.raises(RemoteError):
        RunStore(db).insert_run(make_record())
