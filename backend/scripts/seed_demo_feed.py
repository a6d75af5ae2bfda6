"""Seed demo profiles, journaled runs and a pod so the feed has content.

Usage (from backend/):
    python -m scripts.seed_demo_feed
"""

from datetime import timedelta
import random

from podrun.core.config import settings
from podrun.core.time_utils import utcnow
from podrun.db import Base, SessionLocal, engine
from podrun.models.cheer import RunCheer  # noqa: F401  (table created with the rest)
from podrun.models.pod import Pod, PodMember
from podrun.models.profile import Profile
from podrun.models.run import Run
from podrun.schemas.run import Mood, RunRecord
from podrun.store import RunStore
from podrun.tracker.metrics import derive_metrics


DEMO_PROFILES = [
    ("demo-sarah", "Sarah", "Lopez", "sarah"),
    ("demo-alex", "Alex", "Chen", "alexc"),
    ("demo-maya", "Maya", "Patel", "mayap"),
    ("demo-jordan", "Jordan", "Kim", "jkim"),
]

DEMO_NOTES = {
    Mood.accomplished: "Beautiful sunrise run through the park! Feeling grateful for this community",
    Mood.peaceful: "Slow and steady today. Sometimes it's about showing up, not speed",
    Mood.energized: "Legs felt fresh, picked it up for the last kilometre.",
    Mood.happy: None,
    Mood.grateful: "Thanks for the cheers yesterday, pod!",
}

DEMO_LOCATIONS = ["Central Park Loop", "Riverside Trail", "Harbor Boardwalk"]


def clear_demo_data(db) -> None:
    """Delete previously seeded demo rows so we can reseed cleanly."""
    ids = [p[0] for p in DEMO_PROFILES]
    db.query(Run).filter(Run.user_id.in_(ids)).delete(synchronize_session=False)
    db.query(PodMember).filter(PodMember.user_id.in_(ids)).delete(synchronize_session=False)
    db.query(Profile).filter(Profile.id.in_(ids)).delete(synchronize_session=False)
    db.commit()


def seed_demo_feed(db, days: int = 14) -> None:
    """Insert profiles, ~one run per user every other day, and one pod."""
    for user_id, first, last, username in DEMO_PROFILES:
        db.add(Profile(id=user_id, first_name=first, last_name=last, username=username))
    db.commit()

    store = RunStore(db)
    now = utcnow()
    count = 0
    for user_id, *_ in DEMO_PROFILES:
        for day in range(days, -1, -2):
            distance_km = round(random.uniform(3.0, 8.0), 2)
            duration = int(distance_km * random.uniform(300, 390))  # 5:00-6:30 /km
            metrics = derive_metrics(
                duration,
                distance_km,
                calories_per_km=settings.calories_per_km,
                steps_per_km=settings.steps_per_km,
            )
            mood = random.choice(list(Mood))
            store.insert_run(
                RunRecord(
                    distance_km=distance_km,
                    duration_seconds=duration,
                    pace=metrics.pace,
                    location=random.choice(DEMO_LOCATIONS),
                    mood=mood,
                    note=DEMO_NOTES[mood],
                    calories=metrics.calories,
                    steps=metrics.steps,
                    user_id=user_id,
                    created_at=now - timedelta(days=day, hours=random.randint(0, 10)),
                )
            )
            count += 1

    pod = Pod(name="Morning Warriors", weekly_goal_km=20)
    db.add(pod)
    db.flush()
    db.add_all(PodMember(pod_id=pod.id, user_id=p[0]) for p in DEMO_PROFILES)
    db.commit()

    print(f"Seeded {len(DEMO_PROFILES)} profiles, {count} runs and pod {pod.id}")


def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        clear_demo_data(db)
        seed_demo_feed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
