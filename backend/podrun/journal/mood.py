"""Post-run mood journal.

After a run is stopped the user picks how they feel and may add a note
for their pod. Submitting turns the frozen session into a ``RunRecord``
and hands it to the store exactly once.
"""

from datetime import datetime
from typing import Callable, Optional

from loguru import logger

from podrun.core.constants import DEFAULT_CALORIES_PER_KM, STEPS_PER_KM
from podrun.core.errors import ValidationError
from podrun.core.time_utils import utcnow
from podrun.schemas.run import Mood, RunRecord
from podrun.store import RunStore
from podrun.tracker.metrics import derive_metrics
from podrun.tracker.session import RunSession, RunStatus

MOOD_REQUIRED = "Please select your mood"


def parse_mood(value) -> Mood:
    """Coerce a mood tag; anything outside the fixed set is a ValidationError."""
    if isinstance(value, Mood):
        return value
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(MOOD_REQUIRED)
    try:
        return Mood(str(value).strip().lower())
    except ValueError:
        raise ValidationError(
            f"Unknown mood {value!r}; choose one of: {', '.join(m.value for m in Mood)}"
        ) from None


class MoodCapture:
    def __init__(
        self,
        snapshot: RunSession,
        location: str,
        user_id: str,
        store: RunStore,
        calories_per_km: float = DEFAULT_CALORIES_PER_KM,
        steps_per_km: float = STEPS_PER_KM,
        on_complete: Optional[Callable[[RunRecord], None]] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.snapshot = snapshot
        self.location = location
        self.user_id = user_id
        self.store = store
        self.calories_per_km = calories_per_km
        self.steps_per_km = steps_per_km
        self.on_complete = on_complete
        self.clock = clock
        self.selected_mood: Optional[Mood] = None
        self.note: str = ""
        self.record: Optional[RunRecord] = None
        # Whatever the store returned for the saved record (the Run row)
        self.saved = None

    def select_mood(self, mood) -> None:
        self.selected_mood = parse_mood(mood)

    def build_record(self, mood: Mood, note: Optional[str]) -> RunRecord:
        metrics = derive_metrics(
            self.snapshot.elapsed_seconds,
            self.snapshot.distance_km,
            calories_per_km=self.calories_per_km,
            steps_per_km=self.steps_per_km,
        )
        note = (note or "").strip() or None
        return RunRecord(
            distance_km=self.snapshot.distance_km,
            duration_seconds=self.snapshot.elapsed_seconds,
            pace=metrics.pace,
            location=self.location,
            mood=mood,
            note=note,
            calories=metrics.calories,
            steps=metrics.steps,
            user_id=self.user_id,
            created_at=self.clock(),
        )

    def submit(self, mood=None, note: Optional[str] = None) -> RunRecord:
        """Validate, build the record and save it.

        Raises:
            ValidationError: no mood (or an unknown one), the run is still
                going, or this journal was already saved.
            RemoteError: the store failed; the journal can be submitted again.
        """
        if self.record is not None:
            raise ValidationError("This run has already been saved")
        if self.snapshot.status is not RunStatus.stopped:
            raise ValidationError("Stop the run before saving it")

        if mood is not None:
            self.select_mood(mood)
        if note is not None:
            self.note = note
        if self.selected_mood is None:
            raise ValidationError(MOOD_REQUIRED)

        record = self.build_record(self.selected_mood, self.note)
        self.saved = self.store.insert_run(record)
        self.record = record
        logger.info(
            f"Journal saved for user {self.user_id}: {record.mood.value}, "
            f"{record.distance_km:.3f} km in {record.duration_seconds}s"
        )

        if self.on_complete is not None:
            self.on_complete(record)
        return record
