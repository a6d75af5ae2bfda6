from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from podrun.tracker.session import RunStatus


class SessionCreate(BaseModel):
    # Falls back to settings.default_location
    location: Optional[str] = None


class SessionRead(BaseModel):
    """Live view of a run in progress."""

    id: str
    status: RunStatus
    location: str
    started_at: datetime
    elapsed_seconds: int
    elapsed: str  # 'M:SS' or 'H:MM:SS'
    distance_km: float
    pace: str
    calories: int
    steps: int


class JournalEntry(BaseModel):
    # Free-form on purpose: an unknown or missing mood is reported by the
    # journal step itself with the same message the form shows.
    mood: Optional[str] = None
    note: Optional[str] = None
