from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Mood(str, Enum):
    energized = "energized"
    accomplished = "accomplished"
    peaceful = "peaceful"
    happy = "happy"
    grateful = "grateful"


class RunRecord(BaseModel):
    """A finished run as handed to the store. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    distance_km: float
    duration_seconds: int
    pace: str  # 'M:SS' per km
    location: Optional[str] = None
    mood: Mood
    note: Optional[str] = None
    calories: int
    steps: int
    user_id: str
    created_at: datetime


class RunRead(BaseModel):
    """Schema returned to the frontend when reading a run."""

    id: int
    user_id: str
    distance_km: float
    duration_seconds: int
    duration: str  # "HH:MM:SS"
    pace: str      # e.g. "5:24" per km
    location: Optional[str] = None
    mood: Mood
    note: Optional[str] = None
    calories: int
    steps: int
    created_at: datetime


class RunStats(BaseModel):
    total_runs: int
    total_distance_km: float
    total_duration_seconds: int
    total_duration: str  # e.g. "3h 25m"
    streak_days: int
