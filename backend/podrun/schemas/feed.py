from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from podrun.schemas.run import Mood


class FeedItem(BaseModel):
    id: int
    user_id: str
    user: str    # display name
    avatar: str  # initials, e.g. "AC"
    avatar_url: Optional[str] = None
    distance_km: float
    duration: str  # 'M:SS' or 'H:MM:SS'
    pace: str
    mood: Mood
    note: Optional[str] = None
    location: Optional[str] = None
    time: str  # e.g. "2 hours ago"
    created_at: datetime
    cheers: int
    cheered_by_me: bool = False


class CheerCount(BaseModel):
    run_id: int
    cheers: int
    cheered_by_me: bool
