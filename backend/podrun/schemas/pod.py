from datetime import date

from pydantic import BaseModel


class PodCreate(BaseModel):
    name: str
    weekly_goal_km: float


class PodProgress(BaseModel):
    id: int
    name: str
    members: int
    week_start: date
    weekly_goal_km: float
    current_km: float
    percent: int  # display value, may exceed 100
