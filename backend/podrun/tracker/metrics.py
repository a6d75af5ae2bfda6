"""Metrics derived from a run session.

Nothing here is stored: pace, calories and steps are recomputed from
elapsed time and distance whenever they are displayed or journaled.
With no distance yet, pace is the '0:00' sentinel and calories and
steps are 0.
"""

from dataclasses import dataclass

from podrun.core.constants import DEFAULT_CALORIES_PER_KM, STEPS_PER_KM
from podrun.core.time_utils import compute_pace, round_half_up


@dataclass(frozen=True)
class DerivedMetrics:
    pace: str  # 'M:SS' per km
    pace_seconds_per_km: float
    calories: int
    steps: int


def pace_seconds_per_km(elapsed_seconds: int, distance_km: float) -> float:
    if distance_km <= 0:
        return 0.0
    return elapsed_seconds / distance_km


def calories(distance_km: float, calories_per_km: float = DEFAULT_CALORIES_PER_KM) -> int:
    return round_half_up(distance_km * calories_per_km)


def steps(distance_km: float, steps_per_km: float = STEPS_PER_KM) -> int:
    return round_half_up(distance_km * steps_per_km)


def derive_metrics(
    elapsed_seconds: int,
    distance_km: float,
    calories_per_km: float = DEFAULT_CALORIES_PER_KM,
    steps_per_km: float = STEPS_PER_KM,
) -> DerivedMetrics:
    return DerivedMetrics(
        pace=compute_pace(elapsed_seconds, distance_km),
        pace_seconds_per_km=pace_seconds_per_km(elapsed_seconds, distance_km),
        calories=calories(distance_km, calories_per_km),
        steps=steps(distance_km, steps_per_km),
    )
