"""Run session lifecycle.

A session moves Idle -> Running <-> Paused -> Stopped. Time and distance
only advance on ``tick()`` while Running; once Stopped nothing changes.
Every operation is total: calls that make no sense in the current state
are no-ops rather than errors.

Distance is simulated. ``DistanceRule`` turns the number of running ticks
into kilometres so repeated ticks never accumulate float error.
"""

from dataclasses import dataclass
from enum import Enum

from loguru import logger

from podrun.core.constants import (
    DEFAULT_CALORIES_PER_KM,
    DEFAULT_DISTANCE_EVERY_TICKS,
    DEFAULT_DISTANCE_INCREMENT_KM,
    DISTANCE_PRECISION,
    STEPS_PER_KM,
)
from podrun.tracker.metrics import DerivedMetrics, derive_metrics


class RunStatus(str, Enum):
    idle = "idle"
    running = "running"
    paused = "paused"
    stopped = "stopped"


@dataclass(frozen=True)
class RunSession:
    """Point-in-time view of a session; what Mood Capture receives on stop."""

    status: RunStatus = RunStatus.idle
    elapsed_seconds: int = 0
    distance_km: float = 0.0


@dataclass(frozen=True)
class DistanceRule:
    """Placeholder for a real distance source: +increment_km every N ticks."""

    increment_km: float = DEFAULT_DISTANCE_INCREMENT_KM
    every_ticks: int = DEFAULT_DISTANCE_EVERY_TICKS

    def __post_init__(self):
        if self.increment_km < 0:
            raise ValueError("increment_km must be >= 0")
        if self.every_ticks < 1:
            raise ValueError("every_ticks must be >= 1")

    def distance_at(self, ticks: int) -> float:
        return round((ticks // self.every_ticks) * self.increment_km, DISTANCE_PRECISION)


class RunSessionTracker:
    def __init__(
        self,
        distance_rule: DistanceRule | None = None,
        calories_per_km: float = DEFAULT_CALORIES_PER_KM,
        steps_per_km: float = STEPS_PER_KM,
    ):
        self.distance_rule = distance_rule or DistanceRule()
        self.calories_per_km = calories_per_km
        self.steps_per_km = steps_per_km
        self._status = RunStatus.idle
        self._elapsed_seconds = 0
        self._distance_km = 0.0

    @property
    def status(self) -> RunStatus:
        return self._status

    @property
    def elapsed_seconds(self) -> int:
        return self._elapsed_seconds

    @property
    def distance_km(self) -> float:
        return self._distance_km

    @property
    def is_running(self) -> bool:
        return self._status is RunStatus.running

    def start(self) -> None:
        if self._status in (RunStatus.idle, RunStatus.paused):
            logger.debug(f"Run session {self._status.value} -> running")
            self._status = RunStatus.running

    def pause(self) -> None:
        if self._status is RunStatus.running:
            logger.debug("Run session running -> paused")
            self._status = RunStatus.paused

    def resume(self) -> None:
        if self._status is RunStatus.paused:
            logger.debug("Run session paused -> running")
            self._status = RunStatus.running

    def tick(self) -> None:
        if self._status is not RunStatus.running:
            return
        self._elapsed_seconds += 1
        self._distance_km = self.distance_rule.distance_at(self._elapsed_seconds)

    def stop(self) -> RunSession:
        if self._status is not RunStatus.stopped:
            logger.debug(
                f"Run session {self._status.value} -> stopped "
                f"({self._elapsed_seconds}s, {self._distance_km:.3f} km)"
            )
            self._status = RunStatus.stopped
        return self.snapshot()

    def snapshot(self) -> RunSession:
        return RunSession(
            status=self._status,
            elapsed_seconds=self._elapsed_seconds,
            distance_km=self._distance_km,
        )

    def metrics(self) -> DerivedMetrics:
        return derive_metrics(
            self._elapsed_seconds,
            self._distance_km,
            calories_per_km=self.calories_per_km,
            steps_per_km=self.steps_per_km,
        )
