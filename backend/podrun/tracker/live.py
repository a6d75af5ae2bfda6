"""Live (in-progress) runs held in process memory.

A ``LiveRun`` keeps one tracker and one tick timer in step: the timer only
exists while the tracker is Running. The registry owns every live run so
shutdown can cancel all timers in one place, and drops runs nobody has
touched for ``max_idle_seconds``.

Timer-touching methods must be called from the event loop thread.
``claim``/``release``/``finish`` are also safe from worker threads: a
claimed run is stopped and has no timer.
"""

import asyncio
import threading
import uuid
from datetime import datetime
from typing import Awaitable, Callable

from loguru import logger

from podrun.core.config import Settings
from podrun.core.logger import session_logger
from podrun.core.time_utils import utcnow
from podrun.tracker.session import DistanceRule, RunSession, RunSessionTracker, RunStatus
from podrun.tracker.timer import TickTimer


class LiveRun:
    def __init__(
        self,
        user_id: str,
        location: str,
        tracker: RunSessionTracker,
        interval: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.id = uuid.uuid4().hex
        self.user_id = user_id
        self.location = location
        self._clock = clock
        self.started_at: datetime = clock()
        self.last_active_at: datetime = self.started_at
        self.tracker = tracker
        self.timer = TickTimer(tracker.tick, interval=interval, sleep=sleep)
        self.log = session_logger(self.id, user_id)

    @property
    def status(self) -> RunStatus:
        return self.tracker.status

    def touch(self) -> None:
        self.last_active_at = self._clock()

    def start(self) -> None:
        self.tracker.start()
        if self.tracker.is_running:
            self.timer.start()
        self.touch()

    def pause(self) -> None:
        self.tracker.pause()
        self.timer.cancel()
        self.touch()

    def resume(self) -> None:
        self.tracker.resume()
        if self.tracker.is_running:
            self.timer.start()
        self.touch()

    def stop(self) -> RunSession:
        self.timer.cancel()
        snapshot = self.tracker.stop()
        self.touch()
        self.log.info(
            f"Live run stopped: {snapshot.elapsed_seconds}s, {snapshot.distance_km:.3f} km"
        )
        return snapshot

    def close(self) -> None:
        self.timer.cancel()


class LiveRunRegistry:
    def __init__(
        self,
        tick_interval: float = 1.0,
        distance_rule: DistanceRule | None = None,
        calories_per_km: float | None = None,
        steps_per_km: float | None = None,
        max_idle_seconds: float | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.tick_interval = tick_interval
        self.distance_rule = distance_rule or DistanceRule()
        self._tracker_kwargs = {}
        if calories_per_km is not None:
            self._tracker_kwargs["calories_per_km"] = calories_per_km
        if steps_per_km is not None:
            self._tracker_kwargs["steps_per_km"] = steps_per_km
        # None keeps runs until they are journaled, discarded or shut down
        self.max_idle_seconds = max_idle_seconds
        self._sleep = sleep
        self._clock = clock
        self._lock = threading.Lock()
        self._runs: dict[str, LiveRun] = {}
        # Runs whose journal is being saved; invisible to get() until released
        self._claimed: dict[str, LiveRun] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> "LiveRunRegistry":
        return cls(
            tick_interval=settings.tick_interval_seconds,
            distance_rule=DistanceRule(
                increment_km=settings.distance_increment_km,
                every_ticks=settings.distance_every_ticks,
            ),
            calories_per_km=settings.calories_per_km,
            steps_per_km=settings.steps_per_km,
            max_idle_seconds=settings.live_run_max_idle_seconds,
        )

    def __len__(self) -> int:
        return len(self._runs)

    def create(self, user_id: str, location: str) -> LiveRun:
        self.prune()
        tracker = RunSessionTracker(self.distance_rule, **self._tracker_kwargs)
        run = LiveRun(
            user_id,
            location,
            tracker,
            interval=self.tick_interval,
            sleep=self._sleep,
            clock=self._clock,
        )
        with self._lock:
            self._runs[run.id] = run
        run.start()
        run.log.info(f"Live run started at {location!r}")
        return run

    def get(self, run_id: str, user_id: str) -> LiveRun:
        with self._lock:
            run = self._runs.get(run_id)
        # Someone else's run looks the same as a missing one
        if run is None or run.user_id != user_id:
            raise LookupError(f"Live run {run_id} not found")
        return run

    def claim(self, run_id: str, user_id: str) -> LiveRun:
        """Take a stopped run out of the registry so only one caller can save it.

        Raises LookupError if the run is missing, not the caller's or already
        claimed, and ValueError if it has not been stopped.
        """
        with self._lock:
            run = self._runs.get(run_id)
            if run is None or run.user_id != user_id:
                raise LookupError(f"Live run {run_id} not found")
            if run.status is not RunStatus.stopped:
                raise ValueError("Stop the run before saving it")
            del self._runs[run_id]
            self._claimed[run_id] = run
        return run

    def release(self, run: LiveRun) -> None:
        """Put a claimed run back after a failed save so it can be retried."""
        with self._lock:
            if self._claimed.pop(run.id, None) is not None:
                run.touch()
                self._runs[run.id] = run

    def finish(self, run: LiveRun) -> None:
        """Forget a claimed run once its journal is saved."""
        with self._lock:
            self._claimed.pop(run.id, None)
        run.close()
        run.log.info("Live run journaled and closed")

    def discard(self, run_id: str) -> None:
        with self._lock:
            run = self._runs.pop(run_id, None)
        if run is not None:
            run.close()
            run.log.info("Live run discarded")

    def prune(self, now: datetime | None = None) -> int:
        """Close and forget runs idle for longer than ``max_idle_seconds``."""
        if self.max_idle_seconds is None:
            return 0
        now = now or self._clock()
        with self._lock:
            stale = [
                run
                for run in self._runs.values()
                if (now - run.last_active_at).total_seconds() > self.max_idle_seconds
            ]
            for run in stale:
                del self._runs[run.id]
        for run in stale:
            run.close()
            run.log.info(f"Live run evicted after {self.max_idle_seconds:.0f}s idle ({run.status.value})")
        return len(stale)

    def close_all(self) -> None:
        with self._lock:
            runs = list(self._runs.values())
            self._runs.clear()
            self._claimed.clear()
        if runs:
            logger.info(f"Closing {len(runs)} live run(s)")
        for run in runs:
            run.close()
