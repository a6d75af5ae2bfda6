import pytest

from podrun.tracker.session import DistanceRule, RunSessionTracker, RunStatus


def tick(tracker: RunSessionTracker, n: int) -> None:
    for _ in range(n):
        tracker.tick()


def test_new_tracker_is_idle_and_zeroed():
    tracker = RunSessionTracker()
    assert tracker.status is RunStatus.idle
    assert tracker.elapsed_seconds == 0
    assert tracker.distance_km == 0.0


def test_ticks_ignored_until_started():
    tracker = RunSessionTracker()
    tick(tracker, 5)
    assert tracker.elapsed_seconds == 0
    assert tracker.distance_km == 0.0


def test_start_is_noop_when_running():
    tracker = RunSessionTracker()
    tracker.start()
    tick(tracker, 3)
    tracker.start()
    assert tracker.status is RunStatus.running
    assert tracker.elapsed_seconds == 3


def test_time_only_advances_while_running():
    tracker = RunSessionTracker()
    tracker.start()
    tick(tracker, 4)
    tracker.pause()
    tick(tracker, 10)
    assert tracker.status is RunStatus.paused
    assert tracker.elapsed_seconds == 4

    tracker.resume()
    tick(tracker, 2)
    assert tracker.elapsed_seconds == 6

    # start() also resumes from paused
    tracker.pause()
    tracker.start()
    tick(tracker, 1)
    assert tracker.elapsed_seconds == 7


def test_pause_and_resume_are_noops_outside_a_session():
    tracker = RunSessionTracker()
    tracker.pause()
    assert tracker.status is RunStatus.idle
    tracker.resume()
    assert tracker.status is RunStatus.idle

    tracker.start()
    tracker.resume()
    assert tracker.status is RunStatus.running


def test_stop_freezes_metrics():
    tracker = RunSessionTracker()
    tracker.start()
    tick(tracker, 10)
    snapshot = tracker.stop()

    tick(tracker, 30)
    tracker.start()
    tracker.resume()
    tick(tracker, 30)

    assert tracker.status is RunStatus.stopped
    assert tracker.elapsed_seconds == 10
    assert tracker.distance_km == snapshot.distance_km
    assert tracker.snapshot() == snapshot


def test_ten_tick_scenario():
    tracker = RunSessionTracker()
    tracker.start()
    tick(tracker, 10)
    snapshot = tracker.stop()

    assert snapshot.status is RunStatus.stopped
    assert snapshot.elapsed_seconds == 10
    assert snapshot.distance_km == 0.05
    metrics = tracker.metrics()
    assert metrics.pace == "3:20"  # 10s / 0.05km = 200 s/km
    assert metrics.pace_seconds_per_km == pytest.approx(200.0)


def test_distance_does_not_drift_over_long_runs():
    tracker = RunSessionTracker()
    tracker.start()
    tick(tracker, 3600)
    assert tracker.distance_km == 18.0


def test_stepped_distance_rule():
    tracker = RunSessionTracker(DistanceRule(increment_km=0.1, every_ticks=10))
    tracker.start()
    tick(tracker, 9)
    assert tracker.distance_km == 0.0
    tick(tracker, 1)
    assert tracker.distance_km == 0.1
    tick(tracker, 15)
    assert tracker.distance_km == 0.2


def test_distance_rule_rejects_bad_cadence():
    with pytest.raises(ValueError):
        DistanceRule(every_ticks=0)
    with pytest.raises(ValueError):
        DistanceRule(increment_km=-1)


def test_metrics_before_any_distance():
    tracker = RunSessionTracker()
    tracker.start()
    metrics = tracker.metrics()
    assert metrics.pace == "0:00"
    assert metrics.calories == 0
    assert metrics.steps == 0


def test_stop_from_idle_gives_empty_snapshot():
    snapshot = RunSessionTracker().stop()
    assert snapshot.status is RunStatus.stopped
    assert snapshot.elapsed_seconds == 0
    assert snapshot.distance_km == 0.0
