from datetime import datetime, timedelta, timezone

from podrun.core.time_utils import (
    compute_pace,
    format_duration_hm,
    format_elapsed,
    humanize_ago,
    round_half_up,
    seconds_to_hhmmss,
)
from podrun.tracker.metrics import calories, derive_metrics, pace_seconds_per_km, steps


def test_calories_and_steps_for_two_km():
    assert calories(2.0, 65) == 130
    assert calories(2.0, 100) == 200
    assert steps(2.0) == 2600


def test_calories_round_half_up():
    # 0.05 km * 65 = 3.25 -> 3 ; 0.1 km * 65 = 6.5 -> 7
    assert calories(0.05, 65) == 3
    assert calories(0.1, 65) == 7
    assert round_half_up(2.5) == 3


def test_pace_never_divides_by_zero():
    assert compute_pace(600, 0) == "0:00"
    assert pace_seconds_per_km(600, 0.0) == 0.0
    metrics = derive_metrics(600, 0.0)
    assert metrics.pace == "0:00"
    assert metrics.calories == 0
    assert metrics.steps == 0


def test_pace_format():
    assert compute_pace(1935, 5.2) == "6:12"
    assert compute_pace(300, 1.0) == "5:00"


def test_duration_formats():
    assert format_elapsed(95) == "1:35"
    assert format_elapsed(3725) == "1:02:05"
    assert seconds_to_hhmmss(2732) == "00:45:32"
    assert format_duration_hm(7500) == "2h 5m"


def test_humanize_ago():
    now = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
    assert humanize_ago(now - timedelta(seconds=20), now) == "just now"
    assert humanize_ago(now - timedelta(minutes=1), now) == "1 minute ago"
    assert humanize_ago(now - timedelta(hours=2, minutes=5), now) == "2 hours ago"
    assert humanize_ago(now - timedelta(days=3), now) == "3 days ago"
    # naive timestamps are treated as UTC
    assert humanize_ago(datetime(2025, 6, 1, 7, 0), now) == "5 hours ago"
