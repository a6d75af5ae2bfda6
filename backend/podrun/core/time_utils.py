import math
from datetime import datetime, timezone

from podrun.core.constants import PACE_SENTINEL


def seconds_to_hhmmss(total_seconds: int) -> str:
    """
    Convert total seconds (int) -> 'HH:MM:SS'.
    Example: 2732 -> '00:45:32'
    """
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_elapsed(total_seconds: int) -> str:
    """
    Format a stopwatch reading: 'M:SS', or 'H:MM:SS' once past an hour.
    Example: 95 -> '1:35', 3725 -> '1:02:05'
    """
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_duration_hm(total_seconds: int) -> str:
    """Format a long total as 'Xh Ym' (e.g. 7500 -> '2h 5m')."""
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    return f"{hours}h {minutes}m"


def compute_pace(duration_seconds: int, distance_km: float) -> str:
    """
    Compute pace per kilometre as 'M:SS'.
    Example: duration=10 sec, distance=0.05 -> '3:20'

    Returns '0:00' when no distance has been covered yet.
    """
    if distance_km <= 0:
        return PACE_SENTINEL

    pace_sec = int(duration_seconds / distance_km)

    minutes = pace_sec // 60
    seconds = pace_sec % 60
    return f"{minutes}:{seconds:02d}"


def round_half_up(value: float) -> int:
    """Round like a stopwatch display does: 2.5 -> 3 (not banker's 2)."""
    return int(math.floor(value + 0.5))


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def humanize_ago(dt: datetime, now: datetime | None = None) -> str:
    """Render a timestamp relative to now: 'just now', '5 minutes ago', '2 hours ago'.

    Naive datetimes are assumed to be UTC (SQLite drops tzinfo).
    """
    now = now or utcnow()
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = int((now - dt).total_seconds())
    if delta < 60:
        return "just now"

    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if delta >= size:
            count = delta // size
            return f"{count} {unit}{'' if count == 1 else 's'} ago"
    return "just now"
