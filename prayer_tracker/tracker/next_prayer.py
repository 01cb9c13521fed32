"""
Next upcoming prayer relative to a time of day, using the scheduled times from
the catalog. There is no rollover to the next day's Fajr.
"""
from typing import Any, Mapping, Optional, Tuple

from .catalog import PrayerType, parse_time, prayer_times
from .errors import InvalidArgument

ALL_PRAYERS_COMPLETED = "All prayers completed"


def _minute_of_day(hour: int, minute: int) -> int:
    if not 0 <= hour <= 23 or not 0 <= minute <= 59:
        raise InvalidArgument(f"Invalid time of day {hour}:{minute}")
    return hour * 60 + minute


def _upcoming(
    hour: int,
    minute: int,
    times: Optional[Mapping[Any, str]],
    inclusive: bool = False,
) -> Optional[Tuple[PrayerType, int]]:
    now = _minute_of_day(hour, minute)
    scheduled = []
    for prayer_type, value in prayer_times(times).items():
        h, m = parse_time(value)
        scheduled.append((prayer_type, h * 60 + m))
    upcoming = sorted(
        (item for item in scheduled if item[1] > now or (inclusive and item[1] == now)),
        key=lambda item: item[1],
    )
    return upcoming[0] if upcoming else None


def next_prayer(hour: int, minute: int, times: Optional[Mapping[Any, str]] = None) -> Optional[PrayerType]:
    """Prayer with the earliest scheduled time strictly after hour:minute, or None."""
    found = _upcoming(hour, minute, times)
    return found[0] if found else None


def current_or_next_prayer(hour: int, minute: int, times: Optional[Mapping[Any, str]] = None) -> Optional[PrayerType]:
    """The prayer time_until_next counts down to: one due this minute, else next_prayer."""
    found = _upcoming(hour, minute, times, inclusive=True)
    return found[0] if found else None


def time_until_next(hour: int, minute: int, times: Optional[Mapping[Any, str]] = None) -> str:
    """'<h>h <m>m', '<m>m', 'Now', or ALL_PRAYERS_COMPLETED when nothing is left today."""
    # A prayer scheduled for this very minute reads as "Now", not as passed.
    found = _upcoming(hour, minute, times, inclusive=True)
    if found is None:
        return ALL_PRAYERS_COMPLETED
    diff = found[1] - _minute_of_day(hour, minute)
    hours, minutes = diff // 60, diff % 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m"
    return "Now"
