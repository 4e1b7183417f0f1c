"""Date arithmetic and display helpers shared by the stress and buffer engines."""

import calendar
import math
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Tuple

from app.models import Event

TRACK_COLOR = "rgba(200,200,200,0.1)"


def minutes_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60


def event_minutes(event: Event) -> float:
    return event.duration_minutes


def sort_by_start(events: Iterable[Event]) -> List[Event]:
    """Start order; equal starts fall back to end time, then id."""
    return sorted(events, key=lambda e: (e.start_time, e.end_time, e.id))


def day_key(value: datetime) -> str:
    """Calendar date of a timestamp as written (no timezone conversion)."""
    return value.strftime("%Y-%m-%d")


def group_by_day(events: Iterable[Event]) -> Dict[str, List[Event]]:
    day_events: Dict[str, List[Event]] = defaultdict(list)
    for event in events:
        day_events[day_key(event.start_time)].append(event)
    return dict(day_events)


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (round() would go to even)."""
    if not math.isfinite(value):
        raise ValueError(f"cannot round non-finite value {value!r}")
    return math.floor(value + 0.5)


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(value: datetime) -> datetime:
    return value.replace(hour=23, minute=59, second=59, microsecond=999999)


def period_bounds(reference: datetime, period: str) -> Tuple[datetime, datetime]:
    """
    Return the (start, end) window of the period containing ``reference``.

    Weeks start on Monday. The end is the last microsecond of the closing day,
    and the reference's tzinfo is preserved.
    """
    day_start = start_of_day(reference)
    if period == "day":
        return day_start, end_of_day(day_start)
    if period == "week":
        week_start = day_start - timedelta(days=reference.weekday())
        return week_start, end_of_day(week_start + timedelta(days=6))
    if period == "month":
        last_day = calendar.monthrange(reference.year, reference.month)[1]
        return day_start.replace(day=1), end_of_day(day_start.replace(day=last_day))
    if period == "year":
        return day_start.replace(month=1, day=1), end_of_day(day_start.replace(month=12, day=31))
    raise ValueError(f"Unknown period: {period}")


def stress_gradient(stress_level: float, color_low: str, color_high: str) -> str:
    """CSS gradient filling ``stress_level / 10`` of the bar from color_low to color_high."""
    percentage = (stress_level / 10) * 100
    return (
        f"linear-gradient(to right, {color_low} 0%, {color_high} {percentage:g}%, "
        f"{TRACK_COLOR} {percentage:g}%, {TRACK_COLOR} 100%)"
    )


def stress_label(stress_level: int) -> str:
    if stress_level <= 3:
        return "low"
    if stress_level <= 6:
        return "medium"
    return "high"
