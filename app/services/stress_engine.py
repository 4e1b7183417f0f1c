"""
Stress Estimation Service

Turns the events of a period into a bounded stress score (0-10) plus the
sub-metrics and advice shown next to the calendar.

Scoring (algorithm "continuous-v1"):
  - density = min(1, event minutes / period minutes)
  - density_score = density * 5                          (0-5)
  - priority_value = (avg_priority - 1) / 4 * 5            (0-5, 1-5 scale)
  - priority_part = priority_value * (1 + density) / 2     (0-5)
  - stress_level = clamp(round(density_score + priority_part), 0, 10)

Buffer checks are short-horizon only: "day" flags any gap under 15 minutes,
"week" flags three or more days carrying over 10 hours of events.
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, List

from app.models import Event, Period, StressMetrics
from app.services.scheduling_utils import (
    clamp,
    day_key,
    event_minutes,
    group_by_day,
    minutes_between,
    period_bounds,
    round_half_up,
    sort_by_start,
)

logger = logging.getLogger(__name__)

ALGORITHM_VERSION = "continuous-v1"

MAX_STRESS = 10
HIGH_PRIORITY_THRESHOLD = 4
MIN_GAP_MINUTES = 15
HEAVY_DAY_MINUTES = 600  # 10 hours
HEAVY_DAY_LIMIT = 3

# Recommendation gates
HIGH_DENSITY = 0.8
HIGH_PRIORITY_LIMIT = 3
REDISTRIBUTE_STRESS = 7

EMPTY_SCHEDULE_MESSAGE = "Your schedule is clear! It's a great time to relax."
HIGH_DENSITY_MESSAGE = "Your schedule is very full. Consider freeing up some time."
BACK_TO_BACK_MESSAGE = "You have events scheduled back to back. Consider adding rest time between them."
HIGH_PRIORITY_MESSAGE = "You have many high-priority items. Try delegating or postponing some of them."
REDISTRIBUTE_MESSAGE = "This week looks heavy. Consider moving some tasks to next week."


class InvalidPeriodError(ValueError):
    """Raised when the analysis window cannot be scored."""


def filter_period_events(
    events: List[Event],
    period_start: datetime,
    period_end: datetime,
    overlap: bool = False,
) -> List[Event]:
    """
    Select the events that belong to the window.

    By default only the start time is checked (inclusive on both ends), so an
    event running past period_end still counts in full and one starting
    before period_start is dropped. With ``overlap=True`` any event sharing
    time with the window is kept.
    """
    if overlap:
        return [e for e in events if e.start_time < period_end and e.end_time > period_start]
    return [e for e in events if period_start <= e.start_time <= period_end]


def calculate_density(events: List[Event], period_start: datetime, period_end: datetime) -> float:
    """Fraction of the window occupied by events, overlaps counted twice, capped at 1."""
    period_minutes = minutes_between(period_start, period_end)
    if period_minutes <= 0:
        raise InvalidPeriodError("period has zero length")
    total = sum(event_minutes(e) for e in events)
    return clamp(total / period_minutes, 0.0, 1.0)


def calculate_stress_score(density: float, avg_priority: float) -> int:
    density_score = density * 5
    priority_value = ((avg_priority - 1) / 4) * 5
    multiplier = 1 + density
    priority_part = (priority_value * multiplier) / 2
    return int(clamp(round_half_up(density_score + priority_part), 0, MAX_STRESS))


def has_back_to_back_events(events: List[Event], min_gap_minutes: float = MIN_GAP_MINUTES) -> bool:
    sorted_events = sort_by_start(events)
    for current, following in zip(sorted_events, sorted_events[1:]):
        if minutes_between(current.end_time, following.start_time) < min_gap_minutes:
            return True
    return False


def count_heavy_days(events: List[Event], threshold_minutes: float = HEAVY_DAY_MINUTES) -> int:
    daily_minutes = {
        day: sum(event_minutes(e) for e in day_events)
        for day, day_events in group_by_day(events).items()
    }
    return sum(1 for minutes in daily_minutes.values() if minutes > threshold_minutes)


def detect_insufficient_buffers(events: List[Event], period: Period) -> bool:
    if period == "day":
        return has_back_to_back_events(events)
    if period == "week":
        return count_heavy_days(events) >= HEAVY_DAY_LIMIT
    return False


def build_recommendations(
    density: float,
    has_insufficient_buffers: bool,
    high_priority_count: int,
    stress_level: int,
    period: Period,
) -> List[str]:
    recommendations: List[str] = []
    if density > HIGH_DENSITY:
        recommendations.append(HIGH_DENSITY_MESSAGE)
    if has_insufficient_buffers:
        recommendations.append(BACK_TO_BACK_MESSAGE)
    if high_priority_count > HIGH_PRIORITY_LIMIT:
        recommendations.append(HIGH_PRIORITY_MESSAGE)
    if period == "week" and stress_level >= REDISTRIBUTE_STRESS:
        recommendations.append(REDISTRIBUTE_MESSAGE)
    return recommendations


def compute_stress_metrics(
    events: List[Event],
    period_start: datetime,
    period_end: datetime,
    period: Period = "week",
    overlap: bool = False,
) -> StressMetrics:
    """
    Score the stress of the events falling inside [period_start, period_end].

    Args:
        events: Candidate events; those outside the window are ignored
        period_start: Window start (inclusive)
        period_end: Window end (inclusive)
        period: Granularity, decides which buffer check applies
        overlap: Use full-interval overlap instead of start-time filtering

    Returns:
        StressMetrics for the window

    Raises:
        InvalidPeriodError: If the window ends before it starts, or has zero
            length while containing events
    """
    if period_end < period_start:
        raise InvalidPeriodError(
            f"period_end {period_end.isoformat()} is before period_start {period_start.isoformat()}"
        )

    period_events = filter_period_events(events, period_start, period_end, overlap=overlap)
    logger.debug(f"{len(period_events)} of {len(events)} events fall in the {period} window")

    if not period_events:
        return StressMetrics(
            stress_level=0,
            density=0.0,
            high_priority_count=0,
            has_insufficient_buffers=False,
            recommendations=[EMPTY_SCHEDULE_MESSAGE],
            period=period,
        )

    density = calculate_density(period_events, period_start, period_end)
    avg_priority = sum(e.priority for e in period_events) / len(period_events)
    stress_level = calculate_stress_score(density, avg_priority)

    high_priority_count = sum(1 for e in period_events if e.priority >= HIGH_PRIORITY_THRESHOLD)
    has_insufficient_buffers = detect_insufficient_buffers(period_events, period)

    return StressMetrics(
        stress_level=stress_level,
        density=density,
        high_priority_count=high_priority_count,
        has_insufficient_buffers=has_insufficient_buffers,
        recommendations=build_recommendations(
            density, has_insufficient_buffers, high_priority_count, stress_level, period
        ),
        period=period,
    )


def compute_daily_stress_levels(events: List[Event], week_start: datetime) -> Dict[str, int]:
    """Day-granularity stress for the seven days starting at week_start, keyed by date."""
    levels: Dict[str, int] = {}
    for offset in range(7):
        day_start, day_end = period_bounds(week_start + timedelta(days=offset), "day")
        metrics = compute_stress_metrics(events, day_start, day_end, "day")
        levels[day_key(day_start)] = metrics.stress_level
    return levels
