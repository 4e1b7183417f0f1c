"""
Dynamic Buffer Scheduling Service

Recommends rest time after events whose gap to the next event is shorter
than a type- and priority-driven target. Buffers only report the shortfall,
not the full target.
"""

import logging
from typing import Dict, List, Tuple

from app.models import BufferConfig, BufferRecommendation, DayRiskMetrics, Event
from app.services.scheduling_utils import (
    clamp,
    day_key,
    minutes_between,
    round_half_up,
    sort_by_start,
)

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_CONFIG = BufferConfig()

CRITICAL_PRIORITY = 5
BUSY_DAY_EVENT_LIMIT = 6
BUFFER_COUNT_LIMIT = 5
CRITICAL_PRIORITY_LIMIT = 3
DAYS_PER_WEEK = 7


def calculate_buffer_multiplier(event: Event, config: BufferConfig = DEFAULT_BUFFER_CONFIG) -> float:
    """Type multiplier (class/personal stay at 1.0), then optional priority escalation."""
    multiplier = 1.0
    if event.type == "exam":
        multiplier = config.exam_multiplier
    elif event.type == "project":
        multiplier = config.project_multiplier
    elif event.type == "work":
        multiplier = config.work_multiplier

    critical = config.critical_priority_threshold
    elevated = config.elevated_priority_threshold
    if critical is not None and event.priority >= critical:
        multiplier *= config.critical_priority_multiplier
    elif elevated is not None and event.priority >= elevated:
        multiplier *= config.elevated_priority_multiplier
    return multiplier


def calculate_recommended_buffer(event: Event, config: BufferConfig = DEFAULT_BUFFER_CONFIG) -> float:
    target = config.base_buffer_minutes * calculate_buffer_multiplier(event, config)
    return clamp(target, config.min_buffer_minutes, config.max_buffer_minutes)


def compute_dynamic_buffers(
    events: List[Event],
    config: BufferConfig = DEFAULT_BUFFER_CONFIG,
) -> List[BufferRecommendation]:
    """
    Walk consecutive events in start order and emit a buffer wherever the gap
    after an event falls short of its recommended rest.

    Overlapping events count as a zero gap. Nothing is emitted after the last
    event, and shortfalls that round to zero minutes are dropped.
    """
    sorted_events = sort_by_start(events)
    buffers: List[BufferRecommendation] = []

    for current, following in zip(sorted_events, sorted_events[1:]):
        gap_minutes = max(0.0, minutes_between(current.end_time, following.start_time))
        recommended = calculate_recommended_buffer(current, config)
        if gap_minutes >= recommended:
            continue

        duration = round_half_up(recommended - gap_minutes)
        if duration <= 0:
            continue
        buffers.append(
            BufferRecommendation(
                after_event_id=current.id,
                duration_minutes=duration,
                reason=f"Buffer after {current.type} (priority {current.priority})",
            )
        )

    logger.debug(f"Computed {len(buffers)} buffers for {len(events)} events")
    return buffers


def get_risk_metrics(
    events: List[Event],
    buffers: List[BufferRecommendation],
) -> Dict[str, DayRiskMetrics]:
    """Per-day event counts and how many of those events are followed by a buffer."""
    metrics_per_day: Dict[str, DayRiskMetrics] = {}
    for event in events:
        key = day_key(event.start_time)
        metrics_per_day.setdefault(key, DayRiskMetrics()).event_count += 1

    events_by_id: Dict[str, Event] = {}
    for event in events:
        events_by_id.setdefault(event.id, event)

    for buffer in buffers:
        event = events_by_id.get(buffer.after_event_id)
        if event is None:
            continue
        key = day_key(event.start_time)
        if key in metrics_per_day:
            metrics_per_day[key].buffered_events += 1

    return metrics_per_day


def get_buffer_recommendations(
    events: List[Event],
    buffers: List[BufferRecommendation],
) -> List[str]:
    recommendations: List[str] = []

    for metrics in get_risk_metrics(events, buffers).values():
        if metrics.event_count > BUSY_DAY_EVENT_LIMIT:
            recommendations.append(
                f"Consider reducing events on days with {metrics.event_count} activities"
            )

    if len(buffers) > BUFFER_COUNT_LIMIT:
        recommendations.append(
            "Your schedule has many back-to-back events - add more space between tasks"
        )

    critical_count = sum(1 for e in events if e.priority >= CRITICAL_PRIORITY)
    if critical_count > CRITICAL_PRIORITY_LIMIT:
        recommendations.append(
            "You have many critical-priority items - consider spreading them out"
        )

    return recommendations


def summarize_buffers(buffers: List[BufferRecommendation]) -> Tuple[int, int]:
    """Total buffer minutes and the average per day of a seven-day week."""
    total = sum(b.duration_minutes for b in buffers)
    return total, round_half_up(total / DAYS_PER_WEEK)
