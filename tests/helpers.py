"""Shared builders for the test suites."""

from datetime import datetime, timedelta

from app.models import Event

MONDAY = datetime(2026, 10, 12)


def make_event(event_id, start, minutes, event_type="class", priority=3):
    return Event(
        id=event_id,
        type=event_type,
        priority=priority,
        start_time=start,
        end_time=start + timedelta(minutes=minutes),
    )


def at(day_offset, hour, minute=0):
    """Timestamp relative to the Monday of the reference week."""
    return MONDAY + timedelta(days=day_offset, hours=hour, minutes=minute)
