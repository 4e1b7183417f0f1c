from datetime import datetime, timedelta
from typing import List, Optional

from app.models import Event


def _start_of_week(dt: datetime) -> datetime:
    start = dt - timedelta(days=dt.weekday())
    return start.replace(hour=9, minute=0, second=0, microsecond=0)


def generate_mock_week(reference: Optional[datetime] = None) -> List[Event]:
    """A student's Monday-Friday: classes, a shift, an exam and project work."""
    base = _start_of_week(reference or datetime.now())
    events: List[Event] = []

    # (title, type, priority, day offset, start hour, duration minutes)
    templates = [
        ("Calculus Lecture", "class", 3, 0, 0, 90),
        ("Physics Lab", "class", 3, 0, 2, 120),
        ("Cafe Shift", "work", 2, 1, 0, 240),
        ("Algorithms Midterm", "exam", 5, 1, 5, 120),
        ("Group Project Sync", "project", 4, 2, 1, 60),
        ("Capstone Prototype", "project", 4, 2, 2, 180),
        ("Statistics Quiz", "exam", 4, 3, 0, 45),
        ("Gym", "personal", 1, 3, 3, 60),
        ("Library Shift", "work", 2, 4, 0, 300),
        ("Dinner with Family", "personal", 2, 4, 10, 90),
    ]

    for i, tpl in enumerate(templates):
        start_time = base + timedelta(days=tpl[3], hours=tpl[4])
        events.append(
            Event(
                id=f"evt-{i + 1}",
                title=tpl[0],
                type=tpl[1],
                priority=tpl[2],
                start_time=start_time,
                end_time=start_time + timedelta(minutes=tpl[5]),
            )
        )

    return events
