from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

EventType = Literal["class", "work", "exam", "project", "personal"]
Period = Literal["day", "week", "month", "year"]


class Event(BaseModel):
    """A time-boxed commitment supplied by the calendar layer.

    Priority is on the 1-5 scale used by the event form.
    """
    id: str
    type: EventType
    priority: int = Field(ge=1, le=5)
    start_time: datetime
    end_time: datetime
    title: Optional[str] = None
    description: Optional[str] = None

    @model_validator(mode="after")
    def _check_interval(self) -> "Event":
        if (self.start_time.tzinfo is None) != (self.end_time.tzinfo is None):
            raise ValueError("start_time and end_time must both be timezone-aware or both naive")
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self

    @property
    def duration_minutes(self) -> float:
        return (self.end_time - self.start_time).total_seconds() / 60


class StressMetrics(BaseModel):
    stress_level: int = Field(ge=0, le=10)
    density: float = Field(ge=0.0, le=1.0)
    high_priority_count: int = 0
    has_insufficient_buffers: bool = False
    recommendations: List[str] = []
    period: Period


class BufferConfig(BaseModel):
    """Tunable parameters for dynamic buffer scheduling."""
    base_buffer_minutes: float = Field(default=15, gt=0)
    exam_multiplier: float = Field(default=3.0, gt=0)  # 45 minutes after exams
    project_multiplier: float = Field(default=2.0, gt=0)  # 30 minutes after projects
    work_multiplier: float = Field(default=1.5, gt=0)  # 22.5 minutes after work
    max_buffer_minutes: float = Field(default=120, gt=0)
    min_buffer_minutes: float = Field(default=5, ge=0)
    # Priority escalation is off unless a threshold is set (e.g. 5 and 4)
    critical_priority_threshold: Optional[int] = Field(default=None, ge=1, le=5)
    critical_priority_multiplier: float = Field(default=1.3, gt=0)
    elevated_priority_threshold: Optional[int] = Field(default=None, ge=1, le=5)
    elevated_priority_multiplier: float = Field(default=1.1, gt=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "BufferConfig":
        if self.min_buffer_minutes > self.max_buffer_minutes:
            raise ValueError("min_buffer_minutes cannot exceed max_buffer_minutes")
        return self


class BufferRecommendation(BaseModel):
    after_event_id: str
    duration_minutes: int = Field(gt=0)
    reason: str


class DayRiskMetrics(BaseModel):
    event_count: int = 0
    buffered_events: int = 0


# ---------------------------------------------------------------------------
# HTTP payloads
# ---------------------------------------------------------------------------

def _check_same_awareness(events: List[Event], *timestamps: Optional[datetime]) -> None:
    """Naive and timezone-aware timestamps cannot be compared, so a request must not mix them."""
    values = [t for t in timestamps if t is not None]
    values += [t for e in events for t in (e.start_time, e.end_time)]
    if len({t.tzinfo is None for t in values}) > 1:
        raise ValueError("timestamps must be all timezone-aware or all naive")


class StressRequest(BaseModel):
    events: List[Event] = []
    period_start: datetime
    period_end: datetime
    period: Period = "week"
    overlap: bool = False
    color_low: str = "#22c55e"
    color_high: str = "#ef4444"

    @model_validator(mode="after")
    def _check_timestamps(self) -> "StressRequest":
        _check_same_awareness(self.events, self.period_start, self.period_end)
        return self


class CurrentStressRequest(BaseModel):
    """Score the day/week/month/year containing ``reference`` (defaults to now)."""
    events: List[Event] = []
    period: Period = "week"
    reference: Optional[datetime] = None
    color_low: str = "#22c55e"
    color_high: str = "#ef4444"

    @model_validator(mode="after")
    def _check_timestamps(self) -> "CurrentStressRequest":
        _check_same_awareness(self.events, self.reference)
        return self


class StressReport(StressMetrics):
    label: str
    gradient: str
    algorithm_version: str
    period_start: datetime
    period_end: datetime


class DailyStressRequest(BaseModel):
    events: List[Event] = []
    week_start: datetime

    @model_validator(mode="after")
    def _check_timestamps(self) -> "DailyStressRequest":
        _check_same_awareness(self.events, self.week_start)
        return self


class DailyStressReport(BaseModel):
    week_start: datetime
    daily_stress: Dict[str, int]


class BufferRequest(BaseModel):
    events: List[Event] = []
    config: Optional[BufferConfig] = None

    @model_validator(mode="after")
    def _check_timestamps(self) -> "BufferRequest":
        _check_same_awareness(self.events)
        return self


class BufferReport(BaseModel):
    buffers: List[BufferRecommendation] = []
    recommendations: List[str] = []
    risk_metrics: Dict[str, DayRiskMetrics] = {}
    total_buffer_minutes: int = 0
    average_buffer_per_day: int = 0
