from .scheduling_utils import (
    minutes_between,
    event_minutes,
    sort_by_start,
    day_key,
    group_by_day,
    clamp,
    round_half_up,
    period_bounds,
    stress_gradient,
    stress_label,
)
from .stress_engine import (
    ALGORITHM_VERSION,
    HIGH_PRIORITY_THRESHOLD,
    InvalidPeriodError,
    filter_period_events,
    calculate_density,
    calculate_stress_score,
    detect_insufficient_buffers,
    compute_stress_metrics,
    compute_daily_stress_levels,
)
from .buffer_scheduler import (
    DEFAULT_BUFFER_CONFIG,
    CRITICAL_PRIORITY,
    calculate_buffer_multiplier,
    calculate_recommended_buffer,
    compute_dynamic_buffers,
    get_risk_metrics,
    get_buffer_recommendations,
    summarize_buffers,
)

__all__ = [
    # Shared date/display helpers
    "minutes_between",
    "event_minutes",
    "sort_by_start",
    "day_key",
    "group_by_day",
    "clamp",
    "round_half_up",
    "period_bounds",
    "stress_gradient",
    "stress_label",
    # Stress engine
    "ALGORITHM_VERSION",
    "HIGH_PRIORITY_THRESHOLD",
    "InvalidPeriodError",
    "filter_period_events",
    "calculate_density",
    "calculate_stress_score",
    "detect_insufficient_buffers",
    "compute_stress_metrics",
    "compute_daily_stress_levels",
    # Buffer scheduler
    "DEFAULT_BUFFER_CONFIG",
    "CRITICAL_PRIORITY",
    "calculate_buffer_multiplier",
    "calculate_recommended_buffer",
    "compute_dynamic_buffers",
    "get_risk_metrics",
    "get_buffer_recommendations",
    "summarize_buffers",
]
