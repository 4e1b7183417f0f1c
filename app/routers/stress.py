import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException

from app.models import (
    CurrentStressRequest,
    DailyStressReport,
    DailyStressRequest,
    StressReport,
    StressRequest,
)
from app.services.scheduling_utils import period_bounds, stress_gradient, stress_label
from app.services.stress_engine import (
    ALGORITHM_VERSION,
    InvalidPeriodError,
    compute_daily_stress_levels,
    compute_stress_metrics,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _build_report(events, period_start, period_end, period, overlap, color_low, color_high) -> StressReport:
    try:
        metrics = compute_stress_metrics(events, period_start, period_end, period, overlap=overlap)
    except InvalidPeriodError as e:
        logger.warning(f"Rejected stress window: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return StressReport(
        **metrics.model_dump(),
        label=stress_label(metrics.stress_level),
        gradient=stress_gradient(metrics.stress_level, color_low, color_high),
        algorithm_version=ALGORITHM_VERSION,
        period_start=period_start,
        period_end=period_end,
    )


@router.post("/stress/metrics", response_model=StressReport)
def get_stress_metrics(payload: StressRequest) -> StressReport:
    return _build_report(
        payload.events,
        payload.period_start,
        payload.period_end,
        payload.period,
        payload.overlap,
        payload.color_low,
        payload.color_high,
    )


@router.post("/stress/current", response_model=StressReport)
def get_current_stress(payload: CurrentStressRequest) -> StressReport:
    reference = payload.reference
    if reference is None:
        # Match the events' awareness so window comparisons stay valid
        tz = payload.events[0].start_time.tzinfo if payload.events else None
        reference = datetime.now(tz)
    period_start, period_end = period_bounds(reference, payload.period)
    return _build_report(
        payload.events,
        period_start,
        period_end,
        payload.period,
        False,
        payload.color_low,
        payload.color_high,
    )


@router.post("/stress/daily", response_model=DailyStressReport)
def get_daily_stress(payload: DailyStressRequest) -> DailyStressReport:
    return DailyStressReport(
        week_start=payload.week_start,
        daily_stress=compute_daily_stress_levels(payload.events, payload.week_start),
    )
