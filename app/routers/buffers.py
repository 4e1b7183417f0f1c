from fastapi import APIRouter

from app.config import get_settings
from app.models import BufferReport, BufferRequest
from app.services.buffer_scheduler import (
    compute_dynamic_buffers,
    get_buffer_recommendations,
    get_risk_metrics,
    summarize_buffers,
)

router = APIRouter()


@router.post("/buffers", response_model=BufferReport)
def get_buffers(payload: BufferRequest) -> BufferReport:
    config = payload.config or get_settings().buffer_config()
    buffers = compute_dynamic_buffers(payload.events, config)
    total, average_per_day = summarize_buffers(buffers)

    return BufferReport(
        buffers=buffers,
        recommendations=get_buffer_recommendations(payload.events, buffers),
        risk_metrics=get_risk_metrics(payload.events, buffers),
        total_buffer_minutes=total,
        average_buffer_per_day=average_per_day,
    )
