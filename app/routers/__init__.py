from .stress import router as stress_router
from .buffers import router as buffers_router

__all__ = [
    "stress_router",
    "buffers_router",
]
