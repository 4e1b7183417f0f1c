"""Application configuration and settings."""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

from app.models import BufferConfig

# Load environment variables
load_dotenv()


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment."""

    app_name: str = "agenda-stress-backend"
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    # Buffer scheduling defaults, validated when settings are loaded
    buffer_defaults: BufferConfig = field(default_factory=BufferConfig)

    def buffer_config(self) -> BufferConfig:
        return self.buffer_defaults


def load_settings() -> Settings:
    """Read settings from the environment; raises ValidationError on bad buffer bounds."""
    return Settings(
        app_name=os.getenv("APP_NAME", "agenda-stress-backend"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
        buffer_defaults=BufferConfig(
            base_buffer_minutes=float(os.getenv("BUFFER_BASE_MINUTES", "15")),
            min_buffer_minutes=float(os.getenv("BUFFER_MIN_MINUTES", "5")),
            max_buffer_minutes=float(os.getenv("BUFFER_MAX_MINUTES", "120")),
        ),
    )


@lru_cache()
def get_settings() -> Settings:
    """Get application settings singleton."""
    return load_settings()
