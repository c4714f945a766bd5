"""Engine configuration."""

from .settings import (
    API_CONFIG,
    REQUEST_TIMEOUT_SECONDS,
    CACHE_CONFIG,
    ENGINE_CONFIG,
    LOG_LEVEL,
)

__all__ = [
    "API_CONFIG",
    "REQUEST_TIMEOUT_SECONDS",
    "CACHE_CONFIG",
    "ENGINE_CONFIG",
    "LOG_LEVEL",
]
