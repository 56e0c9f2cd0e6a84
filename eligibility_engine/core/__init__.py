"""Core infrastructure - configuration, logging, metrics."""

from .config import Settings, get_settings
from .logging_config import configure_logging
from .metrics import EligibilityMetrics

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "EligibilityMetrics",
]
