"""Configuration and logging shared by every layer."""

from authbase.core.config import Settings, get_settings
from authbase.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
    new_correlation_id,
)

__all__ = [
    "Settings",
    "bind_correlation_id",
    "clear_context",
    "configure_logging",
    "get_logger",
    "get_settings",
    "new_correlation_id",
]
