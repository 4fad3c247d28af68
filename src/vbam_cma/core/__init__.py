"""
VBAM core infrastructure: configuration and logging.
"""

from .config import VbamSettings, get_settings, reset_settings
from .logging import get_logger, reset_logging, set_log_level

__all__ = [
    "VbamSettings",
    "get_settings",
    "reset_settings",
    "get_logger",
    "reset_logging",
    "set_log_level",
]
