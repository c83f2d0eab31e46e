"""Core helpers shared by every DrillStack module."""

from .config import Config, get_config_value
from .error_handlers import (
    ConfigurationError,
    DrillStackError,
    PlaybackError,
    PreconditionError,
)
from .logging_config import get_logger, setup_logging

__all__ = [
    "Config",
    "ConfigurationError",
    "DrillStackError",
    "PlaybackError",
    "PreconditionError",
    "get_config_value",
    "get_logger",
    "setup_logging",
]
