"""
Core module: Configuration, logging, and exception handling.
"""

from .config import Config, DetectorConfig, config
from .exceptions import (
    ConfigurationError,
    RateSpikeError,
    TimestampOrderError,
)
from .logging_config import setup_logging

__all__ = [
    "Config",
    "DetectorConfig",
    "config",
    "RateSpikeError",
    "ConfigurationError",
    "TimestampOrderError",
    "setup_logging",
]
