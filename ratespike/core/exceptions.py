"""
Custom exceptions for the rate spike detector.

Use them to distinguish caller errors (bad timestamps) from configuration
problems.
"""


class RateSpikeError(Exception):
    """Base exception for rate spike detection failures."""
    pass


class ConfigurationError(RateSpikeError):
    """Raised when detector configuration is invalid."""
    pass


class TimestampOrderError(RateSpikeError, ValueError):
    """Raised when a timestamp is not finite or not strictly increasing."""
    pass
