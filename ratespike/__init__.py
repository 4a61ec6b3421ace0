"""
ratespike: streaming rate anomaly detection.

Feed event timestamps to a detector one at a time; each event yields the
rate / filtered-rate ratio, a spike flag and an admit probability that dips
after a spike and recovers over time.
"""

from ratespike.core import (
    Config,
    ConfigurationError,
    DetectorConfig,
    RateSpikeError,
    TimestampOrderError,
    config,
    setup_logging,
)
from ratespike.detector import (
    AdmissionGate,
    DetectorSnapshot,
    DetectorState,
    RateSample,
    RateSpikeDetector,
    SeriesRecorder,
    SpikeEngine,
    SpikeEvent,
    new_detector,
)

__version__ = "0.1.0"

__all__ = [
    "Config",
    "DetectorConfig",
    "config",
    "setup_logging",
    "RateSpikeError",
    "ConfigurationError",
    "TimestampOrderError",
    "RateSpikeDetector",
    "new_detector",
    "RateSample",
    "DetectorState",
    "DetectorSnapshot",
    "SpikeEvent",
    "SpikeEngine",
    "SeriesRecorder",
    "AdmissionGate",
]
