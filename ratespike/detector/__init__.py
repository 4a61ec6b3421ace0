"""
Detector module: adaptive rate spike detection for event streams.

Per event:

    timestamp
        ↓
    HistoryBuffer.record → (oldest, previous)
        ↓
    RateEstimator.observe → ratio
        ↓
    SpikeClassifier.classify → (is_spike, admit_probability)
"""

from .decay import SpikeClassifier, admit_probability
from .detector import RateSpikeDetector, new_detector
from .engine import SpikeEngine
from .estimator import RateEstimator, validate_timestamp
from .gate import AdmissionGate
from .history import HistoryBuffer
from .schema import DetectorSnapshot, DetectorState, RateSample, SpikeEvent
from .series import SeriesRecorder

__all__ = [
    "HistoryBuffer",
    "RateEstimator",
    "validate_timestamp",
    "SpikeClassifier",
    "admit_probability",
    "RateSpikeDetector",
    "new_detector",
    "SpikeEngine",
    "SeriesRecorder",
    "AdmissionGate",
    "RateSample",
    "DetectorState",
    "DetectorSnapshot",
    "SpikeEvent",
]
