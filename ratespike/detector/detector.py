"""
Single-stream rate spike detector.

Wires the history buffer, the rate estimator and the spike classifier
together behind one per-event entry point:

    detector = new_detector(capacity=256, threshold=2.0)
    sample = detector.process(timestamp)

The detector owns all of its state and reads no clock; replaying the same
timestamps through a fresh detector yields the same samples. It holds no
locks, so concurrent callers must serialize access to an instance.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

from pydantic import ValidationError

from ratespike.core.config import DetectorConfig, config
from ratespike.core.exceptions import ConfigurationError

from .decay import SpikeClassifier
from .estimator import RateEstimator
from .history import HistoryBuffer, Timestamp
from .schema import DetectorSnapshot, DetectorState, RateSample

logger = logging.getLogger(__name__)


class RateSpikeDetector:
    """
    Adaptive rate spike detector for one event stream.

    Args:
        capacity: history ring buffer size (>= 2)
        threshold: ratio above which an event is a spike (> 0)
        decay_constant: admit probability recovery rate (>= 0)
        origin: value of unwritten history slots; the first timestamp must
            be strictly greater

    Raises:
        ConfigurationError: If any parameter is out of range
    """

    def __init__(
        self,
        capacity: int = 256,
        threshold: float = 2.0,
        decay_constant: float = 0.00001,
        origin: Timestamp = 0,
    ) -> None:
        try:
            settings = DetectorConfig(
                capacity=capacity,
                threshold=threshold,
                decay_constant=decay_constant,
                origin=origin,
            )
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid detector configuration: {exc}") from exc

        self.config = settings
        self._history = HistoryBuffer(capacity=settings.capacity, origin=origin)
        self._estimator = RateEstimator(history=self._history)
        self._classifier = SpikeClassifier(
            threshold=settings.threshold,
            decay_constant=settings.decay_constant,
            last_spike_time=origin,
        )
        self.events_processed = 0
        self.spikes_detected = 0

        logger.debug(
            "Created detector capacity=%d threshold=%s decay_constant=%s",
            settings.capacity,
            settings.threshold,
            settings.decay_constant,
        )

    @classmethod
    def from_config(cls, settings: Optional[DetectorConfig] = None) -> "RateSpikeDetector":
        """Build a detector from a DetectorConfig (global config by default)."""
        settings = settings or config.detector
        return cls(
            capacity=settings.capacity,
            threshold=settings.threshold,
            decay_constant=settings.decay_constant,
            origin=settings.origin,
        )

    def process(self, timestamp: Timestamp) -> RateSample:
        """
        Process one event.

        Args:
            timestamp: event time, strictly greater than the previous one

        Returns:
            RateSample with ratio, spike flag and admit probability

        Raises:
            TimestampOrderError: If timestamp is not finite or not increasing.
                Detector state is left unchanged.
        """
        ratio = self._estimator.observe(timestamp)
        is_spike, probability = self._classifier.classify(timestamp, ratio)

        self.events_processed += 1
        if is_spike:
            self.spikes_detected += 1
            logger.warning(
                "Rate spike at t=%s: ratio=%.3f (threshold %.3f), admit probability %.3f",
                timestamp,
                ratio,
                self._classifier.threshold,
                probability,
            )

        return RateSample(
            timestamp=timestamp,
            ratio=ratio,
            is_spike=is_spike,
            admit_probability=probability,
        )

    def process_many(self, timestamps: Iterable[Timestamp]) -> Iterator[RateSample]:
        """Lazily process timestamps in order."""
        for timestamp in timestamps:
            yield self.process(timestamp)

    @property
    def state(self) -> DetectorState:
        return self._classifier.state

    @property
    def history(self) -> HistoryBuffer:
        return self._history

    @property
    def filtered_rate(self) -> float:
        return self._estimator.filtered_rate

    @property
    def last_spike_time(self) -> Timestamp:
        return self._classifier.last_spike_time

    @property
    def last_spike_excess(self) -> float:
        return self._classifier.last_spike_excess

    def snapshot(self) -> DetectorSnapshot:
        return DetectorSnapshot(
            capacity=self._history.capacity,
            count=self._history.count,
            is_warm=self._history.is_full,
            filtered_rate=self._estimator.filtered_rate,
            last_spike_time=self._classifier.last_spike_time,
            last_spike_excess=self._classifier.last_spike_excess,
            state=self._classifier.state,
            events_processed=self.events_processed,
            spikes_detected=self.spikes_detected,
        )


def new_detector(
    capacity: int = 256,
    threshold: float = 2.0,
    decay_constant: float = 0.00001,
    origin: Timestamp = 0,
) -> RateSpikeDetector:
    """
    Create a detector with the given configuration.

    For wall-clock streams pass an origin just before the first timestamp;
    with the default 0 the warm-up rate is measured from time 0.
    """
    return RateSpikeDetector(
        capacity=capacity,
        threshold=threshold,
        decay_constant=decay_constant,
        origin=origin,
    )
