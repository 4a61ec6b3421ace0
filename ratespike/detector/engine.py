"""
Multi-stream spike detection engine.

Keeps one independent RateSpikeDetector per stream name, created lazily from a
shared DetectorConfig. Streams never influence each other; the engine only
routes events and turns spikes into SpikeEvent records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from ratespike.core.config import DetectorConfig, config

from . import decay
from .detector import RateSpikeDetector
from .history import Timestamp
from .schema import DetectorSnapshot, RateSample, SpikeEvent

logger = logging.getLogger(__name__)


@dataclass
class SpikeEngine:
    """
    Routes (stream, timestamp) events to per-stream detectors.

    Notes:
    - Detectors are created on first use of a stream name.
    - Not thread-safe; serialize calls per engine.
    """

    detector_config: Optional[DetectorConfig] = None

    def __post_init__(self) -> None:
        if self.detector_config is None:
            self.detector_config = config.detector
        self._detectors: Dict[str, RateSpikeDetector] = {}

    def process(self, stream: str, timestamp: Timestamp) -> RateSample:
        return self._detector_for(stream).process(timestamp)

    def detect(self, events: Iterable[Tuple[str, Timestamp]]) -> List[SpikeEvent]:
        """
        Process events in order and return the ones that were spikes.

        Raises:
            TimestampOrderError: If a stream receives a non-increasing timestamp
        """
        spikes: List[SpikeEvent] = []

        for stream, timestamp in events:
            sample = self.process(stream, timestamp)
            if sample.is_spike:
                spikes.append(self._build_event(stream, sample, self._detectors[stream]))

        return spikes

    def admit_probability(self, stream: str) -> float:
        """Admit probability after the last event seen on a stream (1.0 if unknown)."""
        detector = self._detectors.get(stream)
        if detector is None or detector.events_processed == 0:
            return 1.0
        return decay.admit_probability(
            detector.last_spike_excess,
            detector.last_spike_time,
            detector.history.latest,
            detector.config.decay_constant,
        )

    def streams(self) -> List[str]:
        return sorted(self._detectors)

    def snapshot(self, stream: str) -> DetectorSnapshot:
        """
        Raises:
            KeyError: If the stream has never been seen
        """
        return self._detectors[stream].snapshot()

    def reset(self, stream: str) -> None:
        """Forget a stream; its next event starts a fresh detector."""
        if self._detectors.pop(stream, None) is not None:
            logger.info("Reset detector for stream %s", stream)

    def _detector_for(self, stream: str) -> RateSpikeDetector:
        detector = self._detectors.get(stream)
        if detector is None:
            detector = RateSpikeDetector.from_config(self.detector_config)
            self._detectors[stream] = detector
            logger.debug("Created detector for stream %s", stream)
        return detector

    def _build_event(
        self, stream: str, sample: RateSample, detector: RateSpikeDetector
    ) -> SpikeEvent:
        return SpikeEvent(
            stream=stream,
            timestamp=sample.timestamp,
            ratio=sample.ratio,
            excess=detector.last_spike_excess,
            admit_probability=sample.admit_probability,
            detected_at=datetime.now(timezone.utc),
        )

