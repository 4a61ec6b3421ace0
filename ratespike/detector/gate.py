"""
Probabilistic admission based on the detector's recovery signal.

Every event is fed to the detector; the event is then admitted with the
current admit probability. Outside of recovery the probability is 1 and
everything is admitted.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from .detector import RateSpikeDetector
from .history import Timestamp

logger = logging.getLogger(__name__)


class AdmissionGate:
    """
    Admit/drop decision per event.

    Args:
        detector: detector that sees every event, admitted or not
        rng: random source; pass a seeded random.Random for replayable runs
    """

    def __init__(
        self, detector: RateSpikeDetector, rng: Optional[random.Random] = None
    ) -> None:
        self.detector = detector
        self._rng = rng or random.Random()
        self.admitted = 0
        self.dropped = 0

    def admit(self, timestamp: Timestamp) -> bool:
        sample = self.detector.process(timestamp)
        if sample.admit_probability >= 1.0 or self._rng.random() < sample.admit_probability:
            self.admitted += 1
            return True

        self.dropped += 1
        logger.debug(
            "Dropped event at t=%s (admit probability %.3f)",
            timestamp,
            sample.admit_probability,
        )
        return False
