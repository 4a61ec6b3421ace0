"""
Spike classification and post-spike admit probability.

After a spike with excess e = ratio - 1 at time s, the admit probability at
time t is the logistic curve

    p(t) = 1 / (1 + e * exp(k * (s - t)))

which dips to 1 / (1 + e) at the spike and climbs back towards 1. The most
recent spike always replaces the previous one, whatever their sizes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .history import Timestamp
from .schema import DetectorState


def admit_probability(
    excess: float,
    spike_time: Timestamp,
    timestamp: Timestamp,
    decay_constant: float,
) -> float:
    """
    Evaluate the recovery curve at a timestamp.

    Returns exactly 1.0 when excess is 0 (no spike yet).
    """
    return 1.0 / (1.0 + excess * math.exp(decay_constant * (spike_time - timestamp)))


@dataclass
class SpikeClassifier:
    """
    Threshold classifier with last-spike-wins memory.

    A ratio above a sub-unity threshold still counts as a spike, but its
    excess is floored at 0 so the admit probability never rises above 1. The
    state still moves to RECOVERING on the first spike.
    """

    threshold: float = 2.0
    decay_constant: float = 0.00001
    last_spike_time: Timestamp = 0
    last_spike_excess: float = 0.0
    has_spiked: bool = False

    def classify(self, timestamp: Timestamp, ratio: float) -> Tuple[bool, float]:
        is_spike = ratio > self.threshold
        if is_spike:
            self.has_spiked = True
            self.last_spike_time = timestamp
            self.last_spike_excess = max(ratio - 1.0, 0.0)

        probability = admit_probability(
            self.last_spike_excess,
            self.last_spike_time,
            timestamp,
            self.decay_constant,
        )
        return is_spike, probability

    @property
    def state(self) -> DetectorState:
        if not self.has_spiked:
            return DetectorState.NOMINAL
        return DetectorState.RECOVERING
