"""
Results-sink adapter.

Records the ordered (timestamp, ratio) and (timestamp, admit probability)
series produced by a detector so that a downstream consumer can chart,
store or alert on them. Rendering is left to that consumer.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

import pandas as pd

from .detector import RateSpikeDetector
from .history import Timestamp
from .schema import RateSample

Point = Tuple[Timestamp, float]


class SeriesRecorder:
    """
    Wraps a detector and keeps every sample it produces.

    Memory grows with the number of recorded events; call clear() between
    runs when recording long streams.
    """

    def __init__(self, detector: RateSpikeDetector) -> None:
        self.detector = detector
        self._samples: List[RateSample] = []

    def process(self, timestamp: Timestamp) -> RateSample:
        sample = self.detector.process(timestamp)
        self._samples.append(sample)
        return sample

    def extend(self, timestamps: Iterable[Timestamp]) -> int:
        """Process timestamps in order and return how many were spikes."""
        spikes = 0
        for timestamp in timestamps:
            if self.process(timestamp).is_spike:
                spikes += 1
        return spikes

    @property
    def samples(self) -> List[RateSample]:
        return list(self._samples)

    def ratio_series(self) -> List[Point]:
        return [(s.timestamp, s.ratio) for s in self._samples]

    def probability_series(self) -> List[Point]:
        return [(s.timestamp, s.admit_probability) for s in self._samples]

    def spikes(self) -> List[RateSample]:
        return [s for s in self._samples if s.is_spike]

    def to_frame(self) -> pd.DataFrame:
        """
        Recorded samples as a DataFrame indexed by timestamp.

        Columns: ratio, is_spike, admit_probability.
        """
        frame = pd.DataFrame(
            [s.as_dict() for s in self._samples],
            columns=["timestamp", "ratio", "is_spike", "admit_probability"],
        )
        return frame.set_index("timestamp")

    def clear(self) -> None:
        self._samples.clear()

    def __len__(self) -> int:
        return len(self._samples)
