"""
Adaptive low-pass estimate of the event rate.

Each event updates an exponentially smoothed rate whose weight is not fixed:
alpha is the share of the observation window covered by the newest
inter-arrival gap, so long gaps move the estimate more than short ones.

    alpha    = (t - previous) / (t - oldest)
    rate     = count / (t - oldest)
    filtered = alpha * rate + (1 - alpha) * filtered
    ratio    = rate / filtered

See https://en.wikipedia.org/wiki/Low-pass_filter#Discrete-time_realization
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass, field
from typing import Optional

from ratespike.core.exceptions import TimestampOrderError

from .history import HistoryBuffer, Timestamp

logger = logging.getLogger(__name__)


def validate_timestamp(timestamp: Timestamp, latest: Timestamp) -> None:
    """
    Reject timestamps that would corrupt the filtered rate.

    Raises:
        TimestampOrderError: If timestamp is not a finite real number or is
            not strictly greater than latest
    """
    if isinstance(timestamp, bool) or not isinstance(timestamp, numbers.Real):
        raise TimestampOrderError(
            f"Timestamp must be a real number, got {type(timestamp).__name__}"
        )
    if not math.isfinite(timestamp):
        raise TimestampOrderError(f"Timestamp must be finite, got {timestamp!r}")
    if timestamp <= latest:
        raise TimestampOrderError(
            f"Timestamp {timestamp!r} is not after previous timestamp {latest!r}"
        )


@dataclass
class RateEstimator:
    """
    Smoothed event rate over a HistoryBuffer.

    The first event sees alpha == 1, so the filter starts at the first rate
    sample and the first ratio is exactly 1.0.
    """

    history: HistoryBuffer
    filtered_rate: float = 0.0
    last_rate: Optional[float] = field(default=None, init=False)

    def observe(self, timestamp: Timestamp) -> float:
        """
        Record one event and return rate / filtered rate.

        Validation runs before the history is touched, so a rejected
        timestamp leaves the estimator unchanged.
        """
        validate_timestamp(timestamp, self.history.latest)

        oldest, previous = self.history.record(timestamp)
        span = float(timestamp - oldest)

        alpha = (timestamp - previous) / span
        rate = self.history.count / span
        self.filtered_rate = alpha * rate + (1.0 - alpha) * self.filtered_rate
        self.last_rate = rate

        return rate / self.filtered_rate
