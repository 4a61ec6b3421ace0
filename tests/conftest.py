"""
Pytest configuration and shared fixtures.

Provides detector configurations and a seeded traffic clock for unit and
integration tests.
"""

import random
from typing import List

import pytest

from ratespike.core.config import DetectorConfig


class TrafficClock:
    """
    Deterministic synthetic arrival times.

    Gaps are drawn uniformly from 1..max_gap with a seeded generator, so the
    same seed always yields the same timestamps.
    """

    def __init__(self, seed: int = 1, start: int = 0) -> None:
        self._rng = random.Random(seed)
        self.now = start

    def take(self, events: int, max_gap: int) -> List[int]:
        timestamps = []
        for _ in range(events):
            self.now += self._rng.randint(1, max_gap)
            timestamps.append(self.now)
        return timestamps

    def pause(self, duration: int) -> None:
        self.now += duration


@pytest.fixture
def detector_config() -> DetectorConfig:
    """
    Fixture providing the default detector configuration.

    Built explicitly so tests do not depend on RATESPIKE_* environment
    variables or a local .env file.
    """
    return DetectorConfig(capacity=256, threshold=2.0, decay_constant=0.00001)


@pytest.fixture
def small_config() -> DetectorConfig:
    """Fixture providing a small-capacity configuration for fast tests."""
    return DetectorConfig(capacity=8, threshold=2.0, decay_constant=0.001)


@pytest.fixture
def traffic():
    """
    Fixture providing a TrafficClock factory.

    Usage: clock = traffic(seed=7); clock.take(1000, max_gap=8)
    """
    def _make(seed: int = 1, start: int = 0) -> TrafficClock:
        return TrafficClock(seed=seed, start=start)

    return _make


def pytest_configure(config):
    """
    Pytest hook for custom configuration.

    Registers custom markers used throughout tests.
    """
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running (deferred CI)"
    )
