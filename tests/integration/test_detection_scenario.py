"""
Integration tests: seeded traffic scenarios through the full detector.

Base load draws inter-arrival gaps from 1..8; a burst draws them from 1..2,
roughly tripling the arrival rate.
"""

import pytest

from ratespike.detector.detector import RateSpikeDetector
from ratespike.detector.engine import SpikeEngine
from ratespike.detector.series import SeriesRecorder

CAPACITY = 256


def _count_spikes(detector, timestamps) -> int:
    return sum(1 for s in detector.process_many(timestamps) if s.is_spike)


@pytest.mark.integration
class TestSteadyLoad:
    """Steady traffic must not look like a spike."""

    @pytest.mark.parametrize("threshold", [2.0, 2.5, 4.0])
    def test_no_false_spike_after_warmup(self, detector_config, traffic, threshold):
        detector = RateSpikeDetector.from_config(
            detector_config.model_copy(update={"threshold": threshold})
        )
        clock = traffic(seed=5)

        list(detector.process_many(clock.take(CAPACITY, max_gap=8)))
        spikes = _count_spikes(detector, clock.take(CAPACITY * 64, max_gap=8))

        assert spikes == 0

    def test_ratio_stays_near_one(self, detector_config, traffic):
        detector = RateSpikeDetector.from_config(detector_config)
        clock = traffic(seed=9)
        list(detector.process_many(clock.take(CAPACITY * 4, max_gap=8)))

        ratios = [s.ratio for s in detector.process_many(clock.take(CAPACITY * 16, max_gap=8))]

        assert 0.8 < min(ratios)
        assert max(ratios) < 1.25


@pytest.mark.integration
class TestBurst:
    """A sustained faster arrival rate must be flagged."""

    def test_spike_within_capacity_of_regime_change(self, detector_config, traffic):
        detector = RateSpikeDetector.from_config(detector_config)
        clock = traffic(seed=2)
        list(detector.process_many(clock.take(CAPACITY * 32, max_gap=8)))

        burst = list(detector.process_many(clock.take(CAPACITY, max_gap=2)))

        assert any(s.is_spike for s in burst)

    def test_admit_probability_bounds(self, detector_config, traffic):
        recorder = SeriesRecorder(RateSpikeDetector.from_config(detector_config))
        clock = traffic(seed=4)

        recorder.extend(clock.take(CAPACITY * 16, max_gap=8))
        recorder.extend(clock.take(1024, max_gap=2))
        recorder.extend(clock.take(CAPACITY * 16, max_gap=8))

        samples = recorder.samples
        first_spike = next(i for i, s in enumerate(samples) if s.is_spike)

        assert all(0.0 < s.admit_probability <= 1.0 for s in samples)
        assert all(s.admit_probability == 1.0 for s in samples[:first_spike])
        for s in recorder.spikes():
            assert s.admit_probability == pytest.approx(1 / (1 + (s.ratio - 1)))

        last_spike = max(i for i, s in enumerate(samples) if s.is_spike)
        recovering = [s.admit_probability for s in samples[last_spike:]]
        assert all(b > a for a, b in zip(recovering, recovering[1:]))

    def test_engine_reports_burst_stream_only(self, detector_config, traffic):
        engine = SpikeEngine(detector_config=detector_config)
        quiet = traffic(seed=6)
        busy = traffic(seed=7)

        events = [("quiet", t) for t in quiet.take(CAPACITY * 8, max_gap=8)]
        events += [("busy", t) for t in busy.take(CAPACITY * 8, max_gap=8)]
        events += [("busy", t) for t in busy.take(1024, max_gap=2)]

        spikes = engine.detect(events)

        assert spikes
        assert {e.stream for e in spikes} == {"busy"}


@pytest.mark.integration
def test_replay_is_bit_identical(detector_config, traffic):
    clock = traffic(seed=13)
    timestamps = clock.take(CAPACITY * 8, max_gap=8) + clock.take(1024, max_gap=2)

    first = SeriesRecorder(RateSpikeDetector.from_config(detector_config))
    second = SeriesRecorder(RateSpikeDetector.from_config(detector_config))
    first.extend(timestamps)
    second.extend(timestamps)

    assert first.samples == second.samples


@pytest.mark.integration
@pytest.mark.slow
def test_full_traffic_scenario(detector_config, traffic):
    """
    Base load, burst, recovery, long pause, moderate burst, second burst.

    Only the sharp bursts (gaps 1..2) may produce spikes; a moderate
    increase (gaps 1..4) and a long silence must not.
    """
    detector = RateSpikeDetector.from_config(detector_config)
    clock = traffic(seed=1)
    phase = CAPACITY * 1024

    assert _count_spikes(detector, clock.take(phase, max_gap=8)) == 0

    assert _count_spikes(detector, clock.take(1024, max_gap=2)) > 0

    # let the burst leave the window before checking quiet phases again
    _count_spikes(detector, clock.take(CAPACITY, max_gap=8))
    assert _count_spikes(detector, clock.take(phase, max_gap=8)) == 0

    clock.pause(1024)
    assert _count_spikes(detector, clock.take(phase, max_gap=8)) == 0

    assert _count_spikes(detector, clock.take(phase, max_gap=4)) == 0

    assert _count_spikes(detector, clock.take(phase, max_gap=8)) == 0

    assert _count_spikes(detector, clock.take(1024, max_gap=2)) > 0

    assert _count_spikes(detector, clock.take(phase, max_gap=8)) == 0
