import pytest

from clue.sampler import AdaptiveSampler, SamplingDecision


class _HighRandom:
    def randrange(self, stop):
        return stop - 1


class _FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_description_and_first_sample():
    s = AdaptiveSampler(2, 10)
    assert s.description() == "Adaptive{maxSamplingRate:2,sampleSize:10}"
    assert s.should_sample(None) is SamplingDecision.RECORD_AND_SAMPLE


def test_second_sample_dropped_after_adjustment():
    clock = _FakeClock()
    s2 = AdaptiveSampler(1, 2, rng=_HighRandom(), clock=clock)
    assert s2.description() == "Adaptive{maxSamplingRate:1,sampleSize:2}"
    clock.now = 0.0001
    assert s2.should_sample(None) is SamplingDecision.RECORD_AND_SAMPLE
    assert s2.should_sample(None) is SamplingDecision.DROP


def test_slow_traffic_is_always_sampled():
    clock = _FakeClock()
    s = AdaptiveSampler(1, 2, rng=_HighRandom(), clock=clock)
    clock.now = 10.0
    assert s.should_sample() is SamplingDecision.RECORD_AND_SAMPLE
    assert s.should_sample() is SamplingDecision.RECORD_AND_SAMPLE
    assert s.should_sample() is SamplingDecision.RECORD_AND_SAMPLE


def test_zero_elapsed_time_drops():
    clock = _FakeClock()
    s = AdaptiveSampler(5, 1, rng=_HighRandom(), clock=clock)
    assert s.should_sample() is SamplingDecision.DROP


@pytest.mark.parametrize("rate,size", [(0, 10), (2, 0), (-1, 1)])
def test_invalid_arguments(rate, size):
    with pytest.raises(ValueError):
        AdaptiveSampler(rate, size)