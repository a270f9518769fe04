"""Adaptive trace sampler targeting a maximum sampling rate."""

from __future__ import annotations

import enum
import random
import threading
import time
from typing import Any, Callable, Protocol

_UPPER_BOUND = 10000


class SamplingDecision(enum.Enum):
    """Outcome of a sampling decision."""

    DROP = "drop"
    RECORD_ONLY = "record_only"
    RECORD_AND_SAMPLE = "record_and_sample"


class _RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


class AdaptiveSampler:
    """Trace sampler that adjusts the interval between samples.

    ``max_sampling_rate`` is the desired maximum number of sampled requests
    per second. ``sample_size`` is the number of requests between two
    adjustments of the sampling rate; the rate cannot change until that many
    requests have been seen at least once.
    """

    def __init__(
        self,
        max_sampling_rate: int,
        sample_size: int,
        *,
        rng: _RandomSource | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_sampling_rate <= 0:
            raise ValueError("max_sampling_rate must be greater than 0")
        if sample_size <= 0:
            raise ValueError("sample_size must be greater than 0")
        self.max_sampling_rate = max_sampling_rate
        self.sample_size = sample_size
        self._rng: _RandomSource = rng if rng is not None else random.Random()
        self._clock = clock
        self._lock = threading.Lock()
        self._counter = 0
        self._last_rate = _UPPER_BOUND
        self._start = clock()

    def description(self) -> str:
        """Return a short description of the sampler and its settings."""
        return (
            f"Adaptive{{maxSamplingRate:{self.max_sampling_rate},"
            f"sampleSize:{self.sample_size}}}"
        )

    def should_sample(self, parameters: Any = None) -> SamplingDecision:
        """Decide whether the next trace is recorded and sampled."""
        if self._sample():
            return SamplingDecision.RECORD_AND_SAMPLE
        return SamplingDecision.DROP

    def _sample(self) -> bool:
        with self._lock:
            self._counter += 1
            if self._counter == self.sample_size:
                self._counter = 0
                now = self._clock()
                elapsed = now - self._start
                if elapsed <= 0:
                    rate = 1
                else:
                    rate = int(
                        self.max_sampling_rate * _UPPER_BOUND * elapsed / self.sample_size
                    )
                    rate = max(1, min(rate, _UPPER_BOUND))
                self._start = now
                self._last_rate = rate
            current = self._last_rate
        return current == _UPPER_BOUND or self._rng.randrange(_UPPER_BOUND) < current

    def __repr__(self) -> str:
        return self.description()