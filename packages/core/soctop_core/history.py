"""Bounded sliding window of collected samples."""

from __future__ import annotations

from collections import deque
from typing import Iterator

from soctop_telemetry.models import MetricSample

DEFAULT_CAPACITY = 600


class HistoryStore:
    """Oldest-first eviction once ``capacity`` samples are held."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("history capacity must be positive")
        self._samples: deque[MetricSample] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._samples.maxlen or 0

    def append(self, sample: MetricSample) -> None:
        self._samples.append(sample)

    def snapshot(self) -> tuple[MetricSample, ...]:
        return tuple(self._samples)

    def latest(self) -> MetricSample | None:
        return self._samples[-1] if self._samples else None

    def clear(self) -> None:
        self._samples.clear()

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[MetricSample]:
        return iter(self._samples)
