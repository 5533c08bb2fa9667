"""Projection of history into chart-ready series with axis bounds."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from soctop_telemetry.models import MetricSample
from soctop_telemetry.units import metric_spec

DEFAULT_PERIOD_S = 0.2
EMPTY_SPAN = 10.0
PADDING_RATIO = 0.1


@dataclass(frozen=True)
class ChartSeries:
    key: str
    points: list[tuple[float, float]]
    bounds: tuple[float, float]

    @property
    def xs(self) -> list[float]:
        return [p[0] for p in self.points]

    @property
    def ys(self) -> list[float]:
        return [p[1] for p in self.points]

    @property
    def last(self) -> float | None:
        return self.points[-1][1] if self.points else None


def axis_bounds(values: np.ndarray) -> tuple[float, float]:
    if values.size == 0:
        return (0.0, EMPTY_SPAN)
    lo = float(values.min())
    hi = float(values.max())
    if hi == lo:
        return (0.0, hi + EMPTY_SPAN)
    padding = (hi - lo) * PADDING_RATIO
    return (max(0.0, lo - padding), hi + padding)


class SeriesProjector:
    def __init__(self, period_s: float = DEFAULT_PERIOD_S, capacity: int = 600) -> None:
        self.period_s = period_s
        self.capacity = capacity

    def project(self, history: Iterable[MetricSample], key: str) -> ChartSeries:
        unit = metric_spec(key).unit
        raw = np.array(
            [np.nan if v is None else v for v in (s.value(key) for s in history)],
            dtype=float,
        )
        xs = np.arange(raw.size, dtype=float) * self.period_s
        present = ~np.isnan(raw)
        ys = raw[present] / unit.divisor
        points = [(float(x), float(y)) for x, y in zip(xs[present], ys)]
        return ChartSeries(key=key, points=points, bounds=axis_bounds(ys))

    def time_window(self, length: int) -> tuple[float, float]:
        return (0.0, max(length * self.period_s, self.capacity * self.period_s))
