"""Sample collector: one read of every sensor source per tick."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from .capabilities import build_sources, resolve_capabilities
from .models import CpuTimes, MetricSample
from .sources import SensorSource, TickReader
from .units import METRIC_KEYS

logger = logging.getLogger("soctop.telemetry")


def _local_now() -> datetime:
    return datetime.now().astimezone()


def _as_float(raw: object) -> float | None:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return float(raw)
    return None


class SampleCollector:
    """Assembles one :class:`MetricSample` per call to :meth:`collect`.

    CPU usage is computed from the delta of cumulative counters between two
    consecutive collections, so the collector keeps the previous counters.
    Counters are primed on construction.
    """

    def __init__(
        self,
        sources: dict[str, SensorSource] | None = None,
        clock: Callable[[], datetime] = _local_now,
    ) -> None:
        self.sources = sources if sources is not None else build_sources(resolve_capabilities())
        self._clock = clock
        self._prev_cpu: CpuTimes | None = None
        self._last_cpu_pct: float | None = None
        self._available: dict[str, bool] = {}
        self.prime()

    @classmethod
    def from_overrides(cls, overrides: dict[str, list[str]] | None = None) -> "SampleCollector":
        return cls(build_sources(resolve_capabilities(overrides)))

    def prime(self) -> None:
        source = self.sources.get("cpu_usage_pct")
        if source is None:
            return
        raw = source.read(TickReader())
        self._prev_cpu = raw if isinstance(raw, CpuTimes) else None

    def collect(self) -> MetricSample:
        reader = TickReader()
        values: dict[str, float | None] = {}
        for key in METRIC_KEYS:
            source = self.sources.get(key)
            raw = source.read(reader) if source is not None else None
            if key == "cpu_usage_pct":
                values[key] = self._cpu_usage(raw)
            else:
                values[key] = _as_float(raw)
            self._track(key, values[key] is not None, source)
        return MetricSample(timestamp=self._clock(), **values)

    def _cpu_usage(self, raw: object) -> float | None:
        if not isinstance(raw, CpuTimes):
            self._prev_cpu = None
            self._last_cpu_pct = None
            return None

        prev, self._prev_cpu = self._prev_cpu, raw
        if prev is None:
            return None
        d_total = raw.total - prev.total
        # Rounded fallback counters can step busy back by one while total advances.
        d_busy = max(raw.busy - prev.busy, 0)
        if d_total < 0:
            # Counters went backwards (source switched or wrapped); start over.
            self._last_cpu_pct = None
            return None
        if d_total == 0:
            return self._last_cpu_pct
        self._last_cpu_pct = min(100.0, d_busy / d_total * 100.0)
        return self._last_cpu_pct

    def _track(self, key: str, available: bool, source: SensorSource | None) -> None:
        if self._available.get(key) == available:
            return
        self._available[key] = available
        if available:
            logger.debug("sensor %s available via %s", key, source.active if source else None)
        else:
            logger.debug("sensor %s unavailable: %s", key, source.last_error if source else "no source")
