"""Event-loop health: render/collect latency, late samples and own resource usage."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

import psutil

logger = logging.getLogger("soctop.loop")


@dataclass(frozen=True)
class HealthStatus:
    render_ms: float
    collect_ms: float
    late_samples: int
    cpu_percent: float
    rss_mb: float
    stalled: bool


class LoopHealth:
    def __init__(self, period_s: float = 0.2, late_factor: float = 1.5) -> None:
        self.period_s = period_s
        self.late_factor = late_factor
        self.render_ms = 0.0
        self.collect_ms = 0.0
        self.late_samples = 0
        self._last_ts: datetime | None = None
        self._stalled = False
        self._process = psutil.Process()
        # Prime non-blocking CPU measurement.
        self._process.cpu_percent(interval=None)

    def record_render(self, seconds: float) -> None:
        self.render_ms = seconds * 1000.0

    def record_collect(self, seconds: float) -> None:
        self.collect_ms = seconds * 1000.0
        stalled = seconds > self.period_s
        if stalled and not self._stalled:
            logger.warning(
                "sensor collection took %.0f ms, longer than the %.0f ms period",
                self.collect_ms,
                self.period_s * 1000.0,
                extra={"event": "collect_stalled"},
            )
        self._stalled = stalled

    def record_sample(self, timestamp: datetime) -> None:
        if self._last_ts is not None:
            gap = (timestamp - self._last_ts).total_seconds()
            if gap > self.period_s * self.late_factor:
                self.late_samples += 1
                logger.debug("late sample gap=%.3fs", gap, extra={"event": "late_sample"})
        self._last_ts = timestamp

    def status(self) -> HealthStatus:
        try:
            cpu = float(self._process.cpu_percent(interval=None))
            rss_mb = float(self._process.memory_info().rss) / (1024 * 1024)
        except psutil.Error:
            cpu = 0.0
            rss_mb = 0.0
        return HealthStatus(
            render_ms=self.render_ms,
            collect_ms=self.collect_ms,
            late_samples=self.late_samples,
            cpu_percent=cpu,
            rss_mb=rss_mb,
            stalled=self._stalled,
        )
