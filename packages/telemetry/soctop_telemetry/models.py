"""Typed telemetry models."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from datetime import datetime

from .units import METRIC_KEYS, metric_spec


@dataclass(frozen=True)
class CpuTimes:
    busy: int
    total: int


@dataclass(frozen=True)
class MetricSample:
    """One collection tick. ``None`` marks a sensor that did not answer."""

    timestamp: datetime
    cpu_usage_pct: float | None = None
    cpu_freq_hz: float | None = None
    gpu_usage_pct: float | None = None
    gpu_freq_hz: float | None = None
    npu_usage_pct: float | None = None
    npu_freq_hz: float | None = None
    rga_usage_pct: float | None = None
    rga_aclk_hz: float | None = None
    rga_core_hz: float | None = None
    rga_hclk_hz: float | None = None
    mem_usage_pct: float | None = None
    swap_usage_pct: float | None = None
    temp_millideg: float | None = None
    fan_state: float | None = None

    def __post_init__(self) -> None:
        for f in fields(self):
            if f.name == "timestamp":
                continue
            value = getattr(self, f.name)
            if value is None:
                continue
            if not math.isfinite(value):
                object.__setattr__(self, f.name, None)
            elif value < 0:
                object.__setattr__(self, f.name, 0.0)

    @classmethod
    def empty(cls, timestamp: datetime) -> "MetricSample":
        return cls(timestamp=timestamp)

    def value(self, key: str) -> float | None:
        metric_spec(key)
        return getattr(self, key)

    def display_value(self, key: str) -> float | None:
        raw = self.value(key)
        if raw is None:
            return None
        return metric_spec(key).unit.to_display(raw)

    def available(self) -> dict[str, bool]:
        return {key: getattr(self, key) is not None for key in METRIC_KEYS}
