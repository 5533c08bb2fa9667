"""Canonical units and the metric registry."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NewType

Percent = NewType("Percent", float)
Hertz = NewType("Hertz", float)
MilliCelsius = NewType("MilliCelsius", float)
Count = NewType("Count", float)


class Unit(Enum):
    PERCENT = ("percent", 1.0, "%")
    HERTZ = ("hertz", 1_000_000.0, "MHz")
    MILLICELSIUS = ("millicelsius", 1_000.0, "°C")
    COUNT = ("count", 1.0, "")

    def __init__(self, label: str, divisor: float, display_suffix: str) -> None:
        self.label = label
        self.divisor = divisor
        self.display_suffix = display_suffix

    def to_display(self, value: float) -> float:
        return value / self.divisor


@dataclass(frozen=True)
class MetricSpec:
    key: str
    unit: Unit
    label: str


METRICS: dict[str, MetricSpec] = {
    spec.key: spec
    for spec in (
        MetricSpec("cpu_usage_pct", Unit.PERCENT, "CPU Usage"),
        MetricSpec("cpu_freq_hz", Unit.HERTZ, "CPU Frequency"),
        MetricSpec("gpu_usage_pct", Unit.PERCENT, "GPU Usage"),
        MetricSpec("gpu_freq_hz", Unit.HERTZ, "GPU Frequency"),
        MetricSpec("npu_usage_pct", Unit.PERCENT, "NPU Usage"),
        MetricSpec("npu_freq_hz", Unit.HERTZ, "NPU Frequency"),
        MetricSpec("rga_usage_pct", Unit.PERCENT, "RGA Usage"),
        MetricSpec("rga_aclk_hz", Unit.HERTZ, "RGA ACLK Frequency"),
        MetricSpec("rga_core_hz", Unit.HERTZ, "RGA Core Frequency"),
        MetricSpec("rga_hclk_hz", Unit.HERTZ, "RGA HCLK Frequency"),
        MetricSpec("mem_usage_pct", Unit.PERCENT, "Memory Usage"),
        MetricSpec("swap_usage_pct", Unit.PERCENT, "Swap Usage"),
        MetricSpec("temp_millideg", Unit.MILLICELSIUS, "Temperature"),
        MetricSpec("fan_state", Unit.COUNT, "Fan State"),
    )
}

METRIC_KEYS: tuple[str, ...] = tuple(METRICS)


def metric_spec(key: str) -> MetricSpec:
    try:
        return METRICS[key]
    except KeyError:
        raise KeyError(f"Unknown metric key: {key}") from None


def to_display(key: str, value: float) -> float:
    return metric_spec(key).unit.to_display(value)
