"""Sensor sources, sample collection and snapshot export for soctop."""

from .capabilities import DEFAULT_CAPABILITIES, build_sources, probe_sources, resolve_capabilities
from .collector import SampleCollector
from .device import read_device_info
from .export import collect_snapshot, snapshot_json, snapshot_payload
from .models import CpuTimes, MetricSample
from .parsers import SensorUnavailable
from .sources import SensorSource, TickReader
from .units import METRIC_KEYS, METRICS, MetricSpec, Unit, metric_spec, to_display

__all__ = [
    "CpuTimes",
    "DEFAULT_CAPABILITIES",
    "METRICS",
    "METRIC_KEYS",
    "MetricSample",
    "MetricSpec",
    "SampleCollector",
    "SensorSource",
    "SensorUnavailable",
    "TickReader",
    "Unit",
    "build_sources",
    "collect_snapshot",
    "metric_spec",
    "probe_sources",
    "read_device_info",
    "resolve_capabilities",
    "snapshot_json",
    "snapshot_payload",
    "to_display",
]
