"""Capability table: metric key -> ordered candidate list."""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Callable

from .parsers import (
    meminfo_usage,
    parse_clk_summary,
    parse_devfreq_load,
    parse_labeled_percent,
    parse_meminfo,
    parse_number,
    parse_proc_stat,
)
from .probes import PROBES, is_probe
from .sources import Candidate, FileCandidate, ProbeCandidate, SensorSource, TickReader
from .units import METRIC_KEYS

logger = logging.getLogger("soctop.telemetry")

CLK_SUMMARY = "/sys/kernel/debug/clk/clk_summary"

DEFAULT_CAPABILITIES: dict[str, list[str]] = {
    "cpu_usage_pct": ["/proc/stat", "psutil:cpu_times"],
    "cpu_freq_hz": [
        "/sys/devices/system/cpu/cpu*/cpufreq/scaling_cur_freq",
        "psutil:cpu_freq",
    ],
    "gpu_usage_pct": [
        "/sys/class/devfreq/fb000000.gpu/load",
        "/sys/class/devfreq/ff700000.gpu/load",
        "/sys/class/devfreq/*.gpu/load",
        "nvml:utilization",
    ],
    "gpu_freq_hz": [
        "/sys/class/devfreq/fb000000.gpu/cur_freq",
        "/sys/class/devfreq/ff700000.gpu/cur_freq",
        "/sys/class/devfreq/*.gpu/cur_freq",
        "nvml:clock",
    ],
    "npu_usage_pct": ["/sys/kernel/debug/rknpu/load"],
    "npu_freq_hz": [
        "/sys/class/devfreq/fdab0000.npu/cur_freq",
        "/sys/class/devfreq/*.npu/cur_freq",
    ],
    "rga_usage_pct": ["/sys/kernel/debug/rkrga/load"],
    "rga_aclk_hz": [CLK_SUMMARY],
    "rga_core_hz": [CLK_SUMMARY],
    "rga_hclk_hz": [CLK_SUMMARY],
    "mem_usage_pct": ["/proc/meminfo", "psutil:virtual_memory"],
    "swap_usage_pct": ["/proc/meminfo", "psutil:swap_memory"],
    "temp_millideg": ["/sys/class/thermal/thermal_zone0/temp", "psutil:sensors_temperatures"],
    "fan_state": ["/sys/class/thermal/cooling_device4/cur_state"],
}


def _meminfo(total_key: str, free_key: str, text: str) -> float:
    return meminfo_usage(parse_meminfo(text), total_key, free_key)


FILE_PARSERS: dict[str, Callable[[str], Any]] = {
    "cpu_usage_pct": parse_proc_stat,
    # scaling_cur_freq is in kHz
    "cpu_freq_hz": partial(parse_number, scale=1000.0),
    "gpu_usage_pct": parse_devfreq_load,
    "gpu_freq_hz": parse_number,
    "npu_usage_pct": partial(parse_labeled_percent, label="NPU load"),
    "npu_freq_hz": parse_number,
    "rga_usage_pct": partial(parse_labeled_percent, label="load"),
    "rga_aclk_hz": partial(parse_clk_summary, clock="aclk_rga2e"),
    "rga_core_hz": partial(parse_clk_summary, clock="clk_core_rga2e"),
    "rga_hclk_hz": partial(parse_clk_summary, clock="hclk_rga2e"),
    "mem_usage_pct": partial(_meminfo, "MemTotal", "MemAvailable"),
    "swap_usage_pct": partial(_meminfo, "SwapTotal", "SwapFree"),
    "temp_millideg": parse_number,
    "fan_state": parse_number,
}


def resolve_capabilities(overrides: dict[str, list[str]] | None = None) -> dict[str, list[str]]:
    table = {key: list(paths) for key, paths in DEFAULT_CAPABILITIES.items()}
    for key, candidates in (overrides or {}).items():
        if key not in table:
            logger.warning("ignoring capability override for unknown metric %s", key)
            continue
        if isinstance(candidates, str):
            candidates = [candidates]
        table[key] = [str(c) for c in candidates]
    return table


def build_candidate(key: str, entry: str) -> Candidate | None:
    if is_probe(entry):
        probe = PROBES.get(entry)
        if probe is None:
            logger.warning("unknown probe %s for %s", entry, key)
            return None
        return ProbeCandidate(entry, probe)
    return FileCandidate(entry, FILE_PARSERS[key])


def build_sources(table: dict[str, list[str]] | None = None) -> dict[str, SensorSource]:
    table = table or resolve_capabilities()
    sources: dict[str, SensorSource] = {}
    for key in METRIC_KEYS:
        candidates = [c for c in (build_candidate(key, entry) for entry in table.get(key, [])) if c is not None]
        sources[key] = SensorSource(key, candidates)
    return sources


def probe_sources(sources: dict[str, SensorSource]) -> dict[str, dict[str, Any]]:
    reader = TickReader()
    report: dict[str, dict[str, Any]] = {}
    for key, source in sources.items():
        value = source.read(reader)
        report[key] = {
            "candidates": [c.name for c in source.candidates],
            "active": source.active,
            "available": value is not None,
            "error": source.last_error,
        }
    return report
