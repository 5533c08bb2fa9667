"""Text parsers for kernel counter files.

Every parser takes the file content as text and either returns a number or
raises :class:`SensorUnavailable`.
"""

from __future__ import annotations

import math
import re

from .models import CpuTimes

CLK_RATE_COLUMN = 4

_PERCENT_RE = re.compile(r"(\d+(?:\.\d+)?)\s*%")


class SensorUnavailable(Exception):
    """A backing path is missing, unreadable, or its content does not parse."""


def parse_number(text: str, scale: float = 1.0) -> float:
    raw = text.strip().split()
    if not raw:
        raise SensorUnavailable("empty counter file")
    try:
        value = float(raw[0])
    except ValueError:
        raise SensorUnavailable(f"not a number: {raw[0]!r}") from None
    if not math.isfinite(value):
        raise SensorUnavailable(f"non-finite reading: {raw[0]!r}")
    return value * scale


def parse_devfreq_load(text: str) -> float:
    # devfreq load files read "<load>@<freq>Hz"
    return parse_number(text.split("@", 1)[0])


def parse_labeled_percent(text: str, label: str) -> float:
    values: list[float] = []
    for line in text.splitlines():
        if label not in line:
            continue
        tail = line.split(label, 1)[1]
        values.extend(float(m) for m in _PERCENT_RE.findall(tail))
    if not values:
        raise SensorUnavailable(f"no '{label}' percentages found")
    return sum(values) / len(values)


def parse_clk_summary(text: str, clock: str) -> float:
    for line in text.splitlines():
        parts = line.split()
        if not parts or parts[0] != clock:
            continue
        if len(parts) <= CLK_RATE_COLUMN:
            break
        try:
            return float(int(parts[CLK_RATE_COLUMN]))
        except ValueError:
            break
    raise SensorUnavailable(f"clock {clock!r} not in clk_summary")


def parse_meminfo(text: str) -> dict[str, int]:
    out: dict[str, int] = {}
    for line in text.splitlines():
        name, sep, rest = line.partition(":")
        if not sep:
            continue
        parts = rest.split()
        if not parts:
            continue
        try:
            out[name.strip()] = int(parts[0])
        except ValueError:
            continue
    return out


def meminfo_usage(fields: dict[str, int], total_key: str, free_key: str) -> float:
    if total_key not in fields or free_key not in fields:
        raise SensorUnavailable(f"meminfo lacks {total_key}/{free_key}")
    total = fields[total_key]
    if total <= 0:
        return 0.0
    used = max(total - fields[free_key], 0)
    return used / total * 100.0


def parse_proc_stat(text: str) -> CpuTimes:
    for line in text.splitlines():
        parts = line.split()
        if not parts or parts[0] != "cpu":
            continue
        try:
            # user nice system idle iowait irq softirq steal; guest time is already in user.
            vals = [int(x) for x in parts[1:9]]
        except ValueError:
            break
        if len(vals) < 4:
            break
        idle = vals[3] + (vals[4] if len(vals) > 4 else 0)
        total = sum(vals)
        return CpuTimes(busy=total - idle, total=total)
    raise SensorUnavailable("no aggregate cpu line")
