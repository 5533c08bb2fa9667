"""Host fallback probes backed by psutil and NVML."""

from __future__ import annotations

from typing import Any, Callable

import psutil

from .models import CpuTimes
from .parsers import SensorUnavailable

_TEMP_CHIPS = ("cpu_thermal", "soc_thermal", "coretemp", "k10temp", "acpitz")


def _guarded(fn: Callable[[], Any]) -> Callable[[], Any]:
    def probe() -> Any:
        try:
            value = fn()
        except SensorUnavailable:
            raise
        except Exception as exc:
            raise SensorUnavailable(f"{fn.__name__}: {exc}") from exc
        if value is None:
            raise SensorUnavailable(f"{fn.__name__}: no reading")
        return value

    probe.__name__ = fn.__name__
    return probe


def cpu_times() -> CpuTimes:
    t = psutil.cpu_times()
    idle = t.idle + getattr(t, "iowait", 0.0)
    total = sum(t) - getattr(t, "guest", 0.0) - getattr(t, "guest_nice", 0.0)
    # Scale to integer hundredths so deltas match /proc/stat jiffies.
    return CpuTimes(busy=int((total - idle) * 100), total=int(total * 100))


def cpu_freq() -> float | None:
    freq = psutil.cpu_freq()
    if not freq or not freq.current:
        return None
    return float(freq.current) * 1_000_000.0


def virtual_memory() -> float:
    return float(psutil.virtual_memory().percent)


def swap_memory() -> float:
    return float(psutil.swap_memory().percent)


def sensors_temperatures() -> float | None:
    temps = psutil.sensors_temperatures()
    if not temps:
        return None

    for name in _TEMP_CHIPS:
        entries = temps.get(name)
        if entries and entries[0].current is not None:
            return float(entries[0].current) * 1000.0

    for _name, entries in temps.items():
        if entries and entries[0].current is not None:
            return float(entries[0].current) * 1000.0
    return None


class _NvmlProbe:
    """Lazily initialized NVML handle shared by the GPU probes."""

    def __init__(self) -> None:
        self._nvml: Any = None
        self._handle: Any = None
        self._failed: str | None = None

    def _device(self) -> Any:
        if self._failed is not None:
            raise SensorUnavailable(self._failed)
        if self._handle is None:
            try:
                import pynvml  # type: ignore

                pynvml.nvmlInit()
                if pynvml.nvmlDeviceGetCount() < 1:
                    raise RuntimeError("no NVIDIA device")
                self._handle = pynvml.nvmlDeviceGetHandleByIndex(0)
                self._nvml = pynvml
            except Exception as exc:
                self._failed = f"nvml unavailable: {exc}"
                raise SensorUnavailable(self._failed) from exc
        return self._handle

    def utilization(self) -> float:
        handle = self._device()
        return float(self._nvml.nvmlDeviceGetUtilizationRates(handle).gpu)

    def clock(self) -> float:
        handle = self._device()
        mhz = self._nvml.nvmlDeviceGetClockInfo(handle, self._nvml.NVML_CLOCK_GRAPHICS)
        return float(mhz) * 1_000_000.0


_NVML = _NvmlProbe()

PROBES: dict[str, Callable[[], Any]] = {
    "psutil:cpu_times": _guarded(cpu_times),
    "psutil:cpu_freq": _guarded(cpu_freq),
    "psutil:virtual_memory": _guarded(virtual_memory),
    "psutil:swap_memory": _guarded(swap_memory),
    "psutil:sensors_temperatures": _guarded(sensors_temperatures),
    "nvml:utilization": _guarded(_NVML.utilization),
    "nvml:clock": _guarded(_NVML.clock),
}


def is_probe(candidate: str) -> bool:
    return candidate.startswith(("psutil:", "nvml:"))
