"""Per-tab chart and status-line layouts."""

from __future__ import annotations

from .models import ChartSpec, StatusField, TabLayout

_PCT = "{:.1f}%"
_MHZ = "{:.0f} MHz"

TAB_LAYOUTS: dict[str, TabLayout] = {
    "CPU": TabLayout(
        name="CPU",
        charts=(
            ChartSpec("cpu_usage_pct", "CPU Usage (%)", "Usage %", 0),
            ChartSpec("cpu_freq_hz", "CPU Frequency (MHz)", "MHz", 1),
        ),
        fields=(StatusField("CPU Usage", "cpu_usage_pct", _PCT), StatusField("Frequency", "cpu_freq_hz", _MHZ)),
    ),
    "GPU": TabLayout(
        name="GPU",
        charts=(
            ChartSpec("gpu_usage_pct", "GPU Usage (%)", "Usage %", 2),
            ChartSpec("gpu_freq_hz", "GPU Frequency (MHz)", "MHz", 3),
        ),
        fields=(StatusField("GPU Usage", "gpu_usage_pct", _PCT), StatusField("Frequency", "gpu_freq_hz", _MHZ)),
    ),
    "NPU": TabLayout(
        name="NPU",
        charts=(
            ChartSpec("npu_usage_pct", "NPU Usage (%)", "Usage %", 4),
            ChartSpec("npu_freq_hz", "NPU Frequency (MHz)", "MHz", 5),
        ),
        fields=(StatusField("NPU Usage", "npu_usage_pct", _PCT), StatusField("Frequency", "npu_freq_hz", _MHZ)),
    ),
    "RGA": TabLayout(
        name="RGA",
        charts=(
            ChartSpec("rga_usage_pct", "RGA Usage (%)", "Usage %", 6),
            ChartSpec("rga_aclk_hz", "RGA ACLK Frequency (MHz)", "MHz", 0),
            ChartSpec("rga_core_hz", "RGA Core Frequency (MHz)", "MHz", 2),
            ChartSpec("rga_hclk_hz", "RGA HCLK Frequency (MHz)", "MHz", 3),
        ),
        fields=(
            StatusField("RGA Usage", "rga_usage_pct", _PCT),
            StatusField("ACLK", "rga_aclk_hz", _MHZ),
            StatusField("Core", "rga_core_hz", _MHZ),
            StatusField("HCLK", "rga_hclk_hz", _MHZ),
        ),
    ),
    "Memory": TabLayout(
        name="Memory",
        charts=(
            ChartSpec("mem_usage_pct", "Memory Usage (%)", "Usage %", 0),
            ChartSpec("swap_usage_pct", "Swap Usage (%)", "Usage %", 1),
        ),
        fields=(StatusField("Memory", "mem_usage_pct", _PCT), StatusField("Swap", "swap_usage_pct", _PCT)),
    ),
    "Thermal": TabLayout(
        name="Thermal",
        charts=(
            ChartSpec("temp_millideg", "Temperature (°C)", "°C", 1),
            ChartSpec("fan_state", "Fan State", "State", 3),
        ),
        fields=(
            StatusField("Temperature", "temp_millideg", "{:.1f}°C"),
            StatusField("Fan State", "fan_state", "{:.0f}"),
        ),
    ),
}


def get_layout(name: str) -> TabLayout:
    return TAB_LAYOUTS[name]
