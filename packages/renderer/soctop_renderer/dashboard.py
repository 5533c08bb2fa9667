"""Full-screen dashboard composer: title, tabs, current values, charts, footer."""

from __future__ import annotations

import sys
from typing import TextIO

import plotext as plt
from blessed import Terminal

from soctop_core.history import HistoryStore
from soctop_core.navigation import NavigationState
from soctop_core.performance import HealthStatus
from soctop_core.projection import ChartSeries, SeriesProjector
from soctop_telemetry.models import MetricSample

from .layouts import get_layout
from .models import ChartSpec, TabLayout, ThemeConfig
from .themes import get_theme

HEADER_ROWS = 3
FOOTER_ROWS = 1
MIN_CHART_ROWS = 6


def format_status_line(layout: TabLayout, sample: MetricSample | None) -> str:
    if sample is None:
        return "Collecting system data..."
    parts = []
    for field in layout.fields:
        value = sample.display_value(field.key)
        parts.append(f"{field.label}: {'N/A' if value is None else field.fmt.format(value)}")
    parts.append(f"Last Update: {sample.timestamp.strftime('%H:%M:%S')}")
    return " | ".join(parts)


def format_health(health: HealthStatus | None) -> str:
    if health is None:
        return ""
    text = (
        f"render {health.render_ms:.0f} ms | collect {health.collect_ms:.0f} ms | "
        f"late {health.late_samples} | cpu {health.cpu_percent:.1f}% | rss {health.rss_mb:.0f} MB"
    )
    if health.stalled:
        text += " | SENSOR STALL"
    return text


def build_chart(
    series: ChartSeries,
    spec: ChartSpec,
    theme: ThemeConfig,
    x_window: tuple[float, float],
    width: int,
    height: int,
) -> str:
    plt.clear_figure()
    plt.theme(theme.plot_theme)
    plt.plotsize(width, height)
    plt.title(spec.title)
    plt.xlabel("Time (seconds)")
    plt.ylabel(spec.y_label)
    if series.points:
        color = theme.chart_colors[spec.color % len(theme.chart_colors)]
        plt.plot(series.xs, series.ys, marker="braille", color=color)
    plt.xlim(*x_window)
    plt.ylim(*series.bounds)
    return plt.build()


class DashboardRenderer:
    """Draws one frame per call; all chart data comes from the projector."""

    def __init__(
        self,
        term: Terminal,
        projector: SeriesProjector,
        device_info: str = "Unknown",
        theme_name: str | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self.term = term
        self.projector = projector
        self.device_info = device_info
        self.theme = get_theme(theme_name)
        self.stream = stream or sys.stdout

    def _style(self, style: str, text: str) -> str:
        return getattr(self.term, style)(text)

    def _tab_bar(self, navigation: NavigationState) -> str:
        parts = []
        for i, title in enumerate(navigation.titles):
            style = self.theme.tab_selected if i == navigation.index else self.theme.tab
            parts.append(self._style(style, f" {title} "))
        return self._style(self.theme.muted, "│").join(parts)

    def compose(
        self,
        history: HistoryStore,
        navigation: NavigationState,
        health: HealthStatus | None,
    ) -> list[str]:
        width = max(self.term.width, 20)
        height = max(self.term.height, HEADER_ROWS + FOOTER_ROWS + 1)
        layout = get_layout(navigation.current)
        snapshot = history.snapshot()
        latest = snapshot[-1] if snapshot else None

        title = f"System Monitor - {self.device_info} - Press 'q' to quit, ←/→ to switch tabs"
        lines = [
            self._style(self.theme.title, self.term.truncate(title, width)),
            self._tab_bar(navigation),
            self._style(self.theme.status, self.term.truncate(format_status_line(layout, latest), width)),
        ]

        chart_rows = height - HEADER_ROWS - FOOTER_ROWS
        if latest is not None and chart_rows >= MIN_CHART_ROWS:
            fit = max(1, min(len(layout.charts), chart_rows // MIN_CHART_ROWS))
            per_chart = chart_rows // fit
            x_window = self.projector.time_window(len(snapshot))
            for spec in layout.charts[:fit]:
                series = self.projector.project(snapshot, spec.key)
                chart = build_chart(series, spec, self.theme, x_window, width, per_chart)
                lines.extend(chart.splitlines()[:per_chart])

        lines = lines[: height - FOOTER_ROWS]
        lines.extend([""] * (height - FOOTER_ROWS - len(lines)))
        footer_style = self.theme.warning if health is not None and health.stalled else self.theme.muted
        lines.append(self._style(footer_style, self.term.truncate(format_health(health), width)))
        return lines

    def render(
        self,
        history: HistoryStore,
        navigation: NavigationState,
        health: HealthStatus | None = None,
    ) -> None:
        lines = self.compose(history, navigation, health)
        out = [self.term.home]
        for line in lines[:-1]:
            out.append(line + self.term.clear_eol + "\n")
        out.append(lines[-1] + self.term.clear_eos)
        self.stream.write("".join(out))
        self.stream.flush()
