"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ThemeConfig:
    name: str
    title: str
    tab: str
    tab_selected: str
    status: str
    muted: str
    warning: str
    plot_theme: str
    chart_colors: tuple[str, ...]


@dataclass(frozen=True)
class ChartSpec:
    key: str
    title: str
    y_label: str
    color: int


@dataclass(frozen=True)
class StatusField:
    label: str
    key: str
    fmt: str


@dataclass(frozen=True)
class TabLayout:
    name: str
    charts: tuple[ChartSpec, ...]
    fields: tuple[StatusField, ...]
