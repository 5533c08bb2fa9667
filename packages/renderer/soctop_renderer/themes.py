"""Built-in terminal dashboard themes.

Style strings are blessed compound formatter names; chart colors are plotext
color names.
"""

from __future__ import annotations

from .models import ThemeConfig

DEFAULT_THEME_NAME = "Neon Slate"

THEMES: dict[str, ThemeConfig] = {
    "Neon Slate": ThemeConfig(
        name="Neon Slate",
        title="bold_cyan",
        tab="white",
        tab_selected="bold_yellow",
        status="bold_green",
        muted="bright_black",
        warning="bold_red",
        plot_theme="clear",
        chart_colors=("yellow", "red", "green", "blue", "magenta", "cyan", "white"),
    ),
    "Solar Drift": ThemeConfig(
        name="Solar Drift",
        title="bold_yellow",
        tab="white",
        tab_selected="bold_red",
        status="bold_yellow",
        muted="bright_black",
        warning="bold_red",
        plot_theme="clear",
        chart_colors=("orange", "red", "yellow", "magenta", "white", "green", "cyan"),
    ),
    "Mono": ThemeConfig(
        name="Mono",
        title="bold",
        tab="white",
        tab_selected="reverse",
        status="bold",
        muted="dim",
        warning="bold",
        plot_theme="clear",
        chart_colors=("default",),
    ),
}


def list_themes() -> list[str]:
    return sorted(THEMES.keys())


def get_theme(name: str | None) -> ThemeConfig:
    if not name:
        return THEMES[DEFAULT_THEME_NAME]
    return THEMES.get(name, THEMES[DEFAULT_THEME_NAME])
