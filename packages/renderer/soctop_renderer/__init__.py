"""Terminal renderer package for the soctop dashboard."""

from .layouts import TAB_LAYOUTS, get_layout
from .models import ChartSpec, StatusField, TabLayout, ThemeConfig
from .themes import DEFAULT_THEME_NAME, get_theme, list_themes

try:  # pragma: no cover - terminal libraries are optional at import time for test environments
    from .dashboard import DashboardRenderer
    from .terminal import TerminalIOFailure, TerminalSession, translate_key
except ImportError:  # pragma: no cover
    DashboardRenderer = None  # type: ignore[assignment]
    TerminalIOFailure = None  # type: ignore[assignment]
    TerminalSession = None  # type: ignore[assignment]
    translate_key = None  # type: ignore[assignment]

__all__ = [
    "ChartSpec",
    "DEFAULT_THEME_NAME",
    "StatusField",
    "TAB_LAYOUTS",
    "TabLayout",
    "ThemeConfig",
    "get_layout",
    "get_theme",
    "list_themes",
]

if DashboardRenderer is not None:
    __all__ += ["DashboardRenderer", "TerminalIOFailure", "TerminalSession", "translate_key"]
