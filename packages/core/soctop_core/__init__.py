"""Core services: config, history, projection, navigation and the event loop."""

from .config import AppConfig, load_config, save_config
from .diagnostics import build_doctor_payload
from .history import HistoryStore
from .navigation import Command, NavigationState
from .performance import HealthStatus, LoopHealth
from .projection import ChartSeries, SeriesProjector, axis_bounds
from .scheduler import EventLoop, InlineSampler, ThreadedSampler

__all__ = [
    "AppConfig",
    "ChartSeries",
    "Command",
    "EventLoop",
    "HealthStatus",
    "HistoryStore",
    "InlineSampler",
    "LoopHealth",
    "NavigationState",
    "SeriesProjector",
    "ThreadedSampler",
    "axis_bounds",
    "build_doctor_payload",
    "load_config",
    "save_config",
]
