"""Dashboard settings schema and load/save helpers."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


CONFIG_VERSION = 2
DEFAULT_TABS = ["CPU", "GPU", "NPU", "RGA", "Memory", "Thermal"]
SAMPLING_MODES = ("thread", "inline")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

logger = logging.getLogger("soctop.config")


@dataclass
class SamplingConfig:
    period_ms: int = 200
    history_capacity: int = 600
    input_poll_ms: int = 100
    mode: str = "thread"

    @property
    def period_s(self) -> float:
        return self.period_ms / 1000.0

    @property
    def input_poll_s(self) -> float:
        return self.input_poll_ms / 1000.0


@dataclass
class UiConfig:
    tabs: list[str] = field(default_factory=lambda: list(DEFAULT_TABS))
    theme: str = "Neon Slate"


@dataclass
class LoggingConfig:
    level: str = "INFO"
    keep_log_files: int = 7


@dataclass
class PerformanceConfig:
    late_factor: float = 1.5


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    ui: UiConfig = field(default_factory=UiConfig)
    sensors: dict[str, list[str]] = field(default_factory=dict)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)


def config_root() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME")
    return (Path(base) if base else Path.home() / ".config") / "soctop"


def config_path() -> Path:
    override = os.environ.get("SOCTOP_CONFIG")
    if override:
        return Path(override).expanduser()
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _clamp_int(value: Any, lo: int, hi: int, default: int) -> int:
    try:
        return max(lo, min(hi, int(value)))
    except (TypeError, ValueError):
        return default


def _normalize_sampling(cfg: AppConfig) -> None:
    s = cfg.sampling
    s.period_ms = _clamp_int(s.period_ms, 50, 5000, 200)
    s.history_capacity = _clamp_int(s.history_capacity, 10, 100_000, 600)
    s.input_poll_ms = _clamp_int(s.input_poll_ms, 10, 1000, 100)
    if s.mode not in SAMPLING_MODES:
        s.mode = "thread"


def _normalize_ui(cfg: AppConfig) -> None:
    tabs = cfg.ui.tabs if isinstance(cfg.ui.tabs, list) else []
    known = [t for t in tabs if t in DEFAULT_TABS]
    if len(known) != len(tabs):
        logger.warning("dropping unknown tabs %s", sorted(set(map(str, tabs)) - set(DEFAULT_TABS)))
    cfg.ui.tabs = known or list(DEFAULT_TABS)
    if not isinstance(cfg.ui.theme, str):
        cfg.ui.theme = "Neon Slate"


def _normalize_sensors(cfg: AppConfig) -> None:
    out: dict[str, list[str]] = {}
    raw = cfg.sensors if isinstance(cfg.sensors, dict) else {}
    for key, candidates in raw.items():
        if isinstance(candidates, str):
            candidates = [candidates]
        if isinstance(candidates, list):
            out[str(key)] = [str(c) for c in candidates]
    cfg.sensors = out


def _normalize_logging(cfg: AppConfig) -> None:
    level = str(cfg.logging.level).upper()
    cfg.logging.level = level if level in LOG_LEVELS else "INFO"
    cfg.logging.keep_log_files = _clamp_int(cfg.logging.keep_log_files, 2, 365, 7)


def _normalize_performance(cfg: AppConfig) -> None:
    try:
        factor = float(cfg.performance.late_factor)
    except (TypeError, ValueError):
        factor = 1.5
    cfg.performance.late_factor = max(1.0, factor)


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = int(raw.get("config_version", 1))
    data = dict(raw)

    if version < 2:
        # v1 kept the sampling period and capability table at the top level.
        sampling = dict(data.get("sampling", {}) or {})
        if "interval_ms" in data:
            sampling.setdefault("period_ms", data.pop("interval_ms"))
        data["sampling"] = sampling
        if "paths" in data:
            data.setdefault("sensors", data.pop("paths"))
        data["config_version"] = 2

    return data


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("unreadable config %s, using defaults: %s", path, exc)
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    data = _migrate(raw)
    cfg = AppConfig(
        config_version=CONFIG_VERSION,
        sampling=_merge(SamplingConfig, data.get("sampling", {})),
        ui=_merge(UiConfig, data.get("ui", {})),
        sensors=data.get("sensors", {}) or {},
        logging=_merge(LoggingConfig, data.get("logging", {})),
        performance=_merge(PerformanceConfig, data.get("performance", {})),
    )

    _normalize_sampling(cfg)
    _normalize_ui(cfg)
    _normalize_sensors(cfg)
    _normalize_logging(cfg)
    _normalize_performance(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
