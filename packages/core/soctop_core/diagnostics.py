"""Diagnostics payload for `soctop doctor`."""

from __future__ import annotations

import platform
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

from soctop_telemetry import build_sources, probe_sources, read_device_info, resolve_capabilities

from .config import AppConfig, config_path, config_root
from .logging_setup import log_dir, log_file


def _log_location() -> dict[str, Any]:
    try:
        return {"log_dir": str(log_dir()), "log_file": str(log_file()), "log_error": None}
    except OSError as exc:
        fallback = config_root() / "logs"
        return {"log_dir": str(fallback), "log_file": None, "log_error": f"log directory unavailable: {exc}"}


def build_doctor_payload(cfg: AppConfig) -> dict[str, Any]:
    sources = build_sources(resolve_capabilities(cfg.sensors))
    probes = probe_sources(sources)
    return {
        "ts_utc": datetime.now(timezone.utc).isoformat(),
        "platform": platform.platform(),
        "python": platform.python_version(),
        "device": read_device_info(),
        "config_path": str(config_path()),
        **_log_location(),
        "config": asdict(cfg),
        "sensors": probes,
        "available": sorted(k for k, v in probes.items() if v["available"]),
        "unavailable": sorted(k for k, v in probes.items() if not v["available"]),
    }
