"""Interactive dashboard wiring and terminal lifecycle."""

from __future__ import annotations

import sys

from soctop_core import (
    AppConfig,
    EventLoop,
    HistoryStore,
    InlineSampler,
    LoopHealth,
    NavigationState,
    SeriesProjector,
    ThreadedSampler,
    load_config,
)
from soctop_core.logging_setup import get_logger
from soctop_renderer.dashboard import DashboardRenderer
from soctop_renderer.terminal import TerminalIOFailure, TerminalSession
from soctop_telemetry import SampleCollector, read_device_info


def build_sampler(cfg: AppConfig, collector: SampleCollector) -> InlineSampler | ThreadedSampler:
    if cfg.sampling.mode == "inline":
        return InlineSampler(collector, cfg.sampling.period_s)
    return ThreadedSampler(collector, cfg.sampling.period_s, max_pending=cfg.sampling.history_capacity)


def build_loop(cfg: AppConfig, session: TerminalSession, collector: SampleCollector | None = None) -> EventLoop:
    collector = collector or SampleCollector.from_overrides(cfg.sensors)
    projector = SeriesProjector(cfg.sampling.period_s, cfg.sampling.history_capacity)
    renderer = DashboardRenderer(session.term, projector, read_device_info(), cfg.ui.theme)
    return EventLoop(
        renderer=renderer,
        keys=session,
        sampler=build_sampler(cfg, collector),
        history=HistoryStore(cfg.sampling.history_capacity),
        navigation=NavigationState(cfg.ui.tabs),
        health=LoopHealth(cfg.sampling.period_s, cfg.performance.late_factor),
        poll_timeout_s=cfg.sampling.input_poll_s,
    )


def run_dashboard(cfg: AppConfig | None = None) -> int:
    cfg = cfg or load_config()
    logger = get_logger("app")
    try:
        with TerminalSession() as session:
            return build_loop(cfg, session).run()
    except KeyboardInterrupt:
        logger.info("interrupted, shutting down", extra={"event": "interrupted"})
        return 0
    except TerminalIOFailure as exc:
        logger.error("terminal failure: %s", exc, extra={"event": "terminal_failure"})
        print(f"soctop: {exc}", file=sys.stderr)
        return 1
