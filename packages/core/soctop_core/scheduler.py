"""Event loop multiplexing key input, timed sampling and rendering.

One iteration renders, waits up to the poll timeout for a key, then services
the sampler. Two samplers are available:

* :class:`InlineSampler` collects on the loop thread when the deadline has
  passed. A slow sensor read delays input handling and rendering.
* :class:`ThreadedSampler` collects on a worker thread and hands finished
  samples to the loop through a queue, so sensor latency never blocks input.

In both cases the loop thread is the only writer of the history store.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Callable, Protocol

from soctop_telemetry.collector import SampleCollector
from soctop_telemetry.models import MetricSample

from .history import HistoryStore
from .navigation import Command, NavigationState
from .performance import HealthStatus, LoopHealth

logger = logging.getLogger("soctop.loop")

Clock = Callable[[], float]
Collected = tuple[MetricSample, float]


class Renderer(Protocol):
    def render(self, history: HistoryStore, navigation: NavigationState, health: HealthStatus | None) -> None: ...


class KeySource(Protocol):
    def poll_key(self, timeout: float) -> Command | None: ...


def next_deadline(deadline: float, now: float, period: float) -> float:
    deadline += period
    if deadline <= now:
        # More than a period behind: resync instead of bursting to catch up.
        deadline = now + period
    return deadline


def _timed_collect(collector: SampleCollector, clock: Clock) -> Collected:
    started = clock()
    sample = collector.collect()
    return sample, clock() - started


class InlineSampler:
    def __init__(self, collector: SampleCollector, period_s: float, clock: Clock = time.monotonic) -> None:
        self.collector = collector
        self.period_s = period_s
        self._clock = clock
        self._deadline: float | None = None

    def start(self) -> None:
        self._deadline = self._clock() + self.period_s

    def pump(self) -> list[Collected]:
        now = self._clock()
        if self._deadline is None:
            self._deadline = now + self.period_s
            return []
        if now < self._deadline:
            return []
        collected = _timed_collect(self.collector, self._clock)
        self._deadline = next_deadline(self._deadline, now, self.period_s)
        return [collected]

    def stop(self) -> None:
        self._deadline = None


class ThreadedSampler:
    def __init__(
        self,
        collector: SampleCollector,
        period_s: float,
        clock: Clock = time.monotonic,
        max_pending: int = 600,
    ) -> None:
        self.collector = collector
        self.period_s = period_s
        self._clock = clock
        self._queue: queue.Queue[Collected] = queue.Queue(maxsize=max_pending)
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self.dropped = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="soctop-sampler", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        deadline = self._clock() + self.period_s
        while not self._stop.wait(max(0.0, deadline - self._clock())):
            try:
                collected = _timed_collect(self.collector, self._clock)
            except Exception:
                logger.exception("sample collection failed", extra={"event": "collect_error"})
            else:
                try:
                    self._queue.put_nowait(collected)
                except queue.Full:
                    self.dropped += 1
                    logger.warning("sample queue full, dropping sample", extra={"event": "sample_dropped"})
            deadline = next_deadline(deadline, self._clock(), self.period_s)

    def pump(self) -> list[Collected]:
        out: list[Collected] = []
        while True:
            try:
                out.append(self._queue.get_nowait())
            except queue.Empty:
                return out

    def stop(self, timeout: float = 1.0) -> None:
        self._stop.set()
        if self._thread is not None:
            # A worker blocked in a hung read is a daemon and is abandoned.
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("sampler thread did not stop within %.1fs", timeout)
        self._thread = None


class EventLoop:
    def __init__(
        self,
        renderer: Renderer,
        keys: KeySource,
        sampler: InlineSampler | ThreadedSampler,
        history: HistoryStore,
        navigation: NavigationState,
        health: LoopHealth | None = None,
        poll_timeout_s: float = 0.1,
        clock: Clock = time.monotonic,
    ) -> None:
        self.renderer = renderer
        self.keys = keys
        self.sampler = sampler
        self.history = history
        self.navigation = navigation
        self.health = health
        self.poll_timeout_s = poll_timeout_s
        self._clock = clock

    def dispatch(self, command: Command | None) -> bool:
        """Apply one command; ``False`` means the loop should stop."""
        if command is Command.QUIT:
            return False
        if command is Command.NEXT_TAB:
            self.navigation.next_tab()
        elif command is Command.PREVIOUS_TAB:
            self.navigation.previous_tab()
        return True

    def ingest(self, collected: list[Collected]) -> None:
        for sample, elapsed in collected:
            self.history.append(sample)
            if self.health is not None:
                self.health.record_collect(elapsed)
                self.health.record_sample(sample.timestamp)

    def step(self) -> bool:
        started = self._clock()
        self.renderer.render(self.history, self.navigation, self.health.status() if self.health else None)
        if self.health is not None:
            self.health.record_render(self._clock() - started)

        if not self.dispatch(self.keys.poll_key(self.poll_timeout_s)):
            return False

        self.ingest(self.sampler.pump())
        return True

    def run(self) -> int:
        self.sampler.start()
        logger.info("event loop started", extra={"event": "loop_started"})
        try:
            while self.step():
                pass
        finally:
            self.sampler.stop()
            logger.info("event loop stopped", extra={"event": "loop_stopped"})
        return 0
