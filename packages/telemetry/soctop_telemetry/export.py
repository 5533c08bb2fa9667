"""One-shot JSON snapshot of a single collected sample."""

from __future__ import annotations

import json
import logging
import math
import time
from datetime import datetime
from typing import Any

from .collector import SampleCollector
from .models import MetricSample
from .units import METRIC_KEYS, Unit, metric_spec

logger = logging.getLogger("soctop.telemetry")


def snapshot_payload(sample: MetricSample) -> dict[str, Any]:
    """Fixed field set; absent readings serialize as zero."""
    payload: dict[str, Any] = {"timestamp": str(sample.timestamp)}
    for key in METRIC_KEYS:
        value = sample.value(key)
        if value is None or not math.isfinite(value):
            value = 0.0
        if metric_spec(key).unit in (Unit.HERTZ, Unit.COUNT):
            payload[key] = int(round(value))
        else:
            payload[key] = float(value)
    return payload


def collect_snapshot(collector: SampleCollector | None = None, settle_s: float = 0.2) -> MetricSample:
    try:
        collector = collector or SampleCollector()
        if settle_s > 0:
            time.sleep(settle_s)
        return collector.collect()
    except Exception:
        logger.exception("snapshot collection failed")
        return MetricSample.empty(datetime.now().astimezone())


def snapshot_json(collector: SampleCollector | None = None, settle_s: float = 0.2) -> str:
    return json.dumps(snapshot_payload(collect_snapshot(collector, settle_s)))
