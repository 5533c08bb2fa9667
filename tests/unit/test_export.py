import json
import sys
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "telemetry"))

from soctop_telemetry.capabilities import build_sources, resolve_capabilities
from soctop_telemetry.collector import SampleCollector
from soctop_telemetry.export import collect_snapshot, snapshot_json, snapshot_payload
from soctop_telemetry.models import MetricSample
from soctop_telemetry.units import METRIC_KEYS


class _Collector:
    def __init__(self, sample=None, error=None):
        self.sample = sample
        self.error = error

    def collect(self):
        if self.error is not None:
            raise self.error
        return self.sample


class ExportTests(unittest.TestCase):
    def setUp(self):
        self.ts = datetime(2026, 3, 1, 9, 30, 0).astimezone()

    def test_payload_has_fixed_field_set(self):
        payload = snapshot_payload(MetricSample.empty(self.ts))
        self.assertEqual(set(payload), {"timestamp", *METRIC_KEYS})
        self.assertEqual(payload["timestamp"], str(self.ts))

    def test_absent_values_serialize_as_zero(self):
        payload = snapshot_payload(MetricSample.empty(self.ts))
        self.assertEqual(payload["npu_usage_pct"], 0.0)
        self.assertEqual(payload["gpu_freq_hz"], 0)
        self.assertIsInstance(payload["gpu_freq_hz"], int)

    def test_non_finite_file_contents_export_as_zero(self):
        with tempfile.TemporaryDirectory() as tmp:
            freq = Path(tmp) / "cur_freq"
            temp = Path(tmp) / "temp"
            freq.write_text("nan\n", encoding="utf-8")
            temp.write_text("inf\n", encoding="utf-8")
            table = resolve_capabilities({"gpu_freq_hz": [str(freq)], "temp_millideg": [str(temp)]})
            sources = build_sources(table)
            collector = SampleCollector({key: sources[key] for key in ("gpu_freq_hz", "temp_millideg")})

            sample = collector.collect()
            self.assertIsNone(sample.gpu_freq_hz)
            self.assertIsNone(sample.temp_millideg)

            data = json.loads(snapshot_json(collector, settle_s=0))
        self.assertEqual(data["gpu_freq_hz"], 0)
        self.assertEqual(data["temp_millideg"], 0.0)

    def test_frequencies_and_counts_are_integers(self):
        sample = MetricSample(timestamp=self.ts, cpu_freq_hz=1_800_000_000.0, fan_state=2.0, cpu_usage_pct=12.5)
        payload = snapshot_payload(sample)
        self.assertEqual(payload["cpu_freq_hz"], 1_800_000_000)
        self.assertEqual(payload["fan_state"], 2)
        self.assertEqual(payload["cpu_usage_pct"], 12.5)

    def test_json_round_trip(self):
        sample = MetricSample(timestamp=self.ts, temp_millideg=45000.0)
        data = json.loads(snapshot_json(_Collector(sample), settle_s=0))
        self.assertEqual(data["temp_millideg"], 45000.0)

    def test_collector_failure_yields_empty_sample(self):
        with self.assertLogs("soctop.telemetry", level="ERROR"):
            sample = collect_snapshot(_Collector(error=RuntimeError("boom")), settle_s=0)
        self.assertFalse(any(sample.available().values()))


if __name__ == "__main__":
    unittest.main()
