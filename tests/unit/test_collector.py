import sys
import unittest
from datetime import datetime, timedelta
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "telemetry"))

from soctop_telemetry.collector import SampleCollector
from soctop_telemetry.models import CpuTimes, MetricSample
from soctop_telemetry.parsers import SensorUnavailable
from soctop_telemetry.sources import ProbeCandidate, SensorSource
from soctop_telemetry.units import METRIC_KEYS


def _scripted(key, values):
    it = iter(values)

    def probe():
        value = next(it)
        if value is None:
            raise SensorUnavailable("scripted gap")
        return value

    return SensorSource(key, [ProbeCandidate(f"script:{key}", probe)])


class _Clock:
    def __init__(self):
        self.now = datetime(2026, 1, 1, 12, 0, 0).astimezone()

    def __call__(self):
        self.now += timedelta(milliseconds=200)
        return self.now


class CollectorTests(unittest.TestCase):
    def test_cpu_usage_from_counter_delta(self):
        cpu = _scripted(
            "cpu_usage_pct",
            [
                CpuTimes(busy=1000, total=10000),  # primed at construction
                CpuTimes(busy=1050, total=10100),
                CpuTimes(busy=1050, total=10200),
            ],
        )
        collector = SampleCollector({"cpu_usage_pct": cpu}, clock=_Clock())
        self.assertAlmostEqual(collector.collect().cpu_usage_pct, 50.0)
        self.assertAlmostEqual(collector.collect().cpu_usage_pct, 0.0)

    def test_zero_total_delta_repeats_last_value(self):
        cpu = _scripted(
            "cpu_usage_pct",
            [CpuTimes(0, 100), CpuTimes(25, 200), CpuTimes(25, 200)],
        )
        collector = SampleCollector({"cpu_usage_pct": cpu}, clock=_Clock())
        self.assertAlmostEqual(collector.collect().cpu_usage_pct, 25.0)
        self.assertAlmostEqual(collector.collect().cpu_usage_pct, 25.0)

    def test_counter_reset_reports_absent(self):
        cpu = _scripted(
            "cpu_usage_pct",
            [CpuTimes(500, 1000), CpuTimes(10, 100), CpuTimes(60, 200)],
        )
        collector = SampleCollector({"cpu_usage_pct": cpu}, clock=_Clock())
        self.assertIsNone(collector.collect().cpu_usage_pct)
        self.assertAlmostEqual(collector.collect().cpu_usage_pct, 50.0)

    def test_busy_rounding_jitter_reads_as_idle(self):
        cpu = _scripted(
            "cpu_usage_pct",
            [CpuTimes(busy=5000, total=90000), CpuTimes(busy=4999, total=90100), CpuTimes(busy=5049, total=90200)],
        )
        collector = SampleCollector({"cpu_usage_pct": cpu}, clock=_Clock())
        self.assertEqual(collector.collect().cpu_usage_pct, 0.0)
        self.assertAlmostEqual(collector.collect().cpu_usage_pct, 50.0)

    def test_unavailable_sensor_stays_none(self):
        sources = {
            "gpu_usage_pct": _scripted("gpu_usage_pct", [None, 0.0]),
            "temp_millideg": _scripted("temp_millideg", [45000, 46000]),
        }
        collector = SampleCollector(sources, clock=_Clock())
        first = collector.collect()
        second = collector.collect()
        self.assertIsNone(first.gpu_usage_pct)
        self.assertEqual(second.gpu_usage_pct, 0.0)
        self.assertEqual(first.temp_millideg, 45000.0)
        self.assertIsNone(first.npu_usage_pct)

    def test_each_source_read_once_per_collect(self):
        calls = {key: 0 for key in METRIC_KEYS}

        def make(key):
            def probe():
                calls[key] += 1
                return 1.0

            return SensorSource(key, [ProbeCandidate(key, probe)])

        sources = {key: make(key) for key in METRIC_KEYS if key != "cpu_usage_pct"}
        collector = SampleCollector(sources, clock=_Clock())
        collector.collect()
        self.assertTrue(all(n == 1 for key, n in calls.items() if key != "cpu_usage_pct"))

    def test_timestamps_non_decreasing(self):
        collector = SampleCollector({}, clock=_Clock())
        stamps = [collector.collect().timestamp for _ in range(5)]
        self.assertEqual(stamps, sorted(stamps))

    def test_negative_values_clamped(self):
        sample = MetricSample(timestamp=datetime.now().astimezone(), temp_millideg=-5000.0)
        self.assertEqual(sample.temp_millideg, 0.0)

    def test_non_finite_values_become_absent(self):
        sample = MetricSample(
            timestamp=datetime.now().astimezone(), gpu_freq_hz=float("nan"), temp_millideg=float("inf")
        )
        self.assertIsNone(sample.gpu_freq_hz)
        self.assertIsNone(sample.temp_millideg)


if __name__ == "__main__":
    unittest.main()
