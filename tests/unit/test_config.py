import json
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "telemetry"))

from soctop_core.config import AppConfig, DEFAULT_TABS, config_path, load_config, save_config


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "missing.json"
            cfg = load_config(path)
            self.assertIsInstance(cfg, AppConfig)
            self.assertEqual(cfg.sampling.period_ms, 200)
            self.assertEqual(cfg.sampling.history_capacity, 600)
            self.assertEqual(cfg.sampling.mode, "thread")
            self.assertEqual(cfg.ui.tabs, DEFAULT_TABS)
            self.assertEqual(cfg.sensors, {})

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "config.json"
            cfg = load_config(path)
            cfg.sampling.period_ms = 500
            cfg.ui.theme = "Mono"
            cfg.sensors = {"gpu_usage_pct": ["/sys/class/devfreq/*.gpu/load"]}
            save_config(cfg, path)
            reloaded = load_config(path)
            self.assertEqual(reloaded.sampling.period_ms, 500)
            self.assertAlmostEqual(reloaded.sampling.period_s, 0.5)
            self.assertEqual(reloaded.ui.theme, "Mono")
            self.assertEqual(reloaded.sensors["gpu_usage_pct"], ["/sys/class/devfreq/*.gpu/load"])

    def test_migrate_v1_shape(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            old = {
                "interval_ms": 1000,
                "paths": {"npu_usage_pct": "/sys/kernel/debug/rknpu/load"},
                "ui": {"theme": "Solar Drift"},
            }
            path.write_text(json.dumps(old), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.config_version, 2)
            self.assertEqual(cfg.sampling.period_ms, 1000)
            self.assertEqual(cfg.sensors, {"npu_usage_pct": ["/sys/kernel/debug/rknpu/load"]})
            self.assertEqual(cfg.ui.theme, "Solar Drift")

    def test_out_of_range_values_clamped(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {
                "config_version": 2,
                "sampling": {"period_ms": 1, "history_capacity": "lots", "mode": "fibers"},
                "ui": {"tabs": ["GPU", "Disk", "CPU"]},
                "logging": {"level": "chatty", "keep_log_files": 1000},
                "performance": {"late_factor": 0.2},
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.sampling.period_ms, 50)
            self.assertEqual(cfg.sampling.history_capacity, 600)
            self.assertEqual(cfg.sampling.mode, "thread")
            self.assertEqual(cfg.ui.tabs, ["GPU", "CPU"])
            self.assertEqual(cfg.logging.level, "INFO")
            self.assertEqual(cfg.logging.keep_log_files, 365)
            self.assertEqual(cfg.performance.late_factor, 1.0)

    def test_unreadable_config_falls_back(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_config(path), AppConfig())

    def test_path_env_overrides(self):
        with mock.patch.dict(os.environ, {"SOCTOP_CONFIG": "/tmp/alt/soctop.json"}):
            self.assertEqual(config_path(), Path("/tmp/alt/soctop.json"))
        with mock.patch.dict(os.environ, {"XDG_CONFIG_HOME": "/tmp/xdg"}, clear=False):
            os.environ.pop("SOCTOP_CONFIG", None)
            self.assertEqual(config_path(), Path("/tmp/xdg/soctop/config.json"))


if __name__ == "__main__":
    unittest.main()
