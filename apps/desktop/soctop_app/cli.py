"""CLI entrypoints for the soctop dashboard, snapshot export and diagnostics."""

from __future__ import annotations

import argparse
import json

from soctop_core import build_doctor_payload, load_config
from soctop_core.logging_setup import configure_logging, install_crash_hooks
from soctop_telemetry import SampleCollector, snapshot_json


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def cmd_run(args: argparse.Namespace) -> int:
    from .app import run_dashboard

    install_crash_hooks()
    return run_dashboard(args.config)


def cmd_snapshot(args: argparse.Namespace) -> int:
    collector = SampleCollector.from_overrides(args.config.sensors)
    print(snapshot_json(collector, settle_s=max(args.settle_ms, 0) / 1000.0))
    return 0


def cmd_doctor(args: argparse.Namespace) -> int:
    _print_json(build_doctor_payload(args.config))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="soctop", description="Live SoC telemetry dashboard and tools")
    sub = parser.add_subparsers(dest="command", required=True)

    run_cmd = sub.add_parser("run", help="Run the interactive dashboard")
    run_cmd.set_defaults(func=cmd_run)

    snap_cmd = sub.add_parser("snapshot", help="Collect one sample and print it as JSON")
    snap_cmd.add_argument(
        "--settle-ms",
        type=int,
        default=200,
        help="Wait between priming and collecting so CPU usage has a real delta",
    )
    snap_cmd.set_defaults(func=cmd_snapshot)

    doctor_cmd = sub.add_parser("doctor", help="Print diagnostics and which sensor candidates answer")
    doctor_cmd.set_defaults(func=cmd_doctor)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.config = load_config()
    configure_logging(args.config.logging.level, args.config.logging.keep_log_files, console=False)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
