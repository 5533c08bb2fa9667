"""Structured local logging and crash hook setup.

Log records go to a JSON-lines file under the config directory. Nothing is
written to the terminal while the dashboard owns it, so the console handler
is opt-in.
"""

from __future__ import annotations

import faulthandler
import json
import logging
import logging.handlers
import sys
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import config_root


_LOGGER_NAME = "soctop"
_EXTRA_FIELDS = ("event", "crash_id", "metric")
_fault_file = None


def log_dir() -> Path:
    path = config_root() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def log_file() -> Path:
    return log_dir() / "soctop.log"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "msg": record.getMessage(),
        }
        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                payload[name] = getattr(record, name)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(level: str = "INFO", keep_files: int = 7, console: bool = False) -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    # Records must never reach the root logger's stderr handler under the TUI.
    logger.propagate = False
    try:
        handler: logging.Handler = logging.handlers.TimedRotatingFileHandler(
            filename=str(log_file()),
            when="midnight",
            backupCount=max(2, keep_files),
            encoding="utf-8",
        )
        handler.setFormatter(JsonFormatter())
    except OSError:
        handler = logging.NullHandler()
    logger.addHandler(handler)

    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
        logger.addHandler(stream_handler)

    logger.info("logging configured level=%s", logger.level, extra={"event": "logging_configured"})
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    if name:
        return logging.getLogger(f"{_LOGGER_NAME}.{name}")
    return logging.getLogger(_LOGGER_NAME)


def _enable_faulthandler(logger: logging.Logger) -> None:
    global _fault_file
    if _fault_file is not None:
        return
    _fault_file = (log_dir() / "fault.log").open("a", encoding="utf-8")
    faulthandler.enable(file=_fault_file, all_threads=True)
    logger.debug("faulthandler enabled", extra={"event": "fault_handler_enabled"})


def install_crash_hooks() -> None:
    logger = get_logger()

    def _log_uncaught(exc_type, exc_value, exc_tb) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return
        crash_id = uuid.uuid4().hex
        logger.critical(
            "uncaught exception",
            exc_info=(exc_type, exc_value, exc_tb),
            extra={"event": "uncaught_exception", "crash_id": crash_id},
        )
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    def _thread_hook(args: threading.ExceptHookArgs) -> None:
        logger.critical(
            "exception in thread %s",
            getattr(args.thread, "name", "?"),
            exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
            extra={"event": "thread_exception", "crash_id": uuid.uuid4().hex},
        )

    sys.excepthook = _log_uncaught
    threading.excepthook = _thread_hook
    try:
        _enable_faulthandler(logger)
    except OSError:
        logger.warning("faulthandler not enabled", extra={"event": "fault_handler_failed"})
