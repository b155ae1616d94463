"""Centralized logging configuration utilities."""

from __future__ import annotations

import logging
import logging.config
import os
from pathlib import Path
from typing import Any, Dict, List

from pythonjsonlogger import jsonlogger

_CONFIGURED = False


class DateContextJsonFormatter(jsonlogger.JsonFormatter):
    """Stamps run and zone metadata onto each structured log line."""

    def __init__(self, run_id: str | None, timezone_name: str | None) -> None:
        super().__init__()
        self._run_id = run_id
        self._timezone_name = timezone_name

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.setdefault("run_id", self._run_id)
        log_record.setdefault("timezone", self._timezone_name)
        log_record.setdefault("logger", record.name)
        log_record.setdefault("level", record.levelname)


def configure_logging(
    *,
    run_id: str | None = None,
    timezone_name: str | None = None,
    level: str | None = None,
    console: bool = True,
) -> None:
    """Configure stderr + rotating JSON file logging once per process."""

    global _CONFIGURED
    if _CONFIGURED:
        return

    level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    log_dir = Path(os.environ.get("LOG_DIR", "storage/logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    handlers: List[str] = ["file"]
    if console:
        handlers.append("console")

    logging_config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": DateContextJsonFormatter,
                "run_id": run_id,
                "timezone_name": timezone_name,
            },
            "console": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "console",
            },
            "file": {
                "class": "logging.handlers.TimedRotatingFileHandler",
                "level": level,
                "when": "midnight",
                "backupCount": int(os.environ.get("LOG_RETENTION_DAYS", "7")),
                "filename": str(log_dir / "datecontext.log"),
                "encoding": "utf-8",
                "formatter": "json",
            },
        },
        "loggers": {
            "urllib3": {"level": "WARNING"},
        },
        "root": {
            "level": level,
            "handlers": handlers,
        },
    }

    logging.config.dictConfig(logging_config)
    _CONFIGURED = True


__all__ = ["configure_logging", "DateContextJsonFormatter"]
