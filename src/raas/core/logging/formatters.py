"""
Log formatters: one JSON object per line for production, colored text for terminals.
"""

import json
import logging
from logging import LogRecord
from typing import Any

from raas.utils.logging import get_project_version

PROJECT_VERSION = get_project_version()

# LogRecord attributes that are never copied as extras
_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """
    Structured JSON formatter.

    Each line carries timestamp, level, logger, message, source location,
    request id, service, env and version, plus every `extra={...}` key the
    caller attached (`entity`, `id`, `duration_ms`, ...). Extras that json
    cannot encode are written as their `str()`.
    """

    def __init__(self, *, env: str | None = None, service: str = "raas", datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service

    def format(self, record: LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "request_id": getattr(record, "request_id", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED or key in log_record or key.startswith("_"):
                continue
            try:
                json.dumps(value)
                log_record[key] = value
            except (TypeError, ValueError):
                log_record[key] = str(value)

        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """Human-readable single-line formatter with the level name colored."""

    COLOR_CODES = {
        "DEBUG": "\033[1;36;47m",  # bold cyan on white
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;41m",  # bold on red
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        reset = self.COLOR_CODES["RESET"] if color else ""
        timestamp = self.formatTime(record, self.datefmt)
        request_id = getattr(record, "request_id", "-")

        line = (
            f"{timestamp} | {color}{record.levelname:<8}{reset} | {record.name:<30} | "
            f"{request_id:<12} | {record.getMessage()}"
        )

        extras = {
            k: v for k, v in record.__dict__.items()
            if k not in _RESERVED and k != "request_id" and not k.startswith("_")
        }
        if extras:
            line += " " + " ".join(f"{k}={v}" for k, v in extras.items())

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


__all__ = ["JsonFormatter", "ColorFormatter", "PROJECT_VERSION"]
