"""Stderr logging for the command line, with ``key=value`` context on each line."""

from __future__ import annotations

import logging
import sys
import time
from typing import Any, Mapping

LOG_FORMAT = "%(asctime)s.%(msecs)03dZ [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def parse_level(value: str | int | None) -> int:
    """Numeric level for a name (``debug``), a number (``10``) or nothing (INFO)."""
    if value is None or isinstance(value, int):
        return logging.INFO if value is None else value
    text = value.strip()
    if not text:
        return logging.INFO
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value!r}")
    return level


def format_context(context: Mapping[str, Any]) -> str:
    return " ".join(
        f"{key}={context[key]}" for key in sorted(context) if context[key] is not None
    )


class LedgerLogger(logging.LoggerAdapter):
    """Adapter that appends bound and per-call ``extra`` values to the message."""

    def bind(self, **extra: Any) -> "LedgerLogger":
        merged = dict(self.extra)
        merged.update(extra)
        return LedgerLogger(self.logger, merged)

    def process(self, msg: Any, kwargs: dict[str, Any]):
        context = dict(self.extra)
        context.update(kwargs.pop("extra", None) or {})
        suffix = format_context(context)
        if suffix:
            msg = f"{msg} | {suffix}"
        return msg, kwargs


class UTCFormatter(logging.Formatter):
    converter = time.gmtime


class LedgerHandler(logging.StreamHandler):
    """Root handler installed once per process; stdout stays free for command output."""

    def __init__(self) -> None:
        super().__init__(stream=sys.stderr)
        self.setFormatter(UTCFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))


def setup_logging(*, level: int = logging.INFO) -> None:
    root = logging.getLogger()
    if not any(isinstance(handler, LedgerHandler) for handler in root.handlers):
        root.addHandler(LedgerHandler())
        logging.captureWarnings(True)
    root.setLevel(level)


def get_logger(name: str, **context: Any) -> LedgerLogger:
    return LedgerLogger(logging.getLogger(name), context)
