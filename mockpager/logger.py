"""Structured logging with a process-wide default logger."""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Mapping

LOGGER_NAME = "mockpager"
PRODUCTION_LEVEL = "PRODUCTION"
DEVELOPMENT_LEVEL = "DEVELOPMENT"

_instance: Logger | None = None


class _JsonFormatter(logging.Formatter):
    """One JSON object per line, fields merged into the top level."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "level": record.levelname,
            "ts": record.created,
            "caller": f"{record.filename}:{record.lineno}",
            "msg": record.getMessage(),
        }
        entry.update(getattr(record, "fields", {}))
        return json.dumps(entry, default=str)


class _ConsoleFormatter(logging.Formatter):
    """Tab-separated human-readable lines, fields appended as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            record.levelname,
            f"{record.filename}:{record.lineno}",
            record.getMessage(),
        ]
        fields = getattr(record, "fields", None)
        if fields:
            parts.append(json.dumps(fields, default=str))
        return "\t".join(parts)


class Logger:
    """A thin structured logger carrying a set of bound fields."""

    def __init__(self, base: logging.Logger, fields: Mapping[str, Any] | None = None):
        self.base = base
        self._bound = dict(fields or {})

    @property
    def fields(self) -> dict[str, Any]:
        return dict(self._bound)

    def _log(
        self,
        level: int,
        msg: str,
        err: BaseException | str | None,
        fields: Mapping[str, Any] | None,
    ) -> None:
        merged = dict(self._bound)
        if err is not None:
            merged["error"] = str(err)
        if fields:
            merged.update(fields)
        self.base.log(level, msg, extra={"fields": merged}, stacklevel=3)

    def debug(self, msg: str, fields: Mapping[str, Any] | None = None) -> None:
        self._log(logging.DEBUG, msg, None, fields)

    def info(self, msg: str, fields: Mapping[str, Any] | None = None) -> None:
        self._log(logging.INFO, msg, None, fields)

    def warn(
        self,
        msg: str,
        err: BaseException | str | None = None,
        fields: Mapping[str, Any] | None = None,
    ) -> None:
        self._log(logging.WARNING, msg, err, fields)

    def error(
        self,
        msg: str,
        err: BaseException | str | None = None,
        fields: Mapping[str, Any] | None = None,
    ) -> None:
        self._log(logging.ERROR, msg, err, fields)

    def with_fields(self, fields: Mapping[str, Any]) -> Logger:
        """Return a child logger with extra bound fields."""
        return Logger(self.base, {**self._bound, **fields})

    def sync(self) -> None:
        """Flush every handler attached to the underlying logger."""
        for handler in self.base.handlers:
            handler.flush()


def create_new_logger() -> Logger:
    """Configure the package logger from the LEVEL environment variable."""
    global _instance
    base = logging.getLogger(LOGGER_NAME)
    for handler in list(base.handlers):
        base.removeHandler(handler)
        handler.close()

    handler = logging.StreamHandler(sys.stderr)
    if os.environ.get("LEVEL") == PRODUCTION_LEVEL:
        handler.setFormatter(_JsonFormatter())
        base.setLevel(logging.INFO)
    else:
        handler.setFormatter(_ConsoleFormatter())
        base.setLevel(logging.DEBUG)
    base.addHandler(handler)
    base.propagate = False

    _instance = Logger(base)
    return _instance


def get_logger() -> Logger:
    """Return the shared logger, creating it on first use."""
    if _instance is None:
        return create_new_logger()
    return _instance