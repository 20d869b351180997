"""Structured event logging for the generator and API.

Every record is one line: an event name plus key=value fields (or a JSON
object when ``PACMAZE_LOG_JSON`` is on). Grid coordinates render compactly
(``cell=5,5``) so a carving trace stays readable when grepping one seed.

Usage:
    from pacmaze.logging_utils import get_logger
    log = get_logger("maze.carver")
    log.debug("carve_stage_done", stage="three_target", removed=12)

    run_log = log.bind(seed=42)   # every record from run_log carries seed=42

Level comes from ``PACMAZE_LOG_LEVEL`` (debug|info|warn|error) and is read on
each call, so tests and the CLI can change it at runtime. Errors go to stderr.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}


def _threshold() -> int:
    return LEVELS.get(os.getenv("PACMAZE_LOG_LEVEL", "info").lower(), LEVELS["info"])


def _json_mode() -> bool:
    return os.getenv("PACMAZE_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")


def _render(value) -> str:
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (tuple, list)) and all(isinstance(v, int) for v in value):
        return ",".join(map(str, value))
    return str(value).replace(" ", "_")


def format_record(level: str, event: str, fields: dict) -> str:
    fields = {k: v for k, v in fields.items() if v is not None}
    if _json_mode():
        rec = {"level": level, "ts": int(time.time()), "event": event, **fields}
        return json.dumps(rec, separators=(",", ":"), default=str)
    head = f"level={level} ts={int(time.time())} event={event}"
    return " ".join([head] + [f"{k}={_render(v)}" for k, v in fields.items()])


class EventLogger:
    def __init__(self, name: str, context: dict | None = None):
        self.name = name
        self.context = context or {}

    def bind(self, **context) -> "EventLogger":
        """Return a logger that adds ``context`` to every record."""
        return EventLogger(self.name, {**self.context, **context})

    def is_enabled_for(self, level: str) -> bool:
        return LEVELS[level] >= _threshold()

    def _emit(self, level: str, event: str, fields: dict) -> None:
        if not self.is_enabled_for(level):
            return
        line = format_record(level, event, {"logger": self.name, **self.context, **fields})
        print(line, file=sys.stderr if level == "error" else sys.stdout)

    def debug(self, event: str, **fields):
        self._emit("debug", event, fields)

    def info(self, event: str, **fields):
        self._emit("info", event, fields)

    def warn(self, event: str, **fields):
        self._emit("warn", event, fields)

    def error(self, event: str, **fields):
        self._emit("error", event, fields)


_LOGGERS: dict[str, EventLogger] = {}


def get_logger(name: str) -> EventLogger:
    if name not in _LOGGERS:
        _LOGGERS[name] = EventLogger(name)
    return _LOGGERS[name]


log = get_logger("pacmaze")
