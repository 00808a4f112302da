"""
Structured logging for scoring events (structlog).

Every record carries timestamp, level, event_type and the emitting module;
callers add keyword context such as username, suspicion_score or flags.
Logs go to stderr so command-line output on stdout stays machine-readable.

A default setup (INFO, JSON) is installed on import so library use logs
sensibly; entrypoints call configure_structlog() with values from Settings
once .env has been loaded. Loggers resolve the configuration lazily, so
module-level loggers pick up a later configure_structlog() call.

No backend_fakecheck imports here, to avoid circular imports.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

import structlog


def _add_timestamp(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def _event_type(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Rename structlog's 'event' key to event_type."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def _level_value(level: str | int) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def configure_structlog(
    level: str | int = "INFO",
    fmt: str = "json",
    stream: TextIO | None = None,
) -> None:
    """
    (Re)configure structlog for the process.

    level: name or number; unknown names fall back to INFO.
    fmt: "json" for one JSON object per line, "console" for human-readable.
    stream: output file; None means whatever sys.stderr is at write time.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        _add_timestamp,
    ]
    if fmt.strip().lower() == "console":
        colors = (stream or sys.stderr).isatty()
        processors.append(structlog.dev.ConsoleRenderer(colors=colors))
    else:
        processors += [_event_type, structlog.processors.JSONRenderer()]

    def logger_factory(*args: Any) -> structlog.PrintLogger:
        return structlog.PrintLogger(file=stream or sys.stderr)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_level_value(level)),
        context_class=dict,
        logger_factory=logger_factory,
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> Any:
    """
    Structured logger for a module:

        logger = get_logger(__name__)
        logger.info("batch_scored", total=120, flagged=7)
    """
    return structlog._config.BoundLoggerLazyProxy(
        None, logger_factory_args=(name,), initial_values={"logger": name}
    )


def bind_account(username: str | None) -> Any:
    """Logger with username bound to every subsequent call."""
    return get_logger("backend_fakecheck").bind(username=username)
