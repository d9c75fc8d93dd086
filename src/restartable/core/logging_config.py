"""Central logging configuration utilities.

The library itself never installs handlers: the controller only emits debug
records through `LoggingPort`. Applications that want to see those records
call `configure_logging` once from their composition root, which wires
separate stdout/stderr sinks and injects the id of the retry session that
produced each record.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional
import contextvars

# Session id context variable (bound by the retry controller for each session)
session_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "session_id", default="-"
)

DEFAULT_FORMAT = (
    "[%(asctime)s] %(levelname)s %(name)s %(session_id)s: %(message)s"
)


def coerce_level(level: int | str | None) -> int:
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    return logging.getLevelNamesMapping().get(str(level).upper().strip(), logging.INFO)


class _SessionIdFilter(logging.Filter):
    """Inject session id from contextvar into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = session_id_var.get()
        return True


class _LevelRangeFilter(logging.Filter):
    """Pass records whose level lies in [min_level, max_level]."""

    def __init__(self, min_level: int, max_level: int = logging.CRITICAL):
        super().__init__()
        self.min_level = min_level
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return self.min_level <= record.levelno <= self.max_level


def configure_logging(
    level: int | str | None = None,
    fmt: Optional[str] = None,
) -> None:
    """Configure root logger with separate stdout/stderr sinks & session id.

    Notes
    -----
    * Existing root handlers are removed so repeated calls do not duplicate output.
    * The `restartable` logger is aligned with `level` so debug records from
      the controller are not dropped before reaching the root handlers.
    """
    numeric_level = coerce_level(level)
    fmt = fmt or DEFAULT_FORMAT

    root = logging.getLogger()
    root.setLevel(numeric_level)

    # Clear existing handlers to avoid duplication on reload
    for h in list(root.handlers):
        root.removeHandler(h)

    formatter = logging.Formatter(fmt)
    sid_filter = _SessionIdFilter()

    # stdout handler for DEBUG/INFO
    stdout_handler = logging.StreamHandler(stream=sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(_LevelRangeFilter(logging.DEBUG, logging.INFO))
    stdout_handler.addFilter(sid_filter)
    stdout_handler.setFormatter(formatter)

    # stderr handler for WARNING+
    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.addFilter(_LevelRangeFilter(logging.WARNING))
    stderr_handler.addFilter(sid_filter)
    stderr_handler.setFormatter(formatter)

    root.addHandler(stdout_handler)
    root.addHandler(stderr_handler)

    logging.getLogger("restartable").setLevel(numeric_level)

    logging.getLogger("restartable").debug(
        "Logging configured level=%s", numeric_level
    )
