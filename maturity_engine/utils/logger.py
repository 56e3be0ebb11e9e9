"""
Logging utility with timestamps and timing support.
Provides structured, colourful console output for catalog loading,
framework resolution, and the service shell.

Per-context state (timers, log buffer) lives in ``contextvars`` so
concurrent requests handled by the service keep separate buffers.
Colour is dropped when stderr is not a terminal or ``NO_COLOR`` is set.
"""

from __future__ import annotations

import contextlib
import contextvars
import os
import re
import sys
import time
from collections.abc import Iterator
from datetime import UTC, datetime
from typing import Any

_timers_var: contextvars.ContextVar[dict[str, tuple[float, str]]] = contextvars.ContextVar("_timers_var")
_buffer_var: contextvars.ContextVar[list[str]] = contextvars.ContextVar("_buffer_var")

_ANSI = re.compile(r"\033\[[0-9;]*m")

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
GREEN = "\033[32m"
RED = "\033[31m"
YELLOW = "\033[33m"
CYAN = "\033[36m"
MAGENTA = "\033[35m"
BLUE = "\033[34m"
GRAY = "\033[90m"

# level -> (rank, colour, symbol)
_LEVELS: dict[str, tuple[int, str, str]] = {
    "debug": (10, GRAY, "•"),
    "timing": (20, MAGENTA, "⏱"),
    "info": (20, CYAN, "ℹ"),
    "success": (20, GREEN, "✓"),
    "warn": (30, YELLOW, "⚠"),
    "error": (40, RED, "✗"),
}

_MAX_VALUE_LEN = 200


def _state(var: contextvars.ContextVar, factory: type) -> Any:
    try:
        return var.get()
    except LookupError:
        value = factory()
        var.set(value)
        return value


def get_log_buffer() -> list[str]:
    """Return a copy of the lines logged in this context, without ANSI codes."""
    return list(_state(_buffer_var, list))


def clear_log_buffer() -> None:
    """Forget buffered lines and running timers for this context."""
    _state(_buffer_var, list).clear()
    _state(_timers_var, dict).clear()


def _colour_enabled() -> bool:
    return "NO_COLOR" not in os.environ and sys.stderr.isatty()


def _paint(colour: str, text: str) -> str:
    return f"{colour}{text}{RESET}"


def _clock() -> str:
    now = datetime.now(UTC)
    return f"{now:%H:%M:%S}.{now.microsecond // 1000:03d}"


def _format_duration(ms: float) -> str:
    if ms < 1000:
        return f"{int(ms)}ms"
    if ms < 60_000:
        return f"{ms / 1000:.2f}s"
    return f"{int(ms // 60_000)}m {(ms % 60_000) / 1000:.1f}s"


def _format_value(value: object) -> str:
    """Render one structured field, collapsing containers to a size."""
    if isinstance(value, bool) or value is None:
        return _paint(DIM if value is None else (GREEN if value else RED), str(value))
    if isinstance(value, (int, float)):
        return _paint(YELLOW, str(value))
    if isinstance(value, str):
        text = value if len(value) <= _MAX_VALUE_LEN else value[: _MAX_VALUE_LEN - 3] + "..."
        return _paint(GREEN, f'"{text}"')
    if isinstance(value, (list, tuple, set, frozenset)):
        return _paint(CYAN, f"[{len(value)} items]")
    if isinstance(value, dict):
        return _paint(CYAN, f"{{{len(value)} keys}}")
    return str(value)


def _emit(line: str) -> None:
    plain = _ANSI.sub("", line)
    print(line if _colour_enabled() else plain, file=sys.stderr)
    _state(_buffer_var, list).append(plain)


class Logger:
    """Structured logger with context prefix and timing support.

    Args:
        context: Prefix shown in square brackets on every line.
        min_level: Lines below this level are dropped.
    """

    def __init__(self, context: str = "Engine", min_level: str = "debug") -> None:
        self._context = context
        self._threshold = _LEVELS[min_level][0]

    @property
    def context(self) -> str:
        return self._context

    def _log(self, level: str, message: str, data: dict[str, object] | None = None) -> None:
        rank, colour, symbol = _LEVELS[level]
        if rank < self._threshold:
            return
        parts = [_paint(GRAY, f"[{_clock()}]"), _paint(colour, symbol), _paint(BOLD, f"[{self._context}]"), message]
        if data:
            parts.extend(f"{_paint(DIM, f'{key}=')}{_format_value(value)}" for key, value in data.items())
        _emit(" ".join(parts))

    def info(self, message: str, data: dict[str, object] | None = None) -> None:
        self._log("info", message, data)

    def success(self, message: str, data: dict[str, object] | None = None) -> None:
        self._log("success", message, data)

    def warn(self, message: str, data: dict[str, object] | None = None) -> None:
        self._log("warn", message, data)

    def error(self, message: str, data: dict[str, object] | None = None) -> None:
        self._log("error", message, data)

    def debug(self, message: str, data: dict[str, object] | None = None) -> None:
        self._log("debug", message, data)

    def start_timer(self, label: str) -> None:
        """Start a named timer, scoped to this logger's context."""
        timers = _state(_timers_var, dict)
        timers[f"{self._context}:{label}"] = (time.monotonic() * 1000, _clock())
        self._log("timing", f"Starting: {label}")

    def end_timer(self, label: str, message: str | None = None) -> float:
        """Stop a named timer and log the elapsed milliseconds."""
        entry = _state(_timers_var, dict).pop(f"{self._context}:{label}", None)
        if entry is None:
            self.warn(f'Timer "{label}" was not started')
            return 0.0

        started_ms, started_at = entry
        elapsed = time.monotonic() * 1000 - started_ms
        self._log(
            "timing",
            f"{message or f'Completed: {label}'} {_paint(DIM, 'took')} "
            f"{_paint(MAGENTA, _format_duration(elapsed))} {_paint(DIM, f'(started {started_at})')}",
        )
        return elapsed

    @contextlib.contextmanager
    def timed(self, label: str, message: str | None = None) -> Iterator[None]:
        """Time the enclosed block; the timer is stopped even on error."""
        self.start_timer(label)
        try:
            yield
        finally:
            self.end_timer(label, message)

    def section(self, title: str) -> None:
        """Print a divider block around *title*."""
        rule = _paint(BLUE, "─" * 60)
        for line in ("", rule, _paint(BLUE + BOLD, f"  {title}"), rule, ""):
            _emit(line)


def create_logger(context: str, min_level: str | None = None) -> Logger:
    """Create a logger for a module.

    The threshold defaults to ``MATURITY_LOG_LEVEL`` (``debug`` when unset).
    """
    level = (min_level or os.environ.get("MATURITY_LOG_LEVEL", "debug")).lower()
    if level not in _LEVELS:
        level = "debug"
    return Logger(context, level)
