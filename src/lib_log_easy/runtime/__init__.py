"""Module-level façade over the default :class:`LoggingContext`.

Purpose
-------
Let host code log and time things without wiring anything: ``runtime.i(...)``
broadcasts to every registered logger and ``runtime.mark_moment("load")``
records a timestamp, both against one process-wide default context.

Contents
--------
* Level helpers ``v``/``d``/``i``/``w``/``e`` accepting ``str.format`` args.
* :func:`exception` – broadcast an exception with an optional stacktrace.
* Moment helpers: :func:`mark_moment`, :func:`get_moments`,
  :func:`get_moments_by_indexes`, :func:`get_intervals`,
  :func:`list_moment_keys`.
* Stopwatch helpers: :func:`restart_stopwatch`, :func:`elapsed_time_string`.
* Context management: :func:`current_context`, :func:`set_context`,
  :func:`reset_context`, :func:`change_default_log_level`.

System Role
-----------
Thin wrappers only; all behaviour lives in :class:`LoggingContext` so tests can
run against isolated instances.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from lib_log_easy.domain import LogLevel

from ._context import LoggingContext
from ._state import current_context, is_initialised, reset_context, set_context


def v(fmt: str | None, *args: object) -> None:
    """Broadcast a VERBOSE message."""

    current_context().v(fmt, *args)


def d(fmt: str | None, *args: object) -> None:
    """Broadcast a DEBUG message."""

    current_context().d(fmt, *args)


def i(fmt: str | None, *args: object) -> None:
    """Broadcast an INFO message."""

    current_context().i(fmt, *args)


def w(fmt: str | None, *args: object) -> None:
    """Broadcast a WARN message."""

    current_context().w(fmt, *args)


def e(fmt: str | None, *args: object) -> None:
    """Broadcast an ERROR message."""

    current_context().e(fmt, *args)


def exception(exc: BaseException | None, stacktrace_level: LogLevel | None = None) -> None:
    """Broadcast ``exc`` at ERROR plus its stacktrace at ``stacktrace_level``."""

    current_context().exception(exc, stacktrace_level)


def mark_moment(key: str | None = None) -> int:
    """Record a timestamp under ``key`` (or the caller's location); return the count."""

    return current_context().mark_moment(key)


def get_moments(key: str | None, predicate: Callable[[int, int], bool] | None = None) -> tuple[int, ...]:
    return current_context().get_moments(key, predicate)


def get_moments_by_indexes(key: str | None, indexes: Iterable[int] | None = None) -> tuple[int, ...]:
    return current_context().get_moments_by_indexes(key, indexes)


def get_intervals(key: str | None, indexes: Iterable[int] | None = None) -> tuple[int, ...]:
    return current_context().get_intervals(key, indexes)


def list_moment_keys() -> frozenset[str]:
    return current_context().list_moment_keys()


def restart_stopwatch() -> None:
    current_context().restart_stopwatch()


def elapsed_time_string(template: str | None = None) -> str:
    return current_context().elapsed_time_string(template)


def change_default_log_level(new_level: LogLevel) -> LogLevel:
    """Change the default mask of the default context; return the previous mask."""

    return current_context().change_default_log_level(new_level)


__all__ = [
    "LoggingContext",
    "change_default_log_level",
    "current_context",
    "d",
    "e",
    "elapsed_time_string",
    "exception",
    "get_intervals",
    "get_moments",
    "get_moments_by_indexes",
    "i",
    "is_initialised",
    "list_moment_keys",
    "mark_moment",
    "reset_context",
    "restart_stopwatch",
    "set_context",
    "v",
    "w",
]
