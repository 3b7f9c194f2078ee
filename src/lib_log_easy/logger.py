"""Extension-style logger: implement ``save`` and inherit the rest.

Purpose
-------
The second, self-contained façade. Subclasses decide where a message goes
(:meth:`ExtendedLogger.save`) and which level is the lowest one they keep
(:meth:`ExtendedLogger.get_bottom_level`); formatting, gating, exception
rendering with a filtered stack and the fluent level helpers are inherited.

Contents
--------
* :class:`ExtendedLogger` – abstract base with the shared behaviour.
* :class:`ConsoleLogger` – prints through a Rich console.
* :class:`MemoryLogger` – keeps messages in a list.
* ``STACK_FRAMES_COUNT`` – frames rendered per level by ``log_exception``.

System Role
-----------
Independent of the event bus and the moment registry; shares only the level
type, the forgiving formatter and the stack filter with the rest of the
package.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TypeVar

from rich.console import Console

from lib_log_easy.adapters.stack import filtered_stack_string
from lib_log_easy.application.use_cases.formatting import try_format_string
from lib_log_easy.domain import LogLevel

logger = logging.getLogger(__name__)

MIN_STACK_FRAME_COUNT = 2

STACK_FRAMES_COUNT: dict[LogLevel, int] = {
    LogLevel.VERBOSE: 11,
    LogLevel.DEBUG: 9,
    LogLevel.INFO: 7,
    LogLevel.WARN: 5,
    LogLevel.ERROR: 3,
    LogLevel.NONE: 0,
}
"""Frames rendered by :meth:`ExtendedLogger.log_exception`; may be changed at run time."""

_LoggerT = TypeVar("_LoggerT", bound="ExtendedLogger")


def frame_count(level: LogLevel) -> int:
    """Return how many stack frames an exception logged at ``level`` shows."""

    return STACK_FRAMES_COUNT.get(level, MIN_STACK_FRAME_COUNT)


def root_cause(exception: BaseException) -> BaseException:
    """Follow ``__cause__`` / ``__context__`` down to the innermost exception."""

    seen = {id(exception)}
    current = exception
    while True:
        nested = current.__cause__
        if nested is None and not current.__suppress_context__:
            nested = current.__context__
        if nested is None or id(nested) in seen:
            return current
        seen.add(id(nested))
        current = nested


def _describe_exception(exception: BaseException, max_frames: int) -> str:
    cause = root_cause(exception)
    stack = filtered_stack_string(max_frames, cause)
    if cause is exception:
        return f"{type(cause).__name__}: {cause}\n{stack}"
    return f"{type(cause).__name__} caused by {type(exception).__name__}: {cause}\n{stack}"


class ExtendedLogger(ABC):
    """Base class providing gating, formatting and exception rendering.

    Every logging method returns ``self`` so calls can be chained::

        logger.info("loaded {0} rows", 12).warn("slow query")
    """

    @abstractmethod
    def save(self, message: str) -> None:
        """Persist one finished message."""

    @abstractmethod
    def get_bottom_level(self) -> LogLevel:
        """Return the lowest level this logger keeps; ``NONE`` keeps nothing."""

    def can_log(self, level: LogLevel) -> bool:
        """Return ``True`` when ``level`` is at or above :meth:`get_bottom_level`."""

        bottom = self.get_bottom_level()
        return bottom != LogLevel.NONE and LogLevel(level).is_atomic and level >= bottom

    def get_message(self, level: LogLevel, fmt: str | None, *args: object) -> str:
        """Compose the message; malformed templates yield a diagnostic line."""

        return try_format_string(fmt, *args)

    def log(self: _LoggerT, level: LogLevel, fmt: str | None, *args: object) -> _LoggerT:
        """Format and save a message when ``level`` is accepted and ``fmt`` is given."""

        if fmt is None or not self.can_log(level):
            return self
        try:
            self.save(self.get_message(level, fmt, *args))
        except Exception:
            logger.debug("%s failed to save a message", type(self).__name__, exc_info=True)
        return self

    def log_exception(self: _LoggerT, level: LogLevel, exception: BaseException | None) -> _LoggerT:
        """Save the root cause of ``exception`` with a filtered stack listing."""

        if exception is None or not self.can_log(level):
            return self
        try:
            message = _describe_exception(exception, frame_count(level))
        except Exception:
            logger.debug("%s failed to describe %s", type(self).__name__, type(exception).__name__, exc_info=True)
            return self
        return self.log(level, message)

    def verbose(self: _LoggerT, message: str | BaseException | None, *args: object) -> _LoggerT:
        return self._route(LogLevel.VERBOSE, message, args)

    def debug(self: _LoggerT, message: str | BaseException | None, *args: object) -> _LoggerT:
        return self._route(LogLevel.DEBUG, message, args)

    def info(self: _LoggerT, message: str | BaseException | None, *args: object) -> _LoggerT:
        return self._route(LogLevel.INFO, message, args)

    def warn(self: _LoggerT, message: str | BaseException | None, *args: object) -> _LoggerT:
        return self._route(LogLevel.WARN, message, args)

    def error(self: _LoggerT, message: str | BaseException | None, *args: object) -> _LoggerT:
        return self._route(LogLevel.ERROR, message, args)

    def _route(self: _LoggerT, level: LogLevel, message: str | BaseException | None, args: tuple[object, ...]) -> _LoggerT:
        if isinstance(message, BaseException):
            return self.log_exception(level, message)
        return self.log(level, message, *args)


class ConsoleLogger(ExtendedLogger):
    """Print accepted messages through a Rich console."""

    def __init__(self, bottom_level: LogLevel = LogLevel.INFO, *, console: Console | None = None) -> None:
        self._bottom = LogLevel(bottom_level)
        self._console = console if console is not None else Console()

    def save(self, message: str) -> None:
        self._console.print(message, markup=False, highlight=False, soft_wrap=True)

    def get_bottom_level(self) -> LogLevel:
        return self._bottom


class MemoryLogger(ExtendedLogger):
    """Keep accepted messages in :attr:`messages`.

    Examples
    --------
    >>> log = MemoryLogger(LogLevel.INFO)
    >>> _ = log.debug("hidden").info("{0} rows", 3).error("{0} {1}", "x")
    >>> log.messages
    ['3 rows', "MalFormatted: format='{0} {1}', args=[[0]x]"]
    """

    def __init__(self, bottom_level: LogLevel = LogLevel.VERBOSE) -> None:
        self._bottom = LogLevel(bottom_level)
        self.messages: list[str] = []

    def save(self, message: str) -> None:
        self.messages.append(message)

    def get_bottom_level(self) -> LogLevel:
        return self._bottom


__all__ = [
    "ConsoleLogger",
    "ExtendedLogger",
    "MIN_STACK_FRAME_COUNT",
    "MemoryLogger",
    "STACK_FRAMES_COUNT",
    "frame_count",
    "root_cause",
]
