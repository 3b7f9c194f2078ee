"""Stock tag, message and stacktrace builders.

Purpose
-------
Provide the default composition steps of a :class:`MessagePipeline` and a few
alternatives callers can plug in instead.

Contents
--------
* Tag builders: :class:`FormattedTag` (default), :func:`no_tag`,
  :func:`short_tag`, :func:`full_tag`.
* Message composer: :func:`default_message`.
* Stacktrace builders: :func:`debuggable_stacktrace` (default),
  :func:`by_exception`, :func:`by_stacktrace`.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable, Sequence
from datetime import datetime

from lib_log_easy.application.ports import StopwatchPort
from lib_log_easy.domain import FrameDescriptor, LogLevel, format_elapsed

SPACE_BEFORE_TAG = "  "
TAG_MESSAGE_CONNECTOR = ": "

_PACKAGE = __name__.split(".")[0]


class FormattedTag:
    """Default tag builder embedding elapsed time for INFO and above.

    VERBOSE and DEBUG get an indented single-letter tag, INFO and WARN the
    elapsed time of ``stopwatch``, ERROR additionally the wall-clock time.

    Examples
    --------
    >>> from datetime import timedelta
    >>> class Fixed:
    ...     def elapsed(self):
    ...         return timedelta(milliseconds=7)
    ...     def restart(self):
    ...         pass
    >>> tag = FormattedTag(Fixed(), clock=lambda: datetime(2025, 1, 1, 13, 5, 9))
    >>> tag(LogLevel.DEBUG), tag(LogLevel.WARN), tag(LogLevel.ERROR)
    ('  [D]', '*[W:007ms]', '***[ERROR:007ms@13:05:09]')
    """

    def __init__(self, stopwatch: StopwatchPort, *, clock: Callable[[], datetime] = datetime.now) -> None:
        self._stopwatch = stopwatch
        self._clock = clock

    def __call__(self, level: LogLevel) -> str:
        if level in (LogLevel.VERBOSE, LogLevel.DEBUG):
            return f"{SPACE_BEFORE_TAG}[{level.code}]"
        if level == LogLevel.INFO:
            return f"[I:{self._elapsed()}]"
        if level == LogLevel.WARN:
            return f"*[W:{self._elapsed()}]"
        if level == LogLevel.ERROR:
            return f"***[ERROR:{self._elapsed()}@{self._clock():%H:%M:%S}]"
        raise ValueError(f"no tag for level {level!r}")

    def _elapsed(self) -> str:
        return format_elapsed(self._stopwatch.elapsed())


def no_tag(level: LogLevel) -> str:
    """Hide the level entirely."""

    return ""


def short_tag(level: LogLevel) -> str:
    """Return ``"[I]"`` style tags."""

    return f"[{level.code}]"


def full_tag(level: LogLevel) -> str:
    """Return ``"[INFO]"`` style tags."""

    return f"[{level.label}]"


def default_message(tag: str, details: str) -> str:
    """Join ``tag`` and ``details`` with ``": "``."""

    return f"{tag}{TAG_MESSAGE_CONNECTOR}{details}"


def debuggable_stacktrace(exception: BaseException, frames: Sequence[FrameDescriptor]) -> str:
    """List caller frames outside this package, one per line, indented by depth.

    Frames without a resolvable source line are skipped.
    """

    lines: list[str] = []
    for frame in frames:
        if frame.qualified_name.startswith(_PACKAGE + ".") or not frame.has_source_line:
            continue
        indent = " " * (2 * (len(lines) + 1))
        lines.append(f"{indent}{frame.function}: {frame.filename}, line {frame.lineno}\n")
    return "".join(lines)


def by_exception(exception: BaseException, frames: Sequence[FrameDescriptor]) -> str:
    """Return Python's own rendering of ``exception``'s traceback."""

    return "".join(traceback.format_tb(exception.__traceback__))


def by_stacktrace(exception: BaseException, frames: Sequence[FrameDescriptor]) -> str:
    """Return the text of every captured frame, newest first."""

    return "".join(f"{frame.text}\n" for frame in frames)


__all__ = [
    "FormattedTag",
    "SPACE_BEFORE_TAG",
    "TAG_MESSAGE_CONNECTOR",
    "by_exception",
    "by_stacktrace",
    "debuggable_stacktrace",
    "default_message",
    "full_tag",
    "no_tag",
    "short_tag",
]
