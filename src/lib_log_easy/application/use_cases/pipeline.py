"""Level-gated composition of tag, message and stacktrace for one logger.

Purpose
-------
Turn ``(level, details)`` into a finished line and hand it to a sink, but only
when the level is one the logger is concerned with. The three composition
steps are pluggable callables grouped in :class:`LogBuilders`.

Contents
--------
* :class:`LogBuilders` – capability record of tag/message/stacktrace builders.
* :class:`MessagePipeline` – gate, compose, emit; never raises to the caller.
* ``STACKTRACE_PREFIX`` – first line of the stacktrace message.

System Role
-----------
Each :class:`lib_log_easy.log.Log` owns one pipeline; the event bus calls into
it through the logger's listener methods. Failures inside builders or the sink
are wrapped in :class:`BuilderFailure` / :class:`SinkFailure` and passed to the
``on_failure`` hook supplied by the owning context.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from lib_log_easy.application.ports import SinkPort
from lib_log_easy.domain import FrameDescriptor, LogLevel, matches
from lib_log_easy.errors import BuilderFailure, InvalidArgument, LogEasyError, SinkFailure

logger = logging.getLogger(__name__)

STACKTRACE_PREFIX = "StackTrace\n"

TagBuilder = Callable[[LogLevel], str]
MessageComposer = Callable[[str, str], str]
StacktraceBuilder = Callable[[BaseException, Sequence[FrameDescriptor]], str]
FailureHook = Callable[[BaseException], None]


@dataclass(slots=True, frozen=True)
class LogBuilders:
    """Pluggable composition steps of a :class:`MessagePipeline`.

    Attributes
    ----------
    build_tag:
        Maps an atomic level to the tag placed in front of the details.
    build_message:
        Joins ``(tag, details)`` into the final line.
    build_stacktrace:
        Renders ``(exception, frames)``; ``None`` disables stacktrace messages.
    """

    build_tag: TagBuilder
    build_message: MessageComposer
    build_stacktrace: StacktraceBuilder | None = None

    def with_overrides(
        self,
        *,
        build_tag: TagBuilder | None = None,
        build_message: MessageComposer | None = None,
        build_stacktrace: StacktraceBuilder | None = None,
    ) -> "LogBuilders":
        """Return a copy where every non-``None`` argument replaces the default."""

        changes = {
            name: value
            for name, value in (
                ("build_tag", build_tag),
                ("build_message", build_message),
                ("build_stacktrace", build_stacktrace),
            )
            if value is not None
        }
        return replace(self, **changes)

    def without_stacktrace(self) -> "LogBuilders":
        """Return a copy that never renders stacktraces."""

        return replace(self, build_stacktrace=None)


class MessagePipeline:
    """Gate by mask, compose and emit messages for a single logger."""

    def __init__(
        self,
        *,
        sink: SinkPort,
        builders: LogBuilders,
        concerned_levels: LogLevel,
        on_failure: FailureHook | None = None,
    ) -> None:
        self._sink = sink
        self._builders = builders
        self._concerned = LogLevel(concerned_levels)
        self._on_failure = on_failure

    @property
    def sink(self) -> SinkPort:
        return self._sink

    @property
    def builders(self) -> LogBuilders:
        return self._builders

    @property
    def concerned_levels(self) -> LogLevel:
        return self._concerned

    @concerned_levels.setter
    def concerned_levels(self, value: LogLevel) -> None:
        self._concerned = LogLevel(value)

    def accepts(self, level: LogLevel) -> bool:
        """Return ``True`` when ``level`` passes this pipeline's mask."""

        return matches(level, self._concerned)

    def process(self, level: LogLevel, details: str, *, tag: str | None = None) -> bool:
        """Emit ``details`` at ``level`` when accepted; return whether it was emitted.

        ``tag`` overrides the configured tag builder for this call only.
        """

        if not self.accepts(level):
            return False
        try:
            self._emit(level, details, tag)
        except LogEasyError as exc:
            self._report(exc)
            return False
        return True

    def process_exception(
        self,
        exception: BaseException | None,
        frames: Sequence[FrameDescriptor],
        stacktrace_level: LogLevel | None = None,
    ) -> None:
        """Log ``exception`` at ERROR and optionally its stacktrace at ``stacktrace_level``.

        The two messages are gated independently, so a logger concerned with
        INFO only still receives an INFO stacktrace of an ERROR exception.
        """

        if exception is None:
            return
        try:
            details = str(exception) or type(exception).__name__
        except Exception as exc:
            self._report(_wrap(BuilderFailure, "exception message", exc))
        else:
            self.process(LogLevel.ERROR, details)

        build_stacktrace = self._builders.build_stacktrace
        if stacktrace_level is None or build_stacktrace is None or not self.accepts(stacktrace_level):
            return
        try:
            trace = build_stacktrace(exception, frames)
        except Exception as exc:
            self._report(_wrap(BuilderFailure, "stacktrace builder", exc))
            return
        self.process(stacktrace_level, STACKTRACE_PREFIX + trace)

    def _emit(self, level: LogLevel, details: str, tag: str | None) -> None:
        if not LogLevel(level).is_atomic:
            raise InvalidArgument(f"a message must carry a single level, got {level!r}")
        try:
            resolved_tag = self._builders.build_tag(level) if tag is None else tag
            message = self._builders.build_message(resolved_tag, details)
        except Exception as exc:
            raise _wrap(BuilderFailure, "message builders", exc) from exc
        try:
            self._sink(level, message)
        except Exception as exc:
            raise _wrap(SinkFailure, "sink", exc) from exc

    def _report(self, error: BaseException) -> None:
        if self._on_failure is None:
            logger.debug("dropping logging failure without handler", exc_info=error)
            return
        try:
            self._on_failure(error)
        except Exception:
            logger.debug("failure hook raised", exc_info=True)


def _wrap(kind: type[LogEasyError], where: str, exc: Exception) -> LogEasyError:
    error = kind(f"{where} failed: {type(exc).__name__}: {exc}")
    error.__cause__ = exc
    return error


__all__ = [
    "FailureHook",
    "LogBuilders",
    "MessageComposer",
    "MessagePipeline",
    "STACKTRACE_PREFIX",
    "StacktraceBuilder",
    "TagBuilder",
]
