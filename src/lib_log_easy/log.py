"""Event-driven logger instance with pluggable builders.

Purpose
-------
A :class:`Log` is one listener on a context's event bus. It keeps its own
concerned-level mask, sink and builders, so several loggers can react
differently to the same broadcast: one printing everything to the console,
another buffering warnings in memory.

Contents
--------
* :class:`Log` – listener plus direct ``v``/``d``/``i``/``w``/``e`` helpers.

System Role
-----------
Created by callers (or as the primary logger of a
:class:`lib_log_easy.runtime.LoggingContext`). Registers itself on
construction; :meth:`Log.close` or leaving a ``with`` block unregisters it.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from lib_log_easy.application.ports import LogListenerPort, SinkPort
from lib_log_easy.application.use_cases.pipeline import (
    LogBuilders,
    MessageComposer,
    MessagePipeline,
    StacktraceBuilder,
    TagBuilder,
)
from lib_log_easy.domain import FrameDescriptor, LogLevel

if TYPE_CHECKING:  # pragma: no cover - typing only
    from lib_log_easy.runtime import LoggingContext


class Log(LogListenerPort):
    """Logger instance listening on a :class:`LoggingContext` event bus.

    Parameters
    ----------
    concerned_levels:
        Mask of accepted levels; defaults to the context's default level.
    sink:
        Destination of composed messages; defaults to the context's sink.
    build_tag, build_message, build_stacktrace:
        Overrides of the context's default builders.
    stacktrace_enabled:
        ``False`` suppresses the stacktrace message of exception logs.
    description:
        Free text naming the logger; defaults to ``"Log<id>"``.
    context:
        Owning context; the process default when omitted.
    """

    def __init__(
        self,
        concerned_levels: LogLevel | None = None,
        sink: SinkPort | None = None,
        *,
        build_tag: TagBuilder | None = None,
        build_message: MessageComposer | None = None,
        build_stacktrace: StacktraceBuilder | None = None,
        stacktrace_enabled: bool = True,
        description: str | None = None,
        context: "LoggingContext | None" = None,
    ) -> None:
        if context is None:
            from lib_log_easy.runtime import current_context

            context = current_context()
        builders = context.default_builders.with_overrides(
            build_tag=build_tag,
            build_message=build_message,
            build_stacktrace=build_stacktrace,
        )
        if not stacktrace_enabled:
            builders = builders.without_stacktrace()
        self._context = context
        self._pipeline = MessagePipeline(
            sink=sink if sink is not None else context.default_sink,
            builders=builders,
            concerned_levels=context.default_level if concerned_levels is None else concerned_levels,
            on_failure=context.report_failure,
        )
        self.description = description or f"Log{id(self):x}"
        self._closed = False
        context.bus.register(self)

    @property
    def concerned_levels(self) -> LogLevel:
        return self._pipeline.concerned_levels

    @concerned_levels.setter
    def concerned_levels(self, value: LogLevel) -> None:
        self._pipeline.concerned_levels = value

    @property
    def sink(self) -> SinkPort:
        return self._pipeline.sink

    @property
    def builders(self) -> LogBuilders:
        return self._pipeline.builders

    @property
    def context(self) -> "LoggingContext":
        return self._context

    @property
    def closed(self) -> bool:
        return self._closed

    def handle_message(self, level: LogLevel, details: str) -> None:
        """Listener entry point for dispatched messages."""

        if self._closed:
            return
        self._pipeline.process(level, details)

    def handle_exception(
        self,
        exception: BaseException,
        frames: Sequence[FrameDescriptor],
        stacktrace_level: LogLevel | None = None,
    ) -> None:
        """Listener entry point for dispatched exceptions."""

        if self._closed:
            return
        self._pipeline.process_exception(exception, frames, stacktrace_level)

    def log(self, level: LogLevel, details: str, *, tag: str | None = None) -> bool:
        """Log ``details`` on this instance only; return whether it was emitted."""

        return self._pipeline.process(level, details, tag=tag)

    def v(self, details: str, *, tag: str | None = None) -> bool:
        return self.log(LogLevel.VERBOSE, details, tag=tag)

    def d(self, details: str, *, tag: str | None = None) -> bool:
        return self.log(LogLevel.DEBUG, details, tag=tag)

    def i(self, details: str, *, tag: str | None = None) -> bool:
        return self.log(LogLevel.INFO, details, tag=tag)

    def w(self, details: str, *, tag: str | None = None) -> bool:
        return self.log(LogLevel.WARN, details, tag=tag)

    def e(self, details: str, *, tag: str | None = None) -> bool:
        return self.log(LogLevel.ERROR, details, tag=tag)

    def exception(self, exception: BaseException | None, stacktrace_level: LogLevel | None = None) -> None:
        """Log ``exception`` on this instance only, with an optional stacktrace of the calling stack."""

        if exception is None:
            return
        try:
            frames = self._context.capture_frames()
        except Exception as exc:
            self._context.report_failure(exc)
            frames = ()
        self._pipeline.process_exception(exception, frames, stacktrace_level)

    def close(self) -> None:
        """Stop receiving dispatched events. Safe to call more than once."""

        if self._closed:
            return
        self._closed = True
        self._context.bus.unregister(self)

    def __enter__(self) -> "Log":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Log(description={self.description!r}, concerned_levels={self.concerned_levels.label})"


__all__ = ["Log"]
