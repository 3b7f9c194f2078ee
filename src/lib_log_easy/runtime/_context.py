"""Injectable bundle of the shared logging state.

Purpose
-------
Hold everything the event-driven façade shares between loggers: the moment
registry, the event bus, the stopwatch behind elapsed-time tags, the default
builders and sink, and the primary logger receiving fallback reports. Tests
build their own :class:`LoggingContext`; applications usually rely on the
default one managed by :mod:`lib_log_easy.runtime._state`.

Contents
--------
* :class:`LoggingContext` – composition root of one logging "world".
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime
from typing import Any

from lib_log_easy.adapters import RichConsoleSink, capture_frames as _capture_frames
from lib_log_easy.adapters.builders import FormattedTag, debuggable_stacktrace, default_message
from lib_log_easy.application.ports import FrameCapturePort, SinkPort, StopwatchPort
from lib_log_easy.application.use_cases import EventBus, LogBuilders
from lib_log_easy.config import RuntimeConfig
from lib_log_easy.domain import FrameDescriptor, LogLevel, MomentRegistry, Stopwatch, format_elapsed
from lib_log_easy.log import Log

logger = logging.getLogger(__name__)


class LoggingContext:
    """Moment registry, event bus and primary logger shared by a set of loggers.

    Parameters
    ----------
    default_level:
        Mask given to loggers created without one, including the primary.
    stacktrace_level:
        Stacktrace level used by :meth:`exception` when none is passed.
    default_sink:
        Sink given to loggers created without one; a Rich console by default.
    moments, stopwatch:
        Injected collaborators, mostly for deterministic tests.
    capture:
        Frame-capture capability handed to the event bus.
    clock:
        Wall-clock provider used by the ERROR tag and stopwatch messages.
    with_primary:
        Create the primary :class:`Log` right away (it must exist before the
        first dispatch to receive anything).
    """

    def __init__(
        self,
        *,
        default_level: LogLevel = LogLevel.DEBUG_AND_ABOVE,
        stacktrace_level: LogLevel = LogLevel.INFO,
        default_sink: SinkPort | None = None,
        moments: MomentRegistry | None = None,
        stopwatch: StopwatchPort | None = None,
        capture: FrameCapturePort = _capture_frames,
        clock: Callable[[], datetime] = datetime.now,
        with_primary: bool = True,
    ) -> None:
        self.moments = moments if moments is not None else MomentRegistry()
        self.stopwatch: StopwatchPort = stopwatch if stopwatch is not None else Stopwatch()
        self.default_sink: SinkPort = default_sink if default_sink is not None else RichConsoleSink()
        self.default_builders = LogBuilders(
            build_tag=FormattedTag(self.stopwatch, clock=clock),
            build_message=default_message,
            build_stacktrace=debuggable_stacktrace,
        )
        self.stacktrace_level = stacktrace_level
        self._default_level = LogLevel(default_level)
        self._capture = capture
        self._clock = clock
        self._reporting = threading.local()
        self.bus = EventBus(capture_frames=capture, on_failure=self.report_failure)
        self._primary: Log | None = Log(context=self, description="primary") if with_primary else None

    @classmethod
    def from_config(cls, config: RuntimeConfig, **overrides: Any) -> "LoggingContext":
        """Build a context from resolved :class:`RuntimeConfig` settings."""

        options: dict[str, Any] = {
            "default_level": config.default_level,
            "stacktrace_level": config.stacktrace_level,
        }
        if "default_sink" not in overrides:
            options["default_sink"] = RichConsoleSink(force_color=config.force_color, no_color=config.no_color)
        options.update(overrides)
        return cls(**options)

    @property
    def default_level(self) -> LogLevel:
        return self._default_level

    @property
    def primary(self) -> Log | None:
        """Logger created with the context; receives fallback reports."""

        return self._primary

    def capture_frames(self, exception: BaseException | None = None) -> Sequence[FrameDescriptor]:
        return self._capture(exception)

    def change_default_log_level(self, new_level: LogLevel) -> LogLevel:
        """Set the default mask (and the primary logger's); return the previous one."""

        previous = self._default_level
        self._default_level = LogLevel(new_level)
        if self._primary is not None:
            self._primary.concerned_levels = self._default_level
        return previous

    def report_failure(self, error: BaseException) -> None:
        """Log ``error`` once through the primary logger; never raises.

        A failure raised while reporting, or a report nested inside another one
        on the same thread, is dropped.
        """

        if getattr(self._reporting, "active", False) or self._primary is None:
            logger.debug("dropping nested logging failure", exc_info=error)
            return
        self._reporting.active = True
        try:
            self._primary.exception(error, LogLevel.INFO)
        except Exception:
            logger.debug("fallback logging failed", exc_info=True)
        finally:
            self._reporting.active = False

    def v(self, fmt: str | None, *args: object) -> None:
        self._dispatch(LogLevel.VERBOSE, fmt, args)

    def d(self, fmt: str | None, *args: object) -> None:
        self._dispatch(LogLevel.DEBUG, fmt, args)

    def i(self, fmt: str | None, *args: object) -> None:
        self._dispatch(LogLevel.INFO, fmt, args)

    def w(self, fmt: str | None, *args: object) -> None:
        self._dispatch(LogLevel.WARN, fmt, args)

    def e(self, fmt: str | None, *args: object) -> None:
        self._dispatch(LogLevel.ERROR, fmt, args)

    def exception(self, exception: BaseException | None, stacktrace_level: LogLevel | None = None) -> None:
        """Broadcast ``exception``; the stacktrace level defaults to :attr:`stacktrace_level`."""

        level = self.stacktrace_level if stacktrace_level is None else stacktrace_level
        self.bus.dispatch_exception(exception, None if level == LogLevel.NONE else level)

    def mark_moment(self, key: str | None = None) -> int:
        return self.moments.mark(key)

    def get_moments(self, key: str | None, predicate: Callable[[int, int], bool] | None = None) -> tuple[int, ...]:
        return self.moments.get_moments(key, predicate)

    def get_moments_by_indexes(self, key: str | None, indexes: Iterable[int] | None = None) -> tuple[int, ...]:
        return self.moments.get_moments_by_indexes(key, indexes)

    def get_intervals(self, key: str | None, indexes: Iterable[int] | None = None) -> tuple[int, ...]:
        return self.moments.get_intervals(key, indexes)

    def list_moment_keys(self) -> frozenset[str]:
        return self.moments.list_keys()

    def restart_stopwatch(self) -> None:
        """Announce the elapsed time at INFO, then restart the stopwatch."""

        self.bus.dispatch_message(
            LogLevel.INFO,
            f"Restart stopwatch at {self._clock():%Y-%m-%d %H:%M:%S}, with time elapsed of {self.elapsed_time_string()}",
        )
        self.stopwatch.restart()

    def elapsed_time_string(self, template: str | None = None) -> str:
        return format_elapsed(self.stopwatch.elapsed(), template)

    def close(self) -> None:
        """Unregister the primary logger."""

        if self._primary is not None:
            self._primary.close()

    def __enter__(self) -> "LoggingContext":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _dispatch(self, level: LogLevel, fmt: str | None, args: tuple[object, ...]) -> None:
        if args or fmt is None:
            self.bus.dispatch_formatted(level, fmt, *args)
        else:
            self.bus.dispatch_message(level, fmt)


__all__ = ["LoggingContext"]
