"""Multicast of logging events to every registered listener.

Purpose
-------
Give the whole process (or one isolated :class:`LoggingContext`) a single place
to broadcast "log this" and "log this exception" requests. Each registered
listener decides for itself, through its own level mask, what to keep.

Contents
--------
* :class:`EventBus` – ordered, identity-deduplicated listener set with
  message, formatted-message and exception dispatch.

System Role
-----------
Sits between the module-level helpers of :mod:`lib_log_easy.runtime` and the
:class:`lib_log_easy.log.Log` instances. A listener that raises never stops
the broadcast; its error goes to the ``on_failure`` hook.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from threading import RLock

from lib_log_easy.application.ports import FrameCapturePort, LogListenerPort
from lib_log_easy.domain import FrameDescriptor, LogLevel
from lib_log_easy.errors import LogEasyError

from .formatting import format_message
from .pipeline import FailureHook

logger = logging.getLogger(__name__)


def _no_frames(exception: BaseException | None = None) -> Sequence[FrameDescriptor]:
    return ()


class EventBus:
    """Ordered set of listeners receiving every dispatched event exactly once.

    One re-entrant lock guards registration and the whole of each dispatch, so a
    listener cannot be removed while another thread is calling it. Dispatch
    iterates a snapshot, which lets a listener unregister itself from within
    its own handler.
    """

    def __init__(
        self,
        *,
        capture_frames: FrameCapturePort | None = None,
        on_failure: FailureHook | None = None,
    ) -> None:
        self._listeners: dict[int, LogListenerPort] = {}
        self._lock = RLock()
        self._capture_frames: FrameCapturePort = capture_frames or _no_frames
        self._on_failure = on_failure

    @property
    def listeners(self) -> tuple[LogListenerPort, ...]:
        """Return the registered listeners in registration order."""

        with self._lock:
            return tuple(self._listeners.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)

    def __contains__(self, listener: object) -> bool:
        with self._lock:
            return self._listeners.get(id(listener)) is listener

    def set_failure_hook(self, on_failure: FailureHook | None) -> None:
        """Replace the hook receiving errors raised during dispatch."""

        self._on_failure = on_failure

    def register(self, listener: LogListenerPort) -> bool:
        """Add ``listener`` unless it is already registered; return whether it was added."""

        with self._lock:
            if id(listener) in self._listeners:
                return False
            self._listeners[id(listener)] = listener
            return True

    def unregister(self, listener: LogListenerPort) -> bool:
        """Remove ``listener`` if present; return whether it was removed."""

        with self._lock:
            if self._listeners.get(id(listener)) is not listener:
                return False
            del self._listeners[id(listener)]
            return True

    def dispatch_message(self, level: LogLevel, text: str) -> None:
        """Hand ``text`` at ``level`` to every listener."""

        with self._lock:
            for listener in tuple(self._listeners.values()):
                try:
                    listener.handle_message(level, text)
                except Exception as exc:
                    self._report(exc)

    def dispatch_formatted(self, level: LogLevel, fmt: str | None, *args: object) -> None:
        """Format ``fmt`` with ``args`` and dispatch it; skip the dispatch on format errors."""

        try:
            text = format_message(fmt, *args)
        except LogEasyError as exc:
            self._report(exc)
            return
        self.dispatch_message(level, text)

    def dispatch_exception(self, exception: BaseException | None, stacktrace_level: LogLevel | None = None) -> None:
        """Capture the calling stack once and hand it with ``exception`` to every listener."""

        if exception is None:
            return
        try:
            frames = self._capture_frames()
        except Exception as exc:
            self._report(exc)
            frames = ()
        with self._lock:
            for listener in tuple(self._listeners.values()):
                try:
                    listener.handle_exception(exception, frames, stacktrace_level)
                except Exception as exc:
                    self._report(exc)

    def _report(self, error: BaseException) -> None:
        if self._on_failure is None:
            logger.debug("dropping dispatch failure without handler", exc_info=error)
            return
        try:
            self._on_failure(error)
        except Exception:
            logger.debug("failure hook raised", exc_info=True)


__all__ = ["EventBus"]
