"""Port implemented by every receiver of dispatched logging events."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from lib_log_easy.domain.frames import FrameDescriptor
from lib_log_easy.domain.levels import LogLevel


@runtime_checkable
class LogListenerPort(Protocol):
    """Receive plain messages and exceptions broadcast by the event bus."""

    def handle_message(self, level: LogLevel, details: str) -> None:
        """Process ``details`` logged at ``level``."""

    def handle_exception(
        self,
        exception: BaseException,
        frames: Sequence[FrameDescriptor],
        stacktrace_level: LogLevel | None = None,
    ) -> None:
        """Process ``exception`` captured together with ``frames``."""


__all__ = ["LogListenerPort"]
