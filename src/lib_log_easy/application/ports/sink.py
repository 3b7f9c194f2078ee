"""Sink port describing where composed messages end up.

Purpose
-------
Keep the message pipeline independent of any particular output so that the
console, an in-memory buffer or a test double can all receive log lines.

Contents
--------
* :class:`SinkPort` – runtime-checkable callable protocol.

System Role
-----------
Consumed by :class:`lib_log_easy.application.use_cases.pipeline.MessagePipeline`
as the last step of every accepted log call.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_easy.domain.levels import LogLevel


@runtime_checkable
class SinkPort(Protocol):
    """Persist one composed message."""

    def __call__(self, level: LogLevel, message: str) -> None:
        """Write ``message`` logged at the atomic ``level``; may raise."""


__all__ = ["SinkPort"]
