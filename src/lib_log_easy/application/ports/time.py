"""Port for elapsed-time measurement."""

from __future__ import annotations

from datetime import timedelta
from typing import Protocol, runtime_checkable


@runtime_checkable
class StopwatchPort(Protocol):
    """Restartable elapsed-time provider."""

    def elapsed(self) -> timedelta: ...

    def restart(self) -> None: ...


__all__ = ["StopwatchPort"]
