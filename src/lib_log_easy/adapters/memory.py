"""In-memory sink keeping every message it receives."""

from __future__ import annotations

from threading import Lock

from lib_log_easy.application.ports import SinkPort
from lib_log_easy.domain import LogLevel


class MemorySink(SinkPort):
    """Buffer ``(level, message)`` records for later inspection.

    Examples
    --------
    >>> sink = MemorySink()
    >>> sink(LogLevel.INFO, "first")
    >>> sink(LogLevel.WARN, "second")
    >>> sink.messages
    ['first', 'second']
    >>> MemorySink(newest_first=True).newest_first
    True
    """

    def __init__(self, *, newest_first: bool = False) -> None:
        self._records: list[tuple[LogLevel, str]] = []
        self._newest_first = newest_first
        self._lock = Lock()

    @property
    def newest_first(self) -> bool:
        return self._newest_first

    def __call__(self, level: LogLevel, message: str) -> None:
        with self._lock:
            if self._newest_first:
                self._records.insert(0, (level, message))
            else:
                self._records.append((level, message))

    @property
    def records(self) -> list[tuple[LogLevel, str]]:
        """Return a copy of the buffered ``(level, message)`` pairs."""

        with self._lock:
            return list(self._records)

    @property
    def messages(self) -> list[str]:
        """Return the buffered messages without their levels."""

        return [message for _, message in self.records]

    def getvalue(self) -> str:
        """Return every message on its own line."""

        return "".join(f"{message}\n" for message in self.messages)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


__all__ = ["MemorySink"]
