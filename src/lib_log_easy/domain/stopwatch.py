"""Restartable stopwatch and the elapsed-time wording used in log tags."""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import timedelta
from threading import Lock


class Stopwatch:
    """Measure elapsed wall time since construction or the last restart."""

    def __init__(self, *, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._lock = Lock()
        self._started = clock()

    def elapsed(self) -> timedelta:
        """Return the time elapsed since the last restart."""

        with self._lock:
            started = self._started
        return timedelta(seconds=max(self._clock() - started, 0.0))

    def restart(self) -> None:
        """Reset the elapsed time to zero."""

        with self._lock:
            self._started = self._clock()

    def elapsed_string(self, template: str | None = None) -> str:
        """Return :meth:`elapsed` rendered by :func:`format_elapsed`."""

        return format_elapsed(self.elapsed(), template)


def format_elapsed(elapsed: timedelta, template: str | None = None) -> str:
    """Render ``elapsed`` with a precision that shrinks as durations grow.

    ``template`` is a :meth:`str.format` string receiving ``days``, ``hours``,
    ``minutes``, ``seconds``, ``milliseconds`` and ``total_seconds``.

    Examples
    --------
    >>> format_elapsed(timedelta(milliseconds=42))
    '042ms'
    >>> format_elapsed(timedelta(seconds=3, milliseconds=5))
    '03.005s'
    >>> format_elapsed(timedelta(minutes=2, seconds=7, milliseconds=250))
    '02:07.250'
    >>> format_elapsed(timedelta(hours=5, minutes=4, seconds=3))
    '5h 4m 3s'
    >>> format_elapsed(timedelta(days=3, hours=2, minutes=1))
    '03.02:01:00'
    >>> format_elapsed(timedelta(seconds=75), "{minutes:02d}-{seconds:02d}")
    '01-15'
    """

    parts = _split(elapsed)
    if template is not None:
        return template.format(**parts)

    days, hours, minutes = parts["days"], parts["hours"], parts["minutes"]
    seconds, millis = parts["seconds"], parts["milliseconds"]
    if elapsed < timedelta(seconds=1):
        return f"{millis:03d}ms"
    if elapsed < timedelta(seconds=10):
        return f"{seconds:02d}.{millis:03d}s"
    if elapsed < timedelta(minutes=10):
        return f"{minutes:02d}:{seconds:02d}.{millis:03d}"
    if elapsed < timedelta(hours=24):
        return f"{hours}h {minutes}m {seconds}s"
    if elapsed < timedelta(days=99):
        return f"{days:02d}.{hours:02d}:{minutes:02d}:{seconds:02d}"
    return str(elapsed)


def _split(elapsed: timedelta) -> dict[str, int | float]:
    whole_seconds, micros = divmod(elapsed // timedelta(microseconds=1), 1_000_000)
    minutes_total, seconds = divmod(whole_seconds, 60)
    hours_total, minutes = divmod(minutes_total, 60)
    days, hours = divmod(hours_total, 24)
    return {
        "days": days,
        "hours": hours,
        "minutes": minutes,
        "seconds": seconds,
        "milliseconds": micros // 1000,
        "total_seconds": elapsed.total_seconds(),
    }


__all__ = ["Stopwatch", "format_elapsed"]
