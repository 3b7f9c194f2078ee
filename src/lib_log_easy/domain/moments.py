"""Named buckets of monotonic timestamps for ad-hoc timing.

Purpose
-------
Let callers drop timestamps ("moments") under a bucket name from anywhere in
the code and later read them back, or the intervals between them, by index.

Contents
--------
* :class:`MomentRegistry` – thread-safe ``key -> [timestamp, ...]`` mapping.
* :data:`UNKNOWN_MOMENT` – key used when no caller location can be derived.

System Role
-----------
One registry lives inside every :class:`lib_log_easy.runtime.LoggingContext`;
the module-level helpers in :mod:`lib_log_easy.runtime` use the default one.
"""

from __future__ import annotations

import inspect
import time
from collections.abc import Callable, Iterable
from threading import RLock

from lib_log_easy.errors import InvalidArgument

UNKNOWN_MOMENT = "Unknown"

_PACKAGE = __name__.split(".")[0]


class MomentRegistry:
    """Append-only timestamp sequences keyed by bucket name.

    Indexes are stable: once a timestamp is appended it never changes position.

    Examples
    --------
    >>> ticks = iter([100, 150, 400])
    >>> registry = MomentRegistry(clock=lambda: next(ticks))
    >>> [registry.mark("A") for _ in range(3)]
    [1, 2, 3]
    >>> registry.get_intervals("A")
    (50, 250)
    """

    def __init__(self, *, clock: Callable[[], int] = time.monotonic_ns) -> None:
        self._clock = clock
        self._moments: dict[str, list[int]] = {}
        self._lock = RLock()

    def mark(self, key: str | None = None) -> int:
        """Append the current timestamp under ``key`` and return the new count.

        When ``key`` is omitted it is derived from the calling source location.
        """

        if key is None:
            key = _caller_key()
        with self._lock:
            moments = self._moments.setdefault(key, [])
            moments.append(self._clock())
            return len(moments)

    def get_moments(
        self,
        key: str | None,
        predicate: Callable[[int, int], bool] | None = None,
    ) -> tuple[int, ...]:
        """Return timestamps of ``key`` accepted by ``predicate(timestamp, index)``."""

        moments = self._snapshot(key)
        if predicate is None:
            return moments
        return tuple(moment for index, moment in enumerate(moments) if predicate(moment, index))

    def get_moments_by_indexes(self, key: str | None, indexes: Iterable[int] | None = None) -> tuple[int, ...]:
        """Return timestamps at ``indexes`` in the order given, skipping unknown ones."""

        moments = self._snapshot(key)
        if indexes is None:
            return moments
        return tuple(moments[index] for index in indexes if 0 <= index < len(moments))

    def get_intervals(self, key: str | None, indexes: Iterable[int] | None = None) -> tuple[int, ...]:
        """Return ``moment[i] - moment[i - 1]`` for each requested ``i``.

        Index ``0`` never closes an interval and is dropped like any other
        out-of-range index. Without ``indexes`` every consecutive delta is
        returned.
        """

        moments = self._snapshot(key)
        if indexes is None:
            return tuple(later - earlier for earlier, later in zip(moments, moments[1:]))
        return tuple(moments[index] - moments[index - 1] for index in indexes if 0 < index < len(moments))

    def list_keys(self) -> frozenset[str]:
        """Return the bucket names recorded so far."""

        with self._lock:
            return frozenset(self._moments)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._moments

    def __len__(self) -> int:
        with self._lock:
            return len(self._moments)

    def _snapshot(self, key: str | None) -> tuple[int, ...]:
        if key is None:
            raise InvalidArgument("key cannot be None when retrieving moments")
        with self._lock:
            return tuple(self._moments.get(key, ()))


def _caller_key() -> str:
    """Describe the first caller outside this package as ``file: func_L<line>``."""

    frame = inspect.currentframe()
    try:
        while frame is not None:
            module = frame.f_globals.get("__name__", "")
            if module.split(".")[0] != _PACKAGE and frame.f_lineno:
                code = frame.f_code
                return f"{code.co_filename}: {code.co_name}_L{frame.f_lineno}"
            frame = frame.f_back
        return UNKNOWN_MOMENT
    finally:
        del frame


__all__ = ["MomentRegistry", "UNKNOWN_MOMENT"]
