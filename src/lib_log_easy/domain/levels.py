"""Bitmask log levels shared by both logging façades.

Purpose
-------
Represent single severities and "at-or-above" filter groups with one integer
flag type so that gating a message is a single bitwise ``AND``.

Contents
--------
* :class:`LogLevel` – ``IntFlag`` with atomic levels and composite masks.
* :func:`matches` / :func:`union` – free-function spelling of the mask algebra.
* ``ATOMIC_LEVELS`` – the five levels a single log call may carry.

System Role
-----------
Every logger instance stores a :class:`LogLevel` mask of the levels it is
concerned with; every log call carries exactly one atomic level.
"""

from __future__ import annotations

import re
from enum import IntFlag
from functools import reduce
from operator import or_


class LogLevel(IntFlag):
    """Severity bits and the composite filters built from them."""

    NONE = 0
    VERBOSE = 1
    DEBUG = 2
    INFO = 4
    WARN = 8
    ERROR = 16

    WARN_AND_ABOVE = WARN | ERROR
    INFO_AND_ABOVE = INFO | WARN_AND_ABOVE
    DEBUG_AND_ABOVE = DEBUG | INFO_AND_ABOVE
    ALL = VERBOSE | DEBUG_AND_ABOVE

    @property
    def is_atomic(self) -> bool:
        """Return ``True`` for VERBOSE, DEBUG, INFO, WARN and ERROR only."""

        return self in ATOMIC_LEVELS

    @property
    def code(self) -> str:
        """Return the single-letter code of an atomic level (``"I"`` for INFO)."""

        return _level_name(self)[0]

    @property
    def label(self) -> str:
        """Return the upper-case name; composites without a name use ``|``."""

        return _level_name(self)

    def matches(self, mask: "LogLevel | int") -> bool:
        """Return ``True`` when this level shares at least one bit with ``mask``.

        Examples
        --------
        >>> LogLevel.DEBUG.matches(LogLevel.DEBUG_AND_ABOVE)
        True
        >>> LogLevel.DEBUG.matches(LogLevel.WARN_AND_ABOVE)
        False
        """

        return (int(self) & int(mask)) != 0

    @classmethod
    def at_or_above(cls, level: "LogLevel") -> "LogLevel":
        """Return the mask of every atomic level at least as severe as ``level``.

        Examples
        --------
        >>> LogLevel.at_or_above(LogLevel.INFO) == LogLevel.INFO_AND_ABOVE
        True
        """

        if level == cls.NONE:
            return cls.NONE
        selected = [atomic for atomic in ATOMIC_LEVELS if atomic >= level]
        return union(*selected) if selected else cls.NONE

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Parse ``"INFO"``, ``"debug_and_above"`` or ``"VERBOSE|WARN"``.

        Tokens may be joined with ``|``, ``,`` or ``+``; ``WARNING`` is accepted
        as an alias of ``WARN``.
        """

        tokens = [token for token in _SEPARATORS.split(name.strip()) if token]
        if not tokens:
            raise ValueError(f"Unknown log level: {name!r}")
        result = cls.NONE
        for token in tokens:
            normalized = token.upper()
            normalized = _ALIASES.get(normalized, normalized)
            try:
                result |= cls[normalized]
            except KeyError as exc:
                raise ValueError(f"Unknown log level: {name!r}") from exc
        return cls(result)


ATOMIC_LEVELS: tuple[LogLevel, ...] = (
    LogLevel.VERBOSE,
    LogLevel.DEBUG,
    LogLevel.INFO,
    LogLevel.WARN,
    LogLevel.ERROR,
)

_ALIASES = {"WARNING": "WARN"}
_SEPARATORS = re.compile(r"[|,+\s]+")


def _level_name(level: LogLevel) -> str:
    for member_name, member in LogLevel.__members__.items():
        if member == level:
            return member_name
    return "|".join(atomic.name or "" for atomic in ATOMIC_LEVELS if atomic & level) or "NONE"


def matches(level: LogLevel | int, mask: LogLevel | int) -> bool:
    """Return ``True`` iff ``level & mask`` is non-zero."""

    return (int(level) & int(mask)) != 0


def union(*levels: LogLevel | int) -> LogLevel:
    """Return the bitwise OR of ``levels`` as a :class:`LogLevel`.

    Examples
    --------
    >>> union(LogLevel.WARN, LogLevel.ERROR) == LogLevel.WARN_AND_ABOVE
    True
    """

    return LogLevel(reduce(or_, (int(level) for level in levels), 0))


__all__ = ["ATOMIC_LEVELS", "LogLevel", "matches", "union"]
