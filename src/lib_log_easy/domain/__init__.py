"""Domain values used by the logging façades."""

from __future__ import annotations

from .frames import FrameDescriptor
from .levels import ATOMIC_LEVELS, LogLevel, matches, union
from .moments import UNKNOWN_MOMENT, MomentRegistry
from .stopwatch import Stopwatch, format_elapsed

__all__ = [
    "ATOMIC_LEVELS",
    "FrameDescriptor",
    "LogLevel",
    "MomentRegistry",
    "Stopwatch",
    "UNKNOWN_MOMENT",
    "format_elapsed",
    "matches",
    "union",
]
