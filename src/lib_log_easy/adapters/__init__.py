"""Concrete sinks, builders and stack capture."""

from __future__ import annotations

from .builders import (
    FormattedTag,
    by_exception,
    by_stacktrace,
    debuggable_stacktrace,
    default_message,
    full_tag,
    no_tag,
    short_tag,
)
from .console import RichConsoleSink
from .memory import MemorySink
from .stack import StackFilter, capture_frames, filtered_stack_string

__all__ = [
    "FormattedTag",
    "MemorySink",
    "RichConsoleSink",
    "StackFilter",
    "by_exception",
    "by_stacktrace",
    "capture_frames",
    "debuggable_stacktrace",
    "default_message",
    "filtered_stack_string",
    "full_tag",
    "no_tag",
    "short_tag",
]
