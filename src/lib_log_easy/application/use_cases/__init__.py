"""Use cases composing the logging pipeline."""

from __future__ import annotations

from .dispatch import EventBus
from .formatting import format_message, try_format_string
from .pipeline import STACKTRACE_PREFIX, LogBuilders, MessagePipeline

__all__ = [
    "EventBus",
    "LogBuilders",
    "MessagePipeline",
    "STACKTRACE_PREFIX",
    "format_message",
    "try_format_string",
]
