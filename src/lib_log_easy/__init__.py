"""Public package surface of :mod:`lib_log_easy`.

Two independent façades live here: the event-driven :class:`Log` with its
module-level helpers in :mod:`lib_log_easy.runtime` (level functions, moments,
stopwatch), and the extension-style :class:`ExtendedLogger` family.
"""

from __future__ import annotations

from . import runtime
from .adapters import (
    FormattedTag,
    MemorySink,
    RichConsoleSink,
    StackFilter,
    by_exception,
    by_stacktrace,
    debuggable_stacktrace,
    default_message,
    full_tag,
    no_tag,
    short_tag,
)
from .application.use_cases import LogBuilders, try_format_string
from .config import RuntimeConfig, load_config
from .domain import LogLevel, MomentRegistry, Stopwatch, matches, union
from .errors import BuilderFailure, InvalidArgument, LogEasyError, MalformedFormat, SinkFailure
from .log import Log
from .logger import ConsoleLogger, ExtendedLogger, MemoryLogger
from .runtime import LoggingContext
from .cli import summary_info

__all__ = [
    "BuilderFailure",
    "ConsoleLogger",
    "ExtendedLogger",
    "FormattedTag",
    "InvalidArgument",
    "Log",
    "LogBuilders",
    "LogEasyError",
    "LogLevel",
    "LoggingContext",
    "MalformedFormat",
    "MemoryLogger",
    "MemorySink",
    "MomentRegistry",
    "RichConsoleSink",
    "RuntimeConfig",
    "SinkFailure",
    "StackFilter",
    "Stopwatch",
    "by_exception",
    "by_stacktrace",
    "debuggable_stacktrace",
    "default_message",
    "full_tag",
    "load_config",
    "matches",
    "no_tag",
    "runtime",
    "short_tag",
    "summary_info",
    "try_format_string",
    "union",
]
