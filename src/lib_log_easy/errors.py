"""Exception hierarchy shared by both logging façades.

Purpose
-------
Name the few failure kinds the logging subsystem knows about so callers and
tests can tell an invalid argument from a broken sink without string matching.

Contents
--------
* :class:`LogEasyError` – common base class.
* :class:`InvalidArgument` – missing key or format string.
* :class:`MalformedFormat` – format/argument mismatch.
* :class:`SinkFailure` / :class:`BuilderFailure` – errors raised inside the
  message pipeline.

System Role
-----------
Only :class:`InvalidArgument` ever reaches a caller (from the moment getters).
Everything raised during a logging call is wrapped in one of the failure types
and handed to the failure hook instead of propagating.
"""

from __future__ import annotations


class LogEasyError(Exception):
    """Base class for all errors raised by :mod:`lib_log_easy`."""


class InvalidArgument(LogEasyError, ValueError):
    """A required key or format string was ``None``."""


class MalformedFormat(LogEasyError, ValueError):
    """A format string did not match the supplied arguments."""

    def __init__(self, fmt: str, args: tuple[object, ...]) -> None:
        super().__init__(f"cannot format {fmt!r} with {len(args)} argument(s)")
        self.format = fmt
        self.args_given = args


class SinkFailure(LogEasyError, RuntimeError):
    """The sink raised while persisting a composed message."""


class BuilderFailure(LogEasyError, RuntimeError):
    """A tag, message or stacktrace builder raised while composing a message."""


__all__ = [
    "BuilderFailure",
    "InvalidArgument",
    "LogEasyError",
    "MalformedFormat",
    "SinkFailure",
]
