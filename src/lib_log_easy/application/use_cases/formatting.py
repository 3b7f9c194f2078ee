"""Message formatting with strict and forgiving variants.

Purpose
-------
Both façades accept ``str.format`` templates with positional arguments. The
event bus wants to know when a template is broken (it skips the dispatch and
reports the error); the extension logger must always produce a line. The two
helpers here cover both needs.

Contents
--------
* :func:`format_message` – strict, raises :class:`MalformedFormat`.
* :func:`try_format_string` – never raises, substitutes a diagnostic line.
* ``PERCENTAGE_ASCII`` – escape sequence turned back into ``%``.
"""

from __future__ import annotations

from lib_log_easy.errors import InvalidArgument, MalformedFormat

PERCENTAGE_ASCII = "&#37"


def format_message(fmt: str | None, *args: object) -> str:
    """Return ``fmt.format(*args)`` or raise a descriptive error.

    Examples
    --------
    >>> format_message("{0} + {0} = {1}", 1, 2)
    '1 + 1 = 2'
    """

    if fmt is None:
        raise InvalidArgument("format cannot be None")
    try:
        return fmt.format(*args)
    except (IndexError, KeyError, ValueError, AttributeError, TypeError) as exc:
        raise MalformedFormat(fmt, args) from exc


def try_format_string(fmt: str | None, *args: object) -> str:
    """Format ``fmt`` with ``args`` and fall back to a diagnostic line.

    A single ``tuple`` argument is unpacked into the positional arguments. Without
    arguments ``fmt`` is returned untouched so literal braces survive.

    Examples
    --------
    >>> try_format_string("{0} scored {1}&#37", "Ann", 93)
    'Ann scored 93%'
    >>> try_format_string("{0} {1}", "only")
    "MalFormatted: format='{0} {1}', args=[[0]only]"
    >>> try_format_string("{0}-{1}", ("a", "b"))
    'a-b'
    """

    if len(args) == 1 and isinstance(args[0], tuple):
        args = args[0]
    try:
        formatted = format_message(fmt, *args) if args else _require(fmt)
    except (InvalidArgument, MalformedFormat):
        return malformed_description(fmt, args)
    return formatted.replace(PERCENTAGE_ASCII, "%")


def malformed_description(fmt: str | None, args: tuple[object, ...]) -> str:
    """Describe ``fmt`` and every argument by position."""

    ordered = ",".join(f"[{index}]{'null' if arg is None else arg}" for index, arg in enumerate(args))
    return f"MalFormatted: format='{'null' if fmt is None else fmt}', args=[{ordered}]"


def _require(fmt: str | None) -> str:
    if fmt is None:
        raise InvalidArgument("format cannot be None")
    return fmt


__all__ = ["PERCENTAGE_ASCII", "format_message", "malformed_description", "try_format_string"]
