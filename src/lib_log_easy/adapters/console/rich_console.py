"""Rich-powered console sink implementing :class:`SinkPort`.

Purpose
-------
Default destination of every logger that is not given a sink: print each
composed line to the terminal, coloured by level.

Contents
--------
* :data:`_STYLE_MAP` - default level-to-style mapping.
* :class:`RichConsoleSink` - sink constructed by :class:`LoggingContext`.

System Role
-----------
Human-facing output; colour behaviour follows the ``force_color`` and
``no_color`` switches resolved by :mod:`lib_log_easy.config`.
"""

from __future__ import annotations

from typing import Mapping

from rich.console import Console

from lib_log_easy.application.ports.sink import SinkPort
from lib_log_easy.domain.levels import LogLevel


_STYLE_MAP: Mapping[LogLevel, str] = {
    LogLevel.VERBOSE: "dim",
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "cyan",
    LogLevel.WARN: "yellow",
    LogLevel.ERROR: "bold red",
}

#: Default Rich styles keyed by atomic :class:`LogLevel`.


class RichConsoleSink(SinkPort):
    """Print composed messages with Rich, styled per level."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: Mapping[LogLevel | str, str] | None = None,
    ) -> None:
        """Configure the console sink with colour and style overrides."""
        if console is not None:
            self._console = console
        else:
            self._console = Console(force_terminal=force_color or None, no_color=no_color)
        self._no_color = no_color
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            level = LogLevel.from_name(key) if isinstance(key, str) else key
            merged[level] = value
        self._style_map = merged

    @property
    def console(self) -> Console:
        return self._console

    def __call__(self, level: LogLevel, message: str) -> None:
        """Print ``message``; brackets in tags are never read as Rich markup.

        Examples
        --------
        >>> from io import StringIO
        >>> console = Console(file=StringIO(), record=True)
        >>> RichConsoleSink(console=console)(LogLevel.INFO, "[I:001ms]: ready")
        >>> console.export_text()
        '[I:001ms]: ready\\n'
        """
        style = "" if self._no_color else self._style_map.get(level, "")
        self._console.print(message, style=style, markup=False, highlight=False, soft_wrap=True)


__all__ = ["RichConsoleSink"]
