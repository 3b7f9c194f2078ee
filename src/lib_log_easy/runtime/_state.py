"""Default context container and access helpers."""

from __future__ import annotations

from threading import RLock

from lib_log_easy.config import load_config

from ._context import LoggingContext

_CONTEXT: LoggingContext | None = None
_CONTEXT_LOCK = RLock()


def current_context() -> LoggingContext:
    """Return the process default context, creating it from the environment on first use."""

    global _CONTEXT
    with _CONTEXT_LOCK:
        if _CONTEXT is None:
            _CONTEXT = LoggingContext.from_config(load_config())
        return _CONTEXT


def set_context(context: LoggingContext) -> LoggingContext | None:
    """Install ``context`` as the default and return the one it replaces."""

    global _CONTEXT
    with _CONTEXT_LOCK:
        previous = _CONTEXT
        _CONTEXT = context
        return previous


def reset_context() -> None:
    """Close and forget the default context; the next access builds a fresh one."""

    global _CONTEXT
    with _CONTEXT_LOCK:
        if _CONTEXT is not None:
            _CONTEXT.close()
        _CONTEXT = None


def is_initialised() -> bool:
    """Return ``True`` once a default context exists."""

    with _CONTEXT_LOCK:
        return _CONTEXT is not None


__all__ = ["current_context", "is_initialised", "reset_context", "set_context"]
