"""Environment-driven configuration and optional ``.env`` loading.

Purpose
-------
Resolve the few runtime knobs (default level mask, stacktrace level, colour
switches) from environment variables, optionally seeded from the nearest
``.env`` file through :mod:`dotenv`.

Contents
--------
* :data:`DOTENV_ENV_VAR` and the ``LOG_EASY_*`` variable names.
* :func:`should_use_dotenv` / :func:`enable_dotenv` – ``.env`` handling.
* :class:`RuntimeConfig` / :func:`load_config` – resolved settings.

System Role
-----------
Read by :func:`lib_log_easy.runtime.current_context` when it creates the
process default context, and by the CLI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

from dotenv import find_dotenv, load_dotenv

from lib_log_easy.domain.levels import LogLevel

DOTENV_ENV_VAR = "LOG_EASY_USE_DOTENV"
LEVEL_ENV_VAR = "LOG_EASY_LEVEL"
STACKTRACE_LEVEL_ENV_VAR = "LOG_EASY_STACKTRACE_LEVEL"
FORCE_COLOR_ENV_VAR = "LOG_EASY_FORCE_COLOR"
NO_COLOR_ENV_VAR = "LOG_EASY_NO_COLOR"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}

_dotenv_attempted = False
_dotenv_path: Path | None = None


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether to load ``.env``; an explicit CLI flag beats the environment.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(env_value="yes")
    True
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv() -> Path | None:
    """Load the nearest ``.env`` above the working directory once per process.

    Existing environment variables keep precedence. Returns the resolved path of
    the loaded file, or ``None`` when no file was found.
    """

    global _dotenv_attempted, _dotenv_path
    if _dotenv_attempted:
        return _dotenv_path
    _dotenv_attempted = True
    found = find_dotenv(usecwd=True)
    if not found:
        return None
    load_dotenv(found, override=False)
    _dotenv_path = Path(found).resolve()
    return _dotenv_path


def _reset_dotenv_state_for_testing() -> None:
    global _dotenv_attempted, _dotenv_path
    _dotenv_attempted = False
    _dotenv_path = None


@dataclass(slots=True, frozen=True)
class RuntimeConfig:
    """Settings used to build a :class:`lib_log_easy.runtime.LoggingContext`.

    Attributes
    ----------
    default_level:
        Concerned-level mask of loggers created without one (and of the
        primary logger).
    stacktrace_level:
        Level of the stacktrace message in ``runtime.exception``; ``NONE``
        suppresses it.
    force_color, no_color:
        Colour switches of the Rich console sink.
    """

    default_level: LogLevel = LogLevel.DEBUG_AND_ABOVE
    stacktrace_level: LogLevel = LogLevel.INFO
    force_color: bool = False
    no_color: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_level", LogLevel(self.default_level))
        stacktrace_level = LogLevel(self.stacktrace_level)
        if stacktrace_level != LogLevel.NONE and not stacktrace_level.is_atomic:
            raise ValueError(f"stacktrace_level must be a single level, got {stacktrace_level.label}")
        object.__setattr__(self, "stacktrace_level", stacktrace_level)
        if self.force_color and self.no_color:
            raise ValueError("force_color and no_color are mutually exclusive")


def load_config(environ: Mapping[str, str] | None = None, **overrides: Any) -> RuntimeConfig:
    """Build a :class:`RuntimeConfig` from ``LOG_EASY_*`` variables plus ``overrides``.

    Examples
    --------
    >>> load_config({"LOG_EASY_LEVEL": "warn_and_above"}).default_level == LogLevel.WARN_AND_ABOVE
    True
    """

    env = os.environ if environ is None else environ
    defaults = RuntimeConfig()
    config = RuntimeConfig(
        default_level=_env_level(env, LEVEL_ENV_VAR, defaults.default_level),
        stacktrace_level=_env_level(env, STACKTRACE_LEVEL_ENV_VAR, defaults.stacktrace_level),
        force_color=env_bool(FORCE_COLOR_ENV_VAR, defaults.force_color, env),
        no_color=env_bool(NO_COLOR_ENV_VAR, defaults.no_color, env),
    )
    return replace(config, **overrides) if overrides else config


def env_bool(name: str, default: bool, environ: Mapping[str, str] | None = None) -> bool:
    """Interpret ``name`` as a boolean flag; unset means ``default``."""

    env = os.environ if environ is None else environ
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def _env_level(env: Mapping[str, str], name: str, default: LogLevel) -> LogLevel:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return LogLevel.from_name(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must name log levels, got {raw!r}") from exc


__all__ = [
    "DOTENV_ENV_VAR",
    "FORCE_COLOR_ENV_VAR",
    "LEVEL_ENV_VAR",
    "NO_COLOR_ENV_VAR",
    "RuntimeConfig",
    "STACKTRACE_LEVEL_ENV_VAR",
    "enable_dotenv",
    "env_bool",
    "load_config",
    "should_use_dotenv",
]
