from __future__ import annotations

from datetime import datetime, timedelta
from io import StringIO
from typing import Iterator

import pytest
from rich.console import Console

from lib_log_easy import runtime
from lib_log_easy.adapters import MemorySink
from lib_log_easy.domain import LogLevel
from lib_log_easy.runtime import LoggingContext

FIXED_NOW = datetime(2025, 9, 23, 13, 5, 9)


class FixedStopwatch:
    """Stopwatch double reporting a constant elapsed time."""

    def __init__(self, elapsed: timedelta = timedelta(milliseconds=7)) -> None:
        self.value = elapsed
        self.restarts = 0

    def elapsed(self) -> timedelta:
        return self.value

    def restart(self) -> None:
        self.restarts += 1
        self.value = timedelta(0)


@pytest.fixture
def record_console() -> Console:
    """Rich console that records output for ``export_text`` assertions."""

    return Console(file=StringIO(), record=True, force_terminal=True, color_system="standard", width=200)


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def stopwatch() -> FixedStopwatch:
    return FixedStopwatch()


@pytest.fixture
def context(sink: MemorySink, stopwatch: FixedStopwatch) -> Iterator[LoggingContext]:
    """Isolated context whose primary logger writes into ``sink``."""

    ctx = LoggingContext(
        default_level=LogLevel.ALL,
        default_sink=sink,
        stopwatch=stopwatch,
        clock=lambda: FIXED_NOW,
    )
    yield ctx
    ctx.close()


@pytest.fixture(autouse=True)
def _reset_default_context() -> Iterator[None]:
    runtime.reset_context()
    yield
    runtime.reset_context()
