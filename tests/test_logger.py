from __future__ import annotations

import logging

import pytest

from lib_log_easy import logger as logger_module
from lib_log_easy.domain import LogLevel
from lib_log_easy.logger import (
    MIN_STACK_FRAME_COUNT,
    ConsoleLogger,
    ExtendedLogger,
    MemoryLogger,
    frame_count,
    root_cause,
)


def _level_three() -> None:
    raise ValueError("deep problem")


def _level_two() -> None:
    _level_three()


def _level_one() -> None:
    _level_two()


def _caught() -> ValueError:
    try:
        _level_one()
    except ValueError as exc:
        return exc
    raise AssertionError("unreachable")


def _chained() -> RuntimeError:
    try:
        try:
            raise KeyError("k")
        except KeyError as inner:
            raise RuntimeError("wrapper") from inner
    except RuntimeError as exc:
        return exc
    raise AssertionError("unreachable")


@pytest.mark.parametrize(
    "bottom, level, expected",
    [
        (LogLevel.INFO, LogLevel.DEBUG, False),
        (LogLevel.INFO, LogLevel.INFO, True),
        (LogLevel.INFO, LogLevel.ERROR, True),
        (LogLevel.VERBOSE, LogLevel.VERBOSE, True),
        (LogLevel.NONE, LogLevel.ERROR, False),
        (LogLevel.VERBOSE, LogLevel.WARN_AND_ABOVE, False),
    ],
)
def test_can_log_compares_against_bottom_level(bottom: LogLevel, level: LogLevel, expected: bool) -> None:
    assert MemoryLogger(bottom).can_log(level) is expected


def test_level_helpers_chain_and_format() -> None:
    log = MemoryLogger(LogLevel.DEBUG)

    result = log.verbose("hidden").debug("{0}+{1}", 1, 2).info("plain {braces}").warn("{0}&#37", 50).error(None)

    assert result is log
    assert log.messages == ["1+2", "plain {braces}", "50%"]


def test_malformed_format_is_saved_as_diagnostic() -> None:
    log = MemoryLogger()

    log.info("{0} {1}", "x")

    assert log.messages == ["MalFormatted: format='{0} {1}', args=[[0]x]"]


def test_log_exception_renders_type_message_and_stack() -> None:
    log = MemoryLogger()

    log.error(_caught())

    first, *stack = log.messages[0].splitlines()
    assert first == "ValueError: deep problem"
    assert len(stack) == frame_count(LogLevel.ERROR)
    assert stack[0].startswith("[0]: File ")
    assert stack[0].endswith("in _level_three")


@pytest.mark.parametrize("level", [LogLevel.VERBOSE, LogLevel.DEBUG, LogLevel.INFO, LogLevel.WARN])
def test_log_exception_stack_depth_depends_on_level(level: LogLevel) -> None:
    log = MemoryLogger()

    log.log_exception(level, _caught())

    stack = log.messages[0].splitlines()[1:]
    # only four frames exist between _caught and the raise
    assert len(stack) == min(frame_count(level), 4)


def test_log_exception_reports_root_cause() -> None:
    log = MemoryLogger()

    log.warn(_chained())

    assert log.messages[0].splitlines()[0] == "KeyError caused by RuntimeError: 'k'"


def test_log_exception_respects_bottom_level() -> None:
    log = MemoryLogger(LogLevel.ERROR)

    log.info(_caught()).log_exception(LogLevel.ERROR, None)

    assert log.messages == []


def test_frame_counts_are_adjustable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(logger_module.STACK_FRAMES_COUNT, LogLevel.ERROR, 1)
    log = MemoryLogger()

    log.error(_caught())

    assert len(log.messages[0].splitlines()) == 2


def test_frame_count_defaults_for_unknown_levels() -> None:
    assert frame_count(LogLevel.WARN_AND_ABOVE) == MIN_STACK_FRAME_COUNT
    assert frame_count(LogLevel.NONE) == 0
    assert frame_count(LogLevel.VERBOSE) == 11


def test_root_cause_follows_implicit_context_and_stops_on_cycles() -> None:
    outer = ValueError("outer")
    inner = KeyError("inner")
    outer.__context__ = inner
    inner.__context__ = outer

    assert root_cause(outer) is inner


def test_root_cause_honours_suppressed_context() -> None:
    error = ValueError("explicit")
    error.__context__ = KeyError("hidden")
    error.__suppress_context__ = True

    assert root_cause(error) is error


def test_save_failure_is_swallowed(caplog: pytest.LogCaptureFixture) -> None:
    class Broken(ExtendedLogger):
        def save(self, message: str) -> None:
            raise OSError("read-only")

        def get_bottom_level(self) -> LogLevel:
            return LogLevel.VERBOSE

    with caplog.at_level(logging.DEBUG, logger="lib_log_easy.logger"):
        result = Broken().info("lost")

    assert isinstance(result, Broken)
    assert "Broken failed to save a message" in caplog.text


def test_subclass_can_customise_message() -> None:
    class Prefixed(MemoryLogger):
        def get_message(self, level: LogLevel, fmt: str | None, *args: object) -> str:
            return f"{level.code}| " + super().get_message(level, fmt, *args)

    log = Prefixed()
    log.warn("{0} left", 3)

    assert log.messages == ["W| 3 left"]


def test_console_logger_prints_through_rich(record_console) -> None:
    log = ConsoleLogger(LogLevel.WARN, console=record_console)

    log.info("hidden").warn("[disk] {0}&#37 full", 91)

    assert record_console.export_text() == "[disk] 91% full\n"
    assert log.get_bottom_level() == LogLevel.WARN


def test_abstract_base_cannot_be_instantiated() -> None:
    with pytest.raises(TypeError):
        ExtendedLogger()  # type: ignore[abstract]


class Unprintable(Exception):
    def __str__(self) -> str:
        raise RuntimeError("no str")


def test_log_exception_with_failing_str_is_swallowed(caplog: pytest.LogCaptureFixture) -> None:
    log = MemoryLogger()

    with caplog.at_level(logging.DEBUG, logger="lib_log_easy.logger"):
        result = log.error(Unprintable()).info("next")

    assert result is log
    assert log.messages == ["next"]
    assert "MemoryLogger failed to describe Unprintable" in caplog.text
