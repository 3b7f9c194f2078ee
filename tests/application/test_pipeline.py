from __future__ import annotations

from collections.abc import Sequence

import pytest

from lib_log_easy.adapters import MemorySink, full_tag
from lib_log_easy.application.use_cases.pipeline import STACKTRACE_PREFIX, LogBuilders, MessagePipeline
from lib_log_easy.domain import FrameDescriptor, LogLevel
from lib_log_easy.errors import BuilderFailure, InvalidArgument, SinkFailure


def _trace(exception: BaseException, frames: Sequence[FrameDescriptor]) -> str:
    return f"{len(frames)} frames of {type(exception).__name__}"


def _pipeline(mask: LogLevel, sink=None, failures: list[BaseException] | None = None, **overrides) -> MessagePipeline:
    builders = LogBuilders(build_tag=full_tag, build_message=lambda tag, details: f"{tag} {details}", build_stacktrace=_trace)
    return MessagePipeline(
        sink=sink if sink is not None else MemorySink(),
        builders=builders.with_overrides(**overrides),
        concerned_levels=mask,
        on_failure=None if failures is None else failures.append,
    )


def test_process_gates_by_mask() -> None:
    sink = MemorySink()
    pipeline = _pipeline(LogLevel.WARN_AND_ABOVE, sink)

    assert pipeline.process(LogLevel.INFO, "skipped") is False
    assert pipeline.process(LogLevel.WARN, "kept") is True
    assert sink.records == [(LogLevel.WARN, "[WARN] kept")]


def test_process_calls_tag_then_message_builder() -> None:
    calls: list[tuple[str, object]] = []

    def tag(level: LogLevel) -> str:
        calls.append(("tag", level))
        return "<T>"

    def message(tag_text: str, details: str) -> str:
        calls.append(("message", (tag_text, details)))
        return tag_text + details

    sink = MemorySink()
    _pipeline(LogLevel.ALL, sink, build_tag=tag, build_message=message).process(LogLevel.DEBUG, "body")

    assert calls == [("tag", LogLevel.DEBUG), ("message", ("<T>", "body"))]
    assert sink.messages == ["<T>body"]


def test_explicit_tag_overrides_builder() -> None:
    sink = MemorySink()

    _pipeline(LogLevel.ALL, sink).process(LogLevel.INFO, "body", tag="custom")

    assert sink.messages == ["custom body"]


def test_concerned_levels_can_change_at_runtime() -> None:
    sink = MemorySink()
    pipeline = _pipeline(LogLevel.ERROR, sink)

    pipeline.concerned_levels = LogLevel.ALL
    pipeline.process(LogLevel.VERBOSE, "now visible")

    assert sink.messages == ["[VERBOSE] now visible"]


def test_exception_logs_error_and_stacktrace_independently() -> None:
    sink = MemorySink()
    pipeline = _pipeline(LogLevel.INFO, sink)
    frames = [FrameDescriptor(0, "a", True), FrameDescriptor(1, "b", True)]

    pipeline.process_exception(KeyError("k"), frames, LogLevel.INFO)

    assert sink.records == [(LogLevel.INFO, f"[INFO] {STACKTRACE_PREFIX}2 frames of KeyError")]


def test_exception_with_error_mask_and_no_stacktrace_level() -> None:
    sink = MemorySink()
    pipeline = _pipeline(LogLevel.ALL, sink)

    pipeline.process_exception(RuntimeError("boom"), [], None)
    pipeline.process_exception(RuntimeError(), [], None)
    pipeline.process_exception(None, [], LogLevel.INFO)

    assert sink.messages == ["[ERROR] boom", "[ERROR] RuntimeError"]


def test_exception_without_stacktrace_builder() -> None:
    sink = MemorySink()
    pipeline = MessagePipeline(
        sink=sink,
        builders=LogBuilders(full_tag, lambda tag, details: details, _trace).without_stacktrace(),
        concerned_levels=LogLevel.ALL,
    )

    pipeline.process_exception(ValueError("bad"), [], LogLevel.DEBUG)

    assert sink.messages == ["bad"]


def test_sink_failure_is_reported_not_raised() -> None:
    failures: list[BaseException] = []

    def broken(level: LogLevel, message: str) -> None:
        raise OSError("disk full")

    emitted = _pipeline(LogLevel.ALL, broken, failures).process(LogLevel.INFO, "lost")

    assert emitted is False
    assert len(failures) == 1
    assert isinstance(failures[0], SinkFailure)
    assert isinstance(failures[0].__cause__, OSError)


def test_builder_failure_is_reported_not_raised() -> None:
    failures: list[BaseException] = []

    def broken_tag(level: LogLevel) -> str:
        raise KeyError(level)

    _pipeline(LogLevel.ALL, None, failures, build_tag=broken_tag).process(LogLevel.INFO, "x")

    assert [type(error) for error in failures] == [BuilderFailure]


def test_stacktrace_builder_failure_keeps_error_message() -> None:
    sink = MemorySink()
    failures: list[BaseException] = []

    def broken_trace(exception: BaseException, frames: Sequence[FrameDescriptor]) -> str:
        raise RuntimeError("trace")

    pipeline = _pipeline(LogLevel.ALL, sink, failures, build_stacktrace=broken_trace)
    pipeline.process_exception(ValueError("bad"), [], LogLevel.INFO)

    assert sink.messages == ["[ERROR] bad"]
    assert isinstance(failures[0], BuilderFailure)


def test_composite_level_is_rejected_as_invalid_argument() -> None:
    failures: list[BaseException] = []
    sink = MemorySink()

    _pipeline(LogLevel.ALL, sink, failures).process(LogLevel.WARN_AND_ABOVE, "ambiguous")

    assert sink.messages == []
    assert isinstance(failures[0], InvalidArgument)


def test_failing_failure_hook_is_swallowed(caplog: pytest.LogCaptureFixture) -> None:
    def broken(level: LogLevel, message: str) -> None:
        raise OSError("sink")

    def hook(error: BaseException) -> None:
        raise RuntimeError("hook")

    pipeline = MessagePipeline(
        sink=broken,
        builders=LogBuilders(full_tag, lambda tag, details: details),
        concerned_levels=LogLevel.ALL,
        on_failure=hook,
    )

    with caplog.at_level("DEBUG", logger="lib_log_easy.application.use_cases.pipeline"):
        assert pipeline.process(LogLevel.INFO, "x") is False

    assert "failure hook raised" in caplog.text


class Unprintable(Exception):
    def __str__(self) -> str:
        raise RuntimeError("no str")


def test_exception_message_failure_is_reported_and_stacktrace_still_emitted() -> None:
    sink = MemorySink()
    failures: list[BaseException] = []

    _pipeline(LogLevel.ALL, sink, failures).process_exception(Unprintable(), [], LogLevel.INFO)

    assert sink.messages == [f"[INFO] {STACKTRACE_PREFIX}0 frames of Unprintable"]
    assert isinstance(failures[0], BuilderFailure)
    assert str(failures[0]) == "exception message failed: RuntimeError: no str"
