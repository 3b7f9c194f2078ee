from __future__ import annotations

import threading
from collections.abc import Sequence

from lib_log_easy.adapters import MemorySink, full_tag
from lib_log_easy.application.use_cases import EventBus, LogBuilders, MessagePipeline
from lib_log_easy.domain import FrameDescriptor, LogLevel
from lib_log_easy.errors import MalformedFormat


class PipelineListener:
    """Minimal listener forwarding into its own pipeline."""

    def __init__(self, mask: LogLevel) -> None:
        self.sink = MemorySink()
        self.pipeline = MessagePipeline(
            sink=self.sink,
            builders=LogBuilders(full_tag, lambda tag, details: f"{tag} {details}"),
            concerned_levels=mask,
        )

    def handle_message(self, level: LogLevel, details: str) -> None:
        self.pipeline.process(level, details)

    def handle_exception(
        self,
        exception: BaseException,
        frames: Sequence[FrameDescriptor],
        stacktrace_level: LogLevel | None = None,
    ) -> None:
        self.pipeline.process_exception(exception, frames, stacktrace_level)


class ExplodingListener:
    def handle_message(self, level: LogLevel, details: str) -> None:
        raise RuntimeError("listener broke")

    def handle_exception(self, exception, frames, stacktrace_level=None) -> None:
        raise RuntimeError("listener broke")


def test_register_is_identity_deduplicated() -> None:
    bus = EventBus()
    listener = PipelineListener(LogLevel.ALL)

    assert bus.register(listener) is True
    assert bus.register(listener) is False
    assert len(bus) == 1

    bus.dispatch_message(LogLevel.INFO, "once")

    assert listener.sink.messages == ["[INFO] once"]


def test_unregister_stops_delivery() -> None:
    bus = EventBus()
    listener = PipelineListener(LogLevel.ALL)
    bus.register(listener)

    assert bus.unregister(listener) is True
    assert bus.unregister(listener) is False
    assert listener not in bus

    bus.dispatch_message(LogLevel.ERROR, "nobody hears")

    assert listener.sink.messages == []


def test_each_listener_applies_its_own_mask() -> None:
    bus = EventBus()
    debug = PipelineListener(LogLevel.DEBUG_AND_ABOVE)
    warn = PipelineListener(LogLevel.WARN_AND_ABOVE)
    bus.register(debug)
    bus.register(warn)

    bus.dispatch_message(LogLevel.DEBUG, "details")
    bus.dispatch_message(LogLevel.WARN, "careful")

    assert debug.sink.messages == ["[DEBUG] details", "[WARN] careful"]
    assert warn.sink.messages == ["[WARN] careful"]
    assert bus.listeners == (debug, warn)


def test_failing_listener_does_not_stop_others() -> None:
    failures: list[BaseException] = []
    bus = EventBus(on_failure=failures.append)
    survivor = PipelineListener(LogLevel.ALL)
    bus.register(ExplodingListener())
    bus.register(survivor)

    bus.dispatch_message(LogLevel.INFO, "still delivered")
    bus.dispatch_exception(ValueError("bad"))

    assert survivor.sink.messages == ["[INFO] still delivered", "[ERROR] bad"]
    assert [str(error) for error in failures] == ["listener broke", "listener broke"]


def test_malformed_format_skips_dispatch_and_reports() -> None:
    failures: list[BaseException] = []
    bus = EventBus(on_failure=failures.append)
    listener = PipelineListener(LogLevel.ALL)
    bus.register(listener)

    bus.dispatch_formatted(LogLevel.INFO, "{0} and {1}", "one")
    bus.dispatch_formatted(LogLevel.INFO, "{0} and {1}", "one", "two")

    assert listener.sink.messages == ["[INFO] one and two"]
    assert isinstance(failures[0], MalformedFormat)


def test_exception_frames_are_captured_once_for_all_listeners() -> None:
    captured: list[BaseException | None] = []
    received: list[Sequence[FrameDescriptor]] = []

    def capture(exception: BaseException | None = None) -> Sequence[FrameDescriptor]:
        captured.append(exception)
        return (FrameDescriptor(0, "frame", True),)

    class Recorder(PipelineListener):
        def handle_exception(self, exception, frames, stacktrace_level=None) -> None:
            received.append(frames)

    bus = EventBus(capture_frames=capture)
    bus.register(Recorder(LogLevel.ALL))
    bus.register(Recorder(LogLevel.ALL))
    error = KeyError("x")

    bus.dispatch_exception(error, LogLevel.DEBUG)
    bus.dispatch_exception(None)

    assert captured == [None]
    assert len(received) == 2
    assert received[0] is received[1]


def test_listener_may_unregister_itself_while_dispatching() -> None:
    bus = EventBus()
    seen: list[str] = []

    class OneShot(PipelineListener):
        def handle_message(self, level: LogLevel, details: str) -> None:
            seen.append(details)
            bus.unregister(self)

    bus.register(OneShot(LogLevel.ALL))
    bus.dispatch_message(LogLevel.INFO, "first")
    bus.dispatch_message(LogLevel.INFO, "second")

    assert seen == ["first"]
    assert len(bus) == 0


def test_register_and_unregister_while_dispatching_from_another_thread() -> None:
    failures: list[BaseException] = []
    bus = EventBus(on_failure=failures.append)
    listeners = [PipelineListener(LogLevel.ALL) for _ in range(40)]
    stop = threading.Event()

    def dispatcher() -> None:
        while not stop.is_set():
            bus.dispatch_message(LogLevel.INFO, "tick")

    def registrar(chunk: list[PipelineListener]) -> None:
        for _ in range(50):
            for listener in chunk:
                bus.register(listener)
                bus.unregister(listener)
        for listener in chunk:
            bus.register(listener)

    sender = threading.Thread(target=dispatcher)
    workers = [threading.Thread(target=registrar, args=(listeners[index::4],)) for index in range(4)]
    sender.start()
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    stop.set()
    sender.join()

    bus.dispatch_message(LogLevel.INFO, "final")

    assert failures == []
    assert len(bus) == 40
    assert all(listener.sink.messages[-1] == "[INFO] final" for listener in listeners)
