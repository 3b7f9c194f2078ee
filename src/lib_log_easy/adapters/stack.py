"""Stack-frame capture and filtering for exception reports.

Purpose
-------
Produce short, readable stack listings by dropping frames of the interpreter
machinery and test runners while remembering where each kept frame sat in the
full stack.

Contents
--------
* :func:`capture_frames` – every frame of an exception or the current call.
* :class:`StackFilter` – pattern-based exclusion plus a frame-count cap.
* :func:`capture`, :func:`render`, :func:`filtered_stack_string` – module
  helpers using :data:`DEFAULT_STACK_FILTERS`.

System Role
-----------
:func:`capture_frames` is the frame-capture capability wired into the event bus,
which records the calling stack of a log call;
:func:`filtered_stack_string` renders the stack section of
:meth:`lib_log_easy.logger.ExtendedLogger.log_exception`.
"""

from __future__ import annotations

import inspect
import re
from collections.abc import Collection, Iterable, Sequence
from types import FrameType

from lib_log_easy.domain.frames import FrameDescriptor

DEFAULT_FRAME_COUNT = 5

DEFAULT_STACK_FILTERS: tuple[str, ...] = (
    r"^_pytest\.",
    r"^pluggy\.",
    r"^unittest\.",
    r"^importlib\.",
    r"^runpy\.",
    r"^threading\.",
    r"^asyncio\.",
    r"^concurrent\.",
    "^" + re.escape(__name__) + r"\.",
)
"""Patterns searched in ``module.function`` of each frame; matches are dropped."""


def capture_frames(exception: BaseException | None = None) -> list[FrameDescriptor]:
    """Return all frames of ``exception``'s traceback, or of the caller, newest first.

    An exception that was never raised has no traceback and yields no frames.
    """

    if exception is not None:
        entries: list[tuple[FrameType, int | None]] = []
        tb = exception.__traceback__
        while tb is not None:
            entries.append((tb.tb_frame, tb.tb_lineno))
            tb = tb.tb_next
        entries.reverse()
    else:
        entries = list(_walk(inspect.currentframe()))
    return [_describe(index, frame, lineno) for index, (frame, lineno) in enumerate(entries)]


class StackFilter:
    """Keep the first ``max_count`` frames not matching any exclusion pattern.

    Examples
    --------
    >>> StackFilter().capture(0)
    []
    """

    def __init__(self, patterns: Collection[str] | None = None) -> None:
        source = DEFAULT_STACK_FILTERS if patterns is None else tuple(patterns)
        self._patterns = tuple(re.compile(pattern) for pattern in source)

    @property
    def patterns(self) -> tuple[str, ...]:
        return tuple(pattern.pattern for pattern in self._patterns)

    def excludes(self, frame: FrameDescriptor) -> bool:
        """Return ``True`` when ``frame`` matches one of the exclusion patterns."""

        return any(pattern.search(frame.qualified_name) for pattern in self._patterns)

    def capture(self, max_count: int = DEFAULT_FRAME_COUNT, exception: BaseException | None = None) -> list[FrameDescriptor]:
        """Return up to ``max_count`` kept frames with their original indexes."""

        if max_count < 0:
            raise ValueError("max_count must not be negative")
        if max_count == 0:
            return []
        return self.select(capture_frames(exception), max_count)

    def select(self, frames: Iterable[FrameDescriptor], max_count: int) -> list[FrameDescriptor]:
        """Filter already captured ``frames``, preserving their order."""

        kept: list[FrameDescriptor] = []
        for frame in frames:
            if len(kept) >= max_count:
                break
            if not self.excludes(frame):
                kept.append(frame)
        return kept


def render(frames: Sequence[FrameDescriptor], indent: str = " ") -> str:
    """Render one line per frame, indented by two ``indent`` per position.

    Examples
    --------
    >>> frames = [FrameDescriptor(2, "a", True), FrameDescriptor(5, "b", True)]
    >>> print(render(frames, "."), end="")
    [2]: a
    ..[5]: b
    """

    return "".join(f"{indent * (2 * position)}[{frame.index}]: {frame.text}\n" for position, frame in enumerate(frames))


def capture(
    max_count: int = DEFAULT_FRAME_COUNT,
    exception: BaseException | None = None,
    patterns: Collection[str] | None = None,
) -> list[FrameDescriptor]:
    """Shortcut for ``StackFilter(patterns).capture(max_count, exception)``."""

    return StackFilter(patterns).capture(max_count, exception)


def filtered_stack_string(
    max_count: int = DEFAULT_FRAME_COUNT,
    exception: BaseException | None = None,
    patterns: Collection[str] | None = None,
    indent: str = " ",
) -> str:
    """Return :func:`render` of :func:`capture`; empty when no frame is kept."""

    return render(capture(max_count, exception, patterns), indent)


def _walk(frame: FrameType | None) -> Iterable[tuple[FrameType, int | None]]:
    while frame is not None:
        yield frame, frame.f_lineno
        frame = frame.f_back


def _describe(index: int, frame: FrameType, lineno: int | None) -> FrameDescriptor:
    return FrameDescriptor.describe(
        index,
        module=str(frame.f_globals.get("__name__", "")),
        function=frame.f_code.co_name,
        filename=frame.f_code.co_filename,
        lineno=lineno,
    )


__all__ = [
    "DEFAULT_FRAME_COUNT",
    "DEFAULT_STACK_FILTERS",
    "StackFilter",
    "capture",
    "capture_frames",
    "filtered_stack_string",
    "render",
]
