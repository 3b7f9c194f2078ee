"""Port for capturing the frames of a call stack."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from lib_log_easy.domain.frames import FrameDescriptor


@runtime_checkable
class FrameCapturePort(Protocol):
    """Return the frames of ``exception`` or of the current call, newest first."""

    def __call__(self, exception: BaseException | None = None) -> Sequence[FrameDescriptor]: ...


__all__ = ["FrameCapturePort"]
