"""Protocols the application layer depends on."""

from __future__ import annotations

from .frames import FrameCapturePort
from .listener import LogListenerPort
from .sink import SinkPort
from .time import StopwatchPort

__all__ = [
    "FrameCapturePort",
    "LogListenerPort",
    "SinkPort",
    "StopwatchPort",
]
