"""
FrameSink interface for rendering processed frames.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from models.frame import FrameData


class FrameSink(ABC):
    """
    Destination for annotated frames.

    A sink must not keep a reference to the frame passed to render(); copy it
    if it needs the pixels after the call returns.
    """

    @property
    def stop_requested(self) -> bool:
        """True once the sink asks the loop to stop (e.g. window closed)."""
        return False

    @abstractmethod
    def render(self, frame: FrameData) -> None:
        """Display or publish one frame."""

    def close(self) -> None:
        """Release display resources. Safe to call multiple times."""


class NullSink(FrameSink):
    """Discards frames; used for headless runs."""

    def render(self, frame: FrameData) -> None:
        pass
