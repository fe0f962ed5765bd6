"""
Web preview sink: publishes frames to the shared preview state served by the
FastAPI app.
"""

from __future__ import annotations

from models.frame import ColorSpace, FrameData
from web.state import PreviewState
from .base import FrameSink


class WebPreviewSink(FrameSink):
    def __init__(self, state: PreviewState):
        self._state = state

    def render(self, frame: FrameData) -> None:
        # to_color returns a copy, so the loop's buffer is never shared
        self._state.set_frame(frame.to_color(ColorSpace.BGR))
        self._state.update_system_stats({"frame_count": frame.frame_index})
