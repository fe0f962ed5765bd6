"""
Local OpenCV window sink.
"""

from __future__ import annotations

import logging

import cv2

from models.frame import ColorSpace, FrameData
from .base import FrameSink


class WindowSink(FrameSink):
    """Shows frames with cv2.imshow; pressing 'q' requests a stop."""

    def __init__(self, window_name: str = "Face Annotator"):
        self.window_name = window_name
        self._stop_requested = False
        self._opened = False

    @property
    def stop_requested(self) -> bool:
        return self._stop_requested

    def render(self, frame: FrameData) -> None:
        # imshow expects BGR
        cv2.imshow(self.window_name, frame.to_color(ColorSpace.BGR))
        self._opened = True
        key = cv2.waitKey(1) & 0xFF
        if key == ord('q'):
            logging.info("Display window: quit requested")
            self._stop_requested = True

    def close(self) -> None:
        if self._opened:
            cv2.destroyWindow(self.window_name)
            self._opened = False
