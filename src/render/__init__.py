"""
Render layer: sinks that display or publish annotated frames.
"""

from .base import FrameSink, NullSink
from .web import WebPreviewSink
from .window import WindowSink

__all__ = ["FrameSink", "NullSink", "WebPreviewSink", "WindowSink"]
