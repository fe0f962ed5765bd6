"""
Observation layer for live frame sources.

This layer abstracts where frames come from (USB camera, stream, video file)
from the processing loop. Each source implements the FrameSource interface and
fills a loop-owned FrameData buffer.
"""

from .base import FrameSource, FrameSourceError, SourceConfig
from .opencv_source import OpenCVCameraSource, OpenCVSourceConfig

__all__ = [
    "FrameSource",
    "FrameSourceError",
    "SourceConfig",
    "OpenCVCameraSource",
    "OpenCVSourceConfig",
]
