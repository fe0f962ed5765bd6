"""
Pipeline module for the face annotator.

The frame loop orchestrates the per-frame flow:
- Frame capture into a loop-owned buffer
- Face detection, attribute estimation and drawing (the processing step)
- Rendering to the configured sinks
"""

from .engine import FrameLoop, LoopState, LoopStats

__all__ = [
    "FrameLoop",
    "LoopState",
    "LoopStats",
]
