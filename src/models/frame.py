"""
FrameData model for captured video frames.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import cv2
import numpy as np


class ColorSpace(str, Enum):
    """Pixel layout of a frame buffer."""
    RGBA = "RGBA"
    BGRA = "BGRA"
    BGR = "BGR"
    RGB = "RGB"

    @property
    def channels(self) -> int:
        return 4 if self in (ColorSpace.RGBA, ColorSpace.BGRA) else 3


# (from, to) -> cv2 conversion code
_CONVERSIONS = {
    (ColorSpace.RGBA, ColorSpace.BGR): cv2.COLOR_RGBA2BGR,
    (ColorSpace.BGR, ColorSpace.RGBA): cv2.COLOR_BGR2RGBA,
    (ColorSpace.BGRA, ColorSpace.BGR): cv2.COLOR_BGRA2BGR,
    (ColorSpace.BGR, ColorSpace.BGRA): cv2.COLOR_BGR2BGRA,
    (ColorSpace.RGB, ColorSpace.BGR): cv2.COLOR_RGB2BGR,
    (ColorSpace.BGR, ColorSpace.RGB): cv2.COLOR_BGR2RGB,
    (ColorSpace.RGBA, ColorSpace.RGB): cv2.COLOR_RGBA2RGB,
    (ColorSpace.RGB, ColorSpace.RGBA): cv2.COLOR_RGB2RGBA,
    (ColorSpace.BGRA, ColorSpace.RGBA): cv2.COLOR_BGRA2RGBA,
    (ColorSpace.RGBA, ColorSpace.BGRA): cv2.COLOR_RGBA2BGRA,
}


def convert_color(
    image: np.ndarray,
    src: ColorSpace,
    dst: ColorSpace,
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Convert an image between color spaces.

    When `out` is given it is used as the destination buffer (no new
    allocation if its shape already matches).
    """
    src, dst = ColorSpace(src), ColorSpace(dst)
    if src == dst:
        if out is None:
            return image.copy()
        np.copyto(out, image)
        return out

    code = _CONVERSIONS.get((src, dst))
    if code is None:
        raise ValueError(f"Unsupported color conversion: {src.value} -> {dst.value}")
    if out is None:
        return cv2.cvtColor(image, code)
    result = cv2.cvtColor(image, code, dst=out)
    if result is not out:
        np.copyto(out, result)
    return out


@dataclass
class FrameData:
    """
    Metadata and payload for a captured video frame.

    Attributes:
        frame: The pixel buffer as a numpy array (H x W x C, uint8).
        width: Frame width in pixels.
        height: Frame height in pixels.
        color_space: Channel layout of `frame`.
        timestamp: Unix timestamp when frame was captured.
        frame_index: Sequential frame number since start.
        source: Identifier for the camera/video source.
    """
    frame: np.ndarray
    width: int
    height: int
    color_space: ColorSpace = ColorSpace.RGBA
    timestamp: float = 0.0
    frame_index: int = 0
    source: Optional[str] = None

    @classmethod
    def allocate(
        cls,
        width: int,
        height: int,
        color_space: ColorSpace = ColorSpace.RGBA,
        source: Optional[str] = None,
    ) -> "FrameData":
        """Create a zeroed, reusable frame buffer."""
        color_space = ColorSpace(color_space)
        pixels = np.zeros((height, width, color_space.channels), dtype=np.uint8)
        return cls(frame=pixels, width=width, height=height, color_space=color_space, source=source)

    @classmethod
    def from_numpy(
        cls,
        frame: np.ndarray,
        color_space: ColorSpace = ColorSpace.BGR,
        timestamp: float = 0.0,
        frame_index: int = 0,
        source: Optional[str] = None,
    ) -> "FrameData":
        """Create FrameData from a numpy array."""
        h, w = frame.shape[:2]
        return cls(
            frame=frame,
            width=w,
            height=h,
            color_space=ColorSpace(color_space),
            timestamp=timestamp,
            frame_index=frame_index,
            source=source,
        )

    @property
    def shape(self) -> Tuple[int, int, int]:
        """Return (height, width, channels)."""
        return self.frame.shape

    @property
    def size(self) -> Tuple[int, int]:
        """Return (width, height)."""
        return (self.width, self.height)

    def to_color(self, color_space: ColorSpace) -> np.ndarray:
        """Return a converted copy of the pixels."""
        return convert_color(self.frame, self.color_space, color_space)
