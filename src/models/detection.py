"""
Detection models for face detection results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class BoundingBox:
    """
    A bounding box in frame pixel coordinates.

    Attributes:
        left: Left edge x coordinate.
        top: Top edge y coordinate.
        right: Right edge x coordinate.
        bottom: Bottom edge y coordinate.
        confidence: Score of the detector record the box came from.
    """
    left: float
    top: float
    right: float
    bottom: float
    confidence: float = 1.0

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> Tuple[float, float]:
        return ((self.left + self.right) / 2, (self.top + self.bottom) / 2)

    @property
    def area(self) -> float:
        return max(self.width, 0.0) * max(self.height, 0.0)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        """Return as (left, top, right, bottom) tuple."""
        return (self.left, self.top, self.right, self.bottom)

    def as_int_tuple(self) -> Tuple[int, int, int, int]:
        """Return as integer (left, top, right, bottom) tuple."""
        return (int(self.left), int(self.top), int(self.right), int(self.bottom))

    def is_within(self, frame_width: float, frame_height: float) -> bool:
        """True if 0 <= left <= right <= width and 0 <= top <= bottom <= height."""
        return (
            0 <= self.left <= self.right <= frame_width
            and 0 <= self.top <= self.bottom <= frame_height
        )

    @classmethod
    def from_tuple(cls, t: Tuple[float, float, float, float], confidence: float = 1.0) -> "BoundingBox":
        """Create from (left, top, right, bottom) tuple."""
        return cls(left=t[0], top=t[1], right=t[2], bottom=t[3], confidence=confidence)
