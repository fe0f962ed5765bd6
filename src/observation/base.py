"""
FrameSource interface for live video sources.

A frame source fills a caller-owned frame buffer on demand. The buffer is
allocated once by the consumer and refilled in place on every read, so no
per-frame allocation happens on the capture path.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict

from models.frame import ColorSpace, FrameData


class FrameSourceError(RuntimeError):
    """Raised when a frame source cannot be opened or read."""


@dataclass
class SourceConfig:
    """
    Base configuration for frame sources.

    Attributes:
        source_id: Unique identifier for this source (e.g., "cam-01").
        resolution: Frame size as (width, height).
        color_space: Device-native color space of the produced frames.
        metadata: Additional source-specific configuration.
    """
    source_id: str = "default"
    resolution: tuple[int, int] = (640, 480)
    color_space: ColorSpace = ColorSpace.RGBA
    metadata: Dict[str, Any] = field(default_factory=dict)


class FrameSource(ABC):
    """
    Abstract base class for frame sources.

    Lifecycle:
        1. Create instance with config
        2. Call open() to bind the capture device
        3. Call allocate_buffer() once, then read_into(buffer) repeatedly
        4. Call close() to release resources

    Can also be used as a context manager:
        with OpenCVCameraSource(config) as source:
            buffer = source.allocate_buffer()
            source.read_into(buffer)
    """

    def __init__(self, config: SourceConfig):
        self._config = config
        self._is_open = False
        self._frame_index = 0

    @property
    def source_id(self) -> str:
        """Unique identifier for this source."""
        return self._config.source_id

    @property
    def resolution(self) -> tuple[int, int]:
        """Frame size as (width, height)."""
        return self._config.resolution

    @property
    def color_space(self) -> ColorSpace:
        return ColorSpace(self._config.color_space)

    @property
    def is_open(self) -> bool:
        """Whether the source is currently open and ready to read."""
        return self._is_open

    @property
    def frame_index(self) -> int:
        """Number of frames read since open."""
        return self._frame_index

    def allocate_buffer(self) -> FrameData:
        """Allocate a frame buffer matching this source's size and color space."""
        width, height = self.resolution
        return FrameData.allocate(width, height, self.color_space, source=self.source_id)

    @abstractmethod
    def open(self) -> None:
        """
        Open/initialize the frame source.

        Raises:
            FrameSourceError: If the source cannot be opened.
        """

    @abstractmethod
    def read_into(self, buffer: FrameData) -> FrameData:
        """
        Fill `buffer` with the next frame and return it.

        Raises:
            FrameSourceError: If no frame could be read.
        """

    @abstractmethod
    def close(self) -> None:
        """Release the source. Safe to call multiple times."""

    def __enter__(self) -> "FrameSource":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
