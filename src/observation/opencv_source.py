"""
OpenCV-based camera source.

Supports:
- USB webcams (device_id as int, e.g., 0)
- IP camera / stream URLs (device_id as str)
- Video files (device_id as file path)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import cv2
import numpy as np

from models.frame import ColorSpace, FrameData, convert_color
from .base import FrameSource, FrameSourceError, SourceConfig

# cv2.VideoCapture always decodes to BGR
CAPTURE_COLOR_SPACE = ColorSpace.BGR


@dataclass
class OpenCVSourceConfig(SourceConfig):
    """
    Configuration for OpenCV-based frame sources.

    Attributes:
        device_id: Camera index (int), stream URL (str), or file path (str).
        fps: Requested capture rate for USB cameras.
        buffer_size: OpenCV capture buffer size (reduces latency for live feeds).
        max_retries: Maximum attempts to open the device.
        warmup_s: Pause after opening a live device.
    """
    device_id: Union[int, str] = 0
    fps: Optional[int] = None
    buffer_size: int = 1
    max_retries: int = 3
    warmup_s: float = 0.5

    @classmethod
    def from_camera_config(cls, camera_cfg: Dict[str, Any], source_id: str = "camera") -> "OpenCVSourceConfig":
        """
        Adapter: Create OpenCVSourceConfig from the camera config dict.

        Args:
            camera_cfg: Camera configuration dict (from config.yaml).
            source_id: Identifier for this source.
        """
        resolution = tuple(camera_cfg.get("resolution", (640, 480)))
        return cls(
            source_id=source_id,
            resolution=resolution,
            color_space=ColorSpace(camera_cfg.get("color_space", "RGBA")),
            device_id=camera_cfg.get("device_id", 0),
            fps=camera_cfg.get("fps"),
            buffer_size=camera_cfg.get("buffer_size", 1),
            max_retries=camera_cfg.get("max_retries", 3),
        )


class OpenCVCameraSource(FrameSource):
    """
    Frame source wrapping cv2.VideoCapture.

    Captured frames are resized to the configured resolution when the device
    delivers another size, then converted into the buffer's color space.
    """

    def __init__(self, config: OpenCVSourceConfig):
        super().__init__(config)
        self._opencv_config = config
        self._cap: Optional[cv2.VideoCapture] = None

    @property
    def device_id(self) -> Union[int, str]:
        return self._opencv_config.device_id

    def open(self) -> None:
        if self._is_open:
            return

        self._initialize(retry_count=0)
        self._is_open = True
        self._frame_index = 0

        logging.info(
            f"OpenCVCameraSource opened: source_id={self.source_id}, "
            f"device={self.device_id}, resolution={self.resolution}"
        )

    def _initialize(self, retry_count: int = 0) -> None:
        """Initialize the capture device, retrying with backoff."""
        if self._cap is not None:
            self._cap.release()
            self._cap = None

        if retry_count > 0:
            wait_time = min(2 ** retry_count, 10)
            logging.info(
                f"Retrying camera initialization (attempt {retry_count + 1}/"
                f"{self._opencv_config.max_retries}) after {wait_time}s"
            )
            time.sleep(wait_time)

        self._cap = cv2.VideoCapture(self.device_id)

        if not self._cap.isOpened():
            if retry_count < self._opencv_config.max_retries - 1:
                logging.warning(f"Failed to open device {self.device_id}, retrying...")
                return self._initialize(retry_count + 1)
            raise FrameSourceError(
                f"Failed to open device {self.device_id} after "
                f"{self._opencv_config.max_retries} attempts"
            )

        # Properties only apply to local cameras
        if isinstance(self.device_id, int):
            w, h = self.resolution
            self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, w)
            self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, h)
            if self._opencv_config.fps:
                self._cap.set(cv2.CAP_PROP_FPS, self._opencv_config.fps)
            self._cap.set(cv2.CAP_PROP_BUFFERSIZE, self._opencv_config.buffer_size)

            actual_w = self._cap.get(cv2.CAP_PROP_FRAME_WIDTH)
            actual_h = self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT)
            logging.info(f"Camera actual resolution: ({actual_w}x{actual_h})")

            if self._opencv_config.warmup_s > 0:
                time.sleep(self._opencv_config.warmup_s)

    def read_into(self, buffer: FrameData) -> FrameData:
        if not self._is_open or self._cap is None:
            raise FrameSourceError(f"Source {self.source_id} is not open")

        ret, frame = self._cap.read()
        if not ret or frame is None:
            raise FrameSourceError(f"Failed to read frame from device {self.device_id}")

        self._fill(buffer, frame)
        self._frame_index += 1
        buffer.timestamp = time.time()
        buffer.frame_index = self._frame_index
        buffer.source = self.source_id
        return buffer

    @staticmethod
    def _fill(buffer: FrameData, frame: np.ndarray) -> None:
        """Resize (if needed) and color-convert a captured BGR frame into the buffer."""
        if frame.shape[1] != buffer.width or frame.shape[0] != buffer.height:
            frame = cv2.resize(frame, (buffer.width, buffer.height))
        convert_color(frame, CAPTURE_COLOR_SPACE, buffer.color_space, out=buffer.frame)

    def close(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None
        self._is_open = False
        logging.info(f"OpenCVCameraSource closed: source_id={self.source_id}")
