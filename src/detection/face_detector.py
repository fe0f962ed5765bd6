"""
Face detector backed by an SSD-style inference engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from inference.backend import InferenceEngine, inference_output
from inference.blob import build_blob
from models.detection import BoundingBox
from .base import Detector
from .decode import DEFAULT_BOX_SCALE, decode_boxes


@dataclass(frozen=True)
class FaceDetectorConfig:
    confidence_threshold: float = 0.5
    input_size: Tuple[int, int] = (192, 144)
    mean: Sequence[float] = field(default_factory=lambda: (104.0, 117.0, 123.0, 0.0))
    scale_factor: float = 1.0
    box_scale: float = DEFAULT_BOX_SCALE


class FaceDetector(Detector):
    def __init__(self, engine: InferenceEngine, cfg: Optional[FaceDetectorConfig] = None):
        self._engine = engine
        self.cfg = cfg if cfg is not None else FaceDetectorConfig()

    def detect(self, frame: np.ndarray) -> List[BoundingBox]:
        height, width = frame.shape[:2]
        blob = build_blob(
            frame,
            scale_factor=self.cfg.scale_factor,
            size=self.cfg.input_size,
            mean=self.cfg.mean,
        )
        with inference_output(self._engine, blob) as out:
            return decode_boxes(
                out,
                frame_width=width,
                frame_height=height,
                confidence_threshold=self.cfg.confidence_threshold,
                scale=self.cfg.box_scale,
            )
