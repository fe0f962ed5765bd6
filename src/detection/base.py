"""
Detection interfaces.

Detectors take a frame in the detector-native (BGR) color space and return
boxes in that frame's pixel space.
"""

from __future__ import annotations

from typing import List

import numpy as np

from models.detection import BoundingBox


class Detector:
    """Detector interface returning boxes in pixel-space."""

    def detect(self, frame: np.ndarray) -> List[BoundingBox]:
        raise NotImplementedError
