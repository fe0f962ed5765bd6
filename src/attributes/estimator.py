"""
Age/gender attribute estimation on the primary face.

The estimator picks one box, builds a fixed-size blob and runs the attribute
network. The raw output tensor is returned as-is for downstream consumers.

By default the blob is built from the whole frame, not the face crop. Set
`crop_to_box=True` to run the network on the selected face only.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, Optional, Sequence, Tuple

import numpy as np

from inference.backend import InferenceEngine
from inference.blob import build_blob
from models.detection import BoundingBox


class BoxSelection(str, Enum):
    """Which detected box the attribute network runs on."""
    FIRST = "first"
    HIGHEST_CONFIDENCE = "highest_confidence"
    LARGEST_AREA = "largest_area"


_SELECTORS: Dict[BoxSelection, Callable[[Sequence[BoundingBox]], BoundingBox]] = {
    BoxSelection.FIRST: lambda boxes: boxes[0],
    BoxSelection.HIGHEST_CONFIDENCE: lambda boxes: max(boxes, key=lambda b: b.confidence),
    BoxSelection.LARGEST_AREA: lambda boxes: max(boxes, key=lambda b: b.area),
}


def select_box(boxes: Sequence[BoundingBox], selection: BoxSelection = BoxSelection.FIRST) -> Optional[BoundingBox]:
    """Pick one box; ties keep detector order."""
    if not boxes:
        return None
    return _SELECTORS[BoxSelection(selection)](boxes)


class AttributeEstimator:
    def __init__(
        self,
        engine: InferenceEngine,
        input_size: Tuple[int, int] = (62, 62),
        selection: BoxSelection = BoxSelection.FIRST,
        crop_to_box: bool = False,
        scale_factor: float = 1.0,
    ):
        self._engine = engine
        self.input_size = (int(input_size[0]), int(input_size[1]))
        self.selection = BoxSelection(selection)
        self.crop_to_box = crop_to_box
        self.scale_factor = scale_factor

    def estimate(self, frame: np.ndarray, boxes: Sequence[BoundingBox]) -> Optional[np.ndarray]:
        """
        Run the attribute network for the selected box.

        Returns the raw output tensor, or None when there is no box, the crop
        is empty, or the engine fails. Engine failures are logged, not raised.
        """
        box = select_box(boxes, self.selection)
        if box is None:
            return None

        image = self._crop(frame, box) if self.crop_to_box else frame
        if image.size == 0:
            logging.debug(f"Empty attribute crop for box {box.as_tuple()}")
            return None

        try:
            blob = build_blob(image, scale_factor=self.scale_factor, size=self.input_size)
            self._engine.set_input(blob)
            out = np.asarray(self._engine.forward())
        except Exception as e:
            logging.warning(f"Attribute inference failed: {e}", exc_info=True)
            return None

        logging.debug(f"Attribute output: shape={out.shape}, values={out.ravel()[:8]}")
        return out

    @staticmethod
    def _crop(frame: np.ndarray, box: BoundingBox) -> np.ndarray:
        left, top, right, bottom = box.as_int_tuple()
        return frame[top:bottom, left:right]
