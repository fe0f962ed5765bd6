"""
Per-frame processing step: detect faces, estimate attributes, draw boxes.

The annotator never keeps a reference to the frame it is given. It works on a
converted copy and hands that copy back to the caller.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple

import cv2
import numpy as np

from attributes.estimator import AttributeEstimator
from detection.base import Detector
from models.detection import BoundingBox
from models.frame import ColorSpace, FrameData, convert_color

# Detectors expect OpenCV's channel order
DETECTOR_COLOR_SPACE = ColorSpace.BGR

Color = Tuple[int, ...]
AnnotationListener = Callable[[FrameData, List[BoundingBox], Optional[np.ndarray]], None]


def draw_boxes(image: np.ndarray, boxes: Sequence[BoundingBox], color: Color, thickness: int = 1) -> None:
    """Draw box outlines onto `image` in place."""
    for box in boxes:
        left, top, right, bottom = box.as_int_tuple()
        cv2.rectangle(image, (left, top), (right, bottom), color, thickness)


class Annotator:
    """
    Callable processing step (FrameData -> FrameData).

    Example:
        annotator = Annotator(FaceDetector(face_engine), AttributeEstimator(age_engine))
        annotated = annotator(frame_data)
    """

    def __init__(
        self,
        detector: Detector,
        attribute_estimator: Optional[AttributeEstimator] = None,
        draw_color: Color = (0, 255, 0, 255),
        thickness: int = 1,
    ):
        self._detector = detector
        self._attribute_estimator = attribute_estimator
        self.draw_color = tuple(int(c) for c in draw_color)
        self.thickness = thickness
        self.last_boxes: List[BoundingBox] = []
        self.last_attributes: Optional[np.ndarray] = None
        self._listeners: List[AnnotationListener] = []

    def add_listener(self, listener: AnnotationListener) -> None:
        """Register a function called with (frame, boxes, attributes) per frame."""
        self._listeners.append(listener)

    def __call__(self, frame: FrameData) -> FrameData:
        return self.annotate(frame)

    def annotate(self, frame: FrameData) -> FrameData:
        device_space = frame.color_space
        working = convert_color(frame.frame, device_space, DETECTOR_COLOR_SPACE)

        boxes = self._detect(working)

        attributes = None
        if boxes and self._attribute_estimator is not None:
            attributes = self._attribute_estimator.estimate(working, boxes)

        draw_boxes(working, boxes, self.draw_color, self.thickness)

        result = FrameData(
            frame=convert_color(working, DETECTOR_COLOR_SPACE, device_space),
            width=frame.width,
            height=frame.height,
            color_space=device_space,
            timestamp=frame.timestamp,
            frame_index=frame.frame_index,
            source=frame.source,
        )

        self.last_boxes = boxes
        self.last_attributes = attributes
        for listener in self._listeners:
            try:
                listener(result, boxes, attributes)
            except Exception as e:
                logging.warning(f"Annotation listener error: {e}")

        return result

    def _detect(self, image: np.ndarray) -> List[BoundingBox]:
        try:
            return self._detector.detect(image)
        except Exception as e:
            logging.warning(f"Face detection failed, frame left unannotated: {e}", exc_info=True)
            return []
