"""
Face Annotator - Detection Module

This module turns detector output into frame-space face boxes.
"""

from .base import Detector
from .decode import clamp_box, decode_boxes, expand_box
from .face_detector import FaceDetector, FaceDetectorConfig

__all__ = ['Detector', 'FaceDetector', 'FaceDetectorConfig', 'decode_boxes', 'expand_box', 'clamp_box']
