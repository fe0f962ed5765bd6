"""
Frame annotation: the processing step run once per loop iteration.
"""

from .annotator import Annotator, draw_boxes

__all__ = ["Annotator", "draw_boxes"]
