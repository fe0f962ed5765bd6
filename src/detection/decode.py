"""
Decode SSD-style detector output into frame-space bounding boxes.

The detector returns a flat float tensor made of 7-float records:

    [batch_id, class_id, confidence, x1, y1, x2, y2]

with coordinates normalized to [0, 1] over the input blob. Decoding keeps the
confident records, maps them onto the frame, enlarges each box by a fraction of
its own size and clamps it to the frame.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union

import numpy as np

from models.detection import BoundingBox

RECORD_SIZE = 7
CONFIDENCE_OFFSET = 2
COORDS_OFFSET = 3

# Detector boxes sit tight around the facial landmarks
DEFAULT_BOX_SCALE = 0.25

RawOutput = Union[np.ndarray, Sequence[float]]

def expand_box(box: BoundingBox, scale: float) -> BoundingBox:
    """Grow a box by `scale` times its width/height on each side."""
    dx = scale * box.width
    dy = scale * box.height
    return BoundingBox(
        left=box.left - dx,
        top=box.top - dy,
        right=box.right + dx,
        bottom=box.bottom + dy,
        confidence=box.confidence,
    )


def clamp_box(box: BoundingBox, frame_width: float, frame_height: float) -> BoundingBox:
    """
    Clamp a box to the frame.

    Only left/top are raised to 0 and right/bottom lowered to the frame size;
    a box lying outside the frame comes out degenerate (left > right).
    """
    return BoundingBox(
        left=max(box.left, 0.0),
        top=max(box.top, 0.0),
        right=min(box.right, float(frame_width)),
        bottom=min(box.bottom, float(frame_height)),
        confidence=box.confidence,
    )


def decode_boxes(
    raw_output: Optional[RawOutput],
    frame_width: int,
    frame_height: int,
    confidence_threshold: float = 0.5,
    scale: float = DEFAULT_BOX_SCALE,
) -> List[BoundingBox]:
    """
    Convert raw detector output into clamped, expanded boxes.

    Args:
        raw_output: Flat (or any-shaped) detector output.
        frame_width: Width of the frame the boxes are mapped onto.
        frame_height: Height of the frame the boxes are mapped onto.
        confidence_threshold: Records scoring below this are dropped.
        scale: Expansion fraction applied on every side.

    Returns:
        Boxes in detector record order. Never raises on malformed output:
        trailing partial records, records with a non-finite score or
        coordinate, and boxes that end up entirely outside the frame are
        skipped.
    """
    if raw_output is None:
        return []

    data = np.asarray(raw_output, dtype=np.float32).ravel()
    count = data.size // RECORD_SIZE
    if count == 0:
        return []

    records = data[: count * RECORD_SIZE].reshape(count, RECORD_SIZE)
    # Compare in the precision the scores arrive in
    threshold = np.float32(confidence_threshold)

    boxes: List[BoundingBox] = []
    for record in records:
        # batch and class ids are never read
        if not np.isfinite(record[CONFIDENCE_OFFSET:]).all():
            continue

        if record[CONFIDENCE_OFFSET] < threshold:
            continue
        confidence = float(record[CONFIDENCE_OFFSET])

        x1, y1, x2, y2 = record[COORDS_OFFSET:COORDS_OFFSET + 4]
        box = BoundingBox(
            left=float(x1) * frame_width,
            top=float(y1) * frame_height,
            right=float(x2) * frame_width,
            bottom=float(y2) * frame_height,
            confidence=confidence,
        )
        box = clamp_box(expand_box(box, scale), frame_width, frame_height)

        if box.left > box.right or box.top > box.bottom:
            logging.debug(f"Dropping box outside frame: {box.as_tuple()}")
            continue

        boxes.append(box)

    return boxes
