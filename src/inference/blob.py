"""
Blob construction helpers built on cv2.dnn.blobFromImage.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple

import cv2
import numpy as np


def build_blob(
    image: np.ndarray,
    scale_factor: float = 1.0,
    size: Tuple[int, int] = (192, 144),
    mean: Optional[Sequence[float]] = None,
    swap_rb: bool = False,
) -> np.ndarray:
    """
    Build an NCHW float32 blob from an image.

    Args:
        image: H x W x C uint8 image.
        scale_factor: Multiplier applied after mean subtraction.
        size: Target (width, height) of the blob.
        mean: Per-channel values to subtract. Extra entries beyond the image's
            channel count are ignored.
        swap_rb: Swap the first and last channels.
    """
    width, height = int(size[0]), int(size[1])
    kwargs: Dict[str, Any] = {
        "scalefactor": scale_factor,
        "size": (width, height),
        "swapRB": swap_rb,
        "crop": False,
    }
    if mean is not None:
        channels = image.shape[2] if image.ndim == 3 else 1
        kwargs["mean"] = tuple(float(m) for m in list(mean)[:channels])

    return cv2.dnn.blobFromImage(image, **kwargs)
