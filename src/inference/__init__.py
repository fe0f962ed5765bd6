"""
Inference layer: opaque engines plus the blob primitive that feeds them.
"""

from .backend import EngineLoadError, InferenceEngine, inference_output
from .blob import build_blob
from .opencv_dnn import ModelArtifacts, OpenCVDnnEngine

__all__ = [
    "EngineLoadError",
    "InferenceEngine",
    "inference_output",
    "build_blob",
    "ModelArtifacts",
    "OpenCVDnnEngine",
]
