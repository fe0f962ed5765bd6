"""
Typed models for the face annotator application.

Use the from_dict adapters to convert from the raw YAML config dicts.
"""

from .frame import ColorSpace, FrameData, convert_color
from .detection import BoundingBox
from .config import (
    Config,
    CameraConfig,
    ModelArtifactsConfig,
    ModelsConfig,
    DetectionConfig,
    AttributesConfig,
    LoopConfig,
    DisplayConfig,
    WebConfig,
)

__all__ = [
    # Frame
    "ColorSpace",
    "FrameData",
    "convert_color",
    # Detection
    "BoundingBox",
    # Config
    "Config",
    "CameraConfig",
    "ModelArtifactsConfig",
    "ModelsConfig",
    "DetectionConfig",
    "AttributesConfig",
    "LoopConfig",
    "DisplayConfig",
    "WebConfig",
]
