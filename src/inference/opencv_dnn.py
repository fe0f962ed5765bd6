"""
OpenCV DNN inference engine.

Wraps a cv2.dnn.Net read from a topology/weights pair (Caffe prototxt +
caffemodel, OpenVINO xml + bin, ...). cv2.dnn.readNet picks the framework from
the file extensions.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import cv2
import numpy as np

from .backend import EngineLoadError, InferenceEngine


@dataclass(frozen=True)
class ModelArtifacts:
    """Paths of the two files that make up one network."""
    model: str
    config: str = ""

    def missing(self) -> list[str]:
        """Return the artifact paths that do not exist on disk."""
        paths = [self.model] + ([self.config] if self.config else [])
        return [p for p in paths if not p or not os.path.exists(p)]


class OpenCVDnnEngine(InferenceEngine):
    def __init__(self, artifacts: ModelArtifacts, name: str = "net"):
        self.artifacts = artifacts
        self.name = name

        missing = artifacts.missing()
        if missing:
            raise EngineLoadError(f"{name}: model artifacts not found: {', '.join(missing)}")

        try:
            self._net = cv2.dnn.readNet(artifacts.model, artifacts.config)
        except cv2.error as e:
            raise EngineLoadError(f"{name}: failed to read network: {e}") from e

        if self._net.empty():
            raise EngineLoadError(f"{name}: network loaded empty from {artifacts.model}")

        logging.info(f"Loaded {name} network: model={artifacts.model}, config={artifacts.config}")

    def set_input(self, blob: np.ndarray) -> None:
        self._net.setInput(blob)

    def forward(self) -> np.ndarray:
        return self._net.forward()
