"""
Inference engine interface.

Engines are opaque: they take a preprocessed blob and return the network's raw
output tensor. Interpreting that tensor is the caller's job.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Protocol

import numpy as np


class EngineLoadError(RuntimeError):
    """Raised when an inference engine cannot be constructed."""


class InferenceEngine(Protocol):
    def set_input(self, blob: np.ndarray) -> None:
        ...

    def forward(self) -> np.ndarray:
        ...


@contextmanager
def inference_output(engine: InferenceEngine, blob: np.ndarray) -> Iterator[np.ndarray]:
    """
    Run one inference call and yield its output as a flat float32 array.

    Consumers finish with the output inside the with-block. Nothing here keeps
    a reference after exit, so the array is freed once the caller's own `as`
    binding goes out of scope.
    """
    engine.set_input(blob)
    yield np.asarray(engine.forward(), dtype=np.float32).ravel()
