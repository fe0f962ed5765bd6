from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from inference.backend import InferenceEngine
from observation.base import FrameSource
from render.base import FrameSink
from web.state import PreviewState


@dataclass
class RuntimeContext:
    """Holds the resolved collaborators of one run; avoids global singletons."""

    config: dict
    face_engine: InferenceEngine
    attribute_engine: Optional[InferenceEngine]
    source: FrameSource
    sinks: List[FrameSink] = field(default_factory=list)
    preview_state: Optional[PreviewState] = None
    web_thread: Any = None
