"""
Bootstrap: resolve inference engines, the frame source and the sinks, then
wire them into a FrameLoop.

The two networks load concurrently; both must be ready before the loop is
built. Any engine load failure propagates and the loop never starts.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional, Tuple

from annotation.annotator import Annotator
from attributes.estimator import AttributeEstimator
from detection.face_detector import FaceDetector, FaceDetectorConfig
from inference.backend import InferenceEngine
from inference.opencv_dnn import ModelArtifacts, OpenCVDnnEngine
from models.config import Config, ModelArtifactsConfig
from observation.base import FrameSource
from observation.opencv_source import OpenCVCameraSource, OpenCVSourceConfig
from pipeline.engine import FrameLoop
from render.base import FrameSink, NullSink
from render.web import WebPreviewSink
from render.window import WindowSink
from web.state import PreviewState
from .context import RuntimeContext

EngineFactory = Callable[[ModelArtifacts, str], InferenceEngine]


def _default_engine_factory(artifacts: ModelArtifacts, name: str) -> InferenceEngine:
    return OpenCVDnnEngine(artifacts, name=name)


def _artifacts(cfg: ModelArtifactsConfig) -> ModelArtifacts:
    return ModelArtifacts(model=cfg.model, config=cfg.config)


def load_engines(
    cfg: Config,
    engine_factory: EngineFactory = _default_engine_factory,
) -> Tuple[InferenceEngine, Optional[InferenceEngine]]:
    """
    Load the face and attribute networks concurrently.

    Returns:
        (face_engine, attribute_engine); attribute_engine is None when
        attribute estimation is disabled or has no artifacts configured.
    """
    age_cfg = cfg.models.age_gender if cfg.attributes.enabled else None
    logging.info("Loading inference engines")

    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="engine-load") as pool:
        face_future = pool.submit(engine_factory, _artifacts(cfg.models.face_detection), "face_detection")
        age_future = pool.submit(engine_factory, _artifacts(age_cfg), "age_gender") if age_cfg else None

        # Join both before raising
        face_exc = face_future.exception()
        age_exc = age_future.exception() if age_future is not None else None

    if face_exc is not None:
        raise face_exc
    if age_exc is not None:
        raise age_exc

    face_engine = face_future.result()
    age_engine = age_future.result() if age_future is not None else None
    logging.info(f"Inference engines ready (attributes={'on' if age_engine else 'off'})")
    return face_engine, age_engine


def create_source(cfg: Config) -> FrameSource:
    return OpenCVCameraSource(OpenCVSourceConfig.from_camera_config(cfg.camera.to_dict(), source_id="main-camera"))


def create_sinks(cfg: Config, display: bool = False, web: bool = False) -> Tuple[List[FrameSink], Optional[PreviewState]]:
    sinks: List[FrameSink] = []
    preview_state = None

    if display or cfg.display.enabled:
        sinks.append(WindowSink(cfg.display.window_name))
    if web or cfg.web.enabled:
        preview_state = PreviewState()
        sinks.append(WebPreviewSink(preview_state))
    if not sinks:
        sinks.append(NullSink())
    return sinks, preview_state


def create_annotator(
    cfg: Config,
    face_engine: InferenceEngine,
    attribute_engine: Optional[InferenceEngine] = None,
) -> Annotator:
    det = cfg.detection
    detector = FaceDetector(
        face_engine,
        FaceDetectorConfig(
            confidence_threshold=float(det.confidence_threshold),
            input_size=(int(det.input_size[0]), int(det.input_size[1])),
            mean=tuple(det.mean),
            box_scale=float(det.box_scale),
        ),
    )

    estimator = None
    if attribute_engine is not None:
        attrs = cfg.attributes
        estimator = AttributeEstimator(
            attribute_engine,
            input_size=(int(attrs.input_size[0]), int(attrs.input_size[1])),
            selection=attrs.selection,
            crop_to_box=bool(attrs.crop_to_box),
        )

    return Annotator(detector, estimator, draw_color=tuple(det.draw_color), thickness=int(det.line_thickness))


def bootstrap(
    config: Dict[str, Any],
    display: bool = False,
    web: bool = False,
    engine_factory: EngineFactory = _default_engine_factory,
    source: Optional[FrameSource] = None,
) -> RuntimeContext:
    """Resolve every collaborator the frame loop needs."""
    cfg = Config.from_dict(config)
    face_engine, attribute_engine = load_engines(cfg, engine_factory)
    sinks, preview_state = create_sinks(cfg, display=display, web=web)

    return RuntimeContext(
        config=config,
        face_engine=face_engine,
        attribute_engine=attribute_engine,
        source=source if source is not None else create_source(cfg),
        sinks=sinks,
        preview_state=preview_state,
    )


def create_loop(ctx: RuntimeContext) -> FrameLoop:
    """Build the annotator and frame loop from a resolved context."""
    cfg = Config.from_dict(ctx.config)
    annotator = create_annotator(cfg, ctx.face_engine, ctx.attribute_engine)
    loop = FrameLoop(ctx.source, annotator, ctx.sinks, cfg.loop)

    if ctx.preview_state is not None:
        state = ctx.preview_state
        annotator.add_listener(lambda frame, boxes, attributes: state.update_system_stats({"faces": len(boxes)}))
        loop.add_callback(lambda frame: state.update_system_stats({"last_iteration_s": loop.stats.last_iteration_s}))

    return loop
