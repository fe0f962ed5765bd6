"""
Typed configuration models matching the YAML config structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class CameraConfig:
    """Camera configuration."""
    device_id: Union[int, str] = 0
    resolution: List[int] = field(default_factory=lambda: [640, 480])
    fps: int = 30
    color_space: str = "RGBA"
    buffer_size: int = 1
    max_retries: int = 3

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CameraConfig":
        """Adapter: Create from config dictionary."""
        return cls(
            device_id=d.get("device_id", 0),
            resolution=d.get("resolution", [640, 480]),
            fps=d.get("fps", 30),
            color_space=d.get("color_space", "RGBA"),
            buffer_size=d.get("buffer_size", 1),
            max_retries=d.get("max_retries", 3),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "device_id": self.device_id,
            "resolution": self.resolution,
            "fps": self.fps,
            "color_space": self.color_space,
            "buffer_size": self.buffer_size,
            "max_retries": self.max_retries,
        }


@dataclass
class ModelArtifactsConfig:
    """A network topology/weights pair readable by cv2.dnn.readNet."""
    model: str = ""
    config: str = ""

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ModelArtifactsConfig":
        return cls(model=d.get("model", ""), config=d.get("config", ""))

    def to_dict(self) -> Dict[str, Any]:
        return {"model": self.model, "config": self.config}


@dataclass
class ModelsConfig:
    """Model artifact locations."""
    face_detection: ModelArtifactsConfig = field(default_factory=lambda: ModelArtifactsConfig(
        model="models/opencv_face_detector.caffemodel",
        config="models/opencv_face_detector.prototxt",
    ))
    age_gender: Optional[ModelArtifactsConfig] = field(default_factory=lambda: ModelArtifactsConfig(
        model="models/age-gender-recognition-retail-0013.bin",
        config="models/age-gender-recognition-retail-0013.xml",
    ))

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ModelsConfig":
        defaults = cls()
        face_dict = d.get("face_detection")
        # An explicit null disables the attribute network
        age_gender = defaults.age_gender
        if "age_gender" in d:
            age_dict = d["age_gender"]
            age_gender = ModelArtifactsConfig.from_dict(age_dict) if age_dict else None
        return cls(
            face_detection=ModelArtifactsConfig.from_dict(face_dict) if face_dict else defaults.face_detection,
            age_gender=age_gender,
        )

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"face_detection": self.face_detection.to_dict()}
        if self.age_gender is not None:
            d["age_gender"] = self.age_gender.to_dict()
        return d


@dataclass
class DetectionConfig:
    """Face detection configuration."""
    confidence_threshold: float = 0.5
    box_scale: float = 0.25
    input_size: List[int] = field(default_factory=lambda: [192, 144])
    mean: List[float] = field(default_factory=lambda: [104.0, 117.0, 123.0, 0.0])
    draw_color: List[int] = field(default_factory=lambda: [0, 255, 0, 255])
    line_thickness: int = 1

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DetectionConfig":
        return cls(
            confidence_threshold=d.get("confidence_threshold", 0.5),
            box_scale=d.get("box_scale", 0.25),
            input_size=d.get("input_size", [192, 144]),
            mean=d.get("mean", [104.0, 117.0, 123.0, 0.0]),
            draw_color=d.get("draw_color", [0, 255, 0, 255]),
            line_thickness=d.get("line_thickness", 1),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "confidence_threshold": self.confidence_threshold,
            "box_scale": self.box_scale,
            "input_size": self.input_size,
            "mean": self.mean,
            "draw_color": self.draw_color,
            "line_thickness": self.line_thickness,
        }


@dataclass
class AttributesConfig:
    """Age/gender attribute estimation configuration."""
    enabled: bool = True
    input_size: List[int] = field(default_factory=lambda: [62, 62])
    selection: str = "first"
    crop_to_box: bool = False

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AttributesConfig":
        return cls(
            enabled=d.get("enabled", True),
            input_size=d.get("input_size", [62, 62]),
            selection=d.get("selection", "first"),
            crop_to_box=d.get("crop_to_box", False),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "input_size": self.input_size,
            "selection": self.selection,
            "crop_to_box": self.crop_to_box,
        }


@dataclass
class LoopConfig:
    """
    Frame loop cadence.

    Attributes:
        interval_s: Wait between iterations in seconds.
        schedule: "fixed_delay" waits the full interval after each iteration;
            "fixed_rate" subtracts the iteration's duration from the wait.
        max_iterations: Stop after this many frames. None = run forever.
    """
    interval_s: float = 1.0
    schedule: str = "fixed_delay"
    max_iterations: Optional[int] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LoopConfig":
        return cls(
            interval_s=d.get("interval_s", 1.0),
            schedule=d.get("schedule", "fixed_delay"),
            max_iterations=d.get("max_iterations"),
        )

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "interval_s": self.interval_s,
            "schedule": self.schedule,
        }
        if self.max_iterations is not None:
            d["max_iterations"] = self.max_iterations
        return d


@dataclass
class DisplayConfig:
    """Local OpenCV window output."""
    enabled: bool = False
    window_name: str = "Face Annotator"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DisplayConfig":
        return cls(
            enabled=d.get("enabled", False),
            window_name=d.get("window_name", "Face Annotator"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"enabled": self.enabled, "window_name": self.window_name}


@dataclass
class WebConfig:
    """Web preview server."""
    enabled: bool = False
    host: str = "0.0.0.0"
    port: int = 5000

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "WebConfig":
        return cls(
            enabled=d.get("enabled", False),
            host=d.get("host", "0.0.0.0"),
            port=d.get("port", 5000),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"enabled": self.enabled, "host": self.host, "port": self.port}


@dataclass
class Config:
    """
    Complete application configuration.

    This is a typed representation of the YAML config structure.
    """
    camera: CameraConfig = field(default_factory=CameraConfig)
    models: ModelsConfig = field(default_factory=ModelsConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    attributes: AttributesConfig = field(default_factory=AttributesConfig)
    loop: LoopConfig = field(default_factory=LoopConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    web: WebConfig = field(default_factory=WebConfig)
    log_path: str = "logs/face_annotator.log"
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Config":
        """Adapter: Create Config from raw dictionary (e.g., from load_config)."""
        return cls(
            camera=CameraConfig.from_dict(d.get("camera", {}) or {}),
            models=ModelsConfig.from_dict(d.get("models", {}) or {}),
            detection=DetectionConfig.from_dict(d.get("detection", {}) or {}),
            attributes=AttributesConfig.from_dict(d.get("attributes", {}) or {}),
            loop=LoopConfig.from_dict(d.get("loop", {}) or {}),
            display=DisplayConfig.from_dict(d.get("display", {}) or {}),
            web=WebConfig.from_dict(d.get("web", {}) or {}),
            log_path=d.get("log_path", "logs/face_annotator.log"),
            log_level=d.get("log_level", "INFO"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to dictionary (for saving or passing to existing code)."""
        return {
            "camera": self.camera.to_dict(),
            "models": self.models.to_dict(),
            "detection": self.detection.to_dict(),
            "attributes": self.attributes.to_dict(),
            "loop": self.loop.to_dict(),
            "display": self.display.to_dict(),
            "web": self.web.to_dict(),
            "log_path": self.log_path,
            "log_level": self.log_level,
        }
