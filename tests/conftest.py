"""
Pytest configuration and shared fixtures.
"""

import os
import sys

import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))


class FakeEngine:
    """Inference engine returning a fixed output and recording its inputs."""

    def __init__(self, output=None, error=None, name="fake"):
        self.output = np.zeros((1, 1, 0, 7), dtype=np.float32) if output is None else output
        self.error = error
        self.name = name
        self.inputs = []

    def set_input(self, blob):
        self.inputs.append(blob)

    def forward(self):
        if self.error is not None:
            raise self.error
        return np.asarray(self.output, dtype=np.float32)


@pytest.fixture
def fake_engine():
    """Factory for FakeEngine instances."""
    return FakeEngine


@pytest.fixture
def face_record():
    """One confident detection covering x 0.1-0.3, y 0.2-0.4 (SSD output shape)."""
    return np.array([[[[0, 1, 0.9, 0.1, 0.2, 0.3, 0.4]]]], dtype=np.float32)


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create a temporary config directory with default.yaml."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    default_yaml = config_dir / "default.yaml"
    default_yaml.write_text("""
camera:
  device_id: 0
  resolution: [640, 480]
  color_space: "RGBA"

models:
  face_detection:
    model: "models/face.caffemodel"
    config: "models/face.prototxt"

detection:
  confidence_threshold: 0.5

loop:
  interval_s: 1.0

log_path: "logs/test.log"
log_level: "INFO"
""")

    return config_dir


@pytest.fixture
def valid_config():
    """Return a valid configuration dictionary."""
    return {
        "camera": {
            "device_id": 0,
            "resolution": [640, 480],
            "fps": 30,
            "color_space": "RGBA",
        },
        "models": {
            "face_detection": {
                "model": "models/face.caffemodel",
                "config": "models/face.prototxt",
            },
            "age_gender": {
                "model": "models/age_gender.bin",
                "config": "models/age_gender.xml",
            },
        },
        "detection": {
            "confidence_threshold": 0.5,
            "box_scale": 0.25,
            "input_size": [192, 144],
            "mean": [104, 117, 123, 0],
            "draw_color": [0, 255, 0, 255],
        },
        "attributes": {
            "enabled": True,
            "input_size": [62, 62],
            "selection": "first",
            "crop_to_box": False,
        },
        "loop": {
            "interval_s": 1.0,
            "schedule": "fixed_delay",
        },
        "log_path": "logs/test.log",
        "log_level": "INFO",
    }
