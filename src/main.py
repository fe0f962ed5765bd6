"""
Face Annotator: live face detection overlay.

Captures frames from a camera, detects faces, runs age/gender inference on the
primary face, draws the boxes and renders the result once per interval.

Usage:
    python src/main.py --config config/config.yaml --display

Arguments:
    --config: Path to configuration file
    --display: Show annotated frames in a local window
    --web: Serve the annotated stream over HTTP
    --max-frames: Stop after N frames (default: run forever)
"""

import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Tuple

import yaml

from attributes.estimator import BoxSelection
from models.frame import ColorSpace
from ops.logging import setup_logging
from pipeline.engine import SCHEDULE_FIXED_DELAY, SCHEDULE_FIXED_RATE
from runtime.bootstrap import bootstrap, create_loop
from web.app import start_web_server


def merge_config(base: Dict[str, Any], override: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge `override` into `base` in place. Nested sections merge key by key."""
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_config(base[key], value)
        else:
            base[key] = value
    return base


def _read_yaml(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        return {}
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def config_layers(config_path: str) -> List[str]:
    """
    Config files in the order they are applied:
    `default.yaml` next to `config_path`, then the local `config.yaml`,
    then `config_path` itself when it is neither of those.
    """
    config_dir = os.path.dirname(config_path)
    layers = [os.path.join(config_dir, "default.yaml"), os.path.join(config_dir, "config.yaml")]
    if os.path.abspath(config_path) not in {os.path.abspath(p) for p in layers}:
        layers.append(config_path)
    return layers


def load_config(config_path: str) -> Dict[str, Any]:
    """Load and merge every config layer. Missing layers are skipped."""
    merged: Dict[str, Any] = {}
    try:
        for path in config_layers(config_path):
            merge_config(merged, _read_yaml(path))
    except (OSError, yaml.YAMLError) as e:
        logging.error(f"Failed to load configuration from {config_path}: {e}")
        sys.exit(1)
    return merged


def _is_size(value: Any) -> bool:
    return (
        isinstance(value, list)
        and len(value) == 2
        and all(isinstance(x, int) and x > 0 for x in value)
    )


def validate_config(config: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate configuration file structure and values.

    Args:
        config: Configuration dictionary

    Returns:
        Tuple of (is_valid, error_message)
    """
    required_sections = ['camera', 'models', 'detection', 'loop', 'log_path', 'log_level']
    for section in required_sections:
        if section not in config:
            return False, f"Missing required configuration section: {section}"

    # Camera
    camera = config.get('camera') or {}
    device_id = camera.get('device_id', 0)
    if not isinstance(device_id, (int, str)):
        return False, "camera.device_id must be an integer (index) or string (URL/path)"
    if isinstance(device_id, int) and device_id < 0:
        return False, "camera.device_id integer must be non-negative"
    if 'resolution' not in camera:
        return False, "Missing camera.resolution"
    if not _is_size(camera['resolution']):
        return False, "camera.resolution must be a list of two positive integers [width, height]"
    color_space = camera.get('color_space', 'RGBA')
    if color_space not in [c.value for c in ColorSpace]:
        return False, f"camera.color_space must be one of: {', '.join(c.value for c in ColorSpace)}"

    # Models
    models = config.get('models') or {}
    face = models.get('face_detection')
    if not isinstance(face, dict) or not face.get('model'):
        return False, "models.face_detection.model is required"
    age = models.get('age_gender')
    if age is not None and (not isinstance(age, dict) or not age.get('model')):
        return False, "models.age_gender.model is required when models.age_gender is set"

    # Detection
    detection = config.get('detection') or {}
    threshold = detection.get('confidence_threshold', 0.5)
    if not isinstance(threshold, (int, float)) or not (0 <= threshold <= 1):
        return False, "detection.confidence_threshold must be between 0 and 1"
    box_scale = detection.get('box_scale', 0.25)
    if not isinstance(box_scale, (int, float)) or box_scale < 0:
        return False, "detection.box_scale must be a non-negative number"
    if 'input_size' in detection and not _is_size(detection['input_size']):
        return False, "detection.input_size must be a list of two positive integers [width, height]"
    draw_color = detection.get('draw_color', [0, 255, 0, 255])
    if (
        not isinstance(draw_color, list)
        or not 3 <= len(draw_color) <= 4
        or not all(isinstance(c, int) and 0 <= c <= 255 for c in draw_color)
    ):
        return False, "detection.draw_color must be a list of 3 or 4 integers in [0, 255]"

    # Attributes (optional)
    attributes = config.get('attributes') or {}
    if 'input_size' in attributes and not _is_size(attributes['input_size']):
        return False, "attributes.input_size must be a list of two positive integers [width, height]"
    selection = attributes.get('selection', 'first')
    if selection not in [s.value for s in BoxSelection]:
        return False, f"attributes.selection must be one of: {', '.join(s.value for s in BoxSelection)}"

    # Loop
    loop = config.get('loop') or {}
    interval = loop.get('interval_s', 1.0)
    if not isinstance(interval, (int, float)) or interval < 0:
        return False, "loop.interval_s must be a non-negative number"
    if loop.get('schedule', SCHEDULE_FIXED_DELAY) not in (SCHEDULE_FIXED_DELAY, SCHEDULE_FIXED_RATE):
        return False, f"loop.schedule must be one of: {SCHEDULE_FIXED_DELAY}, {SCHEDULE_FIXED_RATE}"
    max_iterations = loop.get('max_iterations')
    if max_iterations is not None and (not isinstance(max_iterations, int) or max_iterations <= 0):
        return False, "loop.max_iterations must be a positive integer"

    # Web (optional)
    web = config.get('web') or {}
    if 'port' in web and (not isinstance(web['port'], int) or not 0 < web['port'] < 65536):
        return False, "web.port must be a valid TCP port"

    valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
    if config['log_level'] not in valid_log_levels:
        return False, f"log_level must be one of: {', '.join(valid_log_levels)}"

    return True, None


def main():
    """Main application function."""
    parser = argparse.ArgumentParser(description='Face Annotator - live face detection overlay')
    parser.add_argument('--config', type=str, default='config/config.yaml',
                        help='Path to configuration file')
    parser.add_argument('--display', action='store_true',
                        help='Show annotated frames in a local window')
    parser.add_argument('--web', action='store_true',
                        help='Serve the annotated stream over HTTP')
    parser.add_argument('--max-frames', type=int, default=None,
                        help='Stop after this many frames')
    args = parser.parse_args()

    config = load_config(args.config)
    if args.max_frames is not None:
        config.setdefault('loop', {})['max_iterations'] = args.max_frames

    is_valid, error_msg = validate_config(config)
    if not is_valid:
        logging.error(f"Configuration validation failed: {error_msg}")
        sys.exit(1)

    setup_logging(config['log_path'], config['log_level'])
    logging.info("Starting Face Annotator")

    ctx = bootstrap(config, display=args.display, web=args.web)
    if ctx.preview_state is not None:
        web_cfg = config.get('web') or {}
        ctx.web_thread = start_web_server(
            ctx.preview_state,
            host=web_cfg.get('host', '0.0.0.0'),
            port=web_cfg.get('port', 5000),
        )

    loop = create_loop(ctx)
    try:
        loop.run()
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
    finally:
        logging.info("Face Annotator stopped")


if __name__ == "__main__":
    main()
