"""
Smoke tests for configuration loading and validation.
"""

import os

import pytest

from main import config_layers, load_config, merge_config, validate_config


class TestValidateConfig:
    """Tests for validate_config function."""

    def test_valid_config_passes(self, valid_config):
        """A complete valid config passes validation."""
        is_valid, error = validate_config(valid_config)

        assert is_valid is True
        assert error is None

    @pytest.mark.parametrize("section", ["camera", "models", "detection", "loop", "log_path", "log_level"])
    def test_missing_required_section(self, valid_config, section):
        """Each required section is reported by name."""
        del valid_config[section]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert section in error.lower()

    def test_attributes_section_optional(self, valid_config):
        """attributes may be left out entirely."""
        del valid_config["attributes"]

        is_valid, error = validate_config(valid_config)

        assert is_valid is True

    def test_invalid_device_id_type(self, valid_config):
        """device_id with invalid type fails."""
        valid_config["camera"]["device_id"] = [1, 2, 3]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "device_id" in error.lower()

    def test_negative_device_id(self, valid_config):
        """Negative integer device_id fails."""
        valid_config["camera"]["device_id"] = -1

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "device_id" in error.lower()

    def test_string_device_id_valid(self, valid_config):
        """String device_id (video file or URL) is valid."""
        valid_config["camera"]["device_id"] = "recordings/hallway.mp4"

        is_valid, error = validate_config(valid_config)

        assert is_valid is True

    def test_invalid_resolution_length(self, valid_config):
        """Resolution with wrong length fails."""
        valid_config["camera"]["resolution"] = [640]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "resolution" in error.lower()

    def test_unknown_color_space(self, valid_config):
        valid_config["camera"]["color_space"] = "YUV"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "color_space" in error.lower()

    def test_face_model_required(self, valid_config):
        valid_config["models"]["face_detection"] = {"config": "models/face.prototxt"}

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "face_detection" in error.lower()

    def test_age_gender_may_be_null(self, valid_config):
        valid_config["models"]["age_gender"] = None

        is_valid, error = validate_config(valid_config)

        assert is_valid is True

    def test_threshold_out_of_range(self, valid_config):
        valid_config["detection"]["confidence_threshold"] = 1.5

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "confidence_threshold" in error.lower()

    def test_negative_box_scale(self, valid_config):
        valid_config["detection"]["box_scale"] = -0.1

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "box_scale" in error.lower()

    def test_draw_color_channels(self, valid_config):
        valid_config["detection"]["draw_color"] = [0, 255]

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "draw_color" in error.lower()

    def test_unknown_selection(self, valid_config):
        valid_config["attributes"]["selection"] = "random"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "selection" in error.lower()

    def test_unknown_schedule(self, valid_config):
        valid_config["loop"]["schedule"] = "asap"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "schedule" in error.lower()

    def test_negative_interval(self, valid_config):
        valid_config["loop"]["interval_s"] = -1

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "interval_s" in error.lower()

    def test_invalid_max_iterations(self, valid_config):
        valid_config["loop"]["max_iterations"] = 0

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "max_iterations" in error.lower()

    def test_invalid_web_port(self, valid_config):
        valid_config["web"] = {"port": 70000}

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "port" in error.lower()

    def test_invalid_log_level(self, valid_config):
        """Invalid log level fails."""
        valid_config["log_level"] = "VERBOSE"

        is_valid, error = validate_config(valid_config)

        assert is_valid is False
        assert "log_level" in error.lower()


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_default_yaml(self, temp_config_dir):
        """Config loads from default.yaml when only it exists."""
        config = load_config(str(temp_config_dir / "config.yaml"))

        assert config["camera"]["device_id"] == 0
        assert config["camera"]["resolution"] == [640, 480]
        assert config["loop"]["interval_s"] == 1.0

    def test_local_overrides_merge(self, temp_config_dir):
        """Local config.yaml overrides default.yaml."""
        config_yaml = temp_config_dir / "config.yaml"
        config_yaml.write_text("""
camera:
  resolution: [320, 240]
loop:
  schedule: "fixed_rate"
""")

        config = load_config(str(config_yaml))

        assert config["camera"]["resolution"] == [320, 240]
        assert config["loop"]["schedule"] == "fixed_rate"
        # Untouched keys survive the merge
        assert config["camera"]["color_space"] == "RGBA"
        assert config["loop"]["interval_s"] == 1.0

    def test_explicit_file_applied_last(self, temp_config_dir):
        (temp_config_dir / "config.yaml").write_text("""
detection:
  confidence_threshold: 0.6
""")
        explicit = temp_config_dir / "bench.yaml"
        explicit.write_text("""
detection:
  confidence_threshold: 0.8
models:
  age_gender:
    model: "models/age_gender.bin"
""")

        config = load_config(str(explicit))

        assert config["detection"]["confidence_threshold"] == 0.8
        assert config["models"]["age_gender"]["model"] == "models/age_gender.bin"
        assert config["models"]["face_detection"]["model"] == "models/face.caffemodel"

    def test_invalid_yaml_exits(self, temp_config_dir):
        bad = temp_config_dir / "config.yaml"
        bad.write_text("camera: [unclosed\n")

        with pytest.raises(SystemExit):
            load_config(str(bad))

    def test_default_yaml_validates(self):
        """The checked-in default config passes validation."""
        root = os.path.join(os.path.dirname(__file__), "..")
        config = load_config(os.path.join(root, "config", "default.yaml"))

        is_valid, error = validate_config(config)

        assert is_valid is True, error


class TestConfigLayers:
    def test_explicit_path_appended(self):
        layers = config_layers(os.path.join("cfg", "bench.yaml"))

        assert layers == [
            os.path.join("cfg", "default.yaml"),
            os.path.join("cfg", "config.yaml"),
            os.path.join("cfg", "bench.yaml"),
        ]

    def test_local_override_not_applied_twice(self):
        assert len(config_layers(os.path.join("cfg", "config.yaml"))) == 2

    def test_merge_replaces_lists(self):
        merged = merge_config({"camera": {"resolution": [640, 480], "fps": 30}}, {"camera": {"resolution": [320, 240]}})

        assert merged == {"camera": {"resolution": [320, 240], "fps": 30}}
