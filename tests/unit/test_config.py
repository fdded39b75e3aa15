"""
Unit tests for configuration management.

Tests the configuration system including defaults, loading, saving
and command-line overrides.
"""

import pytest

from mobilenet_classifier.utils.config import (
    Config,
    InferenceConfig,
    ModelConfig,
    PostprocessingConfig,
    PreprocessingConfig,
    get_default_config,
)


class TestModelConfig:
    """Test ModelConfig functionality."""

    def test_default_config(self):
        """Test default model configuration."""
        config = ModelConfig()

        assert config.model_path == "mobilenet_v1.tflite"
        assert config.label_file == "labels.txt"
        assert config.num_threads is None


class TestPreprocessingConfig:
    """Test PreprocessingConfig functionality."""

    def test_default_config(self):
        """Test the packaged model's input constants."""
        config = PreprocessingConfig()

        assert config.image_size == (224, 224)
        assert config.resize_method == "nearest_neighbor"
        assert config.mean == [127.5]
        assert config.std == [127.5]
        assert config.zero_point == 128.0
        assert config.scale == 0.0078125
        assert config.dtype == "uint8"

    def test_default_lists_are_not_shared(self):
        first = PreprocessingConfig()
        second = PreprocessingConfig()
        first.mean.append(1.0)

        assert second.mean == [127.5]


class TestPostprocessingConfig:
    """Test PostprocessingConfig functionality."""

    def test_default_config(self):
        """Test the packaged model's output constants."""
        config = PostprocessingConfig()

        assert config.zero_point == 0.0
        assert config.scale == 0.00390625
        assert config.mean == [0.0]
        assert config.std == [1.0]


class TestConfig:
    """Test main Config class functionality."""

    def test_default_config(self):
        """Test default complete configuration."""
        config = Config()

        assert isinstance(config.model, ModelConfig)
        assert isinstance(config.preprocessing, PreprocessingConfig)
        assert isinstance(config.inference, InferenceConfig)
        assert config.inference.top_k == 5

    def test_config_to_dict(self):
        """Test complete configuration to dictionary."""
        config_dict = Config().to_dict()

        assert set(config_dict) == {
            "model",
            "preprocessing",
            "postprocessing",
            "inference",
            "logging",
        }
        assert config_dict["preprocessing"]["image_size"] == [224, 224]

    def test_config_from_dict(self):
        """Test configuration creation from dictionary."""
        config = Config.from_dict(
            {
                "model": {"model_path": "other.tflite", "num_threads": 2},
                "preprocessing": {"image_size": [192, 192]},
                "inference": {"top_k": 1},
                "unknown_section": {"foo": 1},
            }
        )

        assert config.model.model_path == "other.tflite"
        assert config.model.num_threads == 2
        assert config.preprocessing.image_size == (192, 192)
        assert config.inference.top_k == 1

    def test_unknown_keys_are_ignored(self):
        config = Config.from_dict({"model": {"not_a_field": 1}})

        assert not hasattr(config.model, "not_a_field")

    def test_yaml_save_load(self, temp_dir):
        """Test YAML save and load functionality."""
        config = Config()
        config.inference.top_k = 10
        config.model.num_threads = 4

        yaml_path = temp_dir / "config.yaml"
        config.save_yaml(yaml_path)
        assert yaml_path.exists()

        loaded_config = Config.from_yaml(yaml_path)

        assert loaded_config.inference.top_k == 10
        assert loaded_config.model.num_threads == 4
        assert loaded_config.preprocessing.image_size == (224, 224)
        assert loaded_config.to_dict() == config.to_dict()

    def test_update_from_args(self):
        """Test configuration update from dotted arguments."""
        config = Config()

        config.update_from_args(
            {
                "inference.top_k": 3,
                "model.model_path": "custom.tflite",
                "model.num_threads": None,
                "nonexistent.key": 1,
                "top_k": 7,
            }
        )

        assert config.inference.top_k == 3
        assert config.model.model_path == "custom.tflite"
        assert config.model.num_threads is None

    def test_non_mapping_yaml_file(self, temp_dir):
        yaml_path = temp_dir / "list.yaml"
        yaml_path.write_text("- a\n- b\n")

        with pytest.raises(ValueError):
            Config.from_yaml(yaml_path)

    def test_invalid_yaml_file(self, temp_dir):
        """Test handling of invalid YAML file."""
        yaml_path = temp_dir / "invalid.yaml"
        yaml_path.write_text("invalid: yaml: content:")

        with pytest.raises(Exception):
            Config.from_yaml(yaml_path)

    def test_nonexistent_file(self):
        """Test handling of nonexistent file."""
        with pytest.raises(FileNotFoundError):
            Config.from_yaml("nonexistent.yaml")


def test_get_default_config():
    assert get_default_config().to_dict() == Config().to_dict()

    with pytest.raises(ValueError):
        get_default_config("resnet50")
