"""
Configuration management for MobileNet Classifier.

This module provides centralized configuration for the classifier,
including model loading, the fixed preprocessing and postprocessing
constants of the packaged model, inference settings, and logging.
"""

from dataclasses import asdict, dataclass, field
from pathlib import Path

import yaml


__all__ = [
    "Config",
    "InferenceConfig",
    "LoggingConfig",
    "ModelConfig",
    "PostprocessingConfig",
    "PreprocessingConfig",
    "get_default_config",
]


@dataclass
class ModelConfig:
    """Configuration for the packaged model artifact."""

    # Model artifact
    model_path: str = "mobilenet_v1.tflite"
    label_file: str = "labels.txt"  # Associated file inside the model metadata
    model_name: str = "mobilenet_v1"

    # Runtime options
    num_threads: int | None = None
    delegate_path: str | None = None


@dataclass
class PreprocessingConfig:
    """Configuration for the image preprocessing pipeline."""

    # Resize
    image_size: tuple[int, int] = (224, 224)  # (height, width)
    resize_method: str = "nearest_neighbor"  # nearest_neighbor, bilinear

    # Normalization
    mean: list[float] = field(default_factory=lambda: [127.5])
    std: list[float] = field(default_factory=lambda: [127.5])

    # Input quantization
    zero_point: float = 128.0
    scale: float = 0.0078125

    # Input tensor type
    dtype: str = "uint8"


@dataclass
class PostprocessingConfig:
    """Configuration for the probability postprocessing pipeline."""

    # Output dequantization
    zero_point: float = 0.0
    scale: float = 0.00390625

    # Normalization
    mean: list[float] = field(default_factory=lambda: [0.0])
    std: list[float] = field(default_factory=lambda: [1.0])


@dataclass
class InferenceConfig:
    """Configuration for model inference."""

    # Result formatting
    top_k: int = 5
    return_all_scores: bool = False

    # Postprocessing
    confidence_threshold: float = 0.0

    # Batch processing
    image_extensions: list[str] = field(
        default_factory=lambda: [".jpg", ".jpeg", ".png", ".bmp"]
    )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    log_level: str = "INFO"
    log_dir: str | None = None  # No file logging when unset
    experiment_name: str | None = None


@dataclass
class Config:
    """Main configuration class that combines all sub-configurations."""

    model: ModelConfig = field(default_factory=ModelConfig)
    preprocessing: PreprocessingConfig = field(default_factory=PreprocessingConfig)
    postprocessing: PostprocessingConfig = field(default_factory=PostprocessingConfig)
    inference: InferenceConfig = field(default_factory=InferenceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self):
        """Post-initialization processing."""
        # YAML has no tuples
        self.preprocessing.image_size = tuple(self.preprocessing.image_size)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            Config instance loaded from YAML
        """
        with open(config_path, encoding="utf-8") as f:
            config_dict = yaml.safe_load(f)

        if not isinstance(config_dict, dict):
            raise ValueError(f"Configuration file is not a mapping: {config_path}")

        return cls.from_dict(config_dict)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """
        Create Config instance from dictionary.

        Unknown sections and keys are ignored.

        Args:
            config_dict: Dictionary containing configuration parameters

        Returns:
            Config instance
        """
        config = cls()

        for section_name, section_data in config_dict.items():
            if hasattr(config, section_name) and isinstance(section_data, dict):
                section_config = getattr(config, section_name)
                for key, value in section_data.items():
                    if hasattr(section_config, key):
                        setattr(section_config, key, value)

        config.__post_init__()
        return config

    def to_dict(self) -> dict:
        """
        Convert configuration to dictionary.

        Returns:
            Dictionary representation of the configuration
        """
        config_dict = asdict(self)
        config_dict["preprocessing"]["image_size"] = list(
            self.preprocessing.image_size
        )
        return config_dict

    def save_yaml(self, config_path: str | Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            config_path: Path where to save the YAML configuration
        """
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, indent=2)

    def update_from_args(self, args: dict) -> None:
        """
        Update configuration from command-line arguments.

        Args:
            args: Dictionary of arguments; nested keys use dots,
                e.g. ``"inference.top_k"``. ``None`` values are skipped.
        """
        for key, value in args.items():
            if value is None or "." not in key:
                continue
            section, param = key.split(".", 1)
            if hasattr(self, section):
                section_config = getattr(self, section)
                if hasattr(section_config, param):
                    setattr(section_config, param, value)

        self.__post_init__()


def get_default_config(model_name: str = "mobilenet_v1") -> Config:
    """
    Get default configuration for a packaged model.

    Args:
        model_name: Name of the packaged model

    Returns:
        Default configuration for the model
    """
    if model_name != "mobilenet_v1":
        raise ValueError(f"Unsupported model: {model_name}")

    return Config()
