"""
Model factory for creating packaged classifiers.

This module maps model names to classifier classes and builds them from
configuration.
"""

from pathlib import Path
from typing import Any

from ..utils.config import Config
from ..utils.logging import get_logger
from .mobilenet import MobilenetV1


_MODEL_REGISTRY: dict[str, dict[str, Any]] = {
    "mobilenet_v1": {
        "class": MobilenetV1,
        "description": (
            "Quantized MobileNetV1 identifying the most prominent object "
            "among 1,001 categories"
        ),
        "model_file": MobilenetV1.MODEL_FILE,
        "label_file": MobilenetV1.LABEL_FILE,
        "input_size": (224, 224),
        "input_dtype": "uint8",
        "num_classes": 1001,
    },
}


def create_classifier(
    config: Config | None = None, model_path: str | Path | None = None
) -> MobilenetV1:
    """
    Create a classifier based on configuration.

    Args:
        config: Configuration object; defaults to ``Config()``
        model_path: Override of ``config.model.model_path``

    Returns:
        Loaded classifier
    """
    logger = get_logger()
    config = config or Config()

    model_name = config.model.model_name.lower()
    if model_name not in _MODEL_REGISTRY:
        raise ValueError(
            f"Unsupported model: {model_name}. "
            f"Available: {', '.join(sorted(_MODEL_REGISTRY))}"
        )

    model_class = _MODEL_REGISTRY[model_name]["class"]
    classifier = model_class.new_instance(model_path=model_path, config=config)
    logger.info(f"Created {model_name} classifier")

    return classifier


def get_available_models() -> dict[str, dict[str, Any]]:
    """
    Get information about available packaged models.

    Returns:
        Dictionary with model information
    """
    return {name: dict(info) for name, info in _MODEL_REGISTRY.items()}
