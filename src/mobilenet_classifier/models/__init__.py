"""
Models module for MobileNet Classifier.

Contains the runtime model wrapper, metadata access and the packaged
MobileNetV1 classifier.
"""

from .base import MetadataExtractor, Model, ModelOptions
from .mobilenet import MobilenetV1, Outputs
from .model_factory import create_classifier, get_available_models


__all__ = [
    "MetadataExtractor",
    "MobilenetV1",
    "Model",
    "ModelOptions",
    "Outputs",
    "create_classifier",
    "get_available_models",
]
