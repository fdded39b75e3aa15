"""
Base runtime components: model wrapper and metadata access.
"""

from .base_model import Model, ModelOptions
from .metadata import MetadataExtractor


__all__ = ["MetadataExtractor", "Model", "ModelOptions"]
