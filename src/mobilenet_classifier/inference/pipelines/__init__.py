"""
Inference pipelines for MobileNet Classifier.

Provides single image and batch classification with result formatting
and timing statistics.
"""

from .classification_inference import ClassificationPipeline


__all__ = ["ClassificationPipeline"]
