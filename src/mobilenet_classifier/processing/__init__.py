"""
Processing module for MobileNet Classifier

Image container, operators and processors that turn images into model
input tensors and raw output tensors into scores.
"""

from .image import TensorImage
from .ops import (
    CastOp,
    DequantizeOp,
    ImageOperator,
    NormalizeOp,
    QuantizeOp,
    ResizeMethod,
    ResizeOp,
    TensorOperator,
)
from .processor import ImageProcessor, TensorProcessor


__all__ = [
    "CastOp",
    "DequantizeOp",
    "ImageOperator",
    "ImageProcessor",
    "NormalizeOp",
    "QuantizeOp",
    "ResizeMethod",
    "ResizeOp",
    "TensorImage",
    "TensorOperator",
    "TensorProcessor",
]
