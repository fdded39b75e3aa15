"""
Image and tensor operators for model input and output processing.

Image operators transform a ``TensorImage``; tensor operators transform a
plain numpy array and can be used both inside an ``ImageProcessor`` and a
``TensorProcessor``.
"""

from abc import ABC, abstractmethod
from enum import Enum

import numpy as np
from PIL import Image

from .image import TensorImage


__all__ = [
    "CastOp",
    "DequantizeOp",
    "ImageOperator",
    "NormalizeOp",
    "QuantizeOp",
    "ResizeMethod",
    "ResizeOp",
    "TensorOperator",
]


class ImageOperator(ABC):
    """Operator applied to a whole ``TensorImage``."""

    @abstractmethod
    def apply(self, image: TensorImage) -> TensorImage:
        pass


class TensorOperator(ABC):
    """Operator applied to a numpy tensor."""

    @abstractmethod
    def apply(self, tensor: np.ndarray) -> np.ndarray:
        pass


class ResizeMethod(Enum):
    """Interpolation used by ``ResizeOp``."""

    NEAREST_NEIGHBOR = "nearest_neighbor"
    BILINEAR = "bilinear"


_PIL_RESAMPLE = {
    ResizeMethod.NEAREST_NEIGHBOR: Image.Resampling.NEAREST,
    ResizeMethod.BILINEAR: Image.Resampling.BILINEAR,
}


class ResizeOp(ImageOperator):
    """Resize an image to a fixed ``(height, width)``."""

    def __init__(
        self,
        target_height: int,
        target_width: int,
        method: ResizeMethod | str = ResizeMethod.BILINEAR,
    ):
        if target_height <= 0 or target_width <= 0:
            raise ValueError(
                f"Target size must be positive, got {target_height}x{target_width}"
            )
        self.target_height = target_height
        self.target_width = target_width
        self.method = ResizeMethod(method)

    def apply(self, image: TensorImage) -> TensorImage:
        if image.height == self.target_height and image.width == self.target_width:
            return image

        resized = image.image.resize(
            (self.target_width, self.target_height),
            resample=_PIL_RESAMPLE[self.method],
        )
        return TensorImage.from_image(resized)

    def __repr__(self) -> str:
        return (
            f"ResizeOp({self.target_height}, {self.target_width}, "
            f"{self.method.name})"
        )


class NormalizeOp(TensorOperator):
    """
    Normalize a tensor as ``(x - mean) / std``.

    ``mean`` and ``std`` hold either one value shared by every channel or
    one value per channel, where channels are the last axis of the tensor.
    The output is always float32, except for the identity case (all means
    0 and all stds 1), in which the input is returned unchanged.
    """

    def __init__(self, mean: float | list[float], std: float | list[float]):
        mean = np.atleast_1d(np.asarray(mean, dtype=np.float32))
        std = np.atleast_1d(np.asarray(std, dtype=np.float32))

        if mean.ndim != 1 or std.ndim != 1:
            raise ValueError("Mean and std must be scalars or flat sequences")
        if mean.size == 0 or mean.size != std.size:
            raise ValueError(
                f"Mean and std must be non-empty and of equal length, got {mean.size} and {std.size}"
            )
        if np.any(std == 0):
            raise ValueError("Std cannot be zero")

        self.mean = mean
        self.std = std
        self.is_identity = bool(np.all(mean == 0) and np.all(std == 1))

    def apply(self, tensor: np.ndarray) -> np.ndarray:
        if self.is_identity:
            return tensor

        tensor = np.asarray(tensor)
        if self.mean.size > 1 and (tensor.ndim == 0 or tensor.shape[-1] != self.mean.size):
            raise ValueError(
                f"Expected {self.mean.size} channels in the last axis, got shape {tensor.shape}"
            )

        return ((tensor.astype(np.float32) - self.mean) / self.std).astype(np.float32)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(mean={self.mean.tolist()}, std={self.std.tolist()})"


class QuantizeOp(NormalizeOp):
    """Quantize float values as ``x / scale + zero_point``."""

    def __init__(self, zero_point: float, scale: float):
        # (x - (-zero_point * scale)) / scale == x / scale + zero_point
        super().__init__(-zero_point * scale, scale)
        self.zero_point = float(zero_point)
        self.scale = float(scale)


class DequantizeOp(NormalizeOp):
    """Dequantize integer values as ``(q - zero_point) * scale``."""

    def __init__(self, zero_point: float, scale: float):
        if scale == 0:
            raise ValueError("Dequantization scale cannot be zero")
        super().__init__(zero_point, 1.0 / scale)
        self.zero_point = float(zero_point)
        self.scale = float(scale)


class CastOp(TensorOperator):
    """
    Cast a tensor to uint8 or float32.

    Casting to uint8 clamps values into [0, 255] and truncates the
    fractional part.
    """

    SUPPORTED_TYPES = (np.dtype(np.uint8), np.dtype(np.float32))

    def __init__(self, dtype: str | np.dtype | type):
        dtype = np.dtype(dtype)
        if dtype not in self.SUPPORTED_TYPES:
            raise ValueError(f"CastOp only supports uint8 and float32, got {dtype}")
        self.dtype = dtype

    def apply(self, tensor: np.ndarray) -> np.ndarray:
        tensor = np.asarray(tensor)
        if tensor.dtype == self.dtype:
            return tensor

        if self.dtype == np.uint8:
            return np.clip(tensor, 0, 255).astype(np.uint8)
        return tensor.astype(np.float32)

    def __repr__(self) -> str:
        return f"CastOp({self.dtype})"
