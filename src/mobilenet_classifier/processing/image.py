"""
Image container used by the preprocessing pipeline.

A ``TensorImage`` holds an image as an ``(height, width, channels)`` numpy
array and converts to and from Pillow images on demand.
"""

from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..utils.exceptions import InvalidImageError


__all__ = ["TensorImage"]


class TensorImage:
    """RGB image stored as a ``(height, width, 3)`` tensor."""

    def __init__(self, tensor: np.ndarray):
        tensor = np.asarray(tensor)
        if tensor.ndim != 3:
            raise ValueError(
                f"Image tensor must have shape (height, width, channels), got {tensor.shape}"
            )
        self._tensor = tensor

    @classmethod
    def from_image(cls, image: Image.Image) -> "TensorImage":
        """
        Create a tensor image from a Pillow image.

        Grayscale, palette and RGBA images are converted to RGB.
        """
        if image.mode != "RGB":
            image = image.convert("RGB")
        return cls(np.asarray(image, dtype=np.uint8))

    @classmethod
    def from_array(cls, array: np.ndarray) -> "TensorImage":
        """
        Create a tensor image from an ``(H, W)``, ``(H, W, 1)``,
        ``(H, W, 3)`` or ``(H, W, 4)`` array.
        """
        array = np.asarray(array)
        if array.ndim == 2:
            array = array[..., np.newaxis]
        if array.ndim != 3 or array.shape[-1] not in (1, 3, 4):
            raise ValueError(f"Unsupported image array shape: {array.shape}")

        if array.shape[-1] == 1:
            array = np.repeat(array, 3, axis=-1)
        elif array.shape[-1] == 4:
            array = array[..., :3]

        return cls(array)

    @classmethod
    def from_file(cls, image_path: str | Path) -> "TensorImage":
        """
        Load an image file.

        Raises:
            InvalidImageError: If the file is missing or cannot be decoded
        """
        try:
            with Image.open(image_path) as image:
                return cls.from_image(image)
        except (OSError, UnidentifiedImageError) as e:
            raise InvalidImageError(f"Invalid image file: {image_path}") from e

    @property
    def tensor(self) -> np.ndarray:
        return self._tensor

    @property
    def height(self) -> int:
        return int(self._tensor.shape[0])

    @property
    def width(self) -> int:
        return int(self._tensor.shape[1])

    @property
    def dtype(self) -> np.dtype:
        return self._tensor.dtype

    @property
    def image(self) -> Image.Image:
        """Pillow view of the image; only available for uint8 tensors."""
        if self._tensor.dtype != np.uint8:
            raise ValueError(
                f"Only uint8 images convert to Pillow images, got {self._tensor.dtype}"
            )
        return Image.fromarray(self._tensor)

    def __repr__(self) -> str:
        return f"TensorImage(height={self.height}, width={self.width}, dtype={self.dtype})"
