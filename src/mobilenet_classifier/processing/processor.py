"""
Sequential processors chaining image and tensor operators.
"""

import numpy as np
from PIL import Image

from .image import TensorImage
from .ops import ImageOperator, TensorOperator


__all__ = ["ImageProcessor", "TensorProcessor"]


class _SequentialProcessor:
    """Ordered list of operators, built with chained ``add`` calls."""

    operator_types: tuple[type, ...] = ()

    def __init__(self, operators=None):
        self.operators = []
        for op in operators or []:
            self.add(op)

    def add(self, op):
        if not isinstance(op, self.operator_types):
            raise TypeError(
                f"{type(self).__name__} does not accept {type(op).__name__}"
            )
        self.operators.append(op)
        return self

    def __len__(self) -> int:
        return len(self.operators)

    def __repr__(self) -> str:
        ops = ", ".join(repr(op) for op in self.operators)
        return f"{type(self).__name__}([{ops}])"


class ImageProcessor(_SequentialProcessor):
    """
    Processor for ``TensorImage`` inputs.

    Image operators receive the ``TensorImage``; tensor operators receive
    its underlying array, and the result is wrapped back into an image.
    """

    operator_types = (ImageOperator, TensorOperator)

    def process(self, image: TensorImage | Image.Image) -> TensorImage:
        if isinstance(image, Image.Image):
            image = TensorImage.from_image(image)

        for op in self.operators:
            if isinstance(op, ImageOperator):
                image = op.apply(image)
            else:
                image = TensorImage(op.apply(image.tensor))
        return image


class TensorProcessor(_SequentialProcessor):
    """Processor for plain tensors; accepts tensor operators only."""

    operator_types = (TensorOperator,)

    def process(self, tensor: np.ndarray) -> np.ndarray:
        for op in self.operators:
            tensor = op.apply(tensor)
        return tensor
