"""
Categories and label-to-tensor mapping.

A ``TensorLabel`` pairs the positional label list of a model with a score
tensor and turns it into ``Category`` objects.
"""

from dataclasses import dataclass

import numpy as np


__all__ = ["Category", "TensorLabel"]


@dataclass(frozen=True)
class Category:
    """A label with its confidence score."""

    label: str
    score: float
    display_name: str = ""
    index: int = -1

    def to_dict(self) -> dict:
        result = {"label": self.label, "score": self.score}
        if self.display_name:
            result["display_name"] = self.display_name
        if self.index >= 0:
            result["index"] = self.index
        return result


class TensorLabel:
    """
    Labels attached to the labelled axis of a score tensor.

    The labelled axis is the first axis whose size is greater than one,
    e.g. axis 1 of a ``(1, 1001)`` classification output. Its size must
    equal the number of labels.
    """

    def __init__(self, labels: list[str], tensor: np.ndarray):
        tensor = np.asarray(tensor)
        self.axis = self._first_axis_larger_than_one(tensor.shape)

        if len(labels) != tensor.shape[self.axis]:
            raise ValueError(
                f"Number of labels does not match the shape of tensor: "
                f"{len(labels)} labels, {tensor.shape[self.axis]} slots on axis {self.axis}"
            )

        self.labels = list(labels)
        self.tensor = tensor

    @staticmethod
    def _first_axis_larger_than_one(shape: tuple[int, ...]) -> int:
        for axis, size in enumerate(shape):
            if size > 1:
                return axis
        raise ValueError(
            f"Cannot find an axis to label in tensor of shape {shape}; "
            "a labelled axis must have size larger than 1"
        )

    def _scores(self) -> np.ndarray:
        if self.tensor.size != len(self.labels):
            raise ValueError(
                f"Category lists need a single labelled axis, got tensor of shape {self.tensor.shape}"
            )
        return self.tensor.reshape(-1).astype(np.float32)

    def get_category_list(self) -> list[Category]:
        """Return one category per label, in label order."""
        scores = self._scores()
        return [
            Category(label=label, score=float(score))
            for label, score in zip(self.labels, scores)
        ]

    def get_map_with_float_value(self) -> dict[str, float]:
        """Return a ``{label: score}`` mapping."""
        scores = self._scores()
        return {label: float(score) for label, score in zip(self.labels, scores)}
