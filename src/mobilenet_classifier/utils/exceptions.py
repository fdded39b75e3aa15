"""Exception hierarchy for MobileNet Classifier."""

__all__ = [
    "AssociatedFileNotFoundError",
    "InferenceError",
    "InvalidImageError",
    "ModelLoadError",
]


class InferenceError(Exception):
    """Base exception for inference-related errors."""

    pass


class ModelLoadError(InferenceError, OSError):
    """The model or its label file could not be loaded."""

    pass


class AssociatedFileNotFoundError(ModelLoadError):
    """A file expected in the model metadata is missing."""

    pass


class InvalidImageError(InferenceError):
    """An input image could not be read or decoded."""

    pass
