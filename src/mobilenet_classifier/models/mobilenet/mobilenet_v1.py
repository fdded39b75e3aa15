"""
Quantized MobileNetV1 image classifier.

Binds the packaged ``mobilenet_v1.tflite`` model to its fixed input
preprocessing and output postprocessing:

- input: resize to 224x224 (nearest neighbour), normalize with mean 127.5
  and std 127.5, quantize with zero point 128 and scale 0.0078125, cast
  to uint8;
- output: dequantize the uint8 probabilities with zero point 0 and scale
  1/256, then normalize with mean 0 and std 1.

Labels come from the ``labels.txt`` file associated with the model.
"""

from pathlib import Path

import numpy as np
from PIL import Image

from ...labels import Category, TensorLabel, load_labels_from_bytes
from ...processing import (
    CastOp,
    DequantizeOp,
    ImageProcessor,
    NormalizeOp,
    QuantizeOp,
    ResizeMethod,
    ResizeOp,
    TensorImage,
    TensorProcessor,
)
from ...utils.config import Config, PostprocessingConfig, PreprocessingConfig
from ...utils.exceptions import ModelLoadError
from ...utils.logging import get_logger
from ..base import MetadataExtractor, Model, ModelOptions


__all__ = ["MobilenetV1", "Outputs"]


def build_image_processor(config: PreprocessingConfig) -> ImageProcessor:
    """Build the input pipeline: resize, normalize, quantize, cast."""
    height, width = config.image_size
    return (
        ImageProcessor()
        .add(ResizeOp(height, width, ResizeMethod(config.resize_method)))
        .add(NormalizeOp(config.mean, config.std))
        .add(QuantizeOp(config.zero_point, config.scale))
        .add(CastOp(config.dtype))
    )


def build_probability_processor(config: PostprocessingConfig) -> TensorProcessor:
    """Build the output pipeline: dequantize, normalize."""
    return (
        TensorProcessor()
        .add(DequantizeOp(config.zero_point, config.scale))
        .add(NormalizeOp(config.mean, config.std))
    )


class MobilenetV1:
    """
    Identify the most prominent object in the image from a set of 1,001
    categories such as trees, animals, food, vehicles, person etc.
    """

    MODEL_FILE = "mobilenet_v1.tflite"
    LABEL_FILE = "labels.txt"

    def __init__(
        self,
        model_path: str | Path | None = None,
        options: ModelOptions | None = None,
        config: Config | None = None,
    ):
        """
        Load the model and its labels.

        Args:
            model_path: Path to the model file; defaults to the configured
                path, then to ``mobilenet_v1.tflite``
            options: Interpreter options; defaults to the configured ones
            config: Configuration object

        Raises:
            ModelLoadError: If the model or its label file cannot be loaded
        """
        self.config = config or Config()
        self.logger = get_logger()

        model_config = self.config.model
        model_path = model_path or model_config.model_path or self.MODEL_FILE
        if options is None:
            options = ModelOptions(
                num_threads=model_config.num_threads,
                delegate_path=model_config.delegate_path,
            )

        self.image_height: int | None = None
        self.image_width: int | None = None

        self.image_processor = build_image_processor(self.config.preprocessing)
        self.probability_post_processor = build_probability_processor(
            self.config.postprocessing
        )

        self.model = Model.create_model(model_path, options)
        try:
            extractor = MetadataExtractor(self.model.data)
            label_file = model_config.label_file or self.LABEL_FILE
            self.labels = load_labels_from_bytes(extractor.get_associated_file(label_file))
        except ModelLoadError:
            self.model.close()
            raise
        except UnicodeDecodeError as e:
            self.model.close()
            raise ModelLoadError(f"Failed to decode label file: {e}") from e

        self.logger.info(
            f"MobilenetV1 ready: input {self.model.get_input_tensor_shape(0)}, "
            f"output {self.model.get_output_tensor_shape(0)}, {len(self.labels)} labels"
        )

    @classmethod
    def new_instance(
        cls,
        model_path: str | Path | None = None,
        options: ModelOptions | None = None,
        config: Config | None = None,
    ) -> "MobilenetV1":
        """Create a classifier; see ``MobilenetV1.__init__``."""
        return cls(model_path=model_path, options=options, config=config)

    def process(self, image: TensorImage | Image.Image | np.ndarray) -> "Outputs":
        """
        Run the classifier.

        Images (``TensorImage`` or Pillow) go through the preprocessing
        pipeline. A numpy array is taken as an already-processed input
        tensor and fed to the model unchanged.

        Args:
            image: Input image or processed tensor

        Returns:
            Raw model outputs
        """
        if isinstance(image, np.ndarray):
            processed = image
        else:
            if isinstance(image, Image.Image):
                image = TensorImage.from_image(image)
            self.image_height = image.height
            self.image_width = image.width
            processed = self.image_processor.process(image).tensor

        outputs = Outputs(self)
        self.model.run([processed], outputs.get_buffer())
        return outputs

    def close(self) -> None:
        """Release the underlying model."""
        self.model.close()

    def __enter__(self) -> "MobilenetV1":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


class Outputs:
    """Raw output of one ``MobilenetV1.process`` call."""

    def __init__(self, classifier: MobilenetV1):
        self._classifier = classifier
        self.probability = np.zeros(
            classifier.model.get_output_tensor_shape(0), dtype=np.uint8
        )

    def get_probability_as_category_list(self) -> list[Category]:
        """Scores for every label, in label order."""
        return TensorLabel(
            self._classifier.labels, self.get_probability_as_tensor_buffer()
        ).get_category_list()

    def get_probability_as_tensor_buffer(self) -> np.ndarray:
        """Dequantized probabilities with the output tensor shape."""
        return self._classifier.probability_post_processor.process(self.probability)

    def get_buffer(self) -> dict[int, np.ndarray]:
        return {0: self.probability}
