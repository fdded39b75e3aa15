"""
Image classification inference pipeline.

This module wraps a packaged classifier with file loading, batch
processing, result formatting and timing statistics.
"""

import time
from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image

from ...models import MobilenetV1, create_classifier
from ...processing import TensorImage
from ...utils.config import Config
from ...utils.exceptions import InvalidImageError
from ...utils.helpers import format_time, validate_image
from ...utils.logging import get_logger
from ..postprocessing import top_k_categories


class ClassificationPipeline:
    """
    Inference pipeline for image classification.

    Loads the classifier described by the configuration (unless one is
    given), runs it on image files and formats ranked predictions.
    """

    def __init__(self, config: Config | None = None, classifier: MobilenetV1 | None = None):
        """
        Initialize inference pipeline.

        Args:
            config: Configuration object
            classifier: Already loaded classifier; created from
                ``config`` when None
        """
        self.config = config or Config()
        self.inference_config = self.config.inference
        self.logger = get_logger()

        self.classifier = classifier or create_classifier(self.config)

        # Performance tracking
        self.inference_times: list[float] = []

        self.logger.info(
            f"Classification pipeline initialized with {len(self.classifier.labels)} labels"
        )

    def predict_image(self, image: TensorImage | Image.Image) -> dict[str, Any]:
        """
        Classify an in-memory image.

        Args:
            image: Image to classify

        Returns:
            Prediction result
        """
        start_time = time.time()
        outputs = self.classifier.process(image)
        categories = outputs.get_probability_as_category_list()
        inference_time = time.time() - start_time
        self.inference_times.append(inference_time)

        return self._format_prediction_result(categories, inference_time)

    def predict_single(self, image_path: str | Path) -> dict[str, Any]:
        """
        Classify a single image file.

        Args:
            image_path: Path to image file

        Returns:
            Prediction result

        Raises:
            InvalidImageError: If the image cannot be read
        """
        image_path = Path(image_path)

        # Validate image
        if not validate_image(image_path):
            raise InvalidImageError(f"Invalid image file: {image_path}")

        image = TensorImage.from_file(image_path)

        result = {"image_path": str(image_path)}
        result.update(self.predict_image(image))
        self.logger.debug(
            f"{image_path.name}: {result['label']} ({result['confidence']:.3f})"
        )
        return result

    def predict_batch(self, image_paths: list[str | Path]) -> list[dict[str, Any]]:
        """
        Classify a list of image files, skipping unreadable ones.

        Args:
            image_paths: List of image paths

        Returns:
            List of prediction results for readable images
        """
        results = []

        for path in image_paths:
            try:
                results.append(self.predict_single(path))
            except InvalidImageError as e:
                self.logger.warning(f"Skipping invalid image {path}: {e}")

        self.logger.info(f"Classified {len(results)}/{len(image_paths)} images")
        return results

    def _format_prediction_result(
        self, categories: list, inference_time: float
    ) -> dict[str, Any]:
        """
        Format prediction result.

        Args:
            categories: Categories in label order
            inference_time: Inference time in seconds

        Returns:
            Formatted result dictionary
        """
        ranked = top_k_categories(
            categories,
            k=self.inference_config.top_k,
            min_score=self.inference_config.confidence_threshold,
        )
        best = ranked[0] if ranked else None

        result = {
            "label": best.label if best else None,
            "confidence": best.score if best else 0.0,
            "top_k": [c.to_dict() for c in ranked],
            "image_height": self.classifier.image_height,
            "image_width": self.classifier.image_width,
            "inference_time_ms": inference_time * 1000,
            "timestamp": time.time(),
        }

        if self.inference_config.return_all_scores:
            result["scores"] = {c.label: c.score for c in categories}

        return result

    def warmup(self, num_iterations: int = 3) -> None:
        """
        Run the model on blank input to stabilize timings.

        Args:
            num_iterations: Number of warmup iterations
        """
        if num_iterations <= 0:
            return

        self.logger.info(f"Warming up model with {num_iterations} iterations")

        input_detail = self.classifier.model.get_input_details()[0]
        dummy_input = np.zeros(
            self.classifier.model.get_input_tensor_shape(0),
            dtype=np.dtype(input_detail["dtype"]),
        )
        for _ in range(num_iterations):
            self.classifier.process(dummy_input)

        self.logger.info("Model warmup completed")

    def get_performance_stats(self) -> dict[str, Any]:
        """
        Get inference performance statistics.

        Returns:
            Performance statistics
        """
        if not self.inference_times:
            return {"message": "No inference performed yet"}

        times = np.array(self.inference_times)
        mean_time = float(np.mean(times))

        return {
            "total_inferences": len(self.inference_times),
            "avg_time_per_image": mean_time,
            "avg_time_formatted": format_time(mean_time),
            "min_time": float(np.min(times)),
            "max_time": float(np.max(times)),
            "std_time": float(np.std(times)),
            "throughput_fps": 1.0 / mean_time if mean_time > 0 else 0.0,
        }

    def clear_cache(self) -> None:
        """Clear performance tracking cache."""
        self.inference_times.clear()

    def close(self) -> None:
        """Release the classifier."""
        self.classifier.close()

    def __enter__(self) -> "ClassificationPipeline":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
