#!/usr/bin/env python3
"""
Inference script for MobileNet Classifier.

Classifies a single image, a directory of images, or a list of image
paths and writes ranked predictions to a JSON file.
"""

import argparse
import sys
from pathlib import Path


# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mobilenet_classifier.inference.pipelines import ClassificationPipeline
from mobilenet_classifier.inference.postprocessing import (
    ConfidenceFilter,
    ResultAggregator,
)
from mobilenet_classifier.utils.config import Config
from mobilenet_classifier.utils.exceptions import ModelLoadError
from mobilenet_classifier.utils.helpers import find_image_paths, save_dict_to_json
from mobilenet_classifier.utils.logging import setup_logging


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Classify images with the packaged MobileNetV1 model",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Configuration
    parser.add_argument("--config", "-c", type=str, help="Path to configuration file")

    # Model
    parser.add_argument(
        "--model", "-m", type=str, help="Path to the .tflite model file"
    )
    parser.add_argument(
        "--num-threads", type=int, help="Number of interpreter threads"
    )

    # Input
    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument(
        "--input",
        "-i",
        type=str,
        help="Path to image file or directory containing images",
    )
    input_group.add_argument(
        "--input-list",
        type=str,
        help="Path to text file containing list of image paths",
    )

    # Output
    parser.add_argument(
        "--output", "-o", type=str, help="Path to save results (JSON format)"
    )

    # Inference settings
    parser.add_argument("--top-k", "-k", type=int, help="Number of ranked labels")
    parser.add_argument(
        "--confidence-threshold",
        type=float,
        help="Minimum score for ranked labels",
    )
    parser.add_argument(
        "--filter-low-confidence",
        action="store_true",
        help="Drop predictions whose top score is below --min-confidence",
    )
    parser.add_argument(
        "--min-confidence",
        type=float,
        default=0.5,
        help="Top score threshold used by --filter-low-confidence",
    )
    parser.add_argument(
        "--warmup",
        type=int,
        default=0,
        help="Number of warmup iterations for consistent timing",
    )

    # System
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    return parser.parse_args(argv)


def get_image_paths(args: argparse.Namespace, extensions: list[str]) -> list[Path]:
    """Get list of image paths from input arguments."""
    if args.input_list:
        with open(args.input_list, encoding="utf-8") as f:
            image_paths = [Path(line.strip()) for line in f if line.strip()]
        return sorted(set(image_paths))

    input_path = Path(args.input)
    if input_path.is_file():
        return [input_path]
    if input_path.is_dir():
        return find_image_paths(input_path, extensions)

    raise FileNotFoundError(f"Input path not found: {args.input}")


def setup_inference_config(args: argparse.Namespace) -> Config:
    """Setup inference configuration."""
    config = Config.from_yaml(args.config) if args.config else Config()

    config.update_from_args(
        {
            "model.model_path": args.model,
            "model.num_threads": args.num_threads,
            "inference.top_k": args.top_k,
            "inference.confidence_threshold": args.confidence_threshold,
        }
    )

    if args.verbose:
        config.logging.log_level = "DEBUG"

    return config


def main(argv: list[str] | None = None) -> int:
    """Main inference function."""
    args = parse_arguments(argv)
    config = setup_inference_config(args)

    logger = setup_logging(
        log_level=config.logging.log_level,
        log_dir=config.logging.log_dir,
        experiment_name=config.logging.experiment_name,
    )
    logger.info("Starting MobileNetV1 classification")
    logger.info(f"Model: {config.model.model_path}")
    logger.log_hyperparameters(
        {
            "top_k": config.inference.top_k,
            "confidence_threshold": config.inference.confidence_threshold,
            "num_threads": config.model.num_threads,
            "image_size": config.preprocessing.image_size,
        }
    )

    try:
        image_paths = get_image_paths(args, config.inference.image_extensions)
    except (FileNotFoundError, OSError) as e:
        logger.error(str(e))
        return 1

    if not image_paths:
        logger.error("No valid image paths found")
        return 1

    logger.info(f"Found {len(image_paths)} images to process")

    try:
        pipeline = ClassificationPipeline(config)
    except ModelLoadError as e:
        logger.error(f"Could not load model: {e}")
        return 1

    with pipeline:
        pipeline.warmup(args.warmup)
        results = pipeline.predict_batch(image_paths)

        if args.filter_low_confidence:
            confidence_filter = ConfidenceFilter(min_confidence=args.min_confidence)
            predictions = confidence_filter.filter(results)
            filter_stats = confidence_filter.get_statistics(results)
        else:
            predictions = results
            filter_stats = None

        performance = pipeline.get_performance_stats()

    summary = ResultAggregator().summarize(predictions)
    final_results = {
        "metadata": {
            "model_path": config.model.model_path,
            "total_images": len(image_paths),
            "processed_images": len(results),
            "inference_config": config.inference.__dict__,
        },
        "performance": performance,
        "summary": summary,
        "predictions": predictions,
    }
    if filter_stats is not None:
        final_results["filter_statistics"] = filter_stats

    if args.output:
        output_path = Path(args.output)
    else:
        input_name = Path(args.input or args.input_list).stem
        output_path = Path(f"predictions_{input_name}.json")

    save_dict_to_json(final_results, output_path)
    logger.info(f"Results saved to: {output_path}")
    logger.log_metrics(
        {
            "processed": len(results),
            "kept": len(predictions),
            "average_confidence": summary.get("average_confidence", 0.0),
        }
    )

    print(f"\n{'=' * 50}")
    print("CLASSIFICATION SUMMARY")
    print(f"{'=' * 50}")
    for result in predictions:
        print(f"{result['image_path']}: {result['label']} ({result['confidence']:.3f})")
    print(f"Total images processed: {len(results)}")
    print(f"Results saved to: {output_path}")
    print(f"{'=' * 50}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
