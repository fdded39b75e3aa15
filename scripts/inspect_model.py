#!/usr/bin/env python3
"""
Print the tensor layout and associated files of a .tflite model.
"""

import argparse
import sys
from pathlib import Path


# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mobilenet_classifier.labels import load_labels_from_bytes
from mobilenet_classifier.models import MetadataExtractor, Model
from mobilenet_classifier.utils.exceptions import ModelLoadError
from mobilenet_classifier.utils.logging import setup_logging


def describe_tensor(detail: dict) -> str:
    shape = [int(s) for s in detail["shape"]]
    dtype = getattr(detail["dtype"], "__name__", str(detail["dtype"]))
    scale, zero_point = detail.get("quantization", (0.0, 0))
    text = f"{detail.get('name', detail['index'])}: shape={shape} dtype={dtype}"
    if scale:
        text += f" scale={scale} zero_point={zero_point}"
    return text


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("model", type=str, help="Path to the .tflite model file")
    parser.add_argument(
        "--show-labels", type=int, default=5, help="Number of labels to print"
    )
    args = parser.parse_args(argv)

    logger = setup_logging(log_level="WARNING")

    try:
        model = Model.create_model(args.model)
    except ModelLoadError as e:
        logger.error(str(e))
        return 1

    with model:
        print("Inputs:")
        for detail in model.get_input_details():
            print(f"  {describe_tensor(detail)}")
        print("Outputs:")
        for detail in model.get_output_details():
            print(f"  {describe_tensor(detail)}")

        extractor = MetadataExtractor(model.data)
        names = extractor.get_associated_file_names()
        print(f"Associated files: {', '.join(names) if names else 'none'}")

        for name in names:
            if name.endswith(".txt") and args.show_labels > 0:
                labels = load_labels_from_bytes(extractor.get_associated_file(name))
                preview = ", ".join(labels[: args.show_labels])
                print(f"  {name}: {len(labels)} labels ({preview}, ...)")

    return 0


if __name__ == "__main__":
    sys.exit(main())
