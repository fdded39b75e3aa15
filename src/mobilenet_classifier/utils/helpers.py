"""
Helper utilities for MobileNet Classifier.

This module provides common utility functions used throughout the
classifier and its scripts.
"""

import json
from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image, UnidentifiedImageError


__all__ = [
    "find_image_paths",
    "format_size",
    "format_time",
    "save_dict_to_json",
    "validate_image",
]


def validate_image(image_path: str | Path) -> bool:
    """
    Validate if file is a valid image.

    Args:
        image_path: Path to image file

    Returns:
        True if valid image, False otherwise
    """
    try:
        with Image.open(image_path) as img:
            img.verify()
        return True
    except (OSError, UnidentifiedImageError, SyntaxError):
        return False


def find_image_paths(
    root: str | Path, extensions: list[str] | tuple[str, ...]
) -> list[Path]:
    """
    Recursively collect image files below a directory.

    Args:
        root: Directory to search
        extensions: Accepted file suffixes, matched case-insensitively

    Returns:
        Sorted list of unique image paths
    """
    suffixes = {ext.lower() for ext in extensions}
    return sorted(
        p for p in Path(root).rglob("*") if p.is_file() and p.suffix.lower() in suffixes
    )


def save_dict_to_json(data: dict[str, Any], file_path: str | Path) -> None:
    """
    Save dictionary to JSON file.

    Numpy scalars and arrays are converted to plain Python values.

    Args:
        data: Dictionary to save
        file_path: Path to save JSON file
    """

    def _default(obj):
        if isinstance(obj, np.generic):
            return obj.item()
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        return str(obj)

    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, default=_default)


def format_time(seconds: float) -> str:
    """
    Format time duration in a human-readable format.

    Args:
        seconds: Time duration in seconds

    Returns:
        Formatted time string
    """
    if seconds < 1:
        return f"{seconds * 1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"


def format_size(size_bytes: float) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string
    """
    for unit in ["B", "KB", "MB", "GB"]:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} TB"
