"""
Label file loading.

A label file is plain UTF-8 text with one label per line; the line number
(ignoring blank lines) is the output tensor slot of the label.
"""

from pathlib import Path


__all__ = ["load_labels", "load_labels_from_bytes"]


def load_labels_from_bytes(data: bytes, encoding: str = "utf-8") -> list[str]:
    """
    Parse a label list from raw file contents.

    Args:
        data: Label file contents
        encoding: Text encoding of the file

    Returns:
        Labels in file order, blank lines skipped
    """
    text = data.decode(encoding)
    return [line.strip() for line in text.splitlines() if line.strip()]


def load_labels(label_path: str | Path, encoding: str = "utf-8") -> list[str]:
    """
    Load a label list from a file.

    Args:
        label_path: Path to the label file
        encoding: Text encoding of the file

    Returns:
        Labels in file order, blank lines skipped
    """
    return load_labels_from_bytes(Path(label_path).read_bytes(), encoding=encoding)
