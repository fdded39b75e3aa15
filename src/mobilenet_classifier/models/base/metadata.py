"""
Access to files packed into a model's metadata.

A ``.tflite`` model carrying metadata has a ZIP archive appended to its
flatbuffer; label lists and other associated files are entries of that
archive.
"""

import io
import zipfile

from ...utils.exceptions import AssociatedFileNotFoundError


__all__ = ["MetadataExtractor"]


class MetadataExtractor:
    """Read associated files from raw model bytes."""

    def __init__(self, model_data: bytes):
        """
        Initialize the extractor.

        Args:
            model_data: Complete contents of the model file
        """
        self._associated_files: dict[str, bytes] = {}

        buffer = io.BytesIO(model_data)
        if not zipfile.is_zipfile(buffer):
            return

        try:
            with zipfile.ZipFile(buffer) as archive:
                for info in archive.infolist():
                    if not info.is_dir():
                        self._associated_files[info.filename] = archive.read(info)
        except zipfile.BadZipFile:
            # Flatbuffer bytes can happen to look like an end-of-archive record
            self._associated_files.clear()

    def has_metadata(self) -> bool:
        """Whether the model carries any associated files."""
        return bool(self._associated_files)

    def get_associated_file_names(self) -> list[str]:
        return sorted(self._associated_files)

    def get_associated_file(self, file_name: str) -> bytes:
        """
        Get the contents of an associated file.

        Raises:
            AssociatedFileNotFoundError: If the model does not pack the file
        """
        try:
            return self._associated_files[file_name]
        except KeyError:
            available = ", ".join(self.get_associated_file_names()) or "none"
            raise AssociatedFileNotFoundError(
                f"Associated file '{file_name}' not found in model metadata "
                f"(available: {available})"
            ) from None
