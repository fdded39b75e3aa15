"""
Pytest configuration and fixtures for MobileNet Classifier tests.

This module provides shared fixtures for all tests, including sample
images, fake model files carrying a label list in their metadata, and a
fake LiteRT interpreter standing in for the native runtime.
"""

# Add src to path for imports
import sys
import tempfile
import zipfile
from pathlib import Path

import numpy as np
import pytest
from PIL import Image


sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mobilenet_classifier.models.base import base_model
from mobilenet_classifier.utils.config import Config


# Leading bytes of a flatbuffer with the TFLite file identifier
FLATBUFFER_HEADER = b"\x1c\x00\x00\x00TFL3" + bytes(56)

SAMPLE_LABELS = ["background", "tench", "goldfish", "great white shark", "tiger shark"]


class FakeInterpreter:
    """In-process stand-in for ``ai_edge_litert.interpreter.Interpreter``."""

    input_shape = (1, 224, 224, 3)
    output_scores = np.array([[10, 200, 30, 0, 15]], dtype=np.uint8)
    instances: list["FakeInterpreter"] = []

    def __init__(self, model_content=None, num_threads=None, experimental_delegates=None):
        if model_content is None or model_content[4:8] != b"TFL3":
            raise ValueError("Model provided has model identifier '????', should be 'TFL3'")
        self.num_threads = num_threads
        self.experimental_delegates = experimental_delegates
        self.allocated = False
        self.invoke_count = 0
        self.last_input = None
        self._tensors = {}
        FakeInterpreter.instances.append(self)

    def allocate_tensors(self):
        self.allocated = True

    def get_input_details(self):
        return [
            {
                "name": "input",
                "index": 0,
                "shape": np.array(self.input_shape, dtype=np.int32),
                "dtype": np.uint8,
                "quantization": (0.0078125, 128),
            }
        ]

    def get_output_details(self):
        return [
            {
                "name": "MobilenetV1/Predictions/Reshape_1",
                "index": 1,
                "shape": np.array(self.output_scores.shape, dtype=np.int32),
                "dtype": np.uint8,
                "quantization": (0.00390625, 0),
            }
        ]

    def set_tensor(self, index, value):
        assert tuple(value.shape) == tuple(self.input_shape)
        self._tensors[index] = np.array(value)

    def invoke(self):
        self.invoke_count += 1
        self.last_input = self._tensors[0]
        self._tensors[1] = self.output_scores.copy()

    def get_tensor(self, index):
        return self._tensors[index]


def write_model_file(path: Path, labels: list[str] | None) -> Path:
    """Write a fake model, appending a metadata archive when labels are given."""
    path.write_bytes(FLATBUFFER_HEADER)
    if labels is not None:
        with zipfile.ZipFile(path, "a") as archive:
            archive.writestr("labels.txt", "\n".join(labels) + "\n")
    return path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_labels() -> list[str]:
    return list(SAMPLE_LABELS)


@pytest.fixture
def fake_runtime(monkeypatch):
    """Replace the LiteRT interpreter with ``FakeInterpreter``."""
    FakeInterpreter.instances = []
    monkeypatch.setattr(base_model, "Interpreter", FakeInterpreter)
    return FakeInterpreter


@pytest.fixture
def make_model_file(temp_dir):
    """Factory writing fake model files into the temporary directory."""

    def _make(name: str, labels: list[str] | None) -> Path:
        return write_model_file(temp_dir / name, labels)

    return _make


@pytest.fixture
def model_file(temp_dir, sample_labels) -> Path:
    """A fake model file packing ``labels.txt``."""
    return write_model_file(temp_dir / "mobilenet_v1.tflite", sample_labels)


@pytest.fixture
def model_without_metadata(temp_dir) -> Path:
    """A fake model file with no associated files."""
    return write_model_file(temp_dir / "bare.tflite", None)


@pytest.fixture
def sample_config(model_file) -> Config:
    """Create a sample configuration pointing at the fake model."""
    config = Config()
    config.model.model_path = str(model_file)
    config.inference.top_k = 3
    return config


@pytest.fixture
def mock_image_rgb() -> Image.Image:
    """Create a mock RGB image for testing."""
    return Image.new("RGB", (64, 48), color="red")


@pytest.fixture
def mock_image_grayscale() -> Image.Image:
    """Create a mock grayscale image for testing."""
    return Image.new("L", (64, 64), color=128)


@pytest.fixture
def sample_image_dir(temp_dir, mock_image_rgb) -> Path:
    """A directory with a few images, a nested one and a non-image file."""
    image_dir = temp_dir / "images"
    nested = image_dir / "nested"
    nested.mkdir(parents=True)

    for i in range(3):
        mock_image_rgb.save(image_dir / f"image_{i}.jpg")
    mock_image_rgb.save(nested / "deep.PNG")
    (image_dir / "notes.txt").write_text("not an image")

    return image_dir


# Test markers
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
