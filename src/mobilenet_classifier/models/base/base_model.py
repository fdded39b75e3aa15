"""
Runtime model wrapper.

This module loads a ``.tflite`` model into the LiteRT interpreter and
exposes a small index-based API for running it with numpy buffers.
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np
from ai_edge_litert.interpreter import Interpreter, load_delegate

from ...utils.exceptions import InferenceError, ModelLoadError
from ...utils.helpers import format_size, format_time
from ...utils.logging import get_logger


__all__ = ["Model", "ModelOptions"]


@dataclass
class ModelOptions:
    """Options for creating the runtime interpreter."""

    num_threads: int | None = None
    delegate_path: str | None = None  # Shared library of an external delegate


class Model:
    """
    A loaded model and its interpreter.

    Instances are created with ``Model.create_model`` and must be closed
    with ``close()`` (or used as a context manager) to release the
    interpreter.
    """

    def __init__(self, interpreter: Any, data: bytes, model_path: str | Path | None = None):
        self._interpreter = interpreter
        self._data = data
        self.model_path = Path(model_path) if model_path is not None else None
        self._input_details = interpreter.get_input_details()
        self._output_details = interpreter.get_output_details()
        self.logger = get_logger()

    @classmethod
    def create_model(
        cls, model_path: str | Path, options: ModelOptions | None = None
    ) -> "Model":
        """
        Load a model file and allocate its tensors.

        Args:
            model_path: Path to the ``.tflite`` file
            options: Interpreter options

        Returns:
            Ready-to-run model

        Raises:
            ModelLoadError: If the file cannot be read or the runtime
                rejects it
        """
        logger = get_logger()
        options = options or ModelOptions()
        model_path = Path(model_path)

        try:
            data = model_path.read_bytes()
        except OSError as e:
            raise ModelLoadError(f"Failed to read model file {model_path}: {e}") from e

        logger.info(f"Loading model from: {model_path} ({format_size(len(data))})")

        try:
            delegates = (
                [load_delegate(options.delegate_path)] if options.delegate_path else None
            )
            interpreter = Interpreter(
                model_content=data,
                num_threads=options.num_threads,
                experimental_delegates=delegates,
            )
            interpreter.allocate_tensors()
        except (ValueError, RuntimeError) as e:
            raise ModelLoadError(f"Failed to load model {model_path}: {e}") from e

        return cls(interpreter, data, model_path)

    @property
    def data(self) -> bytes:
        """Raw model file contents."""
        return self._data

    @property
    def is_closed(self) -> bool:
        return self._interpreter is None

    def get_input_details(self) -> list[dict[str, Any]]:
        return [dict(d) for d in self._input_details]

    def get_output_details(self) -> list[dict[str, Any]]:
        return [dict(d) for d in self._output_details]

    def get_input_tensor_shape(self, index: int) -> tuple[int, ...]:
        return tuple(int(s) for s in self._input_details[index]["shape"])

    def get_output_tensor_shape(self, index: int) -> tuple[int, ...]:
        return tuple(int(s) for s in self._output_details[index]["shape"])

    def get_output_tensor_dtype(self, index: int) -> np.dtype:
        return np.dtype(self._output_details[index]["dtype"])

    def run(self, inputs: list[np.ndarray], outputs: dict[int, np.ndarray]) -> None:
        """
        Run inference.

        Each input is reshaped to its input tensor shape. The output tensor
        at each key of ``outputs`` is copied into the corresponding buffer
        in place.

        Args:
            inputs: One array per model input, in input order
            outputs: Output index to destination buffer
        """
        if self._interpreter is None:
            raise InferenceError("Model has been closed")

        if len(inputs) != len(self._input_details):
            raise ValueError(
                f"Model expects {len(self._input_details)} inputs, got {len(inputs)}"
            )

        for detail, array in zip(self._input_details, inputs):
            array = np.asarray(array)
            expected_dtype = np.dtype(detail["dtype"])
            if array.dtype != expected_dtype:
                raise ValueError(
                    f"Input '{detail.get('name', detail['index'])}' expects {expected_dtype}, "
                    f"got {array.dtype}"
                )
            shape = tuple(int(s) for s in detail["shape"])
            if array.size != int(np.prod(shape)):
                raise ValueError(
                    f"Cannot feed array of shape {array.shape} to input of shape {shape}"
                )
            self._interpreter.set_tensor(detail["index"], array.reshape(shape))

        start_time = time.time()
        self._interpreter.invoke()
        self.logger.debug(f"Interpreter invoke took {format_time(time.time() - start_time)}")

        for output_index, buffer in outputs.items():
            result = self._interpreter.get_tensor(self._output_details[output_index]["index"])
            np.copyto(buffer, np.asarray(result).reshape(buffer.shape), casting="same_kind")

    def close(self) -> None:
        """Release the interpreter."""
        if self._interpreter is not None:
            self._interpreter = None
            self.logger.debug("Model closed")

    def __enter__(self) -> "Model":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
