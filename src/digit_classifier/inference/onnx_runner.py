"""ONNX Runtime inference runner."""

from __future__ import annotations

import numpy as np
import onnxruntime as ort
from loguru import logger

from digit_classifier.config import InferenceConfig
from digit_classifier.errors import InferenceError, ModelLoadError, ShapeMismatch
from digit_classifier.inference.base import BaseInferenceRunner
from digit_classifier.transforms.tensor import InputShape


class ONNXInferenceRunner(BaseInferenceRunner):
    """Run forward inference with an in-memory ONNX model.

    The session options come from an explicit :class:`InferenceConfig`
    instead of a process-wide runtime environment.  The model's first input
    must be a single-channel NCHW tensor.

    Failures are raised immediately and never retried.

    Args:
        model_bytes: Serialized ONNX model.
        config: Session configuration.  Defaults to CPU with warning-level
            runtime logging.
    """

    def __init__(
        self,
        model_bytes: bytes,
        config: InferenceConfig | None = None,
    ) -> None:
        self.config = config or InferenceConfig()
        if not model_bytes:
            raise ModelLoadError("Model buffer is empty")

        options = ort.SessionOptions()
        options.logid = self.config.name
        options.log_severity_level = self.config.log_severity_level
        options.intra_op_num_threads = self.config.intra_op_num_threads

        try:
            self.session = ort.InferenceSession(
                model_bytes,
                sess_options=options,
                providers=list(self.config.providers),
            )
        except Exception as exc:
            raise ModelLoadError(f"Could not load ONNX model: {exc}") from exc

        inputs = self.session.get_inputs()
        if not inputs:
            raise ModelLoadError("ONNX model declares no inputs")
        self.input_name: str = inputs[0].name
        self._input_shape = InputShape.from_dims(inputs[0].shape)
        logger.debug(
            f"Loaded ONNX model ({len(model_bytes) / 1024:.1f} KB), "
            f"input '{self.input_name}' {self._input_shape.dims}"
        )

    @property
    def input_shape(self) -> InputShape:
        return self._input_shape

    def run(self, tensor: np.ndarray) -> list[np.ndarray]:  # type: ignore[type-arg]
        """Single forward pass; returns all outputs as numpy arrays."""
        if tuple(tensor.shape) != self._input_shape.dims:
            raise ShapeMismatch(
                f"Input tensor shape {tuple(tensor.shape)} does not match "
                f"model input {self._input_shape.dims}"
            )
        try:
            outputs = self.session.run(None, {self.input_name: tensor})
        except Exception as exc:
            raise InferenceError(f"ONNX forward pass failed: {exc}") from exc
        if not outputs:
            raise InferenceError("ONNX model produced no outputs")
        return [np.asarray(output) for output in outputs]
