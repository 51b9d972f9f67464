"""Model inference runners."""

from digit_classifier.inference.base import BaseInferenceRunner
from digit_classifier.inference.onnx_runner import ONNXInferenceRunner

__all__ = [
    "BaseInferenceRunner",
    "ONNXInferenceRunner",
]
