"""Single-image handwritten digit classification with an ONNX model."""

__version__ = "0.0.1"
