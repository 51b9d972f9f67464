"""Exceptions raised by the digit classification pipeline.

Every error is terminal for the invocation that raised it: nothing in the
pipeline retries or returns a partial result.
"""


class ClassifierError(Exception):
    """Base class for all pipeline failures."""


class DecodeError(ClassifierError):
    """Image bytes could not be decoded into a bitmap."""


class ModelLoadError(ClassifierError):
    """Model bytes are malformed or incompatible with the runtime."""


class ShapeMismatch(ClassifierError):
    """Tensor dimensions do not match what the model declares."""


class InferenceError(ClassifierError):
    """The forward pass failed inside the inference runtime."""


class InvalidOutput(ClassifierError):
    """The model output cannot be turned into a probability ranking."""
