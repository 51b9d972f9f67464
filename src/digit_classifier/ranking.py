"""Softmax normalization and probability ranking of model outputs."""

from __future__ import annotations

import numpy as np

from digit_classifier.errors import InvalidOutput
from digit_classifier.schemas.prediction import ClassProbability


def softmax(logits: np.ndarray, axis: int = -1) -> np.ndarray:  # type: ignore[type-arg]
    """Numerically stable softmax along *axis*.

    Non-finite logits produce NaN rather than raising; callers check.
    """
    with np.errstate(invalid="ignore", over="ignore"):
        exp = np.exp(logits - logits.max(axis=axis, keepdims=True))
        return exp / exp.sum(axis=axis, keepdims=True)


def rank_probabilities(output: np.ndarray) -> list[ClassProbability]:  # type: ignore[type-arg]
    """Convert a ``(1, C)`` logits tensor into a full descending ranking.

    Classes with exactly equal probability keep ascending class-index order.

    Raises:
        InvalidOutput: If the output is not a single row of numbers, is
            empty, or normalizes to NaN (NaN or infinite logits).
    """
    try:
        logits = np.asarray(output, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidOutput(f"Model output is not numeric: {exc}") from exc

    if logits.ndim == 2 and logits.shape[0] == 1:
        logits = logits[0]
    elif logits.ndim != 1:
        raise InvalidOutput(f"Expected output of shape (1, C), got {logits.shape}")
    if logits.size == 0:
        raise InvalidOutput("Model output has no classes")

    probs = softmax(logits)
    if np.isnan(probs).any():
        bad = np.flatnonzero(np.isnan(probs)).tolist()
        raise InvalidOutput(f"Softmax produced NaN for class indices {bad}")

    order = np.argsort(-probs, kind="stable")
    return [
        ClassProbability(class_id=int(idx), probability=float(probs[idx]))
        for idx in order
    ]
