"""Classification result schemas."""

from digit_classifier.schemas.prediction import (
    ClassificationResult,
    ClassProbability,
)

__all__ = [
    "ClassProbability",
    "ClassificationResult",
]
