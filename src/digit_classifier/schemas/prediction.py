"""Ranked classification result schema.

One result per classified image, holding the probability of every class
sorted by confidence.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class ClassProbability(BaseModel, frozen=True):
    """Probability assigned to a single class index."""

    class_id: int = Field(ge=0)
    probability: float = Field(ge=0.0, le=1.0)


class ClassificationResult(BaseModel):
    """Full ranking for a single image.

    ``predictions`` covers every class the model declares, highest
    probability first.
    """

    source: str
    image_width: int
    image_height: int
    input_shape: tuple[int, int, int, int]
    predictions: list[ClassProbability]
    created_at: str = Field(default_factory=lambda: datetime.now(tz=UTC).isoformat())

    @property
    def top(self) -> ClassProbability:
        return self.predictions[0]

    def as_pairs(self) -> list[tuple[int, float]]:
        """Return ``(class_index, probability)`` pairs in ranked order."""
        return [(p.class_id, p.probability) for p in self.predictions]
