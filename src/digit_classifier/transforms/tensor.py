"""NCHW input shape handling and tensor layout."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from pydantic import BaseModel, Field

from digit_classifier.errors import ShapeMismatch


class InputShape(BaseModel, frozen=True):
    """Declared model input in NCHW layout, restricted to one image, one channel."""

    height: int = Field(gt=0)
    width: int = Field(gt=0)

    @property
    def dims(self) -> tuple[int, int, int, int]:
        return (1, 1, self.height, self.width)

    @classmethod
    def from_dims(cls, dims: Sequence[int | str | None]) -> InputShape:
        """Validate dimensions reported by a model and build an ``InputShape``.

        The layout is asserted rather than assumed: the shape must have rank 4
        and be ordered ``(batch, channel, height, width)``.  A symbolic batch
        dimension (a string or ``None``, as exported with dynamic axes) is
        pinned to 1.  Height and width must be concrete since the image is
        resized to them.

        Raises:
            ShapeMismatch: If the shape is not a single-channel, single-batch
                NCHW shape with concrete spatial dimensions.
        """
        dims = list(dims)
        if len(dims) != 4:
            raise ShapeMismatch(
                f"Expected NCHW input of rank 4, model declares {dims}"
            )
        batch, channels, height, width = dims
        if _is_concrete(batch) and batch != 1:
            raise ShapeMismatch(f"Only batch size 1 is supported, model declares {batch}")
        if channels != 1:
            raise ShapeMismatch(
                f"Only single-channel input is supported, model declares {channels}"
            )
        for name, value in (("height", height), ("width", width)):
            if not _is_concrete(value) or value <= 0:  # type: ignore[operator]
                raise ShapeMismatch(
                    f"Model input {name} must be a positive integer, got {value!r}"
                )
        return cls(height=height, width=width)  # type: ignore[arg-type]


def _is_concrete(dim: int | str | None) -> bool:
    return isinstance(dim, int) and not isinstance(dim, bool)


def build_input_tensor(
    grid: np.ndarray,  # type: ignore[type-arg]
    shape: InputShape,
) -> np.ndarray:  # type: ignore[type-arg]
    """Lay a ``(H, W)`` grid out as a ``(1, 1, H, W)`` float32 tensor.

    ``tensor[0, 0, row, col] == grid[row, col]`` for every position.
    """
    grid = np.asarray(grid, dtype=np.float32)
    if grid.shape != (shape.height, shape.width):
        raise ShapeMismatch(
            f"Grid shape {grid.shape} does not match model input "
            f"{(shape.height, shape.width)}"
        )
    return np.ascontiguousarray(grid.reshape(shape.dims))
