"""Abstract base class for inference runners."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from digit_classifier.transforms.tensor import InputShape


class BaseInferenceRunner(ABC):
    """Base class for forward-inference backends.

    A runner exposes the input shape its model declares and executes one
    forward pass per ``run`` call.  Instances are built once per process and
    reused; they hold no per-call state.
    """

    @property
    @abstractmethod
    def input_shape(self) -> InputShape:
        """Shape of the model's first input."""

    @abstractmethod
    def run(self, tensor: np.ndarray) -> list[np.ndarray]:  # type: ignore[type-arg]
        """Run a forward pass on a ``(1, 1, H, W)`` tensor.

        Returns every model output in declaration order.
        """
