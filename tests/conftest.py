"""Shared pytest fixtures for digit_classifier tests.

Builds a tiny "stripe" digit classifier exported to ONNX with torch, plus
images it recognises.  Class ``k`` is a vertical two-pixel stripe starting
at column ``2 * k + 4`` of a 28x28 grid; the model's weight row ``k`` is
that same stripe, so the matching class always scores highest.
"""

from __future__ import annotations

import io
from collections.abc import Callable

import numpy as np
import pytest
import torch
from PIL import Image
from torch import nn

NUM_CLASSES = 10
SIZE = 28


def stripe_template(digit: int) -> np.ndarray:  # type: ignore[type-arg]
    """28x28 float mask with a vertical stripe for *digit*."""
    grid = np.zeros((SIZE, SIZE), dtype=np.float32)
    col = 2 * digit + 4
    grid[:, col : col + 2] = 1.0
    return grid


def stripe_image_bytes(digit: int, scale: int = 2, fmt: str = "PNG") -> bytes:
    """Encode the stripe for *digit* as an RGB image upscaled by *scale*."""
    pixels = (stripe_template(digit) * 255).astype(np.uint8)
    image = Image.fromarray(pixels).convert("RGB")
    image = image.resize((SIZE * scale, SIZE * scale), Image.Resampling.NEAREST)
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def export_onnx(
    model: nn.Module,
    input_shape: tuple[int, ...] = (1, 1, SIZE, SIZE),
    dynamic_batch: bool = False,
) -> bytes:
    """Export *model* to ONNX and return the serialized bytes."""
    buffer = io.BytesIO()
    dynamic_axes = (
        {"input": {0: "batch_size"}, "logits": {0: "batch_size"}}
        if dynamic_batch
        else None
    )
    torch.onnx.export(
        model.eval(),
        (torch.zeros(*input_shape),),
        buffer,
        input_names=["input"],
        output_names=["logits"],
        opset_version=17,
        dynamic_axes=dynamic_axes,
        dynamo=False,
    )
    return buffer.getvalue()


def stripe_classifier() -> nn.Module:
    linear = nn.Linear(SIZE * SIZE, NUM_CLASSES)
    with torch.no_grad():
        weights = np.stack([stripe_template(k).reshape(-1) for k in range(NUM_CLASSES)])
        linear.weight.copy_(torch.from_numpy(weights * 0.1))
        linear.bias.zero_()
    return nn.Sequential(nn.Flatten(), linear)


@pytest.fixture(scope="session")
def stripe_model_bytes() -> bytes:
    """ONNX stripe classifier with a fixed (1, 1, 28, 28) input."""
    return export_onnx(stripe_classifier())


@pytest.fixture(scope="session")
def dynamic_batch_model_bytes() -> bytes:
    """Same classifier exported with a symbolic batch dimension."""
    return export_onnx(stripe_classifier(), dynamic_batch=True)


@pytest.fixture()
def export_model() -> Callable[..., bytes]:
    """Exporter for ad-hoc ONNX models built inside a test."""
    return export_onnx


@pytest.fixture()
def make_stripe_image() -> Callable[..., bytes]:
    """Factory for encoded stripe images of any digit."""
    return stripe_image_bytes


@pytest.fixture()
def five_image_bytes() -> bytes:
    return stripe_image_bytes(5)
