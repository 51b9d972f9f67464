"""Decode, resize and rescale images into normalized intensity grids."""

from __future__ import annotations

import io

import numpy as np
from PIL import Image, UnidentifiedImageError
from torchvision import transforms

from digit_classifier.errors import DecodeError, ShapeMismatch


def decode_image(data: bytes) -> Image.Image:
    """Decode an encoded raster image held in memory.

    The pixel data is loaded eagerly so truncated files fail here rather
    than halfway through resizing.

    Raises:
        DecodeError: If *data* is empty or not a format Pillow recognises.
    """
    if not data:
        raise DecodeError("Image buffer is empty")
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        ValueError,
        SyntaxError,
    ) as exc:
        raise DecodeError(f"Could not decode image: {exc}") from exc
    return image


def _to_8bit(image: Image.Image) -> Image.Image:
    """Scale 16- and 32-bit integer grayscale images down to 8-bit ``L``.

    Values are mapped from ``[0, 65535]`` to ``[0, 255]`` (``v / 257``,
    rounded); 32-bit ``I`` images are clipped to the 16-bit range first.

    Raises:
        DecodeError: For floating-point ``F`` images, whose intensity range
            is not defined by the format.
    """
    if image.mode == "F":
        raise DecodeError("Floating-point images are not supported")
    if image.mode == "I" or image.mode.startswith("I;16"):
        pixels = np.clip(np.asarray(image, dtype=np.float64), 0, 65535)
        return Image.fromarray(np.rint(pixels / 257.0).astype(np.uint8))
    return image


class ImageNormalizer:
    """Convert images into a ``(height, width)`` grid of floats in ``[0, 1]``.

    Resizing uses nearest-neighbour sampling, so every output pixel keeps one
    of the source intensities.  The result is then reduced to a single luminance
    channel and divided by 255.

    Args:
        height: Target grid height in pixels.
        width: Target grid width in pixels.
    """

    def __init__(self, height: int, width: int) -> None:
        if height <= 0 or width <= 0:
            raise ShapeMismatch(
                f"Target size must be positive, got height={height} width={width}"
            )
        self.height = height
        self.width = width
        self.transform = transforms.Compose(
            [
                transforms.Resize(
                    (height, width),
                    interpolation=transforms.InterpolationMode.NEAREST,
                ),
                transforms.Grayscale(num_output_channels=1),
                transforms.ToTensor(),
            ]
        )

    def normalize(self, image: Image.Image) -> np.ndarray:  # type: ignore[type-arg]
        """Return the normalized grid for an already decoded image."""
        image = _to_8bit(image)
        if image.mode not in ("L", "RGB"):
            # Palette, alpha and CMYK images go through RGB before luminance
            image = image.convert("RGB")
        tensor = self.transform(image)
        grid = tensor[0].numpy().astype(np.float32, copy=False)
        return np.clip(grid, 0.0, 1.0)

    def __call__(self, data: bytes) -> np.ndarray:  # type: ignore[type-arg]
        return self.normalize(decode_image(data))
