"""Image-to-tensor transforms for single-channel NCHW models.

``ImageNormalizer`` turns encoded image bytes into a ``[0, 1]`` intensity
grid sized for the model; ``build_input_tensor`` lays that grid out as the
``(1, 1, H, W)`` batch the model consumes.
"""

from digit_classifier.transforms.normalize import ImageNormalizer, decode_image
from digit_classifier.transforms.tensor import InputShape, build_input_tensor

__all__ = [
    "ImageNormalizer",
    "InputShape",
    "build_input_tensor",
    "decode_image",
]
