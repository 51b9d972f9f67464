"""End-to-end classification of one encoded image."""

from __future__ import annotations

from loguru import logger

from digit_classifier.config import InferenceConfig
from digit_classifier.inference.base import BaseInferenceRunner
from digit_classifier.inference.onnx_runner import ONNXInferenceRunner
from digit_classifier.ranking import rank_probabilities
from digit_classifier.schemas.prediction import ClassificationResult
from digit_classifier.transforms.normalize import ImageNormalizer, decode_image
from digit_classifier.transforms.tensor import build_input_tensor


class DigitClassifier:
    """Classify images with a single-channel NCHW classification model.

    The normalizer is sized from the runner's declared input shape, so the
    same pipeline serves any ``(1, 1, H, W)`` model.  Only the first model
    output is ranked.

    Args:
        runner: Inference backend, shared across ``classify`` calls.
    """

    def __init__(self, runner: BaseInferenceRunner) -> None:
        self.runner = runner
        self.input_shape = runner.input_shape
        self.normalizer = ImageNormalizer(
            self.input_shape.height, self.input_shape.width
        )

    @classmethod
    def from_model_bytes(
        cls,
        model_bytes: bytes,
        config: InferenceConfig | None = None,
    ) -> DigitClassifier:
        """Build a classifier backed by an in-memory ONNX model."""
        return cls(ONNXInferenceRunner(model_bytes, config))

    def classify(self, image_bytes: bytes, source: str = "<memory>") -> ClassificationResult:
        """Decode, normalize, run and rank one image.

        Any :class:`~digit_classifier.errors.ClassifierError` aborts the call;
        there is no partial result.
        """
        image = decode_image(image_bytes)
        logger.debug(f"Decoded {source}: {image.width}x{image.height} {image.mode}")

        grid = self.normalizer.normalize(image)
        tensor = build_input_tensor(grid, self.input_shape)
        outputs = self.runner.run(tensor)
        predictions = rank_probabilities(outputs[0])

        top = predictions[0]
        logger.debug(
            f"{source}: class {top.class_id} ({top.probability:.4f}) "
            f"of {len(predictions)} classes"
        )
        return ClassificationResult(
            source=source,
            image_width=image.width,
            image_height=image.height,
            input_shape=self.input_shape.dims,
            predictions=predictions,
        )
