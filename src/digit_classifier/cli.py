"""Command-line entrypoint for digit_classifier.

Usage::

    digit-classifier --image digit.png --model mnist-8.onnx
    digit-classifier --image digit.png --model mnist-8.onnx --format table --top-k 3
    python -m digit_classifier --image digit.png --model mnist-8.onnx --format json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import orjson
from loguru import logger
from rich.console import Console
from rich.table import Table

from digit_classifier.config import InferenceConfig
from digit_classifier.errors import ClassifierError
from digit_classifier.pipeline import DigitClassifier
from digit_classifier.schemas.prediction import ClassificationResult


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="digit-classifier",
        description="Classify a handwritten digit image with an ONNX model.",
    )
    parser.add_argument("--image", type=Path, required=True, help="Image file")
    parser.add_argument("--model", type=Path, required=True, help="ONNX model file")
    parser.add_argument(
        "--format",
        choices=["text", "table", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--top-k",
        type=int,
        default=None,
        help="Only print the K most probable classes (default: all)",
    )
    parser.add_argument(
        "--threads",
        type=int,
        default=0,
        help="ONNX Runtime intra-op threads, 0 lets the runtime decide",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Loguru log level (default: WARNING)",
    )
    args = parser.parse_args(argv)
    if args.top_k is not None and args.top_k < 1:
        parser.error("--top-k must be at least 1")
    if args.threads < 0:
        parser.error("--threads must not be negative")
    return args


def format_text(result: ClassificationResult, top_k: int | None = None) -> str:
    """Render ranked ``(class_index, probability)`` pairs as a Python list."""
    return repr(result.as_pairs()[:top_k])


def build_table(result: ClassificationResult, top_k: int | None = None) -> Table:
    table = Table(title=f"Predictions for {result.source}")
    table.add_column("Rank", justify="right")
    table.add_column("Class", justify="right", style="cyan")
    table.add_column("Probability", justify="right", style="green")
    for rank, pred in enumerate(result.predictions[:top_k], start=1):
        table.add_row(str(rank), str(pred.class_id), f"{pred.probability:.6f}")
    return table


def format_json(result: ClassificationResult, top_k: int | None = None) -> str:
    dump = result.model_dump()
    dump["predictions"] = dump["predictions"][:top_k]
    return orjson.dumps(dump, option=orjson.OPT_INDENT_2).decode()


def main(argv: list[str] | None = None) -> int:
    """Classify one image and print its ranking.  Returns the exit status."""
    args = parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=args.log_level)

    try:
        model_bytes = args.model.read_bytes()
        image_bytes = args.image.read_bytes()
    except OSError as exc:
        logger.error(f"Could not read input file: {exc}")
        return 1

    config = InferenceConfig(intra_op_num_threads=args.threads)
    try:
        classifier = DigitClassifier.from_model_bytes(model_bytes, config)
        result = classifier.classify(image_bytes, source=args.image.name)
    except ClassifierError as exc:
        logger.error(f"{type(exc).__name__}: {exc}")
        return 1

    if args.format == "table":
        Console().print(build_table(result, args.top_k))
    elif args.format == "json":
        print(format_json(result, args.top_k))
    else:
        print(format_text(result, args.top_k))
    return 0


if __name__ == "__main__":
    sys.exit(main())
