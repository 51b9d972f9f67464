"""Pydantic frozen configuration models for digit_classifier."""

from pydantic import BaseModel, Field, field_validator


class InferenceConfig(BaseModel, frozen=True):
    """Configuration for the ONNX inference session.

    Built once per process and handed to the runner explicitly; nothing is
    read from the environment or from config files.
    """

    name: str = "digit-classifier"
    log_severity_level: int = Field(default=2, ge=0, le=4)
    intra_op_num_threads: int = Field(default=0, ge=0)
    providers: tuple[str, ...] = ("CPUExecutionProvider",)

    @field_validator("providers")
    @classmethod
    def _providers_not_empty(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Require at least one execution provider."""
        if not value:
            raise ValueError("at least one execution provider is required")
        return value
