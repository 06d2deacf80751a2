"""
Validation result model

Holds what a schema run produced: an error tree, and - only when that tree is
empty - the filtered output the service will use as its inputs.
"""

from typing import Any

from pydantic import BaseModel, Field, model_validator


class ValidationResult(BaseModel):
    """Outcome of validating raw input against a schema"""

    model_config = {"frozen": True}

    errors: dict[str, Any] = Field(
        default_factory=dict,
        description="Error tree: field key -> message or list of messages",
    )

    output: dict[str, Any] | None = Field(
        default=None,
        description="Validated and filtered input (None when there are errors)",
    )

    @model_validator(mode="after")
    def output_only_without_errors(self) -> "ValidationResult":
        if self.errors and self.output is not None:
            raise ValueError("ValidationResult cannot carry output alongside errors")
        return self

    @property
    def is_valid(self) -> bool:
        return not self.errors
