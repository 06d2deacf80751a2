"""
Input validator - runs a resolved schema against raw input

The schema does the actual work; this layer records what happened.
"""

from typing import Any

from validated_services.kernel.logging import get_logger
from validated_services.validation.results import ValidationResult
from validated_services.validation.schema import Schema

logger = get_logger(__name__)


class InputValidator:
    """Validates raw service input once, at construction time"""

    def validate(self, schema: Schema, raw_input: Any) -> ValidationResult:
        """
        Run schema against raw_input

        Returns:
            ValidationResult with either an error tree or the filtered output
        """
        result = schema(raw_input)
        if result.errors:
            logger.debug(
                "Input validation failed",
                schema=schema.model.__name__,
                error_keys=sorted(result.errors),
            )
        else:
            logger.debug("Input validation passed", schema=schema.model.__name__)
        return result
