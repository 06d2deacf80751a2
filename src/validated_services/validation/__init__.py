"""
Validation - schemas, validation results and the error tree
"""

from validated_services.validation.error_tree import (
    ErrorTree,
    coerce_contribution,
    merge_error,
    merge_errors,
)
from validated_services.validation.results import ValidationResult
from validated_services.validation.schema import (
    BASE_ERROR_KEY,
    FilledStr,
    Schema,
    define_schema,
    optional,
    predicate,
    required,
)
from validated_services.validation.validator import InputValidator

__all__ = [
    # Error tree
    "ErrorTree",
    "coerce_contribution",
    "merge_error",
    "merge_errors",
    # Schemas
    "BASE_ERROR_KEY",
    "FilledStr",
    "Schema",
    "define_schema",
    "optional",
    "predicate",
    "required",
    # Validation
    "InputValidator",
    "ValidationResult",
]
