"""
Validated Services - validated command objects with mergeable errors

A service is built from a context and raw input, validates that input against
a pydantic schema before any business logic runs, and reports a uniform
success/fail outcome. Errors from validation and from business logic end up
in one error tree.

Fun fact: the "command object" pattern predates most languages that use it -
the Gang of Four catalogued it in 1994, but undo stacks built on it shipped
in text editors a decade earlier.
"""

from validated_services.kernel.errors import (
    InvalidContribution,
    InvalidOptions,
    InvalidSchema,
    SchemaNotDeclared,
    ServiceError,
)
from validated_services.service import Service, ServiceStatus
from validated_services.validation import (
    FilledStr,
    Schema,
    ValidationResult,
    define_schema,
    optional,
    predicate,
    required,
)

__version__ = "0.1.0"
__all__ = [
    "Service",
    "ServiceStatus",
    "Schema",
    "ValidationResult",
    "FilledStr",
    "define_schema",
    "optional",
    "predicate",
    "required",
    "ServiceError",
    "InvalidContribution",
    "InvalidSchema",
    "InvalidOptions",
    "SchemaNotDeclared",
    "__version__",
]
