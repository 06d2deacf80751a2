"""
Custom exceptions for validated services

Only programmer-contract violations are raised. Data problems found while
validating input are never exceptions - they are captured in the error tree
and observed through ``Service.errors`` / ``Service.failed``.
"""

from typing import Any


class ServiceError(Exception):
    """Base exception for all validated-service errors"""

    pass


class InvalidContribution(ServiceError, TypeError):
    """
    Raised when an error contribution is not a mapping or a sequence of pairs

    Signals a bug in the calling code. The error tree is left untouched.
    """

    def __init__(self, contribution: Any, message: str = "") -> None:
        self.contribution = contribution
        super().__init__(
            message
            or f"Error contribution must be a mapping or a sequence of (key, value) pairs, "
            f"got {type(contribution).__name__}"
        )


class InvalidSchema(ServiceError, TypeError):
    """Raised when a declared schema is neither a Schema nor a pydantic model class"""

    def __init__(self, schema: Any) -> None:
        self.schema = schema
        super().__init__(
            f"Cannot use {schema!r} as a schema - expected a Schema or a pydantic BaseModel subclass"
        )


class InvalidOptions(ServiceError, TypeError):
    """Raised when options_for_context returns something other than a mapping"""

    def __init__(self, service_type: type, options: Any) -> None:
        self.service_type = service_type
        self.options = options
        super().__init__(
            f"options_for_context of {service_type.__name__} must return a mapping, "
            f"got {type(options).__name__}"
        )


class SchemaNotDeclared(ServiceError, LookupError):
    """Raised when a service type (or any of its bases) never declared a schema"""

    def __init__(self, service_type: type) -> None:
        self.service_type = service_type
        super().__init__(f"No schema declared for {service_type.__name__}")
