"""
Kernel - shared infrastructure for validated services

Errors, settings, structured logging and metrics used by the validation and
service layers.
"""

from validated_services.kernel.errors import (
    InvalidContribution,
    InvalidOptions,
    InvalidSchema,
    SchemaNotDeclared,
    ServiceError,
)
from validated_services.kernel.settings import ServiceSettings, default_settings

__all__ = [
    # Errors
    "ServiceError",
    "InvalidContribution",
    "InvalidSchema",
    "InvalidOptions",
    "SchemaNotDeclared",
    # Settings
    "ServiceSettings",
    "default_settings",
]
