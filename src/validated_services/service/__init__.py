"""
Service - the validated unit of work and its execution state machine
"""

from validated_services.service.base import Service
from validated_services.service.registry import (
    SchemaRegistry,
    ServiceConfig,
    default_registry,
)
from validated_services.service.resolver import SchemaResolver
from validated_services.service.state import (
    ExecutionController,
    ServiceState,
    ServiceStatus,
)

__all__ = [
    "Service",
    "SchemaRegistry",
    "ServiceConfig",
    "default_registry",
    "SchemaResolver",
    "ExecutionController",
    "ServiceState",
    "ServiceStatus",
]
