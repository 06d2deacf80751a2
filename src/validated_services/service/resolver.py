"""
Schema resolver - picks a service type's schema and injects its options
"""

from collections.abc import Mapping
from typing import Any

from validated_services.kernel.errors import InvalidOptions
from validated_services.service.registry import OptionsForContext, SchemaRegistry, default_registry
from validated_services.validation.schema import Schema


class SchemaResolver:
    """
    Resolves the schema a service instance validates against

    The options function declared alongside the schema takes precedence over
    the instance hook passed to resolve().
    """

    def __init__(self, registry: SchemaRegistry = default_registry) -> None:
        self._registry = registry

    def resolve(
        self,
        service_type: type,
        context: Any,
        options_for_context: OptionsForContext,
    ) -> Schema:
        """
        Build the schema for one construction of service_type

        Raises:
            SchemaNotDeclared: If service_type has no declared schema
            InvalidOptions: If the options function does not return a mapping
        """
        config = self._registry.resolve(service_type)
        options_fn = config.options_for_context or options_for_context
        options = options_fn(context)
        if not isinstance(options, Mapping):
            raise InvalidOptions(service_type, options)
        return config.schema.with_options(options)
