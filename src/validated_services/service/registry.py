"""
Schema registry - which schema belongs to which service type

Declarations are written once, when a Service subclass is defined, and read
on every construction. Lookups walk the MRO, so a subclass without its own
declaration uses its nearest declared ancestor.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from validated_services.kernel.errors import SchemaNotDeclared
from validated_services.kernel.logging import get_logger
from validated_services.validation.schema import Schema

logger = get_logger(__name__)

OptionsForContext = Callable[[Any], Mapping[str, Any]]


@dataclass(frozen=True)
class ServiceConfig:
    """Per-type declaration: the schema plus an optional options function"""

    schema: Schema
    options_for_context: OptionsForContext | None = None


class SchemaRegistry:
    """Maps service types to their ServiceConfig"""

    def __init__(self) -> None:
        self._configs: dict[type, ServiceConfig] = {}

    def declare(
        self,
        service_type: type,
        schema: Schema | type[BaseModel],
        options_for_context: OptionsForContext | None = None,
    ) -> ServiceConfig:
        """
        Declare (or re-declare) the schema for a service type

        The most recent declaration wins.

        Raises:
            InvalidSchema: If schema is not a Schema or a BaseModel subclass
        """
        config = ServiceConfig(
            schema=Schema.coerce(schema),
            options_for_context=options_for_context,
        )
        if service_type in self._configs:
            logger.debug("Schema re-declared", service_type=service_type.__name__)
        self._configs[service_type] = config
        logger.debug(
            "Schema declared",
            service_type=service_type.__name__,
            schema=config.schema.model.__name__,
        )
        return config

    def resolve(self, service_type: type) -> ServiceConfig:
        """
        Find the config for service_type or its nearest declared base

        Raises:
            SchemaNotDeclared: If no type in the MRO declared a schema
        """
        for klass in service_type.__mro__:
            config = self._configs.get(klass)
            if config is not None:
                return config
        raise SchemaNotDeclared(service_type)

    def is_declared(self, service_type: type) -> bool:
        return any(klass in self._configs for klass in service_type.__mro__)

    def forget(self, service_type: type) -> None:
        """Remove the declaration made directly on service_type, if any"""
        self._configs.pop(service_type, None)

    def clear(self) -> None:
        """Remove every declaration"""
        self._configs.clear()


default_registry = SchemaRegistry()
