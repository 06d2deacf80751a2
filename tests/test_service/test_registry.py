"""
Tests for SchemaRegistry and SchemaResolver
"""

from types import SimpleNamespace

import pytest

from validated_services import Service
from validated_services.kernel.errors import InvalidOptions, InvalidSchema, SchemaNotDeclared
from validated_services.service.registry import SchemaRegistry
from validated_services.service.resolver import SchemaResolver
from validated_services.validation.schema import Schema


class Parent:
    pass


class Child(Parent):
    pass


def default_options(context) -> dict:
    return {"current_context": context}


# =============================================================================
# SchemaRegistry
# =============================================================================


def test_declare_and_resolve(registry: SchemaRegistry, foo_schema: Schema) -> None:
    registry.declare(Parent, foo_schema)
    assert registry.resolve(Parent).schema is foo_schema


def test_resolve_walks_mro(registry: SchemaRegistry, foo_schema: Schema) -> None:
    registry.declare(Parent, foo_schema)
    assert registry.resolve(Child).schema is foo_schema
    assert registry.is_declared(Child)


def test_latest_declaration_wins(registry: SchemaRegistry, foo_schema: Schema) -> None:
    other = foo_schema.with_messages({"string_type": "must be text"})
    registry.declare(Parent, foo_schema)
    registry.declare(Parent, other)
    assert registry.resolve(Parent).schema is other


def test_undeclared_type_raises(registry: SchemaRegistry) -> None:
    with pytest.raises(SchemaNotDeclared) as exc_info:
        registry.resolve(Parent)
    assert exc_info.value.service_type is Parent


def test_declaring_non_schema_raises(registry: SchemaRegistry) -> None:
    with pytest.raises(InvalidSchema):
        registry.declare(Parent, "FooSchema")


def test_forget_and_clear(registry: SchemaRegistry, foo_schema: Schema) -> None:
    registry.declare(Parent, foo_schema)
    registry.declare(Child, foo_schema)

    registry.forget(Child)
    assert registry.resolve(Child).schema is foo_schema  # falls back to Parent

    registry.clear()
    assert not registry.is_declared(Child)


# =============================================================================
# SchemaResolver
# =============================================================================


def test_resolver_injects_options(registry: SchemaRegistry, foo_schema: Schema) -> None:
    registry.declare(Parent, foo_schema)
    user = SimpleNamespace(name="alice")

    schema = SchemaResolver(registry).resolve(Parent, user, default_options)

    assert schema.options == {"current_context": user}
    assert foo_schema.options == {}


def test_declared_options_function_takes_precedence(
    registry: SchemaRegistry, foo_schema: Schema
) -> None:
    registry.declare(Parent, foo_schema, lambda context: {"user": context})

    schema = SchemaResolver(registry).resolve(Parent, "alice", default_options)

    assert schema.options == {"user": "alice"}


def test_non_mapping_options_raise(registry: SchemaRegistry, foo_schema: Schema) -> None:
    registry.declare(Parent, foo_schema)

    with pytest.raises(InvalidOptions):
        SchemaResolver(registry).resolve(Parent, "alice", lambda context: [context])


def test_resolver_on_service_with_custom_registry(
    registry: SchemaRegistry, foo_schema: Schema, user, args
) -> None:
    class Isolated(Service):
        pass

    Isolated.registry = registry
    Isolated.declare_schema(foo_schema)

    assert Isolated(user, args).inputs == args
    assert registry.is_declared(Isolated)
