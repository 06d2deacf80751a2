"""
Pytest configuration and shared fixtures

Service types are defined per test (like throwaway classes), so each test gets
its own registry entry. The fixtures below keep base-class callbacks from
leaking between tests.
"""

from types import SimpleNamespace
from typing import Iterator

import pytest

from validated_services import Service, define_schema, required
from validated_services.service.registry import SchemaRegistry
from validated_services.validation.schema import FilledStr, Schema


@pytest.fixture(autouse=True)
def clean_base_callbacks() -> Iterator[None]:
    """Callbacks registered on Service itself apply to every subclass"""
    yield
    Service.clean_callbacks()


@pytest.fixture
def user() -> SimpleNamespace:
    """Acting user passed as the service context"""
    return SimpleNamespace(foo="bar", name="alice")


@pytest.fixture
def args() -> dict:
    """Raw input that satisfies foo_schema"""
    return {"foo": "bar"}


@pytest.fixture
def foo_schema() -> Schema:
    """Schema requiring a non-empty string under 'foo'"""
    return define_schema("FooSchema", foo=required(FilledStr))


@pytest.fixture
def registry() -> SchemaRegistry:
    """Fresh registry, isolated from the process-wide default"""
    return SchemaRegistry()


@pytest.fixture
def succeeding_service(foo_schema: Schema) -> type[Service]:
    """Service whose logic always reports success"""

    class SucceedingService(Service, schema=foo_schema):
        def execute(self, logic=None):
            super().execute(lambda: True)

    yield SucceedingService
    SucceedingService.clean_callbacks()
