"""
Service - base class for validated units of work

A service is constructed with a context (usually the acting user) and a raw
input mapping. Construction validates the input against the schema declared
for the service type; execute() then runs business logic, but only if the
input was valid.

Example:
    >>> class RenamePost(Service, schema=RenamePostSchema):
    ...     def execute(self, logic=None):
    ...         super().execute(lambda: self.rename(self.inputs["title"]))
    ...
    >>> service = RenamePost(current_user, {"title": "Hello"})
    >>> service.execute()
    >>> service.succeeded
    True

Logic receives either no arguments or the service itself, and reports success
by returning a truthy value. Subclasses that skip super().execute() and call
mark_success() directly are still bound by the fail-lock: a service that
failed validation never succeeds.
"""

import copy
import inspect
from collections.abc import Callable, Mapping
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

from validated_services.kernel.logging import LogOperation, get_logger
from validated_services.kernel.metrics import (
    error_contributions_total,
    service_execution_duration_seconds,
    service_executions_total,
    services_initialized_total,
)
from validated_services.kernel.settings import ServiceSettings, default_settings
from validated_services.service.registry import (
    OptionsForContext,
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
from validated_services.validation.error_tree import ErrorTree, merge_errors
from validated_services.validation.schema import Schema
from validated_services.validation.validator import InputValidator

logger = get_logger(__name__)

ContextT = TypeVar("ContextT")

Logic = Callable[..., Any]
ServiceCallback = Callable[["Service[Any]"], None]


class Service(Generic[ContextT]):
    """
    Base class for validated services

    Subclasses declare their schema as a class keyword:

        class CreatePost(Service[User], schema=CreatePostSchema): ...

    where the schema is a Schema or any pydantic BaseModel subclass. An
    options_for_context keyword, or an override of the options_for_context
    method, controls what the schema's predicates see as options.
    """

    registry: ClassVar[SchemaRegistry] = default_registry
    settings: ClassVar[ServiceSettings] = default_settings

    _success_callbacks: ClassVar[list[ServiceCallback]] = []
    _fail_callbacks: ClassVar[list[ServiceCallback]] = []

    def __init_subclass__(
        cls,
        schema: Schema | type[BaseModel] | None = None,
        options_for_context: OptionsForContext | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        cls._success_callbacks = []
        cls._fail_callbacks = []
        if schema is not None:
            cls.declare_schema(schema, options_for_context=options_for_context)

    # ------------------------------------------------------------------
    # Class-level declarations
    # ------------------------------------------------------------------

    @classmethod
    def declare_schema(
        cls,
        schema: Schema | type[BaseModel],
        *,
        options_for_context: OptionsForContext | None = None,
    ) -> ServiceConfig:
        """Declare the schema for this service type, replacing any earlier one"""
        return cls.registry.declare(cls, schema, options_for_context)

    @classmethod
    def on_success(cls, callback: ServiceCallback) -> ServiceCallback:
        """Register a callback run when an instance succeeds (usable as a decorator)"""
        cls._success_callbacks.append(callback)
        return callback

    @classmethod
    def on_fail(cls, callback: ServiceCallback) -> ServiceCallback:
        """Register a callback run when an instance is marked FAILED (usable as a decorator)"""
        cls._fail_callbacks.append(callback)
        return callback

    @classmethod
    def clean_callbacks(cls) -> None:
        """Drop callbacks registered directly on this class"""
        cls._success_callbacks.clear()
        cls._fail_callbacks.clear()

    @classmethod
    def _callbacks_for(cls, status: ServiceStatus) -> list[ServiceCallback]:
        attribute = "_success_callbacks" if status is ServiceStatus.SUCCEEDED else "_fail_callbacks"
        callbacks: list[ServiceCallback] = []
        for klass in reversed(cls.__mro__):
            callbacks.extend(klass.__dict__.get(attribute, ()))
        return callbacks

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def __init__(self, context: ContextT, raw_input: Mapping[str, Any] | None = None) -> None:
        self._context = context
        self._state = ServiceState()
        self._controller = ExecutionController(self._state, on_transition=self._run_callbacks)

        schema = SchemaResolver(self.registry).resolve(
            type(self), context, self.options_for_context
        )
        result = InputValidator().validate(schema, {} if raw_input is None else raw_input)

        if result.errors:
            self._merge(result.errors, source="validation")
            self._controller.mark_failed()
        else:
            self._state.inputs = result.output

        services_initialized_total.labels(
            service_type=self.service_type, status=self._state.status.value
        ).inc()
        logger.debug(
            "Service initialized",
            service_type=self.service_type,
            status=self._state.status.value,
            error_keys=sorted(self._state.errors),
        )

    def options_for_context(self, context: ContextT) -> Mapping[str, Any]:
        """Options injected into the schema; override to rename or reshape them"""
        return {self.settings.default_option_key: context}

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def service_type(self) -> str:
        return type(self).__name__

    @property
    def context(self) -> ContextT:
        return self._context

    @property
    def errors(self) -> ErrorTree:
        """Snapshot of the accumulated error tree"""
        return copy.deepcopy(self._state.errors)

    @property
    def inputs(self) -> dict[str, Any] | None:
        """Validated input, or None when validation failed"""
        return copy.deepcopy(self._state.inputs)

    @property
    def status(self) -> ServiceStatus:
        return self._controller.status

    @property
    def state(self) -> ServiceState:
        return self._state.model_copy(deep=True)

    @property
    def succeeded(self) -> bool:
        return self._controller.succeeded

    @property
    def failed(self) -> bool:
        return self._controller.failed

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def execute(self, logic: Logic | None = None) -> None:
        """
        Run business logic unless the service already failed or succeeded

        Subclasses override this and call super().execute(logic). Exceptions
        raised by logic mark the service FAILED and propagate.
        """
        if self._state.status.is_terminal:
            logger.info(
                "Service execution ignored",
                service_type=self.service_type,
                status=self._state.status.value,
            )
            service_executions_total.labels(
                service_type=self.service_type, outcome="ignored"
            ).inc()
            return

        try:
            with LogOperation(
                logger,
                "execute_service",
                settings=self.settings,
                service_type=self.service_type,
            ):
                with service_execution_duration_seconds.labels(
                    service_type=self.service_type
                ).time():
                    self._controller.run(self._bind(logic))
        except Exception:
            service_executions_total.labels(
                service_type=self.service_type, outcome="error"
            ).inc()
            raise

        service_executions_total.labels(
            service_type=self.service_type,
            outcome="success" if self.succeeded else "failure",
        ).inc()

    def mark_success(self) -> None:
        """Report success directly; ignored once the service has failed"""
        self._controller.mark_success()

    def mark_failed(self) -> None:
        """Mark the service FAILED unless it already reached a terminal state"""
        self._controller.mark_failed()

    def add_errors(self, contribution: Any) -> None:
        """
        Merge an error contribution into the error tree

        Args:
            contribution: Mapping of key -> message(s), or a sequence of
                (key, message) pairs

        Raises:
            InvalidContribution: If contribution is None or not mapping-like
        """
        self._merge(contribution, source="logic")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _merge(self, contribution: Any, *, source: str) -> None:
        self._state.errors = merge_errors(self._state.errors, contribution)
        error_contributions_total.labels(service_type=self.service_type, source=source).inc()

    def _bind(self, logic: Logic | None) -> Callable[[], Any] | None:
        if logic is None:
            return None
        try:
            parameters = inspect.signature(logic).parameters.values()
        except (TypeError, ValueError):
            return logic
        takes_service = any(
            parameter.kind
            in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
            and parameter.default is inspect.Parameter.empty
            for parameter in parameters
        )
        if takes_service:
            return lambda: logic(self)
        return logic

    def _run_callbacks(self, status: ServiceStatus) -> None:
        for callback in type(self)._callbacks_for(status):
            callback(self)

    def __repr__(self) -> str:
        return f"<{self.service_type} status={self._state.status.value}>"
