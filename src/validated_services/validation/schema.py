"""
Schema - pydantic models as service input schemas

A service declares its input rules as a pydantic model. The model can be
written by hand (any BaseModel subclass) or built from field declarations
with define_schema(). Both end up wrapped in a Schema, which adds:

- options: run-time values passed to pydantic as the validation context, so
  predicates can compare input against the acting user and similar data
- messages: per error-type overrides for the rendered error text

Example:
    >>> schema = define_schema(
    ...     "RenamePost",
    ...     title=required(FilledStr),
    ...     author=required(
    ...         str,
    ...         predicate("is_author", lambda value, options: options["current_context"].name == value),
    ...     ),
    ...     messages={"is_author": "must be the acting user"},
    ... )
"""

from collections.abc import Callable, Mapping
from typing import Annotated, Any, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    StringConstraints,
    ValidationError,
    ValidationInfo,
    create_model,
)
from pydantic_core import PydanticCustomError

from validated_services.kernel.errors import InvalidSchema
from validated_services.validation.error_tree import ErrorTree
from validated_services.validation.results import ValidationResult

# Error key used for model-level errors that have no field location
BASE_ERROR_KEY = "base"

FilledStr = Annotated[str, StringConstraints(min_length=1)]

Check = Callable[[Any, Mapping[str, Any]], bool]


def required(annotation: Any, *metadata: Any) -> tuple[Any, Any]:
    """Field definition for a required field, optionally with extra validators"""
    if metadata:
        annotation = Annotated[(annotation, *metadata)]
    return (annotation, ...)


def optional(annotation: Any, *metadata: Any, default: Any = None) -> tuple[Any, Any]:
    """Field definition for a field that may be missing or None"""
    if metadata:
        annotation = Annotated[(annotation, *metadata)]
    return (Optional[annotation], default)


def predicate(name: str, check: Check, message: str | None = None) -> AfterValidator:
    """
    Build a custom validator that can read injected options

    check(value, options) must return a truthy value for valid input. A falsy
    result produces an error whose type is ``name``, so Schema.messages can
    override its text.

    Args:
        name: Error type reported on failure
        check: Callable receiving the value and the injected options mapping
        message: Default error text (defaults to "failed <name> check")
    """
    template = message or f"failed {name} check"

    def validate(value: Any, info: ValidationInfo) -> Any:
        options = info.context if info.context is not None else {}
        if not check(value, options):
            raise PydanticCustomError(name, template)
        return value

    return AfterValidator(validate)


class Schema:
    """
    A pydantic model bound to options and message overrides

    Schemas are immutable: with_options() and with_messages() return new
    instances, so a schema shared by a service type is never modified by
    a single construction.
    """

    def __init__(
        self,
        model: type[BaseModel],
        *,
        messages: Mapping[str, str] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        if not (isinstance(model, type) and issubclass(model, BaseModel)):
            raise InvalidSchema(model)
        self._model = model
        self._messages = dict(messages or {})
        self._options = dict(options or {})

    @classmethod
    def coerce(cls, schema: "Schema | type[BaseModel]") -> "Schema":
        """Accept a Schema as-is, or wrap a pydantic model class"""
        if isinstance(schema, Schema):
            return schema
        return cls(schema)

    @property
    def model(self) -> type[BaseModel]:
        return self._model

    @property
    def messages(self) -> dict[str, str]:
        return dict(self._messages)

    @property
    def options(self) -> dict[str, Any]:
        return dict(self._options)

    def with_options(self, options: Mapping[str, Any]) -> "Schema":
        """Return a copy that injects options into validation"""
        return Schema(self._model, messages=self._messages, options=options)

    def with_messages(self, messages: Mapping[str, str]) -> "Schema":
        """Return a copy with extra message overrides layered on top"""
        return Schema(
            self._model,
            messages={**self._messages, **messages},
            options=self._options,
        )

    def render_errors(self, exc: ValidationError) -> ErrorTree:
        """
        Convert a pydantic ValidationError into an error tree

        Keys are dotted locations ("items.0.name"), values are lists of
        messages in pydantic's order.
        """
        tree: ErrorTree = {}
        for error in exc.errors():
            key = ".".join(str(part) for part in error["loc"]) or BASE_ERROR_KEY
            message = self._messages.get(error["type"], error["msg"])
            tree.setdefault(key, []).append(message)
        return tree

    def __call__(self, raw_input: Any) -> ValidationResult:
        try:
            validated = self._model.model_validate(raw_input, context=self._options)
        except ValidationError as exc:
            return ValidationResult(errors=self.render_errors(exc))
        return ValidationResult(output=validated.model_dump())

    def __repr__(self) -> str:
        return f"Schema({self._model.__name__}, options={sorted(self._options)})"


def define_schema(
    name: str,
    *,
    messages: Mapping[str, str] | None = None,
    **fields: Any,
) -> Schema:
    """
    Build a schema from field declarations

    Field values use pydantic.create_model syntax; required() and optional()
    produce them.
    """
    model = create_model(name, **fields)
    return Schema(model, messages=messages)
