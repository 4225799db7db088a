"""Object schemas with explicitly declared fields.

An :class:`ObjectSchema` validates an object field by field. Fields are
declared with a name, a validator and an accessor (an attribute/key name or
a callable); nothing is discovered by introspection.

    ```python
    @dataclass
    class Node:
        name: str
        next: Node | None = None

    node_schema = ObjectSchema("Node")
    node_schema.field("name", Validator.of(NotBlank()))
    node_schema.field("next", node_schema.nullable())

    node = Node("a")
    node.next = node
    node_schema.try_validate(node)  # terminates: the re-entered node is skipped
    ```

Each field is validated under its own path segment. When a field value is
an object already being validated further up the path, that field is
skipped, so self-referential graphs terminate.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from dataclasses import replace as replace_field
from typing import Any, TypeVar, Union

from .constraint import Constraint, evaluate
from .context import ValidationContext
from .messages import Message
from .result import Both, Failure, Success, ValidationIor
from .validator import Validator

T = TypeVar("T")

Accessor = Union[str, Callable[[Any], Any]]


@dataclass(frozen=True)
class Field:
    """One declared field of an object schema."""

    name: str
    validator: Validator[Any, Any] | None
    accessor: Accessor
    chooser: Callable[[Any], Validator[Any, Any]] | None = None

    def get(self, obj: Any) -> Any:
        """Read this field's value from ``obj``.

        A string accessor reads a key of a mapping or an attribute of any
        other object; a missing key reads as None.
        """
        if callable(self.accessor):
            return self.accessor(obj)
        if isinstance(obj, Mapping):
            return obj.get(self.accessor)
        return getattr(obj, self.accessor)

    def validator_for(self, obj: Any) -> Validator[Any, Any]:
        """The validator for this field of ``obj``, chosen from the whole object when a chooser is set."""
        if self.chooser is not None:
            return self.chooser(obj)
        return self.validator  # type: ignore[return-value]


class ObjectSchema(Validator[T, T]):
    """Validator for an object with declared fields (fluent API).

    Args:
        name: Root identifier reported in messages; defaults to the
            qualified class name of the validated object
    """

    def __init__(self, name: str | None = None):
        self.name = name
        self.fields: list[Field] = []
        self.constraints: list[Constraint[T]] = []

    def field(
        self,
        name: str,
        validator: Validator[Any, Any],
        accessor: Accessor | None = None,
    ) -> ObjectSchema[T]:
        """Declare a field (fluent API).

        Args:
            name: Path segment for the field
            validator: Validator for the field value
            accessor: Attribute/key name or callable; defaults to ``name``

        Returns:
            Self for chaining
        """
        self.fields.append(Field(name, validator, accessor if accessor is not None else name))
        return self

    def choose(
        self,
        name: str,
        chooser: Callable[[T], Validator[Any, Any]],
        accessor: Accessor | None = None,
    ) -> ObjectSchema[T]:
        """Declare a field whose validator depends on the whole object (fluent API).

        ``chooser`` is called with the validated object on every run, e.g. to
        pick a postcode format from the object's country.

        Returns:
            Self for chaining
        """
        self.fields.append(Field(name, None, accessor if accessor is not None else name, chooser))
        return self

    def replace(self, name: str, validator: Validator[Any, Any]) -> ObjectSchema[T]:
        """Return a copy of this schema with field ``name`` validated by ``validator``.

        This schema is left unchanged.

        Raises:
            KeyError: If no field is named ``name``
        """
        if not any(field.name == name for field in self.fields):
            raise KeyError(f"No field named '{name}'")
        schema: ObjectSchema[T] = ObjectSchema(self.name)
        schema.fields = [
            replace_field(field, validator=validator, chooser=None) if field.name == name else field
            for field in self.fields
        ]
        schema.constraints = list(self.constraints)
        return schema

    def add_constraint(self, constraint: Constraint[T]) -> ObjectSchema[T]:
        """Add a constraint on the whole object, checked after the fields (fluent API).

        Returns:
            Self for chaining
        """
        self.constraints.append(constraint)
        return self

    def execute(self, context: ValidationContext, input: T) -> ValidationIor[T]:
        context = context.add_root(self.name or type(input).__qualname__, input)
        messages: list[Message] = []
        failed = False

        for field in self.fields:
            value = field.get(input)
            child = context.add_path_checked(field.name, value)
            if child is None:
                continue
            result = field.validator_for(input).execute(child, value)
            if not result.is_failure:
                continue
            messages.extend(result.messages)
            failed = failed or isinstance(result, Failure)
            if context.fail_fast:
                return Failure(messages)

        for constraint in self.constraints:
            result = evaluate(context, constraint, input)
            if result.is_failure:
                messages.extend(result.messages)
                failed = True
                if context.fail_fast:
                    return Failure(messages)

        if failed:
            return Failure(messages)
        if messages:
            return Both(input, messages)
        return Success(input)

    def __repr__(self) -> str:
        names = ", ".join(field.name for field in self.fields)
        return f"ObjectSchema({self.name!r}, fields=[{names}])"


class _Lazy(Validator[Any, Any]):
    """Resolves its validator on first use."""

    def __init__(self, supplier: Callable[[], Validator[Any, Any]]):
        self.supplier = supplier

    def execute(self, context: ValidationContext, input: Any) -> ValidationIor[Any]:
        return self.supplier().execute(context, input)


def lazy(supplier: Callable[[], Validator[Any, Any]]) -> Validator[Any, Any]:
    """Refer to a validator that is defined later, e.g. mutually recursive schemas."""
    return _Lazy(supplier)


__all__ = ["ObjectSchema", "Field", "Accessor", "lazy"]
