"""Validate named arguments, then construct an object from them."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from .context import ValidationContext
from .exceptions import MessageError
from .messages import Message
from .result import Both, Failure, Success, ValidationIor, ValidationResult
from .validation import try_validate, validate
from .validator import Identity, Validator, follow

if TYPE_CHECKING:
    from .config import ValidationConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Argument:
    """One constructor argument and the validator for its raw input."""

    name: str
    validator: Validator[Any, Any]
    key: str


class ObjectFactory(Validator[Mapping[str, Any], T]):
    """Validator turning a mapping of raw inputs into a constructed object.

    Every argument is validated under its own path segment. The constructor
    is called with keyword arguments only when every argument produced a
    value; its ``ValueError``, ``TypeError``, ``ArithmeticError`` or
    ``MessageError`` becomes a failure.

    Example:
        ```python
        users = (
            ObjectFactory(User)
            .arg("name", Validator.of(NotBlank()))
            .arg("age", Validator.success().map(int) >> Validator.of(Min(0)))
        )
        user = users.create({"name": "Ada", "age": "36"})
        ```
    """

    def __init__(self, constructor: Callable[..., T], name: str | None = None):
        """Initialize the factory.

        Args:
            constructor: Called with the validated arguments as keywords
            name: Root identifier for messages; defaults to the
                constructor's qualified name
        """
        self.constructor = constructor
        self.name = name or getattr(constructor, "__qualname__", type(constructor).__name__)
        self.arguments: list[Argument] = []
        self.post: Validator[T, T] | None = None

    def arg(self, name: str, validator: Validator[Any, Any] | None = None, key: str | None = None) -> ObjectFactory[T]:
        """Declare a constructor argument (fluent API).

        Args:
            name: Keyword passed to the constructor and path segment
            validator: Validator for the raw input; defaults to identity
            key: Key of the raw input; defaults to ``name``

        Returns:
            Self for chaining
        """
        self.arguments.append(Argument(name, validator or Identity(), key or name))
        return self

    def then_check(self, validator: Validator[T, T]) -> ObjectFactory[T]:
        """Validate the constructed object with ``validator`` (fluent API)."""
        self.post = validator
        return self

    def execute(self, context: ValidationContext, input: Mapping[str, Any]) -> ValidationIor[T]:
        context = context.add_root(self.name, input)
        values: dict[str, Any] = {}
        messages: list[Message] = []
        missing = False

        for argument in self.arguments:
            raw = input.get(argument.key)
            result = argument.validator.execute(context.add_path(argument.name, raw), raw)
            messages.extend(result.messages)
            if context.fail_fast and result.is_failure:
                return Failure(messages)
            if isinstance(result, Failure):
                missing = True
            else:
                values[argument.name] = result.value  # type: ignore[attr-defined]

        if missing:
            return Failure(messages)

        constructed = self._construct(context, input, values)
        if isinstance(constructed, Failure):
            return constructed.prepend(messages)

        result: ValidationIor[T] = Both(constructed.value, messages) if messages else constructed
        if self.post is None:
            return result
        return follow(context, result, self.post)

    def _construct(self, context: ValidationContext, input: Any, values: dict[str, Any]) -> ValidationIor[T]:
        try:
            return Success(self.constructor(**values))
        except MessageError as e:
            return Failure([e.message])
        except (ValueError, TypeError, ArithmeticError) as e:
            logger.debug("Constructing %s failed: %s", self.name, e)
            message = context.resource("factory.construct", str(e) or type(e).__name__)
            return Failure([message.with_details(input, "factory.construct")])

    def try_create(self, input: Mapping[str, Any], config: ValidationConfig | None = None) -> ValidationResult[T]:
        """Validate ``input`` and construct; see :meth:`Validator.try_validate`."""
        return try_validate(lambda ctx: self.bind(ctx, input), config)

    def create(self, input: Mapping[str, Any], config: ValidationConfig | None = None) -> T:
        """Validate ``input`` and construct, raising ``ValidationError`` on failure."""
        return validate(lambda ctx: self.bind(ctx, input), config)

    def __repr__(self) -> str:
        names = ", ".join(argument.name for argument in self.arguments)
        return f"ObjectFactory({self.name!r}, args=[{names}])"


__all__ = ["ObjectFactory", "Argument"]
