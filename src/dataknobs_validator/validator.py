"""Composable validators.

A :class:`Validator` turns an input into a
:class:`~dataknobs_validator.result.ValidationIor`: a value, messages, or
both. Validators are immutable and stateless; all per-call state lives in
the :class:`~dataknobs_validator.context.ValidationContext` passed to
:meth:`Validator.execute`, so one instance can be shared between threads.

Building validators:

    ```python
    from dataknobs_validator import Validator
    from dataknobs_validator.constraints import Length, Max, Min

    age = Validator.of(Min(0)) & Validator.of(Max(150))
    name = Validator.of(Length(1, 50)).named("name")
    to_int = Validator.success().map(int) >> age

    age.try_validate(200)            # Failure([... "comparable.max" ...])
    to_int.try_validate("42")        # Success(42)
    ```

Composition semantics:

- ``and_`` (``&``, ``+``): run both on the same input and merge the results.
  Under fail-fast the second is skipped when the first failed.
- ``or_`` (``|``): return the first result that does not fail. When both
  fail the result carries one message embedding both message lists.
- ``chain``: feed the output of the first into the second. Messages of a
  partial first result are kept ahead of the second's, and a failing
  second stage keeps the value of the first.
- ``then`` (``>>``): type-changing pipeline. The second stage runs only on
  a value the first stage produced, and its failure stays a failure.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from . import accumulate
from .constraint import Constraint, evaluate
from .context import ValidationContext
from .exceptions import MessageError
from .result import Both, Failure, Success, ValidationIor, ValidationResult, combine
from .validation import try_validate, validate

if TYPE_CHECKING:
    from .config import ValidationConfig
    from .nullable import NotNull, Nullable, WithDefault

logger = logging.getLogger(__name__)

In = TypeVar("In")
Out = TypeVar("Out")
Next = TypeVar("Next")
Prev = TypeVar("Prev")


class Validator(ABC, Generic[In, Out]):
    """Base class for all validators."""

    @abstractmethod
    def execute(self, context: ValidationContext, input: In) -> ValidationIor[Out]:
        """Validate ``input`` at the location described by ``context``."""

    # Running

    def bind(self, context: ValidationContext, input: In) -> Out:
        """Run inside a block, reporting messages to the block's scope.

        Returns:
            The produced value; a hard failure aborts the enclosing scope
        """
        return context.bind(self.execute(context, input))

    def try_validate(self, input: In, config: ValidationConfig | None = None) -> ValidationResult[Out]:
        """Validate ``input`` as a top-level call.

        Args:
            input: Value to validate
            config: Settings for the call; defaults to ``ValidationConfig()``

        Returns:
            ``Success`` with the output value or ``Failure`` with every
            message (only the first under fail-fast)
        """
        return try_validate(lambda ctx: self.bind(ctx, input), config)

    def validate(self, input: In, config: ValidationConfig | None = None) -> Out:
        """Like :meth:`try_validate` but raise ``ValidationError`` on failure."""
        return validate(lambda ctx: self.bind(ctx, input), config)

    # Composition

    def and_(self, other: Validator[In, Out]) -> Validator[In, Out]:
        """Both validators must hold for the same input."""
        return And(self, other)

    def or_(self, other: Validator[In, Out]) -> Validator[In, Out]:
        """Either validator may hold; ``other`` is tried only if this one fails."""
        return Or(self, other)

    def chain(self, other: Validator[Out, Out]) -> Validator[In, Out]:
        """Validate the output of this validator with ``other``."""
        return Chain(self, other)

    def then(self, other: Validator[Out, Next]) -> Validator[In, Next]:
        """Pipe the output of this validator into ``other``."""
        return Then(self, other)

    def compose(self, before: Validator[Prev, In]) -> Validator[Prev, Out]:
        """Run ``before`` first and feed its output to this validator."""
        return Then(before, self)

    def map(self, transform: Callable[[Out], Next]) -> Validator[In, Next]:
        """Transform the output value.

        ``ValueError``, ``TypeError`` and ``ArithmeticError`` raised by
        ``transform`` become a failure, as does a :class:`MessageError`
        which contributes its own message.
        """
        return Mapped(self, transform)

    def named(self, name: str) -> Validator[In, Out]:
        """Validate under the path segment ``name``."""
        return Named(self, name)

    def constrain(self, constraint: Constraint[Out]) -> Validator[In, Out]:
        """Check ``constraint`` on the output value."""
        return Chain(self, ConstraintValidator(constraint))

    def only_if(self, predicate: Callable[[In], bool]) -> Validator[In, In | Out]:
        """Skip this validator (passing the input through) when ``predicate`` is false."""
        return Conditional(self, predicate)

    # Null handling

    def nullable(self) -> Nullable[In, Out]:
        """Accept None and pass it through unchanged."""
        from .nullable import Nullable

        return Nullable(self)

    def with_default(self, default: Any = None, factory: Callable[[], In] | None = None) -> WithDefault[In, Out]:
        """Substitute ``default`` (or ``factory()``) for None before validating."""
        from .nullable import WithDefault

        return WithDefault(self, default=default, factory=factory)

    def not_null(self) -> NotNull[In, Out]:
        """Fail on None instead of validating it."""
        from .nullable import NotNull

        return NotNull(self)

    # Containers

    def each(self, element: Validator[Any, Any]) -> Validator[In, Out]:
        """Validate every element of the output collection with ``element``."""
        from .containers import EachElement

        return Chain(self, EachElement(element))

    def each_key(self, key: Validator[Any, Any]) -> Validator[In, Out]:
        """Validate every key of the output mapping with ``key``."""
        from .containers import EachKey

        return Chain(self, EachKey(key))

    def each_value(self, value: Validator[Any, Any]) -> Validator[In, Out]:
        """Validate every value of the output mapping with ``value``."""
        from .containers import EachValue

        return Chain(self, EachValue(value))

    def each_entry(self, entry: Validator[Any, Any]) -> Validator[In, Out]:
        """Validate every ``(key, value)`` pair of the output mapping with ``entry``."""
        from .containers import EachEntry

        return Chain(self, EachEntry(entry))

    # Operator aliases

    def __and__(self, other: Validator[In, Out]) -> Validator[In, Out]:
        return self.and_(other)

    def __add__(self, other: Validator[In, Out]) -> Validator[In, Out]:
        return self.and_(other)

    def __or__(self, other: Validator[In, Out]) -> Validator[In, Out]:
        return self.or_(other)

    def __rshift__(self, other: Validator[Out, Next]) -> Validator[In, Next]:
        return self.then(other)

    # Constructors

    @staticmethod
    def success() -> Validator[Any, Any]:
        """The identity validator."""
        return Identity()

    @staticmethod
    def of(*constraints: Constraint[Any]) -> Validator[Any, Any]:
        """Validator checking each of ``constraints`` in order."""
        validator: Validator[Any, Any] = Identity()
        for constraint in constraints:
            validator = validator.constrain(constraint)
        return validator

    @staticmethod
    def from_block(block: Callable[[ValidationContext, Any], Any]) -> Validator[Any, Any]:
        """Validator running a block-style function ``block(ctx, input)``."""
        return BlockValidator(block)

    @staticmethod
    def from_function(function: Callable[[ValidationContext, Any], ValidationIor[Any]]) -> Validator[Any, Any]:
        """Validator delegating to ``function(ctx, input)``, which returns a result."""
        return FunctionValidator(function)


class Identity(Validator[In, In]):
    """Passes the input through."""

    def execute(self, context: ValidationContext, input: In) -> ValidationIor[In]:
        return Success(input)

    def __repr__(self) -> str:
        return "Identity()"


class FunctionValidator(Validator[In, Out]):
    """Delegates to a function returning a result."""

    def __init__(self, function: Callable[[ValidationContext, In], ValidationIor[Out]]):
        self.function = function

    def execute(self, context: ValidationContext, input: In) -> ValidationIor[Out]:
        return self.function(context, input)


class BlockValidator(Validator[In, Out]):
    """Runs a block in its own collecting scope.

    The block reports violations through the context (``ctx.check``,
    ``ctx.named``, ...) and returns the output value.
    """

    def __init__(self, block: Callable[[ValidationContext, In], Out]):
        self.block = block

    def execute(self, context: ValidationContext, input: In) -> ValidationIor[Out]:
        return accumulate.ior(context, lambda ctx: self.block(ctx, input))


class ConstraintValidator(Validator[In, In]):
    """Checks a single constraint."""

    def __init__(self, constraint: Constraint[In]):
        self.constraint = constraint

    def execute(self, context: ValidationContext, input: In) -> ValidationIor[In]:
        return evaluate(context, self.constraint, input)

    def __repr__(self) -> str:
        return f"ConstraintValidator({self.constraint!r})"


class And(Validator[In, Out]):
    def __init__(self, first: Validator[In, Out], second: Validator[In, Out]):
        self.first = first
        self.second = second

    def execute(self, context: ValidationContext, input: In) -> ValidationIor[Out]:
        first = self.first.execute(context, input)
        if context.fail_fast and first.is_failure:
            return first.to_failure()
        return combine(first, self.second.execute(context, input))

    def __repr__(self) -> str:
        return f"And({self.first!r}, {self.second!r})"


class Or(Validator[In, Out]):
    def __init__(self, first: Validator[In, Out], second: Validator[In, Out]):
        self.first = first
        self.second = second

    def execute(self, context: ValidationContext, input: In) -> ValidationIor[Out]:
        first = self.first.execute(context, input)
        return either(context, input, first, lambda: self.second.execute(context, input))

    def __repr__(self) -> str:
        return f"Or({self.first!r}, {self.second!r})"


def either(
    context: ValidationContext,
    input: Any,
    first: ValidationIor[Out],
    second: Callable[[], ValidationIor[Out]],
) -> ValidationIor[Out]:
    """Fall back to ``second`` after ``first`` failed.

    Also usable from blocks: ``either(ctx, v, ior(ctx, a), lambda: ior(ctx, b))``.

    Returns:
        ``first`` if it did not fail, else the result of ``second`` if that
        did not fail, else a result with a single ``or`` message embedding
        both message lists. A partial value is kept, the first branch's
        winning over the second's.
    """
    if not first.is_failure:
        return first
    result = second()
    if not result.is_failure:
        return result
    message = context.resource("or", first.messages, result.messages).with_details(input, "or")
    carrier = first if isinstance(first, Both) else result
    return carrier.with_message(message)  # type: ignore[attr-defined]


class Chain(Validator[In, Out]):
    def __init__(self, first: Validator[In, Out], second: Validator[Out, Out]):
        self.first = first
        self.second = second

    def execute(self, context: ValidationContext, input: In) -> ValidationIor[Out]:
        return follow(context, self.first.execute(context, input), self.second)

    def __repr__(self) -> str:
        return f"Chain({self.first!r}, {self.second!r})"


def follow(
    context: ValidationContext,
    first: ValidationIor[Out],
    second: Validator[Out, Out],
) -> ValidationIor[Out]:
    """Run ``second`` on the value of ``first``, keeping messages of both.

    A hard failure of ``first`` (or any failure under fail-fast) stops
    here. When ``second`` fails, the value of ``first`` is kept so later
    checks still run; under fail-fast it becomes a ``Failure``.
    """
    if isinstance(first, Failure):
        return first
    if context.fail_fast and first.is_failure:
        return first.to_failure()
    value = first.value  # type: ignore[attr-defined]
    result = second.execute(context, value)
    messages = first.messages + result.messages
    if not messages:
        return result
    if isinstance(result, Failure):
        if context.fail_fast:
            return Failure(messages)
        return Both(value, messages)
    return Both(result.value, messages)  # type: ignore[attr-defined]


class Then(Validator[In, Next]):
    def __init__(self, first: Validator[In, Out], second: Validator[Out, Next]):
        self.first = first
        self.second = second

    def execute(self, context: ValidationContext, input: In) -> ValidationIor[Next]:
        first = self.first.execute(context, input)
        if isinstance(first, Failure):
            return first
        if context.fail_fast and first.is_failure:
            return first.to_failure()
        return self.second.execute(context, first.value).prepend(first.messages)  # type: ignore[attr-defined]

    def __repr__(self) -> str:
        return f"Then({self.first!r}, {self.second!r})"


class Mapped(Validator[In, Next]):
    def __init__(self, validator: Validator[In, Out], transform: Callable[[Out], Next]):
        self.validator = validator
        self.transform = transform

    def execute(self, context: ValidationContext, input: In) -> ValidationIor[Next]:
        result = self.validator.execute(context, input)
        if isinstance(result, Failure):
            return result
        try:
            value = self.transform(result.value)  # type: ignore[attr-defined]
        except MessageError as e:
            return Failure(result.messages + [e.message])
        except (ValueError, TypeError, ArithmeticError) as e:
            logger.debug("Transform failed at %s: %s", context.path.full_name, e)
            message = context.text(str(e) or type(e).__name__, constraint_id="map")
            return Failure(result.messages + [message.with_details(result.value, "map")])  # type: ignore[attr-defined]
        if isinstance(result, Both):
            return Both(value, result.messages)
        return Success(value)


class Named(Validator[In, Out]):
    def __init__(self, validator: Validator[In, Out], name: str):
        self.validator = validator
        self.name = name

    def execute(self, context: ValidationContext, input: In) -> ValidationIor[Out]:
        return self.validator.execute(context.add_path(self.name, input), input)

    def __repr__(self) -> str:
        return f"Named({self.name!r}, {self.validator!r})"


class Conditional(Validator[In, Any]):
    def __init__(self, validator: Validator[In, Out], predicate: Callable[[In], bool]):
        self.validator = validator
        self.predicate = predicate

    def execute(self, context: ValidationContext, input: In) -> ValidationIor[Any]:
        if not self.predicate(input):
            return Success(input)
        return self.validator.execute(context, input)


__all__ = [
    "Validator",
    "Identity",
    "FunctionValidator",
    "BlockValidator",
    "ConstraintValidator",
    "And",
    "Or",
    "Chain",
    "Then",
    "Mapped",
    "Named",
    "Conditional",
    "either",
    "follow",
]
