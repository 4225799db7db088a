"""Constraints: the atomic checks validators are built from.

A :class:`Constraint` looks at a read-only :class:`ConstraintContext` and
answers :data:`SATISFIED` or :class:`Violated` with a message. It knows
nothing about accumulation, fail-fast or paths beyond what the snapshot
tells it; :func:`evaluate` takes care of logging and of stamping the message
with the constraint id and the offending input.

Writing a constraint:

    ```python
    class Even(Constraint[int]):
        id = "number.even"

        def check(self, context: ConstraintContext[int]) -> ConstraintResult:
            return context.satisfies(
                context.input % 2 == 0,
                lambda: context.text("must be even"),
            )
    ```
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Generic, TypeVar, Union

from .config import Clock, system_clock
from .log import Satisfied as SatisfiedEntry
from .log import Violated as ViolatedEntry
from .messages import CatalogMessage, Message, MessageCatalog, TextMessage
from .path import Path
from .result import Failure, Success, ValidationIor

if TYPE_CHECKING:
    from .context import ValidationContext

T = TypeVar("T")


@dataclass(frozen=True)
class ConstraintContext(Generic[T]):
    """What a constraint may see while checking ``input``."""

    input: T
    constraint_id: str = ""
    root: str = ""
    path: Path = field(default_factory=Path.root)
    fail_fast: bool = False
    catalog: MessageCatalog = field(default_factory=MessageCatalog.default, repr=False)
    clock: Clock = field(default=system_clock, repr=False)

    def now(self) -> datetime:
        return self.clock()

    def text(self, text: str) -> TextMessage:
        """Literal message for this constraint at the current location."""
        return TextMessage(
            literal=text,
            constraint_id=self.constraint_id,
            root=self.root,
            path=self.path.detached(),
            input=self.input,
        )

    def resource(self, key: str, *args: Any) -> CatalogMessage:
        """Catalog message for this constraint at the current location."""
        return CatalogMessage(
            key=key,
            message_args=args,
            catalog=self.catalog,
            constraint_id=self.constraint_id,
            root=self.root,
            path=self.path.detached(),
            input=self.input,
        )

    def satisfies(
        self,
        condition: bool,
        message: Union[Message, Callable[[], Message]],
    ) -> ConstraintResult:
        """Turn ``condition`` into a result.

        Args:
            condition: Whether the constraint holds
            message: Message, or a callable producing it only when needed
        """
        if condition:
            return SATISFIED
        if not isinstance(message, Message):
            message = message()
        return Violated(message)


class _Satisfied:
    """The constraint held."""

    _instance: _Satisfied | None = None

    def __new__(cls) -> _Satisfied:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SATISFIED"


SATISFIED = _Satisfied()


@dataclass(frozen=True)
class Violated:
    """The constraint failed with ``message``."""

    message: Message


ConstraintResult = Union[_Satisfied, Violated]


class Constraint(ABC, Generic[T]):
    """Base class for constraints.

    Subclasses set ``id`` (class attribute or instance attribute) and
    implement :meth:`check`. Constraints are immutable and may be shared.
    """

    id: str = ""

    @abstractmethod
    def check(self, context: ConstraintContext[T]) -> ConstraintResult:
        """Check ``context.input``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!r})"


class Custom(Constraint[T]):
    """Constraint backed by a callable.

    The callable receives the :class:`ConstraintContext` and returns either a
    ``ConstraintResult`` or a bool; for a bool, ``message`` (literal text or a
    callable building a message from the context) describes the violation.
    """

    def __init__(
        self,
        constraint_id: str,
        check: Callable[[ConstraintContext[T]], Union[ConstraintResult, bool]],
        message: Union[str, Callable[[ConstraintContext[T]], Message]] = "Custom validation failed",
    ):
        self.id = constraint_id
        self._check = check
        self._message = message

    def check(self, context: ConstraintContext[T]) -> ConstraintResult:
        result = self._check(context)
        if isinstance(result, (_Satisfied, Violated)):
            return result
        message = self._message
        if isinstance(message, str):
            return context.satisfies(bool(result), lambda: context.text(message))
        return context.satisfies(bool(result), lambda: message(context))


def record(
    context: ValidationContext,
    constraint_id: str,
    value: T,
    message: Message | None,
) -> ValidationIor[T]:
    """Log the outcome of a check and turn it into a result.

    ``message`` is None when the check held; otherwise it is stamped with
    ``value`` and ``constraint_id`` and returned as a ``Failure``.
    """
    if message is None:
        context.log(lambda: SatisfiedEntry(constraint_id, context.root, context.path.full_name, value))
        return Success(value)
    message = message.with_details(value, constraint_id)
    context.log(
        lambda: ViolatedEntry(
            constraint_id, context.root, context.path.full_name, value, list(message.args)
        )
    )
    return Failure([message])


def evaluate(context: ValidationContext, constraint: Constraint[T], value: T) -> ValidationIor[T]:
    """Check ``value`` against ``constraint`` at the current location.

    Returns:
        ``Success(value)`` if the constraint held, otherwise a ``Failure``
        carrying the violation message
    """
    result = constraint.check(context.constraint_context(value, constraint.id))
    if isinstance(result, Violated):
        return record(context, constraint.id, value, result.message)
    return record(context, constraint.id, value, None)


__all__ = [
    "Constraint",
    "ConstraintContext",
    "ConstraintResult",
    "Custom",
    "SATISFIED",
    "Violated",
    "evaluate",
    "record",
]
