"""Validation result types and the rules for combining them.

Two views of the same classes:

- ``ValidationResult`` (public): :class:`Success` or :class:`Failure`.
- ``ValidationIor`` (internal, inclusive-or): adds :class:`Both`, a value
  that was still produced even though some constraints failed.

Combination (:func:`combine`, used by ``Validator.and_``):

    ============  ============  =====================================
    first         second        result
    ============  ============  =====================================
    Success(a)    Success(b)    Success(b)
    any           Failure       Failure(first.messages + second's)
    Failure       any           Failure(first's + second.messages)
    otherwise                   Both(second value, messages in order)
    ============  ============  =====================================

Messages always keep evaluation order.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar, Union

if TYPE_CHECKING:
    from .messages import Message

T = TypeVar("T")


class ValidationIor(ABC, Generic[T]):
    """Base of :class:`Success`, :class:`Failure` and :class:`Both`."""

    @property
    @abstractmethod
    def is_success(self) -> bool:
        """True only for :class:`Success`."""

    @property
    def is_failure(self) -> bool:
        """True for results carrying messages (``Failure`` or ``Both``)."""
        return not self.is_success

    @property
    def has_value(self) -> bool:
        return not isinstance(self, Failure)

    def prepend(self, messages: list[Message]) -> ValidationIor[T]:
        """Return this result with ``messages`` placed before its own."""
        if not messages:
            return self
        if isinstance(self, Failure):
            return Failure(list(messages) + self.messages)
        return Both(self.value, list(messages) + self.messages)  # type: ignore[attr-defined]

    def to_result(self) -> ValidationResult[T]:
        """Convert to the public two-state result. ``Both`` becomes ``Failure``."""
        if isinstance(self, Both):
            return Failure(self.messages)
        return self  # type: ignore[return-value]

    def to_failure(self) -> Failure:
        """Drop any value, keeping messages. Only valid for failing results."""
        if isinstance(self, Failure):
            return self
        if isinstance(self, Both):
            return Failure(self.messages)
        raise ValueError("A successful result cannot be turned into a Failure")


@dataclass(frozen=True)
class Success(ValidationIor[T]):
    """Validation passed and produced ``value``."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def messages(self) -> list[Message]:
        return []


@dataclass(frozen=True)
class Failure(ValidationIor[Any]):
    """Validation failed without producing a value."""

    messages: list[Message]

    def __post_init__(self) -> None:
        if not self.messages:
            raise ValueError("Failure requires at least one message")
        object.__setattr__(self, "messages", list(self.messages))

    @property
    def is_success(self) -> bool:
        return False

    def with_message(self, message: Message) -> Failure:
        """Replace the messages with ``message``."""
        return Failure([message])


@dataclass(frozen=True)
class Both(ValidationIor[T]):
    """A value was produced but some constraints failed on the way."""

    value: T
    messages: list[Message]

    def __post_init__(self) -> None:
        if not self.messages:
            raise ValueError("Both requires at least one message")
        object.__setattr__(self, "messages", list(self.messages))

    @property
    def is_success(self) -> bool:
        return False

    def with_message(self, message: Message) -> Both[T]:
        """Keep the value, replacing the messages with ``message``."""
        return Both(self.value, [message])


ValidationResult = Union[Success[T], Failure]


def combine(first: ValidationIor[Any], second: ValidationIor[T]) -> ValidationIor[T]:
    """Merge two results of independent validations of the same value.

    Args:
        first: Result evaluated first
        second: Result evaluated second

    Returns:
        ``Failure`` if either side failed, otherwise ``Success``/``Both``
        holding the second value; messages are concatenated first-to-second
    """
    messages = first.messages + second.messages
    if isinstance(first, Failure) or isinstance(second, Failure):
        return Failure(messages)
    if messages:
        return Both(second.value, messages)  # type: ignore[attr-defined]
    return second


def combine_all(results: Iterable[ValidationIor[Any]], initial: ValidationIor[T]) -> ValidationIor[T]:
    """Fold ``results`` into ``initial`` with :func:`combine`, left to right."""
    combined: ValidationIor[Any] = initial
    for result in results:
        combined = combine(combined, result)
    return combined


__all__ = [
    "ValidationIor",
    "ValidationResult",
    "Success",
    "Failure",
    "Both",
    "combine",
    "combine_all",
]
