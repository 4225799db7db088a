"""Accumulation scopes and the fail-fast abort.

Every block of validation runs inside a scope. The scope installs a *sink*
on the :class:`~dataknobs_validator.context.ValidationContext` it hands to the
block; violations are appended to the nearest sink. Raising a hard failure,
or accumulating while fail-fast is on, aborts the block with a
:class:`ValidationAbort` tagged with the scope's own :class:`ScopeToken`.
:func:`recover_validation` catches only the abort carrying its token, so an
abort can never be mistaken for one belonging to another scope.

Two scopes are provided:

- :func:`ior` collects messages locally and returns a ``ValidationIor``.
- :func:`accumulating` forwards messages to the enclosing sink, but keeps a
  hard failure inside the block from escaping past its own boundary.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, NoReturn, TypeVar

from .result import Both, Failure, Success, ValidationIor

if TYPE_CHECKING:
    from .context import ValidationContext
    from .messages import Message

logger = logging.getLogger(__name__)

R = TypeVar("R")


class ScopeToken:
    """Identity of one accumulation scope."""

    __slots__ = ()

    def abort(self) -> NoReturn:
        """Unwind to the scope that owns this token."""
        raise ValidationAbort(self)


class ValidationAbort(BaseException):
    """Control-flow signal unwinding to the scope owning ``token``.

    Not an ``Exception`` subclass, so broad handlers in validation blocks
    do not swallow it.
    """

    def __init__(self, token: ScopeToken) -> None:
        super().__init__()
        self.token = token


def recover_validation(
    block: Callable[[ScopeToken], R],
    recover: Callable[[], R],
) -> R:
    """Run ``block`` with a fresh token, recovering only from its own abort.

    Args:
        block: Receives the new scope token
        recover: Produces the result when ``block`` aborts with that token

    Returns:
        The block result, or the recovery result

    Raises:
        ValidationAbort: Aborts tagged with any other token propagate
    """
    token = ScopeToken()
    try:
        return block(token)
    except ValidationAbort as e:
        if e.token is not token:
            raise
        logger.debug("Recovered abort at scope boundary")
        return recover()


def ior(context: ValidationContext, block: Callable[[ValidationContext], R]) -> ValidationIor[R]:
    """Run ``block`` in a collecting scope.

    Returns:
        ``Success`` when nothing was accumulated, ``Both`` when the block
        returned a value but accumulated messages, ``Failure`` when it
        aborted
    """
    messages: list[Message] = []

    def run(token: ScopeToken) -> ValidationIor[R]:
        def sink(new: list[Message]) -> ScopeToken:
            messages.extend(new)
            if context.fail_fast:
                token.abort()
            return token

        value = block(context.with_sink(sink))
        if messages:
            return Both(value, list(messages))
        return Success(value)

    return recover_validation(run, lambda: Failure(list(messages)))


class Accumulated(ABC, Generic[R]):
    """Outcome of an :func:`accumulating` block."""

    @property
    @abstractmethod
    def value(self) -> R:
        """The block result; reading it from an ``Error`` aborts the enclosing scope."""

    @property
    @abstractmethod
    def ok(self) -> bool:
        """True when the block completed without messages."""


class Ok(Accumulated[R]):
    """The block completed and returned ``value``."""

    def __init__(self, value: R) -> None:
        self._value = value

    @property
    def value(self) -> R:
        return self._value

    @property
    def ok(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Ok({self._value!r})"


class Error(Accumulated[Any]):
    """The block failed; its messages went to the enclosing sink.

    Reading :attr:`value` aborts the enclosing scope, so code that needs a
    failed value stops there.
    """

    def __init__(self, token: ScopeToken) -> None:
        self.token = token

    @property
    def value(self) -> NoReturn:
        self.token.abort()

    @property
    def ok(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Error()"


def accumulating(context: ValidationContext, block: Callable[[ValidationContext], R]) -> Accumulated[R]:
    """Run ``block`` so that a hard failure inside it stops only this block.

    Messages are forwarded to the enclosing sink. Under fail-fast the
    enclosing sink aborts its own scope, which passes through this one.
    """
    outer: list[ScopeToken] = []

    def run(token: ScopeToken) -> Accumulated[R]:
        def sink(new: list[Message]) -> ScopeToken:
            outer.append(context.accumulate(new))
            return token

        return Ok(block(context.with_sink(sink)))

    return recover_validation(run, lambda: Error(outer[-1]))


__all__ = [
    "ScopeToken",
    "ValidationAbort",
    "recover_validation",
    "ior",
    "accumulating",
    "Accumulated",
    "Ok",
    "Error",
]
