"""The validation context threaded through every validator call.

A :class:`ValidationContext` is immutable. Pushing a path segment, setting
the root or entering an accumulation scope returns a new context; the caller's
context is left untouched. The only mutable state of a validation call lives
in the sink closures installed by the scopes in
:mod:`dataknobs_validator.accumulate`, which belong to that call's stack.

The block-style methods (:meth:`ValidationContext.check`,
:meth:`ValidationContext.named`, ...) let plain functions express
validations:

    ```python
    def validate_user(ctx: ValidationContext, user: User) -> User:
        ctx = ctx.add_root("User", user)
        ctx.named("name", user.name, lambda c, v: c.check(v, NotBlank()))
        ctx.named("age", user.age, lambda c, v: c.check(v, Min(0)))
        return user

    result = try_validate(lambda ctx: validate_user(ctx, user))
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import TYPE_CHECKING, Any, NoReturn, TypeVar

from . import accumulate
from .accumulate import Accumulated, Ok, ScopeToken
from .config import ValidationConfig
from .constraint import Constraint, ConstraintContext, evaluate
from .exceptions import ConfigurationError
from .log import LogEntry
from .messages import CatalogMessage, MessageCatalog, TextMessage
from .path import Path
from .result import Both, Failure, Success, ValidationIor

if TYPE_CHECKING:
    from .messages import Message

T = TypeVar("T")
R = TypeVar("R")

Sink = Callable[[list["Message"]], ScopeToken]


def _no_scope(messages: list[Message]) -> ScopeToken:
    raise ConfigurationError(
        "No accumulation scope is active; run validations through try_validate or validate",
        context={"messages": [m.text for m in messages]},
    )


@dataclass(frozen=True)
class ValidationContext:
    """State of one validation call at one point of the traversal.

    Attributes:
        root: Identifier of the validation root, empty until a root is set
        path: Route from the root to the value being validated
        config: Settings fixed for the whole call
        sink: Where violations go; installed by the nearest scope
    """

    root: str = ""
    path: Path = field(default_factory=Path.root)
    config: ValidationConfig = field(default_factory=ValidationConfig)
    sink: Sink = field(default=_no_scope, repr=False)

    @property
    def fail_fast(self) -> bool:
        return self.config.fail_fast

    @property
    def catalog(self) -> MessageCatalog:
        return self.config.catalog

    def now(self) -> datetime:
        """Current time according to the configured clock."""
        return self.config.clock()

    def with_sink(self, sink: Sink) -> ValidationContext:
        return replace(self, sink=sink)

    def add_root(self, name: str, obj: Any = None) -> ValidationContext:
        """Set the root identifier unless one is already set.

        The first root wins, so nested schemas report against the outermost
        root. Setting the root also records ``obj`` for cycle detection.
        """
        if self.root:
            return self
        if self.path.parent is None and not self.path.name:
            return replace(self, root=name, path=Path.root(obj))
        # keep segments pushed before the root was known
        return replace(self, root=name, path=self.path.append("", obj))

    def add_path(self, name: str, obj: Any = None) -> ValidationContext:
        """Push ``name`` as the next path segment."""
        return replace(self, path=self.path.append(name, obj))

    def add_path_checked(self, name: str, obj: Any) -> ValidationContext | None:
        """Push ``name`` unless ``obj`` is already being validated on this path.

        Returns:
            The new context, or None if entering ``obj`` again would recurse
        """
        path = self.path.append_checked(name, obj)
        if path is None:
            return None
        return replace(self, path=path)

    # Messages

    def text(self, text: str, constraint_id: str = "") -> TextMessage:
        """Create a literal message located at the current root and path."""
        return TextMessage(
            literal=text,
            constraint_id=constraint_id,
            root=self.root,
            path=self.path.detached(),
        )

    def resource(self, key: str, *args: Any, constraint_id: str | None = None) -> CatalogMessage:
        """Create a catalog message located at the current root and path."""
        return CatalogMessage(
            key=key,
            message_args=args,
            catalog=self.catalog,
            constraint_id=key if constraint_id is None else constraint_id,
            root=self.root,
            path=self.path.detached(),
        )

    def log(self, entry: Callable[[], LogEntry]) -> None:
        """Send a trace event to the configured hook, if any."""
        hook = self.config.logger
        if hook is not None:
            hook(entry())

    # Accumulation

    def accumulate(self, messages: list[Message]) -> ScopeToken:
        """Append ``messages`` to the nearest scope.

        Under fail-fast this aborts that scope and does not return.
        """
        return self.sink(list(messages))

    def fail(self, messages: list[Message]) -> NoReturn:
        """Append ``messages`` and abort the nearest scope."""
        if not messages:
            raise ValueError("fail requires at least one message")
        self.accumulate(messages).abort()

    def bind(self, result: ValidationIor[T]) -> T:
        """Extract the value of ``result``, reporting its messages.

        ``Success`` returns its value, ``Both`` accumulates its messages and
        returns its value, ``Failure`` aborts the nearest scope.
        """
        if isinstance(result, Success):
            return result.value
        if isinstance(result, Both):
            self.accumulate(result.messages)
            return result.value
        self.fail(result.to_failure().messages)

    def check(self, value: T, constraint: Constraint[T]) -> T:
        """Evaluate ``constraint`` on ``value``, accumulating any violation.

        Returns:
            ``value`` unchanged
        """
        result = evaluate(self, constraint, value)
        if isinstance(result, Failure):
            self.accumulate(result.messages)
        return value

    def named(
        self,
        name: str,
        value: T,
        block: Callable[[ValidationContext, T], R],
    ) -> Accumulated[R | None]:
        """Validate ``value`` under path segment ``name``.

        ``block`` runs in its own accumulating scope, so a hard failure in it
        does not stop sibling fields. When ``value`` is already being
        validated further up the path the block is skipped.
        """
        child = self.add_path_checked(name, value)
        if child is None:
            return Ok(None)
        return accumulate.accumulating(child, lambda ctx: block(ctx, value))

    def capture(self, name: str, block: Callable[[ValidationContext], R]) -> Accumulated[R]:
        """Run ``block`` under path segment ``name`` and report its outcome.

        Messages of a failing block are forwarded to the nearest scope and an
        ``Error`` is returned; reading its value aborts that scope.
        """
        result = accumulate.ior(self.add_path(name), block)
        if isinstance(result, Success):
            return Ok(result.value)
        token = self.accumulate(result.messages)
        return accumulate.Error(token)

    def constraint_context(self, value: T, constraint_id: str) -> ConstraintContext[T]:
        """Read-only snapshot handed to a constraint."""
        return ConstraintContext(
            input=value,
            constraint_id=constraint_id,
            root=self.root,
            path=self.path,
            fail_fast=self.fail_fast,
            catalog=self.catalog,
            clock=self.config.clock,
        )


__all__ = ["ValidationContext", "Sink"]
