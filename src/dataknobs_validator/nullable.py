"""Adapting validators to inputs that may be None.

Three separate adaptations, chosen by the caller:

- :class:`Nullable`: None passes through untouched; other values are
  validated.
- :class:`WithDefault`: None is replaced by a default, which is then
  validated like any other value.
- :class:`NotNull`: None is a violation (``nullable.not_null``).

    ```python
    middle_name = Validator.of(Length(1, 30)).nullable()
    retries = Validator.of(Min(0)).with_default(3)
    email = Validator.of(Pattern(r".+@.+")).not_null()
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional, TypeVar

from .constraint import record
from .context import ValidationContext
from .result import Success, ValidationIor
from .validator import Validator

In = TypeVar("In")
Out = TypeVar("Out")


class Nullable(Validator[Optional[In], Optional[Out]]):
    """None in, None out; other values go to the wrapped validator."""

    def __init__(self, validator: Validator[In, Out]):
        self.validator = validator

    def execute(self, context: ValidationContext, input: Optional[In]) -> ValidationIor[Optional[Out]]:
        if input is None:
            return Success(None)
        return self.validator.execute(context, input)

    def __repr__(self) -> str:
        return f"Nullable({self.validator!r})"


class WithDefault(Validator[Optional[In], Out]):
    """Replace None with a default value before validating.

    Args:
        validator: Validator applied to the input or the default
        default: Value used in place of None
        factory: Called for each None input instead of using ``default``;
            use it for mutable defaults
    """

    def __init__(
        self,
        validator: Validator[In, Out],
        default: Any = None,
        factory: Callable[[], In] | None = None,
    ):
        if default is None and factory is None:
            raise ValueError("WithDefault requires a default value or a factory")
        self.validator = validator
        self.default = default
        self.factory = factory

    def execute(self, context: ValidationContext, input: Optional[In]) -> ValidationIor[Out]:
        if input is None:
            input = self.factory() if self.factory is not None else self.default
        return self.validator.execute(context, input)

    def __repr__(self) -> str:
        return f"WithDefault({self.validator!r}, default={self.default!r})"


class NotNull(Validator[Optional[In], Out]):
    """Fail on None; other values go to the wrapped validator."""

    id = "nullable.not_null"

    def __init__(self, validator: Validator[In, Out]):
        self.validator = validator

    def execute(self, context: ValidationContext, input: Optional[In]) -> ValidationIor[Out]:
        if input is None:
            return record(context, self.id, input, context.resource(self.id))
        return self.validator.execute(context, input)

    def __repr__(self) -> str:
        return f"NotNull({self.validator!r})"


__all__ = ["Nullable", "WithDefault", "NotNull"]
