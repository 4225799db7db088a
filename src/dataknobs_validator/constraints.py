"""A small set of ready-made constraints.

These cover the comparisons most validations start from. Anything more
specific is easiest written as a :class:`~dataknobs_validator.constraint.Custom`
constraint or a :class:`~dataknobs_validator.constraint.Constraint` subclass.
"""

from __future__ import annotations

import re
from collections.abc import Sized
from datetime import date, datetime, timezone
from re import Pattern as RegexPattern
from typing import Any, Union

from .constraint import SATISFIED, Constraint, ConstraintContext, ConstraintResult, Violated


class Min(Constraint[Any]):
    """Value must be greater than or equal to ``value`` (greater than if ``exclusive``)."""

    def __init__(self, value: Any, exclusive: bool = False):
        self.value = value
        self.exclusive = exclusive
        self.id = "comparable.gt" if exclusive else "comparable.min"

    def check(self, context: ConstraintContext[Any]) -> ConstraintResult:
        if self.exclusive:
            return context.satisfies(context.input > self.value, lambda: context.resource(self.id, self.value))
        return context.satisfies(context.input >= self.value, lambda: context.resource(self.id, self.value))


class Max(Constraint[Any]):
    """Value must be less than or equal to ``value`` (less than if ``exclusive``)."""

    def __init__(self, value: Any, exclusive: bool = False):
        self.value = value
        self.exclusive = exclusive
        self.id = "comparable.lt" if exclusive else "comparable.max"

    def check(self, context: ConstraintContext[Any]) -> ConstraintResult:
        if self.exclusive:
            return context.satisfies(context.input < self.value, lambda: context.resource(self.id, self.value))
        return context.satisfies(context.input <= self.value, lambda: context.resource(self.id, self.value))


class Length(Constraint[str]):
    """String length must lie within ``min``..``max`` (inclusive)."""

    def __init__(self, min: int | None = None, max: int | None = None):
        if min is not None and min < 0:
            raise ValueError(f"min length cannot be negative: {min}")
        if max is not None and max < 0:
            raise ValueError(f"max length cannot be negative: {max}")
        if min is not None and max is not None and min > max:
            raise ValueError(f"min length ({min}) cannot be greater than max ({max})")
        self.min = min
        self.max = max
        if min is not None and max is not None:
            self.id = "string.length_between"
        elif min is not None:
            self.id = "string.min_length"
        else:
            self.id = "string.max_length"

    def check(self, context: ConstraintContext[str]) -> ConstraintResult:
        length = len(context.input)
        too_short = self.min is not None and length < self.min
        too_long = self.max is not None and length > self.max
        if self.min is not None and self.max is not None:
            return context.satisfies(
                not (too_short or too_long),
                lambda: context.resource(self.id, self.min, self.max),
            )
        bound = self.min if self.min is not None else self.max
        return context.satisfies(not (too_short or too_long), lambda: context.resource(self.id, bound))


class Size(Constraint[Sized]):
    """Collection size must lie within ``min``..``max`` (inclusive)."""

    id = "collection.size"

    def __init__(self, min: int | None = None, max: int | None = None):
        if min is not None and max is not None and min > max:
            raise ValueError(f"min size ({min}) cannot be greater than max ({max})")
        self.min = min
        self.max = max

    def check(self, context: ConstraintContext[Sized]) -> ConstraintResult:
        size = len(context.input)
        if self.min is not None and size < self.min:
            return Violated(context.resource("collection.min_size", size, self.min))
        if self.max is not None and size > self.max:
            return Violated(context.resource("collection.max_size", size, self.max))
        return SATISFIED


class NotBlank(Constraint[str]):
    """String must contain a non-whitespace character."""

    id = "string.not_blank"

    def check(self, context: ConstraintContext[str]) -> ConstraintResult:
        return context.satisfies(bool(context.input.strip()), lambda: context.resource(self.id))


class Pattern(Constraint[str]):
    """String must fully match a regular expression."""

    id = "string.pattern"

    def __init__(self, pattern: Union[str, RegexPattern[str]]):
        self.regex = re.compile(pattern) if isinstance(pattern, str) else pattern

    def check(self, context: ConstraintContext[str]) -> ConstraintResult:
        return context.satisfies(
            self.regex.fullmatch(context.input) is not None,
            lambda: context.resource(self.id, self.regex.pattern),
        )


class OneOf(Constraint[Any]):
    """Value must equal one of ``values``."""

    id = "literal.one_of"

    def __init__(self, *values: Any):
        if not values:
            raise ValueError("OneOf requires at least one allowed value")
        self.values = list(values)

    def check(self, context: ConstraintContext[Any]) -> ConstraintResult:
        if len(self.values) == 1:
            return context.satisfies(
                context.input == self.values[0],
                lambda: context.resource("literal.single", self.values[0]),
            )
        return context.satisfies(context.input in self.values, lambda: context.resource(self.id, self.values))


class IsNull(Constraint[Any]):
    """Value must be None."""

    id = "nullable.is_null"

    def check(self, context: ConstraintContext[Any]) -> ConstraintResult:
        return context.satisfies(context.input is None, lambda: context.resource(self.id))


class Past(Constraint[Union[date, datetime]]):
    """Moment must be before the configured clock's current time."""

    id = "temporal.past"

    def check(self, context: ConstraintContext[Union[date, datetime]]) -> ConstraintResult:
        return context.satisfies(context.input < _now_like(context), lambda: context.resource(self.id))


class Future(Constraint[Union[date, datetime]]):
    """Moment must be after the configured clock's current time."""

    id = "temporal.future"

    def check(self, context: ConstraintContext[Union[date, datetime]]) -> ConstraintResult:
        return context.satisfies(context.input > _now_like(context), lambda: context.resource(self.id))


def _now_like(context: ConstraintContext[Union[date, datetime]]) -> Union[date, datetime]:
    """Current time in the same flavour as the input (date, naive or aware datetime).

    A naive clock reading is taken as UTC when compared with an aware input.
    """
    now = context.now()
    value = context.input
    if isinstance(value, datetime):
        if value.tzinfo is None and now.tzinfo is not None:
            return now.replace(tzinfo=None)
        if value.tzinfo is not None and now.tzinfo is None:
            return now.replace(tzinfo=timezone.utc)
        return now
    return now.date()


__all__ = ["Min", "Max", "Length", "Size", "NotBlank", "Pattern", "OneOf", "IsNull", "Past", "Future"]
