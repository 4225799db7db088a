"""Validators applying a child validator to every element of a container.

Each element is validated under its own path segment:

    ===============  ===================================
    validator        segment
    ===============  ===================================
    EachElement      ``[2]<collection element>``
    EachKey          ``<map key>``
    EachValue        ``[key]<map value>``
    EachEntry        ``[key]<map entry>``
    ===============  ===================================

Child failures are collected (all of them, or up to the first under
fail-fast) and reported as one message at the container level. The child
messages are its arguments, so ``message.descendants`` lists them with
their own paths.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Tuple, TypeVar

from .constraint import record
from .context import ValidationContext
from .messages import Message
from .result import ValidationIor
from .validator import Validator

C = TypeVar("C")


class _Each(Validator[C, C]):
    """Shared traversal; subclasses choose the items and their segments."""

    id = ""

    def __init__(self, validator: Validator[Any, Any]):
        self.validator = validator

    @abstractmethod
    def items(self, input: C) -> Iterator[Tuple[str, Any]]:
        """Yield ``(segment, value)`` for each item to validate."""

    def execute(self, context: ValidationContext, input: C) -> ValidationIor[C]:
        messages: list[Message] = []
        for segment, value in self.items(input):
            child = context.add_path_checked(segment, value)
            if child is None:
                continue
            result = self.validator.execute(child, value)
            if result.is_failure:
                messages.extend(result.messages)
                if context.fail_fast:
                    break
        if not messages:
            return record(context, self.id, input, None)
        return record(context, self.id, input, context.resource(self.id, messages))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.validator!r})"


class EachElement(_Each[Iterable[Any]]):
    """Validate every element of an iterable."""

    id = "collection.each"

    def items(self, input: Iterable[Any]) -> Iterator[Tuple[str, Any]]:
        for index, element in enumerate(input):
            yield f"[{index}]<collection element>", element


class EachKey(_Each[Mapping[Any, Any]]):
    """Validate every key of a mapping."""

    id = "map.each_key"

    def items(self, input: Mapping[Any, Any]) -> Iterator[Tuple[str, Any]]:
        for key in input:
            yield "<map key>", key


class EachValue(_Each[Mapping[Any, Any]]):
    """Validate every value of a mapping."""

    id = "map.each_value"

    def items(self, input: Mapping[Any, Any]) -> Iterator[Tuple[str, Any]]:
        for key, value in input.items():
            yield f"[{key}]<map value>", value


class EachEntry(_Each[Mapping[Any, Any]]):
    """Validate every ``(key, value)`` pair of a mapping."""

    id = "map.each_entry"

    def items(self, input: Mapping[Any, Any]) -> Iterator[Tuple[str, Any]]:
        for key, value in input.items():
            yield f"[{key}]<map entry>", (key, value)


__all__ = ["EachElement", "EachKey", "EachValue", "EachEntry"]
