"""Custom exceptions for the dataknobs_validator package.

This module defines exception types for the validator package, built on the
common exception framework from dataknobs_common.

Constraint violations are not exceptions: they are collected as
:class:`~dataknobs_validator.messages.Message` objects and reported through
:class:`~dataknobs_validator.result.Failure`. The exceptions below cover the
boundary where that changes:

- ``validate(...)`` raising :class:`ValidationError` with the full message list
- configuration problems, including a missing message catalog key
- transforms reporting a message via :class:`MessageError`

Example:
    ```python
    from dataknobs_validator import ValidationError, validate

    try:
        validate(lambda ctx: ctx.check(-5, Min(0)))
    except ValidationError as e:
        for message in e.messages:
            print(message.path.full_name, message.text)
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict

from dataknobs_common import (
    ConfigurationError as BaseConfigurationError,
    DataknobsError,
    ValidationError as BaseValidationError,
)

if TYPE_CHECKING:
    from .messages import Message


class ValidatorError(DataknobsError):
    """Base exception for the validator package."""

    pass


class ValidationError(ValidatorError, BaseValidationError):
    """Raised by ``validate`` style entry points when validation fails.

    Carries every message that the equivalent ``try_validate`` call would
    have returned in its ``Failure``.

    Example:
        ```python
        try:
            Validator.of(Min(0)).validate(-1)
        except ValidationError as e:
            assert e.messages[0].constraint_id == "comparable.min"
        ```
    """

    def __init__(self, messages: list[Message], context: Dict[str, Any] | None = None):
        self.messages = list(messages)
        super().__init__(
            "; ".join(_describe(m) for m in self.messages) or "Validation failed",
            context=context,
        )


class ConfigurationError(ValidatorError, BaseConfigurationError):
    """Raised when configuration is invalid or the engine is misused.

    Common scenarios include:
    - Unknown keys or unreadable files when loading a ``ValidationConfig``
    - Accumulating messages on a context with no accumulation scope
    """

    pass


class MessageNotFoundError(ConfigurationError):
    """Raised when a catalog message key has no template.

    Surfaces when the message text is rendered, never as an accumulated
    validation failure.
    """

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"No message template for key '{key}'", context={"key": key})


class MessageError(ValidatorError):
    """Raised from a transform to report a validation message.

    ``Validator.map`` and ``ObjectFactory`` convert it into a ``Failure``
    carrying ``message`` instead of letting it propagate.
    """

    def __init__(self, message: Message):
        self.message = message
        super().__init__(_describe(message))


def _describe(message: Message) -> str:
    name = message.path.full_name
    return f"{name}: {message.text}" if name else message.text


__all__ = [
    "ValidatorError",
    "ValidationError",
    "ConfigurationError",
    "MessageNotFoundError",
    "MessageError",
]
