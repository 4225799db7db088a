"""Top-level entry points.

These are the only places where the three-state internal result becomes
the public :data:`~dataknobs_validator.result.ValidationResult`:

    ```python
    from dataknobs_validator import ValidationConfig, try_validate
    from dataknobs_validator.constraints import Max, Min

    def check_age(ctx, age):
        ctx.check(age, Min(0))
        ctx.check(age, Max(150))
        return age

    result = try_validate(lambda ctx: check_age(ctx, -5))
    config = ValidationConfig(fail_fast=True)
    result = try_validate(lambda ctx: check_age(ctx, -5), config)
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from .accumulate import ior
from .config import ValidationConfig
from .context import ValidationContext
from .exceptions import ValidationError
from .result import Failure, ValidationResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


def try_validate(
    block: Callable[[ValidationContext], T],
    config: ValidationConfig | None = None,
) -> ValidationResult[T]:
    """Run ``block`` under a fresh context.

    Args:
        block: Receives the context and returns the validated value
        config: Settings for this call; defaults to ``ValidationConfig()``

    Returns:
        ``Success`` with the block's value, or ``Failure`` with every message
        the block reported (only the first under fail-fast)
    """
    context = ValidationContext(config=config if config is not None else ValidationConfig())
    result = ior(context, block).to_result()
    logger.debug(
        "Validation finished with %d message(s) (fail_fast=%s)",
        len(result.messages),
        context.fail_fast,
    )
    return result


def validate(
    block: Callable[[ValidationContext], T],
    config: ValidationConfig | None = None,
) -> T:
    """Run ``block`` like :func:`try_validate`, returning its value.

    Raises:
        ValidationError: If validation failed; carries the messages
    """
    result = try_validate(block, config)
    if isinstance(result, Failure):
        raise ValidationError(result.messages)
    return result.value


__all__ = ["try_validate", "validate"]
