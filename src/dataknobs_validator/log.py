"""Trace events emitted while constraints are evaluated.

Configure ``ValidationConfig(logger=...)`` with any callable accepting a
:class:`LogEntry`. Events are informational only; they never change the
outcome of a validation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class Satisfied:
    """A constraint held."""

    constraint_id: str
    root: str
    path: str
    input: Any


@dataclass(frozen=True)
class Violated:
    """A constraint failed."""

    constraint_id: str
    root: str
    path: str
    input: Any
    args: list[Any] = field(default_factory=list)


LogEntry = Union[Satisfied, Violated]

LogHook = Callable[[LogEntry], None]


def logging_logger(logger: logging.Logger, level: int = logging.DEBUG) -> LogHook:
    """Adapt a stdlib logger into a trace hook.

    Example:
        ```python
        config = ValidationConfig(logger=logging_logger(logging.getLogger("validation")))
        ```
    """

    def hook(entry: LogEntry) -> None:
        if not logger.isEnabledFor(level):
            return
        if isinstance(entry, Violated):
            logger.log(
                level,
                "Violated %s at %s/%s (input=%r, args=%r)",
                entry.constraint_id, entry.root, entry.path, entry.input, entry.args,
            )
        else:
            logger.log(
                level,
                "Satisfied %s at %s/%s (input=%r)",
                entry.constraint_id, entry.root, entry.path, entry.input,
            )

    return hook


__all__ = ["Satisfied", "Violated", "LogEntry", "LogHook", "logging_logger"]
