"""Validation configuration.

A :class:`ValidationConfig` is fixed for one top-level validation call. It can
be built directly, from a dictionary, from a YAML/JSON file or from
environment variables:

    ```yaml
    # validation.yaml
    fail_fast: true
    messages:
      comparable.min: "is too small (minimum {0})"
    ```

    ```python
    config = ValidationConfig.from_file("validation.yaml")
    result = try_validate(block, config=config)
    ```
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Union

import yaml  # type: ignore[import-untyped]

from .exceptions import ConfigurationError
from .log import LogHook
from .messages import MessageCatalog

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

ENV_PREFIX = "DATAKNOBS_VALIDATOR_"

_KNOWN_KEYS = {"fail_fast", "messages", "messages_file"}


def system_clock() -> datetime:
    """Current time, timezone-aware UTC."""
    return datetime.now(timezone.utc)


def fixed_clock(moment: datetime) -> Clock:
    """A clock that always returns ``moment``. Useful in tests."""
    return lambda: moment


@dataclass(frozen=True)
class ValidationConfig:
    """Settings for one validation call.

    Attributes:
        fail_fast: Stop at the first violation instead of collecting all
        clock: Time source for temporal constraints
        logger: Optional hook receiving trace events
        catalog: Message catalog used to render catalog messages
    """

    fail_fast: bool = False
    clock: Clock = system_clock
    logger: LogHook | None = None
    catalog: MessageCatalog = field(default_factory=MessageCatalog.default)

    def replace(self, **changes: Any) -> ValidationConfig:
        """Return a copy with ``changes`` applied."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], **kwargs: Any) -> ValidationConfig:
        """Create a config from a dictionary.

        Args:
            data: Mapping with optional keys ``fail_fast``, ``messages``
                (template overrides) and ``messages_file``
            **kwargs: Values for fields that cannot come from data
                (``clock``, ``logger``, ``catalog``)

        Raises:
            ConfigurationError: If data contains unknown keys or invalid values
        """
        unknown = set(data) - _KNOWN_KEYS
        if unknown:
            raise ConfigurationError(
                f"Unknown validation config keys: {', '.join(sorted(unknown))}",
                context={"unknown": sorted(unknown), "allowed": sorted(_KNOWN_KEYS)},
            )

        fail_fast = data.get("fail_fast", False)
        if not isinstance(fail_fast, bool):
            raise ConfigurationError(
                f"fail_fast must be a boolean, got {type(fail_fast).__name__}",
                context={"fail_fast": fail_fast},
            )

        catalog = kwargs.pop("catalog", None) or MessageCatalog.default()
        if data.get("messages_file"):
            catalog = MessageCatalog.from_file(data["messages_file"], fallback=catalog)
        if data.get("messages"):
            messages = data["messages"]
            if not isinstance(messages, dict):
                raise ConfigurationError("messages must be a mapping of key to template")
            catalog = catalog.with_overrides({str(k): str(v) for k, v in messages.items()})

        return cls(fail_fast=fail_fast, catalog=catalog, **kwargs)

    @classmethod
    def from_file(cls, path: Union[str, Path], **kwargs: Any) -> ValidationConfig:
        """Create a config from a YAML or JSON file.

        A relative ``messages_file`` is resolved against the config file's
        directory.
        """
        path = Path(path).resolve()
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

        suffix = path.suffix.lower()
        with open(path, encoding="utf-8") as f:
            if suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ConfigurationError(f"Unsupported file format: {suffix}")

        data = data or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file must contain a mapping: {path}")
        messages_file = data.get("messages_file")
        if messages_file and not os.path.isabs(messages_file):
            data = {**data, "messages_file": str(path.parent / messages_file)}

        logger.debug("Loaded validation config from %s", path)
        return cls.from_dict(data, **kwargs)

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, **kwargs: Any) -> ValidationConfig:
        """Create a config from ``<prefix>FAIL_FAST`` and ``<prefix>MESSAGES_FILE``."""
        data: Dict[str, Any] = {}
        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            name = key[len(prefix):].lower()
            if name in _KNOWN_KEYS - {"messages"}:
                data[name] = _parse_value(value)
        return cls.from_dict(data, **kwargs)


def _parse_value(value: str) -> Any:
    """Convert an environment string to bool, number or string."""
    if value.lower() in ["true", "yes", "1", "on"]:
        return True
    if value.lower() in ["false", "no", "0", "off"]:
        return False
    if re.fullmatch(r"-?\d+", value):
        return int(value)
    if re.fullmatch(r"-?\d+\.\d+", value):
        return float(value)
    return value


__all__ = ["ValidationConfig", "Clock", "system_clock", "fixed_clock", "ENV_PREFIX"]
