"""Validation messages and the message catalog.

A :class:`Message` describes one violation: which constraint failed, where
(root identifier and path), on which input, and what to tell the user. Text
is either literal (:class:`TextMessage`) or looked up in a
:class:`MessageCatalog` by key and formatted with positional arguments
(:class:`CatalogMessage`).

Catalog templates use ``{0}``, ``{1}``... placeholders:

    ```yaml
    comparable.min: "must be greater than or equal to {0}"
    or: "at least one constraint must be satisfied: [{0}, {1}]"
    ```
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from functools import cached_property
from importlib import resources
from pathlib import Path as FilePath
from typing import Any, Union

import yaml  # type: ignore[import-untyped]

from .exceptions import ConfigurationError, MessageNotFoundError
from .path import Path

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_RESOURCE = "messages.yaml"


class MessageCatalog:
    """Key to template lookup with positional argument substitution.

    Catalogs can be layered: a lookup that misses falls through to the
    ``fallback`` catalog, so a locale or an application can override a few
    templates on top of the defaults.
    """

    def __init__(
        self,
        templates: Mapping[str, str] | None = None,
        fallback: MessageCatalog | None = None,
    ) -> None:
        """Initialize the catalog.

        Args:
            templates: Mapping of message key to template
            fallback: Catalog consulted for keys missing here
        """
        self._templates: dict[str, str] = dict(templates or {})
        self.fallback = fallback

    def lookup(self, key: str) -> str:
        """Return the template for ``key``.

        Raises:
            MessageNotFoundError: If neither this catalog nor its fallbacks
                define ``key``
        """
        catalog: MessageCatalog | None = self
        while catalog is not None:
            if key in catalog._templates:
                return catalog._templates[key]
            catalog = catalog.fallback
        raise MessageNotFoundError(key)

    def format(self, template: str, args: Sequence[Any]) -> str:
        """Substitute already-rendered ``args`` into ``template``."""
        return template.format(*args)

    def __contains__(self, key: str) -> bool:
        try:
            self.lookup(key)
        except MessageNotFoundError:
            return False
        return True

    def keys(self) -> set[str]:
        """All keys resolvable through this catalog and its fallbacks."""
        keys = set(self._templates)
        if self.fallback is not None:
            keys |= self.fallback.keys()
        return keys

    def with_overrides(self, templates: Mapping[str, str]) -> MessageCatalog:
        """Return a catalog that prefers ``templates`` and falls back to this one."""
        return MessageCatalog(templates, fallback=self)

    @classmethod
    def from_file(
        cls, path: Union[str, FilePath], fallback: MessageCatalog | None = None
    ) -> MessageCatalog:
        """Load templates from a YAML or JSON file.

        Args:
            path: Path to a ``.yaml``/``.yml`` or ``.json`` file holding a
                flat key to template mapping
            fallback: Catalog consulted for keys missing from the file

        Raises:
            ConfigurationError: If the file is missing, has an unsupported
                format or does not contain a mapping
        """
        path = FilePath(path).resolve()
        if not path.exists():
            raise ConfigurationError(f"Message catalog not found: {path}")

        suffix = path.suffix.lower()
        with open(path, encoding="utf-8") as f:
            if suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ConfigurationError(f"Unsupported message catalog format: {suffix}")

        logger.debug("Loaded message catalog from %s", path)
        return cls(_as_templates(data, str(path)), fallback=fallback)

    @classmethod
    def default(cls) -> MessageCatalog:
        """The catalog shipped with the package."""
        return _default_catalog()


_DEFAULT: MessageCatalog | None = None


def _default_catalog() -> MessageCatalog:
    global _DEFAULT
    if _DEFAULT is None:
        text = resources.files(__package__).joinpath(DEFAULT_CATALOG_RESOURCE).read_text("utf-8")
        _DEFAULT = MessageCatalog(_as_templates(yaml.safe_load(text), DEFAULT_CATALOG_RESOURCE))
        logger.debug("Loaded default message catalog")
    return _DEFAULT


def _as_templates(data: Any, source: str) -> dict[str, str]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigurationError(
            f"Message catalog must be a mapping of key to template: {source}",
            context={"source": source, "type": type(data).__name__},
        )
    return {str(key): str(value) for key, value in data.items()}


class Message(ABC):
    """A validation failure.

    Subclasses are immutable. Attributes shared by all kinds:

    - ``constraint_id``: identifier of the constraint that failed
    - ``root``: identifier of the validation root (e.g. a schema name)
    - ``path``: where in the validated value the failure occurred
    - ``input``: the offending value, when known
    """

    constraint_id: str
    root: str
    path: Path
    input: Any

    @abstractmethod
    def render(self) -> str:
        """Produce the message text."""

    @abstractmethod
    def with_details(self, input: Any, constraint_id: str) -> Message:
        """Return a copy carrying the violating input and constraint id."""

    @property
    def text(self) -> str:
        return self.render()

    @property
    def args(self) -> list[Any]:
        return []

    @property
    def descendants(self) -> list[Message]:
        """Messages embedded in this message's arguments, depth first."""
        return []

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, eq=False)
class TextMessage(Message):
    """A message with literal text."""

    literal: str
    constraint_id: str = ""
    root: str = ""
    path: Path = field(default_factory=Path.root)
    input: Any = None

    def render(self) -> str:
        return self.literal

    def with_details(self, input: Any, constraint_id: str) -> TextMessage:
        return TextMessage(
            literal=self.literal,
            constraint_id=constraint_id,
            root=self.root,
            path=self.path,
            input=input,
        )

    def __repr__(self) -> str:
        return (
            f"Message(constraint_id={self.constraint_id}, text={self.literal!r}, "
            f"root={self.root}, path={self.path.full_name}, input={self.input!r})"
        )


@dataclass(frozen=True, eq=False)
class CatalogMessage(Message):
    """A message whose text comes from a catalog template.

    The text is rendered on first access and cached. Arguments that are
    messages render as their own text; sequences render element-wise as
    ``[a, b]``.
    """

    key: str
    message_args: tuple[Any, ...] = ()
    catalog: MessageCatalog = field(default_factory=MessageCatalog.default, repr=False)
    constraint_id: str = ""
    root: str = ""
    path: Path = field(default_factory=Path.root)
    input: Any = None

    def render(self) -> str:
        return self.text

    @cached_property
    def text(self) -> str:  # type: ignore[override]
        template = self.catalog.lookup(self.key)
        return self.catalog.format(template, [render_argument(arg) for arg in self.message_args])

    @property
    def args(self) -> list[Any]:
        return list(self.message_args)

    @property
    def descendants(self) -> list[Message]:
        found: list[Message] = []
        for arg in self.message_args:
            _collect_messages(arg, found)
        return found

    def with_details(self, input: Any, constraint_id: str) -> CatalogMessage:
        return CatalogMessage(
            key=self.key,
            message_args=self.message_args,
            catalog=self.catalog,
            constraint_id=constraint_id,
            root=self.root,
            path=self.path,
            input=input,
        )

    def __repr__(self) -> str:
        return (
            f"Message(constraint_id={self.constraint_id}, key={self.key}, "
            f"root={self.root}, path={self.path.full_name}, input={self.input!r}, "
            f"args={list(self.message_args)!r})"
        )


def render_argument(arg: Any) -> str:
    """Render one catalog argument to text."""
    if isinstance(arg, Message):
        return arg.text
    if _is_sequence(arg):
        return "[" + ", ".join(render_argument(item) for item in arg) + "]"
    return str(arg)


def _collect_messages(arg: Any, found: list[Message]) -> None:
    if isinstance(arg, Message):
        found.append(arg)
    elif _is_sequence(arg):
        for item in arg:
            _collect_messages(item, found)


def _is_sequence(arg: Any) -> bool:
    return isinstance(arg, (Sequence, set, frozenset)) and not isinstance(
        arg, (str, bytes, bytearray)
    )


__all__ = [
    "Message",
    "TextMessage",
    "CatalogMessage",
    "MessageCatalog",
    "render_argument",
]
