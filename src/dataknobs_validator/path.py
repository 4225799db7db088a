"""Validation paths from the root value to the value being checked.

A :class:`Path` is an immutable linked list of segments, leaf first. Each
node also remembers the value that was entered there so that recursive
validation can notice it has come back to an object it is already inside.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Segments starting with these characters are joined without a dot,
# e.g. ``tags[2]<collection element>``.
_ATTACHED_PREFIXES = ("[", "<")

# Values of these types are compared by value elsewhere and may be interned,
# so identity says nothing about cycles.
_SCALAR_TYPES = (str, bytes, int, float, complex, bool)


@dataclass(frozen=True, eq=False)
class Path:
    """One node of a validation path.

    Attributes:
        name: Segment name; empty for the root node
        obj: Value entered at this node, used only for cycle detection
        parent: The enclosing node, or None for the root
    """

    name: str = ""
    obj: Any = None
    parent: Path | None = None

    @classmethod
    def root(cls, obj: Any = None) -> Path:
        """Create an unnamed root node."""
        return cls(name="", obj=obj, parent=None)

    def append(self, name: str, obj: Any = None) -> Path:
        """Return a new node for ``name`` whose parent is this node.

        This node is never modified; the new node shares it as its tail.
        """
        return Path(name=name, obj=obj, parent=self)

    def append_checked(self, name: str, obj: Any) -> Path | None:
        """Append ``name`` unless ``obj`` is already being validated on this path.

        Returns:
            The new node, or None when ``obj`` was entered by this node or
            one of its ancestors
        """
        if self.contains_object(obj):
            return None
        return self.append(name, obj)

    def contains_object(self, target: Any) -> bool:
        """Check whether ``target`` was entered on the chain from the root to here.

        Comparison is by identity. None and scalar values never match.
        """
        if target is None or isinstance(target, _SCALAR_TYPES):
            return False
        node: Path | None = self
        while node is not None:
            if node.obj is target:
                return True
            node = node.parent
        return False

    def detached(self) -> Path:
        """Copy of this path with the entered values dropped."""
        parent = self.parent.detached() if self.parent is not None else None
        return Path(name=self.name, obj=None, parent=parent)

    @property
    def names(self) -> list[str]:
        """Non-empty segment names in root-to-leaf order."""
        names = []
        node: Path | None = self
        while node is not None:
            if node.name:
                names.append(node.name)
            node = node.parent
        names.reverse()
        return names

    @property
    def full_name(self) -> str:
        """Dot/bracket joined rendering, e.g. ``order.items[0]<collection element>.sku``."""
        full = ""
        for name in self.names:
            if not full or name.startswith(_ATTACHED_PREFIXES):
                full += name
            else:
                full += "." + name
        return full

    def __str__(self) -> str:
        return self.full_name

    def __repr__(self) -> str:
        return f"Path({self.full_name!r})"
