"""In-memory tree node built from one source element."""

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any


class FrozenNodeError(RuntimeError):
    """Raised when a node is modified after it left the build stack."""


class HierarchicalNode:
    """
    One element of a configuration block: name, attributes, text and children.

    A node is mutable only while the tree builder holds it on top of its
    stack. Once popped it is frozen: attributes become a read-only mapping,
    children a tuple and the text is fixed.

    :param name: Element name as it appears in the document
    :type name: str
    :param attributes: Attribute name/value pairs, last occurrence wins
    :type attributes: Mapping[str, str] | Iterable[tuple[str, str]] | None
    """

    __slots__ = ("name", "_attributes", "_text_parts", "_children", "_frozen")

    def __init__(
        self,
        name: str,
        attributes: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
    ):
        self.name = name
        self._attributes: dict[str, str] = {}
        self._text_parts: list[str] = []
        self._children: list[HierarchicalNode] = []
        self._frozen = False

        if attributes is not None:
            pairs = attributes.items() if isinstance(attributes, Mapping) else attributes
            for attribute_name, value in pairs:
                self.set_attribute(attribute_name, value)

    def _check_mutable(self) -> None:
        if self._frozen:
            raise FrozenNodeError(f"Node <{self.name}> is frozen and cannot be modified")

    def set_attribute(self, name: str, value: str) -> None:
        """Set an attribute, overwriting any earlier value for the same name."""
        self._check_mutable()
        self._attributes[name] = value

    def append_text(self, chars: str) -> None:
        """Append character data; text is never trimmed or replaced."""
        self._check_mutable()
        self._text_parts.append(chars)

    def add_child(self, child: "HierarchicalNode") -> None:
        """Attach ``child`` as the last child of this node."""
        self._check_mutable()
        self._children.append(child)

    def freeze(self) -> "HierarchicalNode":
        """Make the node immutable and return it."""
        if not self._frozen:
            self._text_parts = ["".join(self._text_parts)]
            self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def attributes(self) -> Mapping[str, str]:
        if self._frozen:
            return MappingProxyType(self._attributes)
        return dict(self._attributes)

    @property
    def text(self) -> str:
        return "".join(self._text_parts)

    @property
    def children(self) -> tuple["HierarchicalNode", ...]:
        return tuple(self._children)

    def get_attribute(self, name: str, default: str | None = None) -> str | None:
        """
        Get an attribute value.

        :param name: Attribute name
        :type name: str
        :param default: Value returned when the attribute is absent
        :type default: str | None
        :return: Attribute value or ``default``
        :rtype: str | None
        """
        return self._attributes.get(name, default)

    def has_attribute(self, name: str) -> bool:
        return name in self._attributes

    def find(self, name: str) -> "HierarchicalNode | None":
        """Return the first child called ``name``, or None."""
        for child in self._children:
            if child.name == name:
                return child
        return None

    def find_all(self, name: str) -> list["HierarchicalNode"]:
        """Return every child called ``name`` in document order."""
        return [child for child in self._children if child.name == name]

    def child_text(self, name: str, default: str | None = None) -> str | None:
        """Return the text of the first child called ``name``, or ``default``."""
        child = self.find(name)
        return child.text if child is not None else default

    def iter(self) -> Iterator["HierarchicalNode"]:
        """Walk this node and its descendants depth-first in document order."""
        yield self
        for child in self._children:
            yield from child.iter()

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view of the subtree, handy for plugins and debugging."""
        return {
            "name": self.name,
            "attributes": dict(self._attributes),
            "text": self.text,
            "children": [child.to_dict() for child in self._children],
        }

    def __repr__(self) -> str:
        return (
            f"HierarchicalNode(name={self.name!r}, attributes={self._attributes!r}, "
            f"children={len(self._children)})"
        )
