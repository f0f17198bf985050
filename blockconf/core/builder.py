"""Stack-based tree builder driven by start, text and end events."""

from collections.abc import Iterable
from dataclasses import dataclass

from blockconf.core.errors import StructuralParsingError
from blockconf.core.node import HierarchicalNode
from blockconf.plugins.base import ConfigurationPlugin


@dataclass
class _Frame:
    node: HierarchicalNode
    plugin: ConfigurationPlugin | None = None


@dataclass(frozen=True)
class CompletedBlock:
    """A configuration block popped from the stack with its bound plugin."""

    node: HierarchicalNode
    plugin: ConfigurationPlugin


class TreeBuilder:
    """
    Assemble elements into :class:`HierarchicalNode` trees with an explicit stack.

    The builder is ``Idle`` while its stack is empty and ``Building`` otherwise.
    Only the node on top of the stack receives text and children. A frame
    opened with a plugin binding is a configuration block: closing it returns
    a :class:`CompletedBlock` instead of attaching the node to a parent.

    One builder serves exactly one read; it is never shared between reads.
    """

    def __init__(self) -> None:
        self._stack: list[_Frame] = []

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def is_idle(self) -> bool:
        return not self._stack

    def open_element(
        self,
        tag: str,
        attributes: Iterable[tuple[str, str]] = (),
        plugin: ConfigurationPlugin | None = None,
    ) -> HierarchicalNode:
        """
        Push a new node for ``tag``.

        :param tag: Element name
        :type tag: str
        :param attributes: Attribute pairs, last occurrence of a name wins
        :type attributes: Iterable[tuple[str, str]]
        :param plugin: Plugin bound to the node when it opens a configuration block
        :type plugin: ConfigurationPlugin | None
        :return: The pushed node
        :rtype: HierarchicalNode
        """
        node = HierarchicalNode(tag, attributes)
        self._stack.append(_Frame(node, plugin))
        return node

    def append_text(self, chars: str) -> None:
        """Append ``chars`` to the top node; ignored while idle."""
        if self._stack:
            self._stack[-1].node.append_text(chars)

    def close_element(self, tag: str) -> CompletedBlock | None:
        """
        Pop the top node and attach it to its parent, or complete a block.

        :param tag: Name of the element being closed
        :type tag: str
        :return: The completed block when the popped node opened one, else None
        :rtype: CompletedBlock | None
        :raises StructuralParsingError: If nothing is open, the tag does not
            match the open node, or a plain element has no enclosing parent
        """
        if not self._stack:
            raise StructuralParsingError(f"Closing tag </{tag}> has no matching open element")

        frame = self._stack[-1]
        if frame.node.name != tag:
            raise StructuralParsingError(
                f"Closing tag </{tag}> does not match open element <{frame.node.name}>"
            )
        self._stack.pop()
        node = frame.node.freeze()

        if frame.plugin is not None:
            return CompletedBlock(node, frame.plugin)

        if not self._stack:
            raise StructuralParsingError(
                f"Element <{tag}> was closed with no enclosing parent element"
            )
        self._stack[-1].node.add_child(node)
        return None
