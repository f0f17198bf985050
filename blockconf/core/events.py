"""Streaming event types consumed by the tree builder.

Any iterable of these events is a valid input for
:meth:`blockconf.core.reader.ConfigurationReader.read_events`, which keeps
the parse engine independent of the tokenizer producing them.
"""

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class StartElement:
    """An element was opened.

    ``attributes`` keeps declaration order and may repeat a name; the last
    occurrence wins once copied into a node.
    """

    tag: str
    attributes: tuple[tuple[str, str], ...] = ()

    @classmethod
    def of(cls, tag: str, attributes: Mapping[str, str] | None = None) -> "StartElement":
        """Build a start event from a mapping of attributes."""
        return cls(tag, tuple((attributes or {}).items()))


@dataclass(frozen=True)
class Text:
    """Character data inside the innermost open element."""

    chars: str


@dataclass(frozen=True)
class EndElement:
    """An element was closed."""

    tag: str


ParseEvent = StartElement | Text | EndElement
