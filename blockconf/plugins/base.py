"""
Abstract base class for configuration plugins.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from blockconf.core.node import HierarchicalNode


class ConfigurationPlugin(ABC):
    """
    Base class for all configuration plugins.

    A plugin turns the tree of one ``<configuration>`` block into a domain
    object. The reader builds the tree, calls :meth:`transform` once per block
    and stores the result under the block's ``id``. Plugin instances are
    cached by the registry and may serve several reads, so ``transform``
    should not keep per-call state on ``self``.
    """

    @abstractmethod
    def transform(self, node: "HierarchicalNode") -> Any:
        """
        Build a configuration object from a configuration block.

        :param node: Frozen root node of the block, named after the block tag
        :type node: HierarchicalNode
        :return: The configuration object stored under the block's id
        :rtype: Any
        """


class FunctionPlugin(ConfigurationPlugin):
    """Adapter turning a plain ``node -> object`` callable into a plugin."""

    def __init__(self, func: Callable[["HierarchicalNode"], Any]):
        if not callable(func):
            raise TypeError(f"{func!r} is not callable")
        self.func = func

    def transform(self, node: "HierarchicalNode") -> Any:
        return self.func(node)

    def __repr__(self) -> str:
        return f"FunctionPlugin({getattr(self.func, '__name__', self.func)!r})"
