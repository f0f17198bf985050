"""Shared fixtures and test utilities for blockconf tests."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from blockconf.core.node import HierarchicalNode
from blockconf.plugins.base import ConfigurationPlugin
from blockconf.plugins.registry import PluginRegistry


class EchoIntPlugin(ConfigurationPlugin):
    """Reads the ``value`` child of a block as an integer."""

    def transform(self, node: HierarchicalNode) -> int:
        return int(node.child_text("value", "").strip())


class NodePlugin(ConfigurationPlugin):
    """Returns the block node itself."""

    def transform(self, node: HierarchicalNode) -> HierarchicalNode:
        return node


class FailingPlugin(ConfigurationPlugin):
    """Always fails to transform."""

    def transform(self, node: HierarchicalNode) -> Any:
        raise ValueError("broken block")


@pytest.fixture
def registry() -> PluginRegistry:
    """Provide a registry with the test plugins registered."""
    plugin_registry = PluginRegistry()
    plugin_registry.register("echo-int", EchoIntPlugin)
    plugin_registry.register("node", NodePlugin)
    plugin_registry.register("failing", FailingPlugin)
    plugin_registry.register_function("text", lambda node: node.text.strip())
    return plugin_registry


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str, str], Path]:
    """Provide a helper writing configuration files under ``tmp_path``."""

    def _write(relative_path: str, content: str) -> Path:
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write

