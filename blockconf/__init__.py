"""
blockconf: streaming reader for tree-structured configuration files.

A configuration file is a root ``<configurations>`` element holding
``<configuration plugin="..." id="...">`` blocks and ``<import file="..."/>``
directives. Each block is built into a :class:`HierarchicalNode` tree and
handed to the plugin registered under its ``plugin`` identifier; the plugin's
result is stored under the block's ``id``. Imports are read recursively and
merged into the same result.

Example:
    from blockconf import PluginRegistry, read_configuration

    registry = PluginRegistry()
    registry.register_function("echo-int", lambda node: int(node.child_text("value")))
    info = read_configuration("/etc/app/main.xml", registry)
    info.configurations["k"]
"""

from blockconf.configs.settings import ReaderSettings, load_settings
from blockconf.core.errors import (
    ConfigurationFileError,
    ConfigurationParsingError,
    DuplicateConfigurationError,
    ImportCycleError,
    ImportResolutionError,
    PluginExecutionError,
    PluginResolutionError,
    StructuralParsingError,
)
from blockconf.core.info import ConfigurationInfo
from blockconf.core.node import HierarchicalNode
from blockconf.core.reader import ConfigurationReader, read_configuration
from blockconf.plugins.base import ConfigurationPlugin, FunctionPlugin
from blockconf.plugins.registry import PluginRegistry

__version__ = "1.0.0"

__all__ = [
    "ConfigurationReader",
    "read_configuration",
    "ConfigurationInfo",
    "HierarchicalNode",
    "ConfigurationPlugin",
    "FunctionPlugin",
    "PluginRegistry",
    "ReaderSettings",
    "load_settings",
    "ConfigurationParsingError",
    "ConfigurationFileError",
    "StructuralParsingError",
    "PluginResolutionError",
    "PluginExecutionError",
    "ImportResolutionError",
    "ImportCycleError",
    "DuplicateConfigurationError",
]
