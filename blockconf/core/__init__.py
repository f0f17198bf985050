"""
Core parse engine: events, tree building, aggregation and the reader.
"""

from .errors import (
    ConfigurationFileError,
    ConfigurationParsingError,
    DuplicateConfigurationError,
    ImportCycleError,
    ImportResolutionError,
    PluginExecutionError,
    PluginResolutionError,
    StructuralParsingError,
)
from .events import EndElement, ParseEvent, StartElement, Text
from .info import ConfigurationInfo
from .node import FrozenNodeError, HierarchicalNode
from .builder import CompletedBlock, TreeBuilder
from .reader import ConfigurationReader, read_configuration

__all__ = [
    "ConfigurationReader",
    "read_configuration",
    "ConfigurationInfo",
    "HierarchicalNode",
    "FrozenNodeError",
    "TreeBuilder",
    "CompletedBlock",
    "StartElement",
    "Text",
    "EndElement",
    "ParseEvent",
    "ConfigurationParsingError",
    "ConfigurationFileError",
    "StructuralParsingError",
    "PluginResolutionError",
    "PluginExecutionError",
    "ImportResolutionError",
    "ImportCycleError",
    "DuplicateConfigurationError",
]
