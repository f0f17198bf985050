"""
Configuration plugins: the contract and the registry resolving identifiers.
"""

from .base import ConfigurationPlugin, FunctionPlugin
from .registry import PluginRegistry

__all__ = [
    "ConfigurationPlugin",
    "FunctionPlugin",
    "PluginRegistry",
]
