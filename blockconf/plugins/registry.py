"""
Configuration plugin registry for blockconf.

This module maps plugin identifiers, as written in the ``plugin`` attribute of
a configuration block, to factories producing :class:`ConfigurationPlugin`
instances. A registry is populated once at startup and passed to every read.
"""

import importlib
import logging
import threading
from collections.abc import Callable
from typing import Any

from blockconf.core.errors import PluginResolutionError
from blockconf.plugins.base import ConfigurationPlugin, FunctionPlugin

logger = logging.getLogger(__name__)

PluginFactory = Callable[[], ConfigurationPlugin]


class PluginRegistry:
    """
    Registry resolving plugin identifiers to cached plugin instances.

    Factories are called lazily, on the first resolution of their identifier,
    and the instance is reused by later resolutions within and across reads.
    The cache is guarded by a reentrant lock, so one registry can serve concurrent
    reads and a factory may resolve other plugins from the same registry.

    Example:
        registry = PluginRegistry()
        registry.register("pool", DatabasePoolPlugin)
        registry.register_function("echo-int", lambda node: int(node.text))
        plugin = registry.resolve("pool")
    """

    def __init__(self, factories: dict[str, PluginFactory] | None = None) -> None:
        """
        Initialize the registry.

        :param factories: Optional identifier to factory mapping registered up front
        :type factories: dict[str, PluginFactory] | None
        """
        self._factories: dict[str, PluginFactory] = {}
        self._instances: dict[str, ConfigurationPlugin] = {}
        self._lock = threading.RLock()

        for plugin_id, factory in (factories or {}).items():
            self.register(plugin_id, factory)

    def register(self, plugin_id: str, factory: PluginFactory) -> None:
        """
        Register a plugin factory.

        :param plugin_id: Identifier used in the ``plugin`` attribute
        :type plugin_id: str
        :param factory: Zero-argument callable returning a ConfigurationPlugin,
            typically the plugin class itself
        :type factory: PluginFactory
        :raises TypeError: If factory is not callable
        :raises ValueError: If plugin_id is empty or already registered
        """
        if not plugin_id:
            raise ValueError("Plugin identifier cannot be empty")
        if not callable(factory):
            raise TypeError(f"Factory for plugin '{plugin_id}' must be callable")

        with self._lock:
            if plugin_id in self._factories:
                raise ValueError(f"Plugin '{plugin_id}' is already registered")
            self._factories[plugin_id] = factory

        logger.debug(f"Registered plugin '{plugin_id}'")

    def register_function(self, plugin_id: str, func: Callable[[Any], Any]) -> None:
        """
        Register a plain ``node -> object`` callable as a plugin.

        :param plugin_id: Identifier used in the ``plugin`` attribute
        :type plugin_id: str
        :param func: Transform function
        :type func: Callable[[Any], Any]
        """
        if not callable(func):
            raise TypeError(f"Transform for plugin '{plugin_id}' must be callable")
        self.register(plugin_id, lambda: FunctionPlugin(func))

    def register_path(self, plugin_id: str, import_path: str) -> None:
        """
        Register the object found at ``package.module:attribute``.

        A ConfigurationPlugin subclass is registered as its own factory; any
        other callable is registered as a transform function.

        :param plugin_id: Identifier used in the ``plugin`` attribute
        :type plugin_id: str
        :param import_path: Import path in ``module:attribute`` form
        :type import_path: str
        :raises ValueError: If the path is malformed or cannot be imported
        """
        module_name, separator, attribute = import_path.partition(":")
        if not separator or not module_name or not attribute:
            raise ValueError(
                f"Invalid plugin path '{import_path}', expected 'package.module:attribute'"
            )

        try:
            target: Any = importlib.import_module(module_name)
            for part in attribute.split("."):
                target = getattr(target, part)
        except (ImportError, AttributeError) as e:
            raise ValueError(f"Cannot import plugin '{import_path}': {e}") from e

        if isinstance(target, type) and issubclass(target, ConfigurationPlugin):
            self.register(plugin_id, target)
        else:
            self.register_function(plugin_id, target)

    def unregister(self, plugin_id: str) -> None:
        """
        Remove a plugin and its cached instance.

        :raises KeyError: If plugin_id is not registered
        """
        with self._lock:
            if plugin_id not in self._factories:
                raise KeyError(f"Plugin '{plugin_id}' not found")
            del self._factories[plugin_id]
            self._instances.pop(plugin_id, None)

    def resolve(self, plugin_id: str | None) -> ConfigurationPlugin:
        """
        Return the plugin registered under ``plugin_id``.

        :param plugin_id: Identifier read from a configuration block
        :type plugin_id: str | None
        :return: Cached or freshly built plugin instance
        :rtype: ConfigurationPlugin
        :raises PluginResolutionError: If the identifier is unknown, the factory
            fails or it does not produce a ConfigurationPlugin
        """
        if not plugin_id:
            raise PluginResolutionError("Configuration block does not name a plugin")

        with self._lock:
            if plugin_id in self._instances:
                return self._instances[plugin_id]

            factory = self._factories.get(plugin_id)
            if factory is None:
                raise PluginResolutionError(
                    f"Plugin '{plugin_id}' not found. "
                    f"Available plugins: {sorted(self._factories)}"
                )

            try:
                plugin = factory()
            except Exception as e:
                raise PluginResolutionError(
                    f"Plugin '{plugin_id}' could not be instantiated: {e}"
                ) from e

            if not isinstance(plugin, ConfigurationPlugin):
                raise PluginResolutionError(
                    f"Factory for plugin '{plugin_id}' returned "
                    f"{type(plugin).__name__}, not a ConfigurationPlugin"
                )

            self._instances[plugin_id] = plugin

        logger.debug(f"Instantiated plugin '{plugin_id}': {plugin!r}")
        return plugin

    def list_plugins(self) -> list[str]:
        """
        List all registered plugin identifiers.

        :return: Registered identifiers in registration order
        :rtype: list[str]
        """
        return list(self._factories)

    def clear_cache(self) -> None:
        """Forget cached instances; factories stay registered."""
        with self._lock:
            self._instances.clear()

    def __contains__(self, plugin_id: object) -> bool:
        return plugin_id in self._factories
