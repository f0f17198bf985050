"""Accumulated result of a configuration read."""

from collections.abc import Iterator
from typing import Any


class ConfigurationInfo:
    """
    Configuration objects produced by a read plus the files it touched.

    ``files_parsed`` lists every opened file in open order, nested imports
    included. ``configurations`` maps block ids to plugin results.
    ``imports`` records ``(importer, imported)`` edges for diagnostics.

    The aggregator does no validation: id uniqueness is the caller's concern.
    """

    def __init__(self) -> None:
        self.files_parsed: list[str] = []
        self.configurations: dict[str, Any] = {}
        self.imports: list[tuple[str, str]] = []

    def add_file(self, path: str) -> None:
        """Record an opened file."""
        self.files_parsed.append(path)

    def add_configuration(self, configuration_id: str, configuration: Any) -> None:
        """Store ``configuration`` under ``configuration_id``, overwriting any previous value."""
        self.configurations[configuration_id] = configuration

    def add_import(self, importer: str, imported: str) -> None:
        self.imports.append((importer, imported))

    def merge(self, other: "ConfigurationInfo") -> None:
        """
        Fold another result into this one.

        Files and import edges are appended; configurations are inserted or
        overwritten in ``other``'s order. Containers are copied, never shared.

        :param other: Result of a nested read
        :type other: ConfigurationInfo
        """
        self.files_parsed.extend(other.files_parsed)
        self.configurations.update(other.configurations)
        self.imports.extend(other.imports)

    def clear(self) -> None:
        """Drop all state."""
        self.files_parsed.clear()
        self.configurations.clear()
        self.imports.clear()

    def get(self, configuration_id: str, default: Any = None) -> Any:
        return self.configurations.get(configuration_id, default)

    def ids(self) -> list[str]:
        return list(self.configurations)

    def __contains__(self, configuration_id: object) -> bool:
        return configuration_id in self.configurations

    def __len__(self) -> int:
        return len(self.configurations)

    def __iter__(self) -> Iterator[str]:
        return iter(self.configurations)

    def __repr__(self) -> str:
        return (
            f"ConfigurationInfo(configurations={list(self.configurations)!r}, "
            f"files_parsed={self.files_parsed!r})"
        )
