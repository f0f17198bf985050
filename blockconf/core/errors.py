"""Exception classes raised while reading configuration files.

Every failure of a read surfaces as exactly one
:class:`ConfigurationParsingError` (or subclass). The exception carries the
ordered list of files opened before the failure, including files opened by
nested imports, so the caller can tell which file in an import chain broke.
"""

from collections.abc import Iterable


class ConfigurationParsingError(Exception):
    """Base exception for configuration read failures.

    :param message: Human-readable description of the failure
    :type message: str
    :param files_parsed: Files opened before the failure, in open order
    :type files_parsed: Iterable[str] | None
    """

    def __init__(self, message: str, files_parsed: Iterable[str] | None = None):
        super().__init__(message)
        self.message = message
        self.files_parsed: list[str] = list(files_parsed or [])

    def attach_files(self, files_parsed: Iterable[str]) -> None:
        """Replace the carried file list with a copy of ``files_parsed``."""
        self.files_parsed = list(files_parsed)


class ConfigurationFileError(ConfigurationParsingError):
    """Raised when a configuration file cannot be opened."""


class StructuralParsingError(ConfigurationParsingError):
    """Raised on malformed nesting or markup.

    Covers an end event with no matching open node, a plain element closed
    without an enclosing parent, a configuration block without an ``id``
    and markup the event source cannot tokenize.
    """


class PluginResolutionError(ConfigurationParsingError):
    """Raised when a configuration block's plugin identifier cannot be resolved."""


class PluginExecutionError(ConfigurationParsingError):
    """Raised when a plugin fails to transform a configuration block."""


class ImportResolutionError(ConfigurationParsingError):
    """Raised when an imported file cannot be opened or fails to parse."""


class ImportCycleError(ImportResolutionError):
    """Raised when a file imports itself, directly or through other files.

    :param message: Human-readable description of the failure
    :type message: str
    :param cycle: File chain ending with the file imported a second time
    :type cycle: Iterable[str]
    """

    def __init__(self, message: str, cycle: Iterable[str], files_parsed: Iterable[str] | None = None):
        super().__init__(message, files_parsed)
        self.cycle: list[str] = list(cycle)


class DuplicateConfigurationError(ConfigurationParsingError):
    """Raised when an id is defined twice and duplicates are rejected."""
