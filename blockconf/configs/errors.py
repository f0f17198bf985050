"""Settings-related exception classes for blockconf."""


class SettingsError(Exception):
    """Base exception for reader settings errors.

    All settings-related exceptions inherit from this class,
    allowing for broad exception handling when needed.
    """


class SettingsFileNotFoundError(SettingsError):
    """Raised when a settings file cannot be found."""


class SettingsParseError(SettingsError):
    """Raised when a settings file cannot be parsed.

    This exception is raised when a settings file exists but contains
    invalid syntax for its format (INI, JSON, YAML) or an unsupported
    file extension.
    """


class SettingsValueError(SettingsError):
    """Raised when a settings value is unknown or has the wrong type."""
