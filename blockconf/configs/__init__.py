"""
Reader settings for blockconf.

Main components:
- ReaderSettings: Tag names, attribute names and policies used by the reader
- load_settings: Loading settings from INI, JSON or YAML files
- Error classes: Specific settings exceptions
"""

from .errors import (
    SettingsError,
    SettingsFileNotFoundError,
    SettingsParseError,
    SettingsValueError,
)
from .settings import ReaderSettings, load_settings, settings_from_dict

__all__ = [
    "ReaderSettings",
    "load_settings",
    "settings_from_dict",
    "SettingsError",
    "SettingsFileNotFoundError",
    "SettingsParseError",
    "SettingsValueError",
]
