"""Reader settings and their loading from INI, JSON or YAML files."""

import configparser
import json
import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Any

import yaml

from blockconf.configs.constants import (
    CONFIGURATION_TAG,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_LOG_LEVEL,
    DUPLICATE_OVERWRITE,
    DUPLICATE_POLICIES,
    FILE_ATTRIBUTE,
    ID_ATTRIBUTE,
    IMPORT_TAG,
    PLUGIN_ATTRIBUTE,
    ROOT_TAG,
    SETTINGS_SECTION,
)
from blockconf.configs.errors import (
    SettingsFileNotFoundError,
    SettingsParseError,
    SettingsValueError,
)
from blockconf.utils.logging_config import LOG_LEVELS

_BOOLEAN_VALUES = {
    "true": True,
    "yes": True,
    "on": True,
    "1": True,
    "false": False,
    "no": False,
    "off": False,
    "0": False,
}


@dataclass(frozen=True)
class ReaderSettings:
    """
    Tag names, attribute names and policies used by the configuration reader.

    Settings are immutable so one instance can be shared by every read.
    """

    root_tag: str = ROOT_TAG
    import_tag: str = IMPORT_TAG
    configuration_tag: str = CONFIGURATION_TAG
    plugin_attribute: str = PLUGIN_ATTRIBUTE
    id_attribute: str = ID_ATTRIBUTE
    file_attribute: str = FILE_ATTRIBUTE
    case_sensitive_tags: bool = False
    duplicate_policy: str = DUPLICATE_OVERWRITE
    detect_import_cycles: bool = True
    chunk_size: int = DEFAULT_CHUNK_SIZE
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        for name in ("root_tag", "import_tag", "configuration_tag"):
            if not getattr(self, name):
                raise SettingsValueError(f"Setting '{name}' cannot be empty")
        tags = {self.normalize_tag(self.root_tag), self.normalize_tag(self.import_tag),
                self.normalize_tag(self.configuration_tag)}
        if len(tags) != 3:
            raise SettingsValueError("Root, import and configuration tags must differ")
        if self.duplicate_policy not in DUPLICATE_POLICIES:
            raise SettingsValueError(
                f"Unknown duplicate_policy '{self.duplicate_policy}'. "
                f"Expected one of: {', '.join(DUPLICATE_POLICIES)}"
            )
        if self.chunk_size <= 0:
            raise SettingsValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise SettingsValueError(f"Unknown log_level '{self.log_level}'")

    def normalize_tag(self, tag: str) -> str:
        """Return ``tag`` in the form used for comparisons."""
        return tag if self.case_sensitive_tags else tag.lower()

    def is_root(self, tag: str) -> bool:
        return self.normalize_tag(tag) == self.normalize_tag(self.root_tag)

    def is_import(self, tag: str) -> bool:
        return self.normalize_tag(tag) == self.normalize_tag(self.import_tag)

    def is_configuration(self, tag: str) -> bool:
        return self.normalize_tag(tag) == self.normalize_tag(self.configuration_tag)

    def with_overrides(self, **overrides: Any) -> "ReaderSettings":
        """Return a copy with ``overrides`` applied and coerced."""
        return replace(self, **_coerce_values(overrides))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _coerce_value(name: str, value: Any, expected: type) -> Any:
    if expected is bool:
        if isinstance(value, bool):
            return value
        normalized = str(value).strip().lower()
        if normalized not in _BOOLEAN_VALUES:
            raise SettingsValueError(f"Setting '{name}' expects a boolean, got {value!r}")
        return _BOOLEAN_VALUES[normalized]
    if expected is int:
        if isinstance(value, bool):
            raise SettingsValueError(f"Setting '{name}' expects an integer, got {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise SettingsValueError(
                f"Setting '{name}' expects an integer, got {value!r}"
            ) from e
    if not isinstance(value, str):
        raise SettingsValueError(f"Setting '{name}' expects a string, got {value!r}")
    return value.strip()


def _coerce_values(raw_values: dict[str, Any]) -> dict[str, Any]:
    field_types = {
        field.name: type(field.default) for field in fields(ReaderSettings)
    }
    coerced: dict[str, Any] = {}
    for name, value in raw_values.items():
        if name not in field_types:
            raise SettingsValueError(
                f"Unknown reader setting '{name}'. "
                f"Available settings: {', '.join(field_types)}"
            )
        coerced[name] = _coerce_value(name, value, field_types[name])
    return coerced


def settings_from_dict(raw_values: dict[str, Any] | None) -> ReaderSettings:
    """
    Build settings from a plain mapping, coercing string values.

    :param raw_values: Setting name to value mapping, may be None
    :type raw_values: dict[str, Any] | None
    :return: Validated settings
    :rtype: ReaderSettings
    :raises SettingsValueError: If a name is unknown or a value is invalid
    """
    return ReaderSettings(**_coerce_values(raw_values or {}))


def _load_ini(path: str) -> dict[str, Any]:
    """Load the reader section of an INI file."""
    parser = configparser.ConfigParser()
    try:
        parser.read(path, encoding="utf-8")
    except configparser.Error as e:
        raise SettingsParseError(f"Invalid INI settings file {path}: {e}") from e
    if not parser.has_section(SETTINGS_SECTION):
        return {}
    return dict(parser[SETTINGS_SECTION].items())


def _load_json(path: str) -> dict[str, Any]:
    """Load the reader mapping of a JSON file."""
    with open(path, encoding="utf-8") as f:
        try:
            document = json.load(f)
        except json.JSONDecodeError as e:
            raise SettingsParseError(f"Invalid JSON settings file {path}: {e}") from e
    return _extract_section(document, path)


def _load_yaml(path: str) -> dict[str, Any]:
    """Load the reader mapping of a YAML file."""
    with open(path, encoding="utf-8") as f:
        try:
            document = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SettingsParseError(f"Invalid YAML settings file {path}: {e}") from e
    return _extract_section(document, path)


def _extract_section(document: Any, path: str) -> dict[str, Any]:
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise SettingsParseError(f"Settings file {path} must contain a mapping")
    section = document.get(SETTINGS_SECTION, {})
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise SettingsParseError(
            f"Section '{SETTINGS_SECTION}' in {path} must be a mapping"
        )
    return section


def load_settings(path: str | os.PathLike[str]) -> ReaderSettings:
    """
    Load reader settings from a file.

    INI files use a ``[reader]`` section; JSON and YAML files use a top-level
    ``reader`` mapping. Missing sections yield the defaults.

    :param path: Path to an ``.ini``, ``.json``, ``.yaml`` or ``.yml`` file
    :type path: str | os.PathLike[str]
    :return: Validated settings
    :rtype: ReaderSettings
    :raises SettingsFileNotFoundError: If the file does not exist
    :raises SettingsParseError: If the file cannot be parsed or has an unknown extension
    :raises SettingsValueError: If a setting is unknown or invalid
    """
    path = os.fspath(path)
    if not os.path.exists(path):
        raise SettingsFileNotFoundError(f"Settings file not found: {path}")

    if path.endswith(".ini"):
        raw_values = _load_ini(path)
    elif path.endswith(".json"):
        raw_values = _load_json(path)
    elif path.endswith((".yaml", ".yml")):
        raw_values = _load_yaml(path)
    else:
        raise SettingsParseError(f"Unsupported settings file format: {path}")

    return settings_from_dict(raw_values)
