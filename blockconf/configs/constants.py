"""Reader constants for blockconf."""

# Element names recognized by the reader
ROOT_TAG: str = "configurations"
IMPORT_TAG: str = "import"
CONFIGURATION_TAG: str = "configuration"

# Attribute names recognized by the reader
PLUGIN_ATTRIBUTE: str = "plugin"
ID_ATTRIBUTE: str = "id"
FILE_ATTRIBUTE: str = "file"

# Duplicate configuration id handling
DUPLICATE_OVERWRITE: str = "overwrite"
DUPLICATE_ERROR: str = "error"
DUPLICATE_POLICIES: tuple[str, ...] = (DUPLICATE_OVERWRITE, DUPLICATE_ERROR)

# Bytes handed to the tokenizer per feed call
DEFAULT_CHUNK_SIZE: int = 65536

# Section holding reader settings in INI files, key in JSON / YAML files
SETTINGS_SECTION: str = "reader"

DEFAULT_LOG_LEVEL: str = "INFO"
