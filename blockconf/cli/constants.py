"""CLI-specific constants for blockconf command-line interfaces."""

# Standard CLI exit codes following Unix conventions
SUCCESS_EXIT_CODE: int = 0
"""Exit code indicating successful program completion."""

ERROR_EXIT_CODE: int = 1
"""Exit code indicating program failure or error condition."""

INTERRUPT_EXIT_CODE: int = 1
"""Exit code indicating program interruption by user (Ctrl+C)."""

LOG_LEVEL_CHOICES: list[str] = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
