"""
blockconf.cli: Command-line entry point and argument parsing.

Entry Points:
- run_read.py: Read a configuration file and report its configurations
"""

from .constants import ERROR_EXIT_CODE, INTERRUPT_EXIT_CODE, SUCCESS_EXIT_CODE
from .main_parser import build_main_argument_parser, parse_plugin_binding

__all__ = [
    "build_main_argument_parser",
    "parse_plugin_binding",
    "SUCCESS_EXIT_CODE",
    "ERROR_EXIT_CODE",
    "INTERRUPT_EXIT_CODE",
]
