"""Argument parser for the blockconf command-line reader."""

from argparse import ArgumentParser, ArgumentTypeError

from blockconf.cli.constants import LOG_LEVEL_CHOICES


def parse_plugin_binding(value: str) -> tuple[str, str]:
    """
    Split a ``--plugin`` value of the form ``ID=package.module:attribute``.

    :param value: Raw argument value
    :type value: str
    :return: Plugin identifier and import path
    :rtype: tuple[str, str]
    :raises ArgumentTypeError: If the value is malformed
    """
    plugin_id, separator, import_path = value.partition("=")
    if not separator or not plugin_id.strip() or ":" not in import_path:
        raise ArgumentTypeError(
            f"Invalid plugin binding '{value}', expected ID=package.module:attribute"
        )
    return plugin_id.strip(), import_path.strip()


def build_main_argument_parser() -> ArgumentParser:
    """
    Build the argument parser for ``blockconf-read``.

    :return: Configured argument parser
    :rtype: ArgumentParser
    """
    parser = ArgumentParser(
        prog="blockconf-read",
        description="Read a configuration file and report the configurations it defines.",
    )
    parser.add_argument("path", help="Configuration file to read")
    parser.add_argument(
        "--plugin",
        dest="plugins",
        action="append",
        default=[],
        type=parse_plugin_binding,
        metavar="ID=MODULE:ATTR",
        help="Register a plugin under ID (repeatable)",
    )
    parser.add_argument(
        "--settings",
        default=None,
        help="Reader settings file (.ini, .json, .yaml or .yml)",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=LOG_LEVEL_CHOICES,
        default=None,
        help="Logging level, overrides the settings file",
    )
    parser.add_argument(
        "--show-imports",
        dest="show_imports",
        action="store_true",
        help="Print the import tree of the files read",
    )
    return parser
