"""CLI entry point for reading blockconf configuration files.

Reads one configuration file with the plugins given on the command line
and prints the configuration ids and the files parsed. On failure it prints
the error and the files opened before it, so the broken file in an import
chain can be located.
"""

import sys

from blockconf.analysis.import_graph import format_import_tree
from blockconf.cli.constants import ERROR_EXIT_CODE, INTERRUPT_EXIT_CODE, SUCCESS_EXIT_CODE
from blockconf.cli.main_parser import build_main_argument_parser
from blockconf.configs.errors import SettingsError
from blockconf.configs.settings import ReaderSettings, load_settings
from blockconf.core.errors import ConfigurationParsingError
from blockconf.core.reader import ConfigurationReader
from blockconf.plugins.registry import PluginRegistry
from blockconf.utils.logging_config import set_log_level, setup_logger


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for ``blockconf-read``.

    :param argv: Arguments without the program name, ``sys.argv[1:]`` if None
    :type argv: list[str] | None
    :return: Exit code (0 for success, 1 for error or interruption)
    :rtype: int
    :raises SystemExit: On argument parsing errors (handled by argparse)
    """
    arguments = build_main_argument_parser().parse_args(argv)

    try:
        settings = load_settings(arguments.settings) if arguments.settings else ReaderSettings()
        log_level = arguments.log_level or settings.log_level
        setup_logger("blockconf", level=log_level)
        set_log_level(log_level)

        registry = PluginRegistry()
        for plugin_id, import_path in arguments.plugins:
            registry.register_path(plugin_id, import_path)

        info = ConfigurationReader(registry, settings).read(arguments.path)

    except KeyboardInterrupt:
        print("\nRead interrupted by user")
        return INTERRUPT_EXIT_CODE
    except SettingsError as e:
        print(f"Settings error: {e}")
        return ERROR_EXIT_CODE
    except ValueError as e:
        print(f"Plugin error: {e}")
        return ERROR_EXIT_CODE
    except ConfigurationParsingError as e:
        print(f"Configuration error ({type(e).__name__}): {e.message}")
        if e.files_parsed:
            print("Files parsed before the failure:")
            for path in e.files_parsed:
                print(f"  {path}")
        return ERROR_EXIT_CODE

    print(f"Configurations ({len(info)}):")
    for configuration_id in info.ids():
        print(f"  {configuration_id}: {type(info.get(configuration_id)).__name__}")
    print(f"Files parsed ({len(info.files_parsed)}):")
    for path in info.files_parsed:
        print(f"  {path}")
    if arguments.show_imports:
        print("Imports:")
        print(format_import_tree(info))

    return SUCCESS_EXIT_CODE


def run_read_main() -> None:
    """Execute :func:`main` and exit with its code."""
    sys.exit(main())


if __name__ == "__main__":
    run_read_main()
