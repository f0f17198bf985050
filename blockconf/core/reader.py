"""
Streaming configuration reader.

Reads a configuration file event by event, builds each configuration block
into a :class:`HierarchicalNode` tree, hands completed blocks to their
plugins and resolves ``<import>`` directives by reading the imported file
with the same algorithm before the importing file resumes.

All per-read state (tree builder, result, current directory and import chain)
lives in a :class:`_ReadContext` created for each file, so a reader instance
holds only immutable collaborators and can be reused, even concurrently.
"""

import logging
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, BinaryIO

from blockconf.configs.constants import DUPLICATE_ERROR
from blockconf.configs.settings import ReaderSettings
from blockconf.core.builder import CompletedBlock, TreeBuilder
from blockconf.core.errors import (
    ConfigurationFileError,
    ConfigurationParsingError,
    DuplicateConfigurationError,
    ImportCycleError,
    ImportResolutionError,
    PluginExecutionError,
    StructuralParsingError,
)
from blockconf.core.events import EndElement, ParseEvent, StartElement, Text
from blockconf.core.info import ConfigurationInfo
from blockconf.io.sax_source import iter_sax_events
from blockconf.utils.logging_config import LoggerAdapter

if TYPE_CHECKING:
    from blockconf.plugins.registry import PluginRegistry

logger = logging.getLogger(__name__)

# (stream, chunk_size, source_name) -> events in document order
EventSource = Callable[[BinaryIO, int, str], Iterable[ParseEvent]]


def _source_failure(error: Exception, source: str) -> ConfigurationParsingError:
    """Translate an unexpected error raised while consuming ``source``."""
    if isinstance(error, OSError):
        return ConfigurationFileError(f"Cannot read {source}: {error.strerror or error}")
    return StructuralParsingError(
        f"Failed to process events from {source}: {type(error).__name__}: {error}"
    )


def _nesting_too_deep(source: str, opened: list[str]) -> ImportResolutionError:
    """Report unbounded import recursion with every file the read opened."""
    return ImportResolutionError(f"Import nesting too deep while reading {source}", opened)


@dataclass
class _ReadContext:
    """State owned by the read of one file."""

    info: ConfigurationInfo
    builder: TreeBuilder
    source: str
    base_dir: str
    chain: tuple[str, ...]
    opened: list[str]  # shared by every file of one read
    log: LoggerAdapter


class ConfigurationReader:
    """
    Read configuration files into a :class:`ConfigurationInfo`.

    :param registry: Registry resolving ``plugin`` identifiers
    :type registry: PluginRegistry
    :param settings: Tag names, attribute names and policies, defaults apply if None
    :type settings: ReaderSettings | None
    :param event_source: Tokenizer turning a byte stream into parse events
    :type event_source: EventSource

    Example:
        >>> reader = ConfigurationReader(registry)
        >>> info = reader.read("/etc/app/main.xml")
        >>> info.files_parsed
        ['/etc/app/main.xml', '/etc/app/pools.xml']
    """

    def __init__(
        self,
        registry: "PluginRegistry",
        settings: ReaderSettings | None = None,
        event_source: EventSource = iter_sax_events,
    ):
        self.registry = registry
        self.settings = settings or ReaderSettings()
        self.event_source = event_source

    def read(self, path: str | os.PathLike[str]) -> ConfigurationInfo:
        """
        Read a configuration file and every file it imports.

        :param path: Path to the configuration file, relative paths are
            resolved against the working directory
        :type path: str | os.PathLike[str]
        :return: Configuration objects by id and the files parsed
        :rtype: ConfigurationInfo
        :raises ConfigurationParsingError: On any failure; ``files_parsed`` on
            the error lists the files opened before the failure
        """
        absolute_path = os.path.abspath(os.fspath(path))
        logger.debug(f"Reading configuration: {absolute_path}")
        opened: list[str] = []
        try:
            try:
                info = self._read_file(absolute_path, (), opened)
            except RecursionError as e:
                raise _nesting_too_deep(absolute_path, opened) from e
        except ConfigurationParsingError as e:
            logger.error(
                f"Failed to read configuration {absolute_path}: {e.message} "
                f"(files parsed: {e.files_parsed})"
            )
            raise

        logger.info(
            f"Read {len(info.configurations)} configuration(s) from "
            f"{len(info.files_parsed)} file(s) starting at {absolute_path}"
        )
        return info

    def read_events(
        self,
        events: Iterable[ParseEvent],
        base_dir: str | os.PathLike[str] = ".",
        source_name: str = "<events>",
    ) -> ConfigurationInfo:
        """
        Run the read algorithm over an in-memory event stream.

        Imports are resolved against ``base_dir`` and read from disk.
        ``source_name`` only appears in log and error messages; it is not
        added to ``files_parsed``.

        :param events: Parse events in document order
        :type events: Iterable[ParseEvent]
        :param base_dir: Directory that relative imports are resolved against
        :type base_dir: str | os.PathLike[str]
        :param source_name: Name of the stream for diagnostics
        :type source_name: str
        :return: Configuration objects by id and the files parsed
        :rtype: ConfigurationInfo
        :raises ConfigurationParsingError: On any failure
        """
        info = ConfigurationInfo()
        context = self._new_context(
            info, source_name, os.path.abspath(os.fspath(base_dir)), (), []
        )
        try:
            self._consume(events, context)
        except ConfigurationParsingError as e:
            e.attach_files(info.files_parsed)
            info.clear()
            raise
        except RecursionError as e:
            info.clear()
            raise _nesting_too_deep(source_name, context.opened) from e
        except Exception as e:
            error = _source_failure(e, source_name)
            error.attach_files(info.files_parsed)
            info.clear()
            raise error from e
        return info

    def _new_context(
        self,
        info: ConfigurationInfo,
        source: str,
        base_dir: str,
        chain: tuple[str, ...],
        opened: list[str],
    ) -> _ReadContext:
        return _ReadContext(
            info=info,
            builder=TreeBuilder(),
            source=source,
            base_dir=base_dir,
            chain=chain,
            opened=opened,
            log=LoggerAdapter(logger, {"file": os.path.basename(source)}),
        )

    def _read_file(
        self, path: str, chain: tuple[str, ...], opened: list[str]
    ) -> ConfigurationInfo:
        if self.settings.detect_import_cycles and path in chain:
            cycle = [*chain[chain.index(path):], path]
            raise ImportCycleError(f"Import cycle detected: {' -> '.join(cycle)}", cycle)

        info = ConfigurationInfo()
        try:
            try:
                stream = open(path, "rb")
            except OSError as e:
                raise ConfigurationFileError(
                    f"Cannot open configuration file {path}: {e.strerror or e}"
                ) from e

            with stream:
                opened.append(path)
                info.add_file(path)
                context = self._new_context(
                    info, path, os.path.dirname(path), chain + (path,), opened
                )
                context.log.debug("Opened configuration file")
                try:
                    events = self.event_source(stream, self.settings.chunk_size, path)
                    self._consume(events, context)
                except (ConfigurationParsingError, RecursionError):
                    raise
                except Exception as e:
                    raise _source_failure(e, path) from e
        except ConfigurationParsingError as e:
            e.attach_files(info.files_parsed)
            info.clear()
            raise

        return info

    def _consume(self, events: Iterable[ParseEvent], context: _ReadContext) -> None:
        iterator = iter(events)
        try:
            for event in iterator:
                if isinstance(event, StartElement):
                    self._on_start(event, context)
                elif isinstance(event, Text):
                    context.builder.append_text(event.chars)
                elif isinstance(event, EndElement):
                    self._on_end(event, context)
                else:
                    raise StructuralParsingError(
                        f"Unsupported parse event {event!r} in {context.source}"
                    )
        finally:
            close = getattr(iterator, "close", None)
            if close is not None:
                close()

        if not context.builder.is_idle:
            raise StructuralParsingError(
                f"{context.source} ended with {context.builder.depth} unclosed element(s)"
            )

    def _on_start(self, event: StartElement, context: _ReadContext) -> None:
        settings = self.settings

        if settings.is_root(event.tag):
            context.log.debug(f"Found <{event.tag}> tag start.")
        elif settings.is_import(event.tag):
            context.log.debug(f"Found <{event.tag}> tag start.")
            self._import(dict(event.attributes), context)
        elif settings.is_configuration(event.tag):
            context.log.debug(f"Found <{event.tag}> tag start.")
            plugin_id = dict(event.attributes).get(settings.plugin_attribute)
            plugin = self.registry.resolve(plugin_id)
            context.builder.open_element(event.tag, event.attributes, plugin)
        else:
            context.log.debug(f"Found <{event.tag}> tag start.")
            context.builder.open_element(event.tag, event.attributes)

    def _on_end(self, event: EndElement, context: _ReadContext) -> None:
        context.log.debug(f"Found <{event.tag}> tag end.")
        if self.settings.is_root(event.tag) or self.settings.is_import(event.tag):
            return

        completed = context.builder.close_element(event.tag)
        if completed is not None:
            self._dispatch(completed, context)

    def _dispatch(self, completed: CompletedBlock, context: _ReadContext) -> None:
        node = completed.node
        configuration_id = node.get_attribute(self.settings.id_attribute)
        if configuration_id is None:
            raise StructuralParsingError(
                f"<{node.name}> block in {context.source} has no "
                f"'{self.settings.id_attribute}' attribute"
            )

        plugin_id = node.get_attribute(self.settings.plugin_attribute)
        try:
            configuration = completed.plugin.transform(node)
        except ConfigurationParsingError:
            raise
        except Exception as e:
            raise PluginExecutionError(
                f"Plugin '{plugin_id}' failed on configuration '{configuration_id}' "
                f"in {context.source}: {e}"
            ) from e

        self._store(configuration_id, configuration, context)
        context.log.debug(f"Loaded configuration '{configuration_id}' with plugin '{plugin_id}'")

    def _store(self, configuration_id: str, configuration: Any, context: _ReadContext) -> None:
        if self.settings.duplicate_policy == DUPLICATE_ERROR and configuration_id in context.info:
            raise DuplicateConfigurationError(
                f"Configuration id '{configuration_id}' is defined more than once in {context.source}"
            )
        context.info.add_configuration(configuration_id, configuration)

    def _import(self, attributes: dict[str, str], context: _ReadContext) -> None:
        relative_path = attributes.get(self.settings.file_attribute)
        if not relative_path:
            raise ImportResolutionError(
                f"<{self.settings.import_tag}> in {context.source} has no "
                f"'{self.settings.file_attribute}' attribute"
            )

        target = os.path.normpath(os.path.join(context.base_dir, relative_path))
        context.log.info(f"Importing {target}")

        try:
            nested = self._read_file(target, context.chain, context.opened)
        except ImportCycleError as e:
            for path in e.files_parsed:
                context.info.add_file(path)
            raise ImportCycleError(
                f"Failed to import '{relative_path}' from {context.source}: {e.message}",
                e.cycle,
            ) from e
        except ConfigurationParsingError as e:
            for path in e.files_parsed:
                context.info.add_file(path)
            raise ImportResolutionError(
                f"Failed to import '{relative_path}' from {context.source}: {e.message}"
            ) from e

        duplicates = [
            configuration_id
            for configuration_id in nested.configurations
            if configuration_id in context.info
        ]
        # Edges start at files only, not at in-memory event streams
        if context.source in context.chain:
            context.info.add_import(context.source, target)
        context.info.merge(nested)

        if duplicates and self.settings.duplicate_policy == DUPLICATE_ERROR:
            raise DuplicateConfigurationError(
                f"Configuration id(s) {duplicates} imported from {target} are already "
                f"defined in {context.source}"
            )


def read_configuration(
    path: str | os.PathLike[str],
    registry: "PluginRegistry",
    settings: ReaderSettings | None = None,
    event_source: EventSource | None = None,
) -> ConfigurationInfo:
    """
    Read a configuration file with a one-off reader.

    :param path: Path to the configuration file
    :type path: str | os.PathLike[str]
    :param registry: Registry resolving ``plugin`` identifiers
    :type registry: PluginRegistry
    :param settings: Reader settings, defaults apply if None
    :type settings: ReaderSettings | None
    :param event_source: Tokenizer override, the SAX source is used if None
    :type event_source: EventSource | None
    :return: Configuration objects by id and the files parsed
    :rtype: ConfigurationInfo
    :raises ConfigurationParsingError: On any failure
    """
    reader = ConfigurationReader(registry, settings, event_source or iter_sax_events)
    return reader.read(path)
