"""Streaming event source over a byte stream using the standard SAX parser."""

import xml.sax
from collections import deque
from collections.abc import Iterator
from typing import BinaryIO
from xml.sax.handler import ContentHandler, feature_external_ges, feature_external_pes
from xml.sax.xmlreader import AttributesImpl

from blockconf.configs.constants import DEFAULT_CHUNK_SIZE
from blockconf.core.errors import ConfigurationFileError, StructuralParsingError
from blockconf.core.events import EndElement, ParseEvent, StartElement, Text


class _EventCollector(ContentHandler):
    """Queue SAX callbacks as parse events until the generator drains them."""

    def __init__(self, events: deque[ParseEvent]):
        super().__init__()
        self._events = events

    def startElement(self, name: str, attrs: AttributesImpl) -> None:
        self._events.append(StartElement(name, tuple(attrs.items())))

    def characters(self, content: str) -> None:
        self._events.append(Text(content))

    def endElement(self, name: str) -> None:
        self._events.append(EndElement(name))


def iter_sax_events(
    stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE, source_name: str = "<stream>"
) -> Iterator[ParseEvent]:
    """
    Tokenize ``stream`` incrementally and yield events in document order.

    The stream is fed to an incremental SAX parser ``chunk_size`` bytes at a
    time, so events of early elements are consumed before the rest of the
    document is read. External entities are never resolved.

    :param stream: Binary stream positioned at the start of the document
    :type stream: BinaryIO
    :param chunk_size: Bytes read per feed call
    :type chunk_size: int
    :param source_name: Name used in error messages
    :type source_name: str
    :return: Iterator of StartElement, Text and EndElement events
    :rtype: Iterator[ParseEvent]
    :raises StructuralParsingError: If the markup is not well formed
    :raises ConfigurationFileError: If the stream cannot be read
    """
    events: deque[ParseEvent] = deque()
    parser = xml.sax.make_parser()
    parser.setFeature(feature_external_ges, False)
    parser.setFeature(feature_external_pes, False)
    parser.setContentHandler(_EventCollector(events))

    received_data = False
    try:
        while True:
            try:
                chunk = stream.read(chunk_size)
            except OSError as e:
                raise ConfigurationFileError(
                    f"Cannot read {source_name}: {e.strerror or e}"
                ) from e
            if not chunk:
                break
            received_data = True
            parser.feed(chunk)
            while events:
                yield events.popleft()
        if not received_data:
            raise StructuralParsingError(f"{source_name} is empty")
        parser.close()
    except xml.sax.SAXParseException as e:
        raise StructuralParsingError(
            f"Malformed markup in {source_name} at line {e.getLineNumber()}, "
            f"column {e.getColumnNumber()}: {e.getMessage()}"
        ) from e
    except xml.sax.SAXException as e:
        raise StructuralParsingError(f"Cannot tokenize {source_name}: {e}") from e

    while events:
        yield events.popleft()
