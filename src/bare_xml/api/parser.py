"""Core parser API for bare-xml.

This module provides the parsing entry points, from simple module-level
functions to a configured ``XMLParser`` class. Unlike a lenient parser these
never guess: a document is either well formed and yields a tree, or the
call raises.
"""

import logging
import time
from pathlib import Path
from typing import Optional, TextIO, Union

from bare_xml.shared.config import ParserConfig
from bare_xml.shared.errors import BareXMLError, XMLSourceError
from bare_xml.shared.logging import get_logger
from bare_xml.tree.builder import DocumentBuilder
from bare_xml.tree.root import DocumentRoot

# Constants for API operations
PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000  # Milliseconds per second conversion


class XMLParser:
    """Parser bound to a configuration and correlation ID.

    Example:
        >>> parser = XMLParser(ParserConfig(max_depth=64))
        >>> doc = parser.parse("<root><item>value</item></root>")
        >>> doc.find("item").all_text()
        'value'
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize parser.

        Args:
            config: Parser settings; defaults to ``ParserConfig()``
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id
        self._builder = DocumentBuilder(self.config, correlation_id)
        self.logger = get_logger(__name__, correlation_id, "xml_parser")

    def parse(self, xml: str) -> DocumentRoot:
        """Parse a complete document held in memory.

        Raises:
            MalformedXMLError: If the document is not well formed
            InvalidNameError: If a tag or attribute name is invalid
        """
        start_time = time.time()
        if self.logger.is_enabled_for(logging.INFO):
            self.logger.info(
                "Starting string parse operation",
                extra={
                    "content_length": len(xml),
                    "preview": (
                        xml[:PREVIEW_LENGTH] + "..."
                        if len(xml) > PREVIEW_LENGTH else xml
                    )
                }
            )
        try:
            root = self._builder.build(xml)
        except BareXMLError as e:
            self.logger.warning(
                "Document rejected",
                extra={
                    "error_type": type(e).__name__,
                    "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
                }
            )
            raise

        self.logger.info(
            "String parse completed",
            extra={
                "top_level_items": root.count_children(),
                "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
            }
        )
        return root

    def parse_stream(self, stream: TextIO) -> DocumentRoot:
        """Read a text stream to the end, then parse it.

        The stream is not closed.

        Raises:
            XMLSourceError: If reading the stream fails
            MalformedXMLError: If the document is not well formed
        """
        try:
            xml = self._builder.read_stream(stream)
        except XMLSourceError:
            self.logger.warning("Stream could not be read", exc_info=True)
            raise
        return self.parse(xml)

    def parse_file(
        self,
        file_path: Union[str, Path],
        encoding: str = "utf-8"
    ) -> DocumentRoot:
        """Parse the XML document stored at ``file_path``.

        Raises:
            XMLSourceError: If the file cannot be opened, read or decoded
            MalformedXMLError: If the document is not well formed
        """
        path_obj = Path(file_path)
        self.logger.info(
            "Starting file parse operation",
            extra={"file_path": str(path_obj), "encoding": encoding}
        )
        try:
            with path_obj.open(encoding=encoding) as file:
                return self.parse_stream(file)
        except XMLSourceError:
            raise
        except OSError as e:
            self.logger.error("Unable to open XML file", extra={"file_path": str(path_obj)})
            raise XMLSourceError(f"Unable to open {path_obj}: {e}") from e


def parse(
    xml: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> DocumentRoot:
    """Parse a complete XML document.

    This is the primary entry point.

    Args:
        xml: The document text
        config: Optional parser settings
        correlation_id: Optional correlation ID for request tracking

    Returns:
        A ``DocumentRoot`` holding the top-level text and elements

    Examples:
        >>> doc = parse('<root><item id="1">Hello</item></root>')
        >>> doc.find("item").get_attribute("id")
        '1'
    """
    return XMLParser(config, correlation_id).parse(xml)


parse_string = parse


def parse_stream(
    stream: TextIO,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> DocumentRoot:
    """Drain a readable text stream into memory and parse it.

    Examples:
        >>> import io
        >>> parse_stream(io.StringIO("<a/>")).element_children()[0].name
        'a'
    """
    return XMLParser(config, correlation_id).parse_stream(stream)


def parse_file(
    file_path: Union[str, Path],
    encoding: str = "utf-8",
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> DocumentRoot:
    """Parse the XML file at ``file_path``."""
    return XMLParser(config, correlation_id).parse_file(file_path, encoding)
