"""Document builder for bare-xml.

This module implements the recursive-descent scan that turns document text
into a ``DocumentRoot`` tree. Each call to ``DocumentBuilder.parse_content``
handles one nesting level: it walks the text between an element's opening
and closing tags, appends text runs and self-closing elements directly and
recurses into the content of every other element it meets.

Matching a closing tag requires the exact tag name followed by whitespace or
``>``, and elements nested inside an element of the same name are counted,
so ``<a><a/><a>x</a></a>`` pairs each ``</a>`` with the right opening tag.

Finding an element's closing tag scans its whole subtree, so the total work
grows with nesting depth times document length. Nesting itself is bounded by
``ParserConfig.max_depth``.
"""

import time
from typing import Optional, TextIO

from bare_xml.character.escape import from_xml_text, strip_comments_and_directives
from bare_xml.shared.config import ParserConfig
from bare_xml.shared.errors import MalformedXMLError, NestingDepthError, XMLSourceError
from bare_xml.shared.logging import get_logger
from bare_xml.tokenization.tag import find_tag_end, parse_tag
from bare_xml.tree.node import Node
from bare_xml.tree.root import DocumentRoot

# Constants for timing conversions
MS_PER_SECOND = 1000


class DocumentBuilder:
    """Builds ``DocumentRoot`` trees from XML text.

    A builder holds no per-document state, so one instance may build several
    documents, including from several threads at once.
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize document builder.

        Args:
            config: Parser settings; defaults to ``ParserConfig()``
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "document_builder")

    def build(self, xml: str) -> DocumentRoot:
        """Parse a complete document.

        Args:
            xml: The document text

        Returns:
            A ``DocumentRoot`` whose children are the top-level text and
            elements of ``xml``

        Raises:
            MalformedXMLError: If the document is not well formed
            InvalidNameError: If a tag or attribute name is invalid
        """
        if not isinstance(xml, str):
            raise TypeError(f"XML document must be a string, not {type(xml).__name__}")

        start_time = time.perf_counter()
        document = strip_comments_and_directives(xml)
        root = DocumentRoot()
        self.parse_content(root, document, 0, len(document), 0)

        self.logger.debug(
            "Document built",
            extra={
                "content_length": len(xml),
                "top_level_items": root.count_children(),
                "processing_time_ms": (time.perf_counter() - start_time) * MS_PER_SECOND,
            }
        )
        return root

    def build_from_stream(self, stream: TextIO) -> DocumentRoot:
        """Drain ``stream`` into memory, then parse it.

        Raises:
            XMLSourceError: If reading from ``stream`` fails
            MalformedXMLError: If the document is not well formed
        """
        return self.build(self.read_stream(stream))

    def read_stream(self, stream: TextIO) -> str:
        """Read ``stream`` to the end in ``config.read_chunk_size`` chunks.

        Raises:
            XMLSourceError: If a read fails or the stream cannot be decoded
            TypeError: If the stream yields anything other than ``str``
        """
        chunks = []
        try:
            while True:
                chunk = stream.read(self.config.read_chunk_size)
                if not chunk:
                    break
                if not isinstance(chunk, str):
                    raise TypeError(
                        f"XML stream must yield text, not {type(chunk).__name__}"
                    )
                chunks.append(chunk)
        except UnicodeDecodeError as e:
            raise XMLSourceError(f"Unable to decode XML source: {e}") from e
        except OSError as e:
            raise XMLSourceError(f"Unable to read XML source: {e}") from e

        return "".join(chunks)

    def parse_content(
        self,
        owner: Node,
        text: str,
        start: int,
        end: int,
        depth: int
    ) -> Node:
        """Parse ``text[start:end]`` as the content of ``owner``.

        Args:
            owner: Element receiving the parsed content
            text: The full document text
            start: Index just past ``owner``'s opening tag
            end: Index of ``owner``'s closing tag
            depth: Nesting depth of ``owner`` (0 for the document root)

        Returns:
            ``owner``, after its content has been appended
        """
        if depth > self.config.max_depth:
            raise NestingDepthError(self.config.max_depth, text[start:end])

        position = start
        while position < end:
            tag_start = text.find("<", position, end)
            if tag_start < 0:
                self._append_text(owner, text[position:end])
                break
            self._append_text(owner, text[position:tag_start])

            tag_end = find_tag_end(text, tag_start, end)
            if tag_end < 0:
                raise MalformedXMLError("< and > mismatch", text[tag_start:end])
            header = text[tag_start:tag_end + 1]
            if header.startswith("</"):
                raise MalformedXMLError("unexpected closing tag", header)
            if header.startswith("<!"):
                raise MalformedXMLError("markup declarations are not supported", header)

            element = parse_tag(header)
            if header.endswith("/>"):
                owner.add_child(element)
                position = tag_end + 1
                continue

            close_start = self._find_closing_tag(text, element.name, tag_end + 1, end)
            if close_start < 0:
                raise MalformedXMLError(
                    f"no closing tag for <{element.name}>", text[tag_start:end]
                )
            self.parse_content(element, text, tag_end + 1, close_start, depth + 1)
            owner.add_child(element)
            position = self._closing_tag_end(text, element.name, close_start, end) + 1

        return owner

    def _append_text(self, owner: Node, raw: str) -> None:
        stripped = raw.strip()
        if stripped:
            owner.add_text(from_xml_text(stripped))

    def _find_closing_tag(self, text: str, name: str, start: int, end: int) -> int:
        """Return the index of the ``</name`` matching an already opened tag."""
        open_marker = "<" + name
        close_marker = "</" + name
        open_count = 1
        position = start
        while True:
            lt = text.find("<", position, end)
            if lt < 0:
                return -1
            if (
                text.startswith(close_marker, lt, end)
                and _is_name_boundary(text, lt + len(close_marker), end, ">")
            ):
                open_count -= 1
                if open_count == 0:
                    return lt
                position = lt + len(close_marker)
            elif (
                text.startswith(open_marker, lt, end)
                and _is_name_boundary(text, lt + len(open_marker), end, ">/")
            ):
                tag_end = find_tag_end(text, lt, end)
                if tag_end < 0:
                    return -1
                if text[tag_end - 1] != "/":
                    open_count += 1
                position = tag_end + 1
            else:
                position = lt + 1

    def _closing_tag_end(self, text: str, name: str, close_start: int, end: int) -> int:
        """Return the index of the ``>`` ending the closing tag at ``close_start``."""
        name_end = close_start + len(name) + 2
        tag_end = text.find(">", name_end, end)
        if tag_end < 0:
            raise MalformedXMLError("< and > mismatch", text[close_start:end])
        if text[name_end:tag_end].strip():
            raise MalformedXMLError(
                f"unexpected text in closing tag of <{name}>",
                text[close_start:tag_end + 1],
            )
        return tag_end


def _is_name_boundary(text: str, index: int, end: int, terminators: str) -> bool:
    if index >= end:
        return False
    char = text[index]
    return char.isspace() or char in terminators
