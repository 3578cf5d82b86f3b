"""The unnamed top of an XML document."""

from typing import Optional, TextIO

from bare_xml.shared.config import ParserConfig
from bare_xml.tree.node import Node

# Reserved name of every document root. It contains "<" so no parsed or
# user-created tag can ever carry it.
ROOT_NAME = "<document>"


class DocumentRoot(Node):
    """Container for the top-level text and elements of a parsed document.

    A document root behaves like any other ``Node`` except that its name is
    fixed and never written out: converting it to text emits only its
    children, one per line.

    Example:
        >>> doc = DocumentRoot.parse('<greeting lang="en">hello</greeting>')
        >>> doc.element_children()[0].get_attribute("lang")
        'en'
    """

    is_document_root = True

    def __init__(self) -> None:
        super().__init__("document")
        # ROOT_NAME fails name validation, so it is assigned afterwards.
        self._name = ROOT_NAME

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        raise AttributeError("The document root cannot be renamed")

    @classmethod
    def parse(
        cls,
        xml: str,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> "DocumentRoot":
        """Parse a complete document.

        Raises:
            MalformedXMLError: If the document is not well formed
            InvalidNameError: If a tag or attribute name is invalid
        """
        from bare_xml.tree.builder import DocumentBuilder

        return DocumentBuilder(config, correlation_id).build(xml)

    @classmethod
    def parse_stream(
        cls,
        stream: TextIO,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> "DocumentRoot":
        """Read ``stream`` to the end, then parse its text as a document.

        Raises:
            XMLSourceError: If reading from ``stream`` fails
            MalformedXMLError: If the document is not well formed
        """
        from bare_xml.tree.builder import DocumentBuilder

        return DocumentBuilder(config, correlation_id).build_from_stream(stream)

    def to_xml(self, indent_depth: int = 0, line_terminator: Optional[str] = None) -> str:
        """Rebuild the XML text of the document.

        ``indent_depth`` is accepted for signature compatibility with ``Node``
        and ignored: top-level items are always written at depth 0.
        """
        from bare_xml.tree.serializer import serialize_document

        return serialize_document(self, line_terminator)
