"""Element tree for bare-xml.

Key Components:
    Node: A named element with attributes and ordered content
    TextRun: A run of character data inside an element
    DocumentRoot: The unnamed top of a parsed document
    serialize: Indenting writer converting a tree back into XML text

The recursive-descent builder lives in ``bare_xml.tree.builder``.
"""

from .node import (
    ContentItem,
    Node,
    TextRun,
    is_valid_name,
    validate_name,
)
from .root import ROOT_NAME, DocumentRoot
from .serializer import serialize, serialize_document

__all__ = [
    "ContentItem",
    "Node",
    "TextRun",
    "is_valid_name",
    "validate_name",
    "ROOT_NAME",
    "DocumentRoot",
    "serialize",
    "serialize_document",
]
