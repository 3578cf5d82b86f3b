"""bare-xml.

A small, thread-safe XML reader and writer that does not depend on any
platform XML library. Parse a document once, mutate the tree freely from
several threads and write it back out.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_stream(), parse_file()
- Level 2: Configured parser - XMLParser class with ParserConfig
- Level 3: Tree model - Node, TextRun and DocumentRoot
"""

__version__ = "0.1.0"
__author__ = "Bare XML Team"

# Level 1 and 2: parsing
from .api import XMLParser, parse, parse_file, parse_stream, parse_string

# Codec
from .character import from_xml_text, strip_comments_and_directives, to_xml_text

# Configuration
from .shared.config import ParserConfig, get_line_terminator, set_line_terminator

# Errors
from .shared.errors import (
    BareXMLError,
    InvalidNameError,
    MalformedXMLError,
    NestingDepthError,
    XMLSourceError,
)

# Level 3: tree model
from .tree import DocumentRoot, Node, TextRun, serialize, serialize_document

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Parsing functions and parser class
    "parse",
    "parse_string",
    "parse_stream",
    "parse_file",
    "XMLParser",

    # Tree model and serialization
    "Node",
    "TextRun",
    "DocumentRoot",
    "serialize",
    "serialize_document",

    # Escape codec
    "to_xml_text",
    "from_xml_text",
    "strip_comments_and_directives",

    # Configuration
    "ParserConfig",
    "get_line_terminator",
    "set_line_terminator",

    # Errors
    "BareXMLError",
    "InvalidNameError",
    "MalformedXMLError",
    "NestingDepthError",
    "XMLSourceError",
]
