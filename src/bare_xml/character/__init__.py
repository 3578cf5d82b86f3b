"""Character layer for bare-xml.

Provides the escape codec that converts between raw text and XML text, and
the pre-parse pass that strips comments and processing directives.
"""

from .escape import (
    ESCAPE_PAIRS,
    from_xml_text,
    strip_comments_and_directives,
    to_xml_text,
)

__all__ = [
    "ESCAPE_PAIRS",
    "from_xml_text",
    "strip_comments_and_directives",
    "to_xml_text",
]
