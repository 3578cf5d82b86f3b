"""Conversion between raw text and XML-safe text.

The characters with special meaning in XML and their escape sequences are::

    &  ->  &amp;
    "  ->  &quot;
    '  ->  &apos;
    <  ->  &lt;
    >  ->  &gt;

All functions in this module are pure and hold no shared state, so they can be
called from any number of threads at once.
"""

import re
from typing import Tuple

# Order matters: "&" must be escaped first so that the entities introduced by
# the later pairs are not escaped again.
ESCAPE_PAIRS: Tuple[Tuple[str, str], ...] = (
    ("&", "&amp;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
    ("<", "&lt;"),
    (">", "&gt;"),
)

_COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)
_DIRECTIVE_PATTERN = re.compile(r"<\?.*?\?>", re.DOTALL)


def to_xml_text(text: str) -> str:
    """Substitute every special character in ``text`` with its escape sequence.

    Args:
        text: Raw text

    Returns:
        The XML representation of ``text``

    Examples:
        >>> to_xml_text('real "deep & dirty"')
        'real &quot;deep &amp; dirty&quot;'
    """
    for raw, entity in ESCAPE_PAIRS:
        text = text.replace(raw, entity)
    return text


def from_xml_text(xml: str) -> str:
    """Return the raw text that the escaped string ``xml`` represents.

    The substitutions of ``to_xml_text`` are undone in reverse order, which
    keeps ``&amp;lt;`` as the literal text ``&lt;``.

    Examples:
        >>> from_xml_text("&amp;lt; &lt;")
        '&lt; <'
    """
    for raw, entity in reversed(ESCAPE_PAIRS):
        xml = xml.replace(entity, raw)
    return xml


def strip_comments_and_directives(text: str) -> str:
    """Remove ``<!-- ... -->`` comments, then ``<? ... ?>`` directives.

    Each run is removed up to the nearest terminator. Unterminated markers are
    left untouched for the parser to report.

    Examples:
        >>> strip_comments_and_directives("a<!--x<y>z-->b")
        'ab'
    """
    text = _COMMENT_PATTERN.sub("", text)
    return _DIRECTIVE_PATTERN.sub("", text)
