"""Opening-tag scanner.

Turns the text of an opening tag such as ``<hippy name="fred" groovy>`` into
a bare ``Node`` carrying the tag name and attributes but no content.

Three attribute forms are recognised::

    attribute1=value1  attribute2="value two"  attribute3

The first stores ``value1``, the second ``value two`` (whitespace inside a
single- or double-quoted span does not split tokens) and the third has no
value at all, which is stored as ``None``.
"""

from typing import List, Optional

from bare_xml.character.escape import from_xml_text
from bare_xml.shared.errors import MalformedXMLError
from bare_xml.tree.node import Node

QUOTE_CHARACTERS = "\"'"


def find_tag_end(text: str, start: int, end: Optional[int] = None) -> int:
    """Return the index of the ``>`` that closes the tag opened at ``start``.

    A ``>`` inside a quoted attribute value does not close the tag.

    Args:
        text: Text containing the tag
        start: Index of the tag's ``<``
        end: Index at which the search stops (defaults to ``len(text)``)

    Returns:
        Index of the closing ``>``, or -1 if the tag is never closed
    """
    if end is None:
        end = len(text)
    quote = None
    for index in range(start + 1, end):
        char = text[index]
        if quote is not None:
            if char == quote:
                quote = None
        elif char in QUOTE_CHARACTERS:
            quote = char
        elif char == ">":
            return index
    return -1


def split_tag_tokens(body: str) -> List[str]:
    """Split ``body`` on whitespace, keeping quoted spans together.

    The quote characters delimiting a span are dropped from the token. A span
    opened by ``"`` is only closed by ``"`` and likewise for ``'``.

    Examples:
        >>> split_tag_tokens('a  x="1 2" y=\\'3\\' z')
        ['a', 'x=1 2', 'y=3', 'z']

    Raises:
        MalformedXMLError: If a quoted span is never closed
    """
    tokens: List[str] = []
    current: List[str] = []
    in_token = False
    quote = None
    for char in body:
        if quote is not None:
            if char == quote:
                quote = None
            else:
                current.append(char)
        elif char in QUOTE_CHARACTERS:
            quote = char
            in_token = True
        elif char.isspace():
            if in_token:
                tokens.append("".join(current))
                current = []
                in_token = False
        else:
            current.append(char)
            in_token = True

    if quote is not None:
        raise MalformedXMLError("unterminated quote in tag", body)
    if in_token:
        tokens.append("".join(current))
    return tokens


def parse_tag(header: str) -> Node:
    """Make an element from the text of an opening tag.

    Args:
        header: e.g. ``<hippy name="fred">`` or ``<br/>``

    Returns:
        The element described by the tag, including attributes but with no
        content

    Raises:
        MalformedXMLError: If the tag has no name or an unterminated quote
        InvalidNameError: If the tag or one of its attributes has an invalid
            name
    """
    body = header.strip()
    if body.startswith("<"):
        body = body[1:]
    if body.endswith(">"):
        body = body[:-1]
    if body.endswith("/"):
        body = body[:-1]

    tokens = split_tag_tokens(body)
    if not tokens or not tokens[0]:
        raise MalformedXMLError("tag has no name", header)

    element = Node(tokens[0])
    for token in tokens[1:]:
        if not token:
            continue
        name, separator, value = token.partition("=")
        if separator:
            element.set_attribute(name, from_xml_text(value))
        else:
            element.set_attribute(name)
    return element
