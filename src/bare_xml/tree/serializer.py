"""Indenting XML writer.

Turns a ``Node`` and its subtree back into XML text. Each nesting level is
indented by one ``INDENT`` unit and every content item is written on its own
line, so that the output of ``serialize`` parses back into an equal tree.
"""

from typing import List, Optional

from bare_xml.character.escape import to_xml_text
from bare_xml.shared.config import get_formatter
from bare_xml.tree.node import Node, TextRun


def serialize(
    node: Node,
    indent_depth: int = 0,
    line_terminator: Optional[str] = None
) -> str:
    """Convert ``node`` and all of its content into XML text.

    Args:
        node: Element to write
        indent_depth: Number of indent units before the opening tag
        line_terminator: Line terminator to use; defaults to the process-wide
            setting

    Returns:
        The XML representation of ``node``. An empty element is written as
        ``<name/>`` with no trailing line terminator; any other element ends
        with one.

    Examples:
        >>> root = Node("root")
        >>> root.set_attribute("name", "Bob")
        >>> _ = root.add_text("Hi & bye")
        >>> serialize(root, line_terminator="\\n")
        '<root name="Bob">\\n\\tHi &amp; bye\\n</root>\\n'
    """
    if indent_depth < 0:
        raise ValueError("indent_depth must be >= 0")
    formatter = get_formatter()
    if line_terminator is None:
        line_terminator = formatter.line_terminator
    parts: List[str] = []
    _write_element(parts, node, indent_depth, line_terminator, formatter.indent)
    return "".join(parts)


def serialize_document(root: Node, line_terminator: Optional[str] = None) -> str:
    """Convert the top-level content of a document back into XML text.

    The root's own tag is never written. Each top-level element or text run
    is written at depth 0 and followed by exactly one line terminator.
    """
    formatter = get_formatter()
    if line_terminator is None:
        line_terminator = formatter.line_terminator
    parts: List[str] = []
    for item in root.children():
        if isinstance(item, TextRun):
            parts.append(to_xml_text(item.text))
            parts.append(line_terminator)
        else:
            element_parts: List[str] = []
            _write_element(element_parts, item, 0, line_terminator, formatter.indent)
            text = "".join(element_parts)
            parts.append(text)
            if not text.endswith(line_terminator):
                parts.append(line_terminator)
    return "".join(parts)


def _write_element(
    parts: List[str],
    node: Node,
    depth: int,
    line_terminator: str,
    indent: str
) -> None:
    prefix = indent * depth
    parts.append(prefix)
    parts.append("<")
    parts.append(node.name)
    for name, value in node.attributes.items():
        parts.append(" ")
        parts.append(name)
        if value is not None:
            parts.append('="')
            parts.append(to_xml_text(value))
            parts.append('"')

    content = node.children()
    if not content:
        parts.append("/>")
        return

    parts.append(">")
    parts.append(line_terminator)
    child_prefix = indent * (depth + 1)
    for item in content:
        if isinstance(item, TextRun):
            parts.append(child_prefix)
            parts.append(to_xml_text(item.text))
        else:
            _write_element(parts, item, depth + 1, line_terminator, indent)
        parts.append(line_terminator)
    parts.append(prefix)
    parts.append("</")
    parts.append(node.name)
    parts.append(">")
    parts.append(line_terminator)
