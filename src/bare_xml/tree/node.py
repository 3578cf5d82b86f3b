"""Element tree data model for bare-xml.

A ``Node`` is a named XML element with attributes and an ordered sequence of
content items. Each content item is either a ``TextRun`` or another ``Node``.

Every node guards its attribute map and its content list with separate
re-entrant locks, so a tree can be read and mutated from several threads at
once. Operations on unrelated nodes never contend with each other.
"""

import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Union

from bare_xml.shared.errors import InvalidNameError

# Characters that may not appear anywhere in a tag or attribute name
ILLEGAL_NAME_CHARACTERS = frozenset("<>'\"&/")


def is_valid_name(name: str) -> bool:
    """Check that ``name`` can be written as a tag or attribute name unescaped.

    A name is valid when it is a non-empty string without whitespace and
    without any of ``< > ' " & /``.
    """
    if not isinstance(name, str) or not name:
        return False
    return not any(
        char.isspace() or char in ILLEGAL_NAME_CHARACTERS for char in name
    )


def validate_name(name: str, kind: str = "tag") -> str:
    """Return ``name`` unchanged or raise ``InvalidNameError``."""
    if not is_valid_name(name):
        raise InvalidNameError(name, kind)
    return name


@dataclass(frozen=True)
class TextRun:
    """A run of character data inside an element."""

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError(
                f"Text content must be a string, not {type(self.text).__name__}"
            )

    def __str__(self) -> str:
        return self.text


ContentItem = Union[TextRun, "Node"]


class Node:
    """A tagged XML element.

    Example:
        >>> font = Node("font")
        >>> font.set_attribute("size", "2")
        >>> font.add_text("Greetings")
        TextRun(text='Greetings')
        >>> bold = font.add_child(Node("b"))
        >>> bold.add_text("friend!")
        TextRun(text='friend!')
        >>> font.all_text()
        'Greetingsfriend!'

    Nodes compare equal when their names, attribute mappings and content
    sequences are equal. Because they are mutable they are not hashable.
    """

    __hash__ = None  # type: ignore[assignment]

    is_document_root = False

    def __init__(self, name: str) -> None:
        """Create an element with no attributes and no content.

        Args:
            name: The tag name, e.g. ``font`` for ``<font face="serif">``

        Raises:
            InvalidNameError: If ``name`` is not a valid tag name
        """
        self._name = validate_name(name, "tag")
        self._attributes: Dict[str, Optional[str]] = {}
        self._content: List[ContentItem] = []
        self._attributes_lock = threading.RLock()
        self._content_lock = threading.RLock()

    # Name

    @property
    def name(self) -> str:
        """The tag name of this element."""
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = validate_name(value, "tag")

    # Attributes

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value of an attribute.

        A valueless attribute (``<input disabled>``) and a missing attribute
        both return ``default``; use ``has_attribute`` to tell them apart.
        """
        with self._attributes_lock:
            value = self._attributes.get(name)
        return default if value is None else value

    def set_attribute(self, name: str, value: Optional[str] = None) -> None:
        """Create or replace an attribute.

        Args:
            name: Attribute name
            value: Attribute value, or ``None`` for an attribute without a value

        Raises:
            InvalidNameError: If ``name`` is not a valid attribute name
            TypeError: If ``value`` is neither a string nor ``None``
        """
        validate_name(name, "attribute")
        if value is not None and not isinstance(value, str):
            raise TypeError(
                f"Attribute value must be a string or None, not {type(value).__name__}"
            )
        with self._attributes_lock:
            self._attributes[name] = value

    def has_attribute(self, name: str) -> bool:
        with self._attributes_lock:
            return name in self._attributes

    def remove_attribute(self, name: str) -> None:
        """Remove an attribute; removing a missing attribute does nothing."""
        with self._attributes_lock:
            self._attributes.pop(name, None)

    def clear_attributes(self) -> None:
        with self._attributes_lock:
            self._attributes.clear()

    def attribute_names(self) -> List[str]:
        """Return the attribute names in the order they were first set."""
        with self._attributes_lock:
            return list(self._attributes)

    @property
    def attributes(self) -> Dict[str, Optional[str]]:
        """A snapshot copy of the attribute mapping."""
        with self._attributes_lock:
            return dict(self._attributes)

    # Content

    def add_text(self, text: str) -> TextRun:
        """Append a run of text to the content of this element.

        In ``<font>Greetings <b>friend!</b></font>`` the content of ``font``
        is the text ``"Greetings "`` followed by the element ``b``; the text
        ``"friend!"`` belongs to ``b``.
        """
        run = TextRun(text)
        with self._content_lock:
            self._content.append(run)
        return run

    def add_child(self, child: "Node") -> "Node":
        """Append an element to the content of this element and return it."""
        self._check_child(child)
        with self._content_lock:
            self._content.append(child)
        return child

    def insert_child(self, index: int, item: Union[str, ContentItem]) -> ContentItem:
        """Insert a text run or element at ``index`` in the content sequence."""
        item = self._coerce_item(item)
        with self._content_lock:
            if not (0 <= index <= len(self._content)):
                raise IndexError("Child index out of range")
            self._content.insert(index, item)
        return item

    def count_children(self) -> int:
        """Return the number of content items (text runs and elements)."""
        with self._content_lock:
            return len(self._content)

    def get_child(self, index: int) -> ContentItem:
        """Return the content item at ``index``.

        Raises:
            IndexError: If there is no item at ``index``
        """
        with self._content_lock:
            return self._content[index]

    def children(self) -> List[ContentItem]:
        """Return a snapshot of all content items in document order."""
        with self._content_lock:
            return list(self._content)

    def text_children(self) -> List[str]:
        """Return the direct text runs of this element, as strings."""
        return [item.text for item in self.children() if isinstance(item, TextRun)]

    def element_children(self) -> List["Node"]:
        """Return the direct child elements of this element."""
        return [item for item in self.children() if isinstance(item, Node)]

    def remove_child_at(self, index: int) -> ContentItem:
        """Remove and return the content item at ``index``."""
        with self._content_lock:
            return self._content.pop(index)

    def remove_child(self, item: Union[str, ContentItem]) -> bool:
        """Remove the first occurrence of ``item`` from the content.

        Elements and ``TextRun`` objects are matched by identity. A plain
        string removes the first text run with that text.

        Returns:
            ``True`` if an item was removed
        """
        with self._content_lock:
            index = self._index_of(item)
            if index < 0:
                return False
            del self._content[index]
            return True

    def clear_children(self) -> None:
        with self._content_lock:
            self._content.clear()

    def contains_child(self, item: Union[str, ContentItem]) -> bool:
        """Check whether ``item`` is a direct content item of this element."""
        with self._content_lock:
            return self._index_of(item) >= 0

    def is_empty(self) -> bool:
        """An element is empty when it has no content (``<br/>``)."""
        return self.count_children() == 0

    # Navigation

    def iter_elements(self) -> Iterator["Node"]:
        """Iterate over all descendant elements in document order.

        Each element's content is snapshotted when it is reached, so mutating
        the tree during iteration does not raise.
        """
        stack = list(reversed(self.element_children()))
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.element_children()))

    def find_all(self, name: str, case_sensitive: bool = True) -> List["Node"]:
        """Return every descendant element named ``name``, in document order.

        Args:
            name: Tag name to look for
            case_sensitive: Compare names exactly when ``True``, ignoring case
                otherwise
        """
        if case_sensitive:
            return [e for e in self.iter_elements() if e.name == name]
        folded = name.casefold()
        return [e for e in self.iter_elements() if e.name.casefold() == folded]

    def find(self, name: str, case_sensitive: bool = True) -> Optional["Node"]:
        """Return the first descendant element named ``name``, or ``None``."""
        folded = name if case_sensitive else name.casefold()
        for element in self.iter_elements():
            candidate = element.name if case_sensitive else element.name.casefold()
            if candidate == folded:
                return element
        return None

    def all_text(self) -> str:
        """Return all of the text in this element, including text in descendants."""
        parts = []
        for item in self.children():
            if isinstance(item, TextRun):
                parts.append(item.text)
            else:
                parts.append(item.all_text())
        return "".join(parts)

    # Copying

    def clone(self) -> "Node":
        """Return a deep copy; descendant elements are copied, text runs shared."""
        copy = self.__class__.__new__(self.__class__)
        copy._name = self._name
        copy._attributes = self.attributes
        copy._content = [
            item.clone() if isinstance(item, Node) else item
            for item in self.children()
        ]
        copy._attributes_lock = threading.RLock()
        copy._content_lock = threading.RLock()
        return copy

    def __copy__(self) -> "Node":
        return self.clone()

    def __deepcopy__(self, memo: Dict[int, Any]) -> "Node":
        return self.clone()

    # Conversion

    def to_xml(self, indent_depth: int = 0, line_terminator: Optional[str] = None) -> str:
        """Convert this element and all of its content into XML text.

        Args:
            indent_depth: How many indent units to put before this element
            line_terminator: Line terminator to use; defaults to the
                process-wide setting
        """
        from bare_xml.tree.serializer import serialize

        return serialize(self, indent_depth, line_terminator)

    def to_dict(self) -> Dict[str, Any]:
        """Convert this element to plain dictionaries, lists and strings."""
        return {
            "name": self.name,
            "attributes": self.attributes,
            "content": [
                item.to_dict() if isinstance(item, Node) else item.text
                for item in self.children()
            ],
        }

    def __str__(self) -> str:
        return self.to_xml()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.name!r}, "
            f"attributes={len(self.attribute_names())}, "
            f"children={self.count_children()})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        if self is other:
            return True
        return (
            self.name == other.name
            and self.attributes == other.attributes
            and self.children() == other.children()
        )

    # Helpers

    def _check_child(self, child: "Node") -> None:
        if not isinstance(child, Node):
            raise TypeError("Child must be a Node instance")
        if child is self:
            raise ValueError("An element cannot contain itself")
        if child.is_document_root:
            raise TypeError("A document root cannot be nested inside an element")

    def _coerce_item(self, item: Union[str, ContentItem]) -> ContentItem:
        if isinstance(item, str):
            return TextRun(item)
        if isinstance(item, TextRun):
            return item
        self._check_child(item)
        return item

    def _index_of(self, item: Union[str, ContentItem]) -> int:
        # Caller holds the content lock.
        for index, candidate in enumerate(self._content):
            if isinstance(item, str):
                if isinstance(candidate, TextRun) and candidate.text == item:
                    return index
            elif candidate is item:
                return index
        return -1
