"""Exception types raised by bare-xml.

Every failure is surfaced to the caller; nothing in the library recovers from
these errors or builds a partial tree.
"""

from typing import Optional

# Max length of the offending fragment kept in error messages
FRAGMENT_PREVIEW_LENGTH = 80


class BareXMLError(Exception):
    """Base exception for all bare-xml errors."""


class InvalidNameError(BareXMLError, ValueError):
    """Raised when an element or attribute name is not usable as an XML name.

    A valid name is non-empty and contains neither whitespace nor any of
    ``< > ' " & /``.
    """

    def __init__(self, name: str, kind: str = "tag") -> None:
        super().__init__(
            f"{name!r} is not a valid {kind} name. XML {kind} names must not "
            "be empty or contain whitespace or escape characters."
        )
        self.name = name
        self.kind = kind


class MalformedXMLError(BareXMLError, ValueError):
    """Raised for any structural problem found while scanning a document.

    Attributes:
        fragment: The piece of text that could not be parsed
    """

    def __init__(self, message: str, fragment: Optional[str] = None) -> None:
        if fragment is not None:
            preview = fragment
            if len(preview) > FRAGMENT_PREVIEW_LENGTH:
                preview = preview[:FRAGMENT_PREVIEW_LENGTH] + "..."
            message = f"Malformed XML! {message}: {preview!r}"
        else:
            message = f"Malformed XML! {message}"
        super().__init__(message)
        self.fragment = fragment


class NestingDepthError(MalformedXMLError):
    """Raised when a document nests elements deeper than the parser allows."""

    def __init__(self, max_depth: int, fragment: Optional[str] = None) -> None:
        super().__init__(
            f"elements nested deeper than the supported maximum of {max_depth}",
            fragment,
        )
        self.max_depth = max_depth


class XMLSourceError(BareXMLError, OSError):
    """Raised when the text of a document could not be read from its source."""
