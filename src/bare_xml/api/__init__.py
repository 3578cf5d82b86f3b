"""Public parsing API for bare-xml."""

from .parser import XMLParser, parse, parse_file, parse_stream, parse_string

__all__ = [
    "XMLParser",
    "parse",
    "parse_file",
    "parse_stream",
    "parse_string",
]
