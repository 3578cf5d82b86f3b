"""Tokenization layer for bare-xml.

Scans the text of opening tags into element names and attribute maps.
"""

from .tag import (
    find_tag_end,
    parse_tag,
    split_tag_tokens,
)

__all__ = [
    "find_tag_end",
    "parse_tag",
    "split_tag_tokens",
]
