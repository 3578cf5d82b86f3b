"""Shared utilities for bare-xml.

This module provides the configuration objects, exception types and logging
helpers used across the codec, tree and parser layers.
"""

from .config import (
    INDENT,
    ConfigError,
    ConfigValidationError,
    FormatterSettings,
    ParserConfig,
    get_formatter,
    get_line_terminator,
    set_line_terminator,
)
from .errors import (
    BareXMLError,
    InvalidNameError,
    MalformedXMLError,
    NestingDepthError,
    XMLSourceError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "INDENT",
    "ConfigError",
    "ConfigValidationError",
    "FormatterSettings",
    "ParserConfig",
    "get_formatter",
    "get_line_terminator",
    "set_line_terminator",
    "BareXMLError",
    "InvalidNameError",
    "MalformedXMLError",
    "NestingDepthError",
    "XMLSourceError",
    "CorrelationLogger",
    "get_logger",
]
