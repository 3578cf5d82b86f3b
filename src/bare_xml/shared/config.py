"""Configuration for bare-xml parsing and serialization.

Two kinds of configuration live here:

* ``ParserConfig`` is an immutable per-parser value object controlling how
  documents are read and how deeply they may nest.
* ``FormatterSettings`` is the process-wide serialization state. It is
  created lazily on first access and holds the line terminator used by every
  serialization that does not pass one explicitly.
"""

import json
import os
import threading
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Optional

# Indent unit written once per nesting level
INDENT = "\t"

# Deepest element nesting the recursive parser accepts
DEFAULT_MAX_DEPTH = 256

# Characters pulled from a stream per read call
DEFAULT_READ_CHUNK_SIZE = 1024

LINE_ENDINGS: Dict[str, str] = {
    "lf": "\n",
    "crlf": "\r\n",
    "cr": "\r",
}


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError, ValueError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Settings for a parser instance.

    Thread-safe due to frozen dataclass implementation.

    Attributes:
        max_depth: Maximum element nesting depth accepted before the document
            is rejected with ``NestingDepthError``
        read_chunk_size: Number of characters requested per ``read`` call when
            draining a stream
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    read_chunk_size: int = DEFAULT_READ_CHUNK_SIZE

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        if not isinstance(self.max_depth, int) or self.max_depth <= 0:
            raise ConfigValidationError(
                "max_depth must be > 0",
                field_name="max_depth",
                suggestions=[f"Use the default of {DEFAULT_MAX_DEPTH}"],
            )
        if not isinstance(self.read_chunk_size, int) or self.read_chunk_size <= 0:
            raise ConfigValidationError(
                "read_chunk_size must be > 0",
                field_name="read_chunk_size",
            )

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> ParserConfig().override(max_depth=32).max_depth
            32
        """
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos in configuration files are
        reported instead of silently ignored.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown parser configuration keys: {', '.join(unknown)}",
                suggestions=[f"Valid keys are: {', '.join(sorted(known))}"],
            )
        return cls(**data)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        data = json.loads(json_str)
        if not isinstance(data, dict):
            raise ConfigValidationError("Parser configuration must be a JSON object")
        return cls.from_dict(data)


def host_line_terminator() -> str:
    """Return the host's native line terminator, or ``"\\n"`` if unknown."""
    return os.linesep or "\n"


class FormatterSettings:
    """Process-wide serialization settings.

    Reads and writes of the line terminator are atomic with respect to each
    other. There is no ordering guarantee between a writer and concurrent
    readers; callers that need read-your-write ordering must synchronize
    externally.
    """

    def __init__(self, line_terminator: Optional[str] = None) -> None:
        self._lock = threading.Lock()
        self._line_terminator = (
            host_line_terminator() if line_terminator is None
            else _validated_terminator(line_terminator)
        )

    @property
    def indent(self) -> str:
        return INDENT

    @property
    def line_terminator(self) -> str:
        with self._lock:
            return self._line_terminator

    @line_terminator.setter
    def line_terminator(self, value: str) -> None:
        value = _validated_terminator(value)
        with self._lock:
            self._line_terminator = value

    def reset(self) -> None:
        """Restore the host's native line terminator."""
        with self._lock:
            self._line_terminator = host_line_terminator()


def _validated_terminator(value: str) -> str:
    if not isinstance(value, str):
        raise ConfigValidationError(
            f"line terminator must be a string, not {type(value).__name__}",
            field_name="line_terminator",
        )
    return value


_formatter: Optional[FormatterSettings] = None
_formatter_lock = threading.Lock()


def get_formatter() -> FormatterSettings:
    """Return the process-wide ``FormatterSettings``, creating it on first use."""
    global _formatter
    if _formatter is None:
        with _formatter_lock:
            if _formatter is None:
                _formatter = FormatterSettings()
    return _formatter


def get_line_terminator() -> str:
    """Return the line terminator currently used for serialization."""
    return get_formatter().line_terminator


def set_line_terminator(line_terminator: str) -> None:
    """Change the line terminator for all subsequent serializations.

    Args:
        line_terminator: Typically ``"\\n"`` or ``"\\r\\n"``
    """
    get_formatter().line_terminator = line_terminator
