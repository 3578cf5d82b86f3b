"""Main CLI entry point for the bare-xml command-line tool.

Provides commands to reformat documents, check them for well-formedness and
search them for elements by tag name.
"""

import argparse
import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from bare_xml import __version__
from bare_xml.api import XMLParser
from bare_xml.shared.config import (
    LINE_ENDINGS,
    ConfigError,
    ParserConfig,
    host_line_terminator,
)
from bare_xml.shared.errors import BareXMLError
from bare_xml.shared.logging import get_logger

LINE_ENDING_CHOICES = ["native"] + sorted(LINE_ENDINGS)

logger = get_logger(__name__, None, "cli")


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self):
        self.parser_config = ParserConfig()
        self.line_ending = "native"
        self.encoding = "utf-8"

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        Recognised keys are ``parser`` (an object of ``ParserConfig`` fields),
        ``line_ending`` and ``encoding``. A missing or unreadable file leaves
        the defaults in place and prints a warning.
        """
        config = cls()
        if not config_path.exists():
            return config
        try:
            with config_path.open() as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ConfigError("Configuration file must hold a JSON object")
            if "parser" in data:
                config.parser_config = ParserConfig.from_dict(data["parser"])
            line_ending = data.get("line_ending", config.line_ending)
            if line_ending not in LINE_ENDING_CHOICES:
                raise ConfigError(f"Unknown line_ending: {line_ending!r}")
            config.line_ending = line_ending
            config.encoding = data.get("encoding", config.encoding)
        except (OSError, ValueError, TypeError, ConfigError) as e:
            print(f"Warning: Could not load config file: {e}", file=sys.stderr)

        return config

    @property
    def line_terminator(self) -> str:
        if self.line_ending == "native":
            return host_line_terminator()
        return LINE_ENDINGS[self.line_ending]


class XMLProcessor:
    """Core XML processing logic for CLI operations."""

    def __init__(self, config: CLIConfig):
        self.config = config
        self.parser = XMLParser(config=config.parser_config)
        self.logger = get_logger(__name__, None, "cli_processor")

    def check_file(self, file_path: Path) -> Dict[str, Any]:
        """Parse a single file and report whether it is well formed."""
        start_time = time.time()
        try:
            document = self.parser.parse_file(file_path, self.config.encoding)
        except BareXMLError as e:
            self.logger.debug("File rejected", extra={"file": str(file_path)})
            return {
                "file": str(file_path),
                "valid": False,
                "error_type": type(e).__name__,
                "error": str(e),
                "processing_time_ms": (time.time() - start_time) * 1000,
            }

        elements = list(document.iter_elements())
        return {
            "file": str(file_path),
            "valid": True,
            "element_count": len(elements),
            "attribute_count": sum(len(e.attribute_names()) for e in elements),
            "top_level_items": document.count_children(),
            "processing_time_ms": (time.time() - start_time) * 1000,
        }


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="bare-xml",
        description="Thread-safe XML reader and writer without platform XML libraries"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Format command
    format_parser = subparsers.add_parser(
        "format", help="Parse an XML file and write it back out re-indented"
    )
    format_parser.add_argument("path", type=Path, help="XML file to format")
    format_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    format_parser.add_argument(
        "--line-ending",
        choices=LINE_ENDING_CHOICES,
        help="Line terminator for the output (default: native)"
    )
    format_parser.add_argument(
        "--timestamp",
        action="store_true",
        help="Add a timestamp attribute to the first top-level element"
    )
    format_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )

    # Check command
    check_parser = subparsers.add_parser("check", help="Check XML files are well formed")
    check_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="XML files to check"
    )
    check_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format"
    )
    check_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )

    # Find command
    find_parser = subparsers.add_parser("find", help="Print elements with a given tag name")
    find_parser.add_argument("path", type=Path, help="XML file to search")
    find_parser.add_argument("name", help="Tag name to look for")
    find_parser.add_argument(
        "--ignore-case", "-i",
        action="store_true",
        help="Match tag names case-insensitively"
    )
    find_parser.add_argument(
        "--format", "-f",
        choices=["xml", "json", "text"],
        default="xml",
        help="Output format (default: xml)"
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def format_check_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format check results for output."""
    if format_type == "json":
        return json.dumps(results, indent=2)

    valid_count = sum(1 for r in results if r["valid"])
    lines = [f"Checked {len(results)} files, {valid_count} well formed"]
    lines.append("-" * 50)
    for result in results:
        status = "✓" if result["valid"] else "✗"
        lines.append(f"{status} {result['file']}")
        if result["valid"]:
            lines.append(
                f"   Elements: {result['element_count']}, "
                f"Attributes: {result['attribute_count']}"
            )
        else:
            lines.append(f"   Error: {result['error']}")
    return "\n".join(lines)


def _load_config(args: argparse.Namespace) -> CLIConfig:
    config_path = getattr(args, "config", None)
    if config_path:
        return CLIConfig.from_file(config_path)
    return CLIConfig()


def cmd_format(args: argparse.Namespace) -> int:
    """Handle format command."""
    config = _load_config(args)
    if args.line_ending:
        config.line_ending = args.line_ending

    parser = XMLParser(config=config.parser_config)
    try:
        document = parser.parse_file(args.path, config.encoding)
    except BareXMLError as e:
        print(f"Failed to parse {args.path}: {e}", file=sys.stderr)
        return 1

    if args.timestamp:
        elements = document.element_children()
        if elements:
            elements[0].set_attribute("timestamp", datetime.now().isoformat(timespec="seconds"))
        else:
            print(f"No element to timestamp in {args.path}", file=sys.stderr)

    output = document.to_xml(line_terminator=config.line_terminator)
    if args.output:
        try:
            with args.output.open("w", encoding=config.encoding, newline="") as f:
                f.write(output)
        except OSError as e:
            logger.exception("Failed to write output", extra={"output": str(args.output)})
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        print(f"Formatted XML written to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(output)
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Handle check command."""
    processor = XMLProcessor(_load_config(args))
    results = [processor.check_file(path) for path in args.paths]
    print(format_check_results(results, args.format))

    valid_count = sum(1 for r in results if r["valid"])
    return 0 if valid_count == len(results) else 1


def cmd_find(args: argparse.Namespace) -> int:
    """Handle find command."""
    parser = XMLParser()
    try:
        document = parser.parse_file(args.path)
    except BareXMLError as e:
        print(f"Failed to parse {args.path}: {e}", file=sys.stderr)
        return 1

    matches = document.find_all(args.name, case_sensitive=not args.ignore_case)
    if args.format == "json":
        print(json.dumps([match.to_dict() for match in matches], indent=2))
    elif args.format == "text":
        for match in matches:
            print(match.all_text())
    else:
        for match in matches:
            text = match.to_xml(line_terminator="\n")
            sys.stdout.write(text if text.endswith("\n") else text + "\n")

    return 0 if matches else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Set up logging verbosity
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    # Route to appropriate command handler
    try:
        if args.command == "format":
            return cmd_format(args)
        elif args.command == "check":
            return cmd_check(args)
        elif args.command == "find":
            return cmd_find(args)
        else:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
