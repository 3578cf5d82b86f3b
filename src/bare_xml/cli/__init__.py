"""Command-line interface module for bare-xml.

This module provides CLI tools to reformat XML files, check them for
well-formedness and search them by tag name.
"""

from .main import main

__all__ = ["main"]
