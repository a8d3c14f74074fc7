"""Command-line interface for typefill.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Single command from image, text and font to rendered layout
- Optional JSON dump of slots and placements
- Verbose/quiet output modes
- Slot outlines for debugging
"""

from typefill.cli.app import cli, main

__all__ = ["cli", "main"]
