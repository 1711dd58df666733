"""Command-line interface for curvebridge.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Repeatable --select in fold order
- Verbose/quiet output modes
- Dry-run preview of the result
- Detailed error reporting
"""

from curvebridge.cli.app import cli, main

__all__ = ["cli", "main"]
