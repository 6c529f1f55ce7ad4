"""Command-line interface for glyphpack.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Single-font and manifest compiles
- Progress bars for batch compiles
- Tool bootstrap (make in the bdfconv directory)
- Detailed error reporting
"""

from glyphpack.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
