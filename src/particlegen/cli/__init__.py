"""Command-line interface for particlegen.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Build and export compositions from shape arguments
- Inspect the import key of an exported file
- Re-export an existing file with new settings
"""

from particlegen.cli.app import cli, main

__all__ = ["cli", "main"]
