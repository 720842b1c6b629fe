"""CLI commands for EmotiSense.

This package provides the command-line interface for EmotiSense,
including journal entry management and pattern analytics.
"""

from emotisense.cli.main import cli, main

__all__ = ["cli", "main"]
