"""CLI interface for keepconf.

This package provides the Typer-based command-line interface for
inspecting and editing config files.
"""

from keepconf.cli.app import FormatChoice, app, main, version_callback

__all__ = [
    "app",
    "main",
    "version_callback",
    "FormatChoice",
]
