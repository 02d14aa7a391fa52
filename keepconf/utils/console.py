"""Rich-based terminal output utilities for keepconf."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

console = Console()
err_console = Console(stderr=True)


def print_header(text: str) -> None:
    """Print a bold section header."""
    console.print()
    console.print(f"[bold cyan]{escape(text)}[/bold cyan]")
    console.print()


def print_info(text: str) -> None:
    """Print an informational line."""
    console.print(f"  {escape(text)}", highlight=False)


def print_success(text: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {escape(text)}", highlight=False)


def print_error(text: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(text)}", highlight=False)
