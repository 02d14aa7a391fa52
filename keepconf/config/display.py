"""Configuration display functions for keepconf.

Standalone functions for rendering a Config's effective values
(user values layered over defaults) as a Rich table.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table

from keepconf.config.stores import PATH_SEPARATOR
from keepconf.utils.console import console, print_header, print_info

if TYPE_CHECKING:
    from keepconf.config.engine import Config

# Module-level logger
logger = logging.getLogger(__name__)

SOURCE_USER = "user"
SOURCE_DEFAULT = "default"


def flatten(data: Any, prefix: str = "") -> Iterator[tuple[str, Any]]:
    """Yield (dotted key, leaf value) pairs of a nested document.

    Empty mappings are yielded as leaves so they stay visible.
    """
    if isinstance(data, dict) and data:
        for key, value in data.items():
            path = f"{prefix}{PATH_SEPARATOR}{key}" if prefix else str(key)
            yield from flatten(value, path)
    else:
        yield prefix, data


def get_config_rows(config: Config) -> list[tuple[str, str, str]]:
    """Build (key, JSON value, source) rows for the effective configuration.

    Nested values are flattened into dotted keys when the config uses dot
    notation; flat configs show one row per top-level key.
    """
    effective = config.get()
    rows: list[tuple[str, str, str]] = []

    for top_key, value in effective.items():
        source = SOURCE_USER if config._store.has(top_key) else SOURCE_DEFAULT
        entries = flatten(value, top_key) if config.dot_notation else [(top_key, value)]
        for key, leaf in entries:
            rows.append((key, json.dumps(leaf, ensure_ascii=False), source))

    return rows


def show_config(config: Config) -> None:
    """Display the effective configuration using Rich formatting."""
    print_header("Current Configuration")
    print_info(f"Config file: {config.file_path}")
    print_info(f"Encrypted:   {'yes' if config.password_protected else 'no'}")
    print_info(f"Schema:      {'yes' if config.schema is not None else 'no'}")
    console.print()

    rows = get_config_rows(config)
    if not rows:
        console.print("  [dim](no values set)[/dim]")
        console.print()
        return

    table = Table(title=None, show_header=True, header_style="bold")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_column("Source")

    for key, value, source in rows:
        style = "green" if source == SOURCE_USER else "dim"
        table.add_row(escape(key), escape(value), f"[{style}]{source}[/{style}]")

    console.print(table)
    console.print()
