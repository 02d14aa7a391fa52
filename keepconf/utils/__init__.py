"""Utility modules for keepconf.

This package contains:
- console: Rich-based terminal output utilities
- errors: Custom exceptions and exit codes
- fs: Atomic file writes and small filesystem helpers
- logging: Logging configuration
"""

from keepconf.utils.console import (
    console,
    print_error,
    print_header,
    print_info,
    print_success,
)
from keepconf.utils.errors import ExitCode, KeepconfError
from keepconf.utils.fs import atomic_write_bytes, ensure_dir, read_bytes, remove_file
from keepconf.utils.logging import setup_logging

__all__ = [
    # Console
    "console",
    "print_error",
    "print_success",
    "print_info",
    "print_header",
    # Errors
    "ExitCode",
    "KeepconfError",
    # Filesystem
    "atomic_write_bytes",
    "ensure_dir",
    "read_bytes",
    "remove_file",
    # Logging
    "setup_logging",
]
