"""Filesystem helpers for keepconf.

Writes go through a temp file in the target directory followed by an
atomic rename, so a reader never observes a partially written file.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

# Config files may hold secrets; keep them private to the owner.
FILE_MODE = 0o600


def ensure_dir(path: Path) -> None:
    """Create ``path`` and any missing parents."""
    path.mkdir(parents=True, exist_ok=True)


def read_bytes(path: Path) -> bytes:
    """Read the full contents of ``path``."""
    return path.read_bytes()


def remove_file(path: Path) -> None:
    """Remove ``path`` if it exists."""
    path.unlink(missing_ok=True)
    logger.debug(f"Removed {path}")


def atomic_write_bytes(path: Path, data: bytes, mode: int = FILE_MODE) -> None:
    """Atomically replace ``path`` with ``data``.

    The temp file is created in the same directory as the target so the
    final rename never crosses a filesystem boundary.

    Raises:
        OSError: If the temp file cannot be written or moved into place.
            The temp file is removed before the error propagates.
    """
    ensure_dir(path.parent)

    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}-")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

        os.chmod(temp_path, mode)
        Path(temp_path).replace(path)
    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise

    logger.debug(f"Wrote {len(data)} bytes to {path}")
