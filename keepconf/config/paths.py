"""Config file location helpers.

Resolves where a config lives on disk:

- File and project names are checked against the lowest common
  denominator of Windows, macOS and Linux naming rules.
- Without an explicit directory, the platform's per-user config
  directory for the project is used (via platformdirs).
- Without an explicit project name, the name is read from the
  pyproject.toml of the code that created the config.
"""

from __future__ import annotations

import inspect
import re
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from keepconf.utils.errors import InvalidArgumentError, ProjectNameError

# Reserved device names on Windows, matched case-insensitively
_RESERVED_NAME_PATTERN = re.compile(r"^(con|prn|aux|nul|com[0-9]|lpt[0-9])$", re.IGNORECASE)
_FORBIDDEN_CHARS_PATTERN = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

_PACKAGE_DIR = Path(__file__).resolve().parents[1]


def validate_filename(name: Any, label: str = "file name") -> None:
    """Check that ``name`` can be used as a file name on every OS.

    Raises:
        InvalidArgumentError: If the name is empty, reserved, or contains a
            path separator or control character.
    """
    if not isinstance(name, str) or not name:
        raise InvalidArgumentError(f"Invalid {label}: {name!r} must be a non-empty string")
    if _RESERVED_NAME_PATTERN.match(name):
        raise InvalidArgumentError(f"Invalid {label}: {name!r} is a reserved device name")
    if _FORBIDDEN_CHARS_PATTERN.search(name):
        raise InvalidArgumentError(
            f"Invalid {label}: {name!r} contains a path separator or control character"
        )


def sanitize_project_name(name: str) -> str:
    """Turn a distribution name into a usable project directory name."""
    name = re.sub(r"[^a-z0-9._-]", "-", name, flags=re.IGNORECASE)
    return re.sub(r"__+", "_", name)


def _caller_directory() -> Path:
    """Directory of the first stack frame outside the keepconf package."""
    frame = inspect.currentframe()
    try:
        while frame is not None:
            filename = frame.f_code.co_filename
            if not filename.startswith("<"):
                path = Path(filename).resolve()
                if not path.is_relative_to(_PACKAGE_DIR):
                    return path.parent
            frame = frame.f_back
    finally:
        del frame
    return Path.cwd()


def _find_up(filename: str, start: Path) -> Path | None:
    for directory in (start, *start.parents):
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def infer_project_name(start: Path | None = None) -> str:
    """Infer the project name from the nearest pyproject.toml.

    Searches upward from ``start`` (default: the directory of the calling
    code) and reads ``[project].name``, falling back to
    ``[tool.poetry].name``.

    Raises:
        ProjectNameError: If no pyproject.toml is found or it has no name.
    """
    start = start or _caller_directory()
    pyproject = _find_up("pyproject.toml", start)
    if pyproject is None:
        raise ProjectNameError(
            f'Cannot find pyproject.toml from "{start}" upwards for project name '
            "detection, please provide a project_name"
        )

    with pyproject.open("rb") as f:
        data = tomllib.load(f)

    name = data.get("project", {}).get("name") or (
        data.get("tool", {}).get("poetry", {}).get("name")
    )
    if not isinstance(name, str) or not name:
        raise ProjectNameError(
            f'Cannot find a project name in "{pyproject}", please provide a project_name'
        )

    return sanitize_project_name(name)


def default_config_dir(project_name: str, suffix: str | None = "python") -> Path:
    """Per-user config directory for ``project_name``.

    The suffix keeps this project's config apart from same-named projects
    in other ecosystems.
    """
    dirname = f"{project_name}-{suffix}" if suffix else project_name
    return Path(user_config_dir(dirname, appauthor=False))


@dataclass(frozen=True)
class ConfigPaths:
    """Resolved file locations of one config.

    Attributes:
        primary: Where the config is read from and written to
        legacy: The always-extensioned location, read once to migrate a
            plaintext config when encryption is newly enabled
    """

    primary: Path
    legacy: Path


def resolve_config_paths(
    config_dir: Path,
    config_name: str,
    extension: str,
    encrypted: bool,
) -> ConfigPaths:
    """Compute the primary and legacy file paths.

    Encrypted configs drop the format extension so that they never shadow
    the plaintext file they were migrated from.
    """
    extension_suffix = f".{extension}" if extension else ""
    primary_suffix = "" if encrypted else extension_suffix
    return ConfigPaths(
        primary=config_dir / f"{config_name}{primary_suffix}",
        legacy=config_dir / f"{config_name}{extension_suffix}",
    )
