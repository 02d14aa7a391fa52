"""Typer application for keepconf.

Inspect and edit a config file from the shell:

    keepconf --dir ./conf get server.port
    keepconf --dir ./conf set server.port 8080
    keepconf --project my-app --password secret show
"""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, NoReturn

import typer

from keepconf import __version__
from keepconf.config.display import show_config
from keepconf.config.engine import Config
from keepconf.config.formats import Format, JsonFormat, YamlFormat
from keepconf.config.paths import infer_project_name
from keepconf.utils.console import print_error, print_success
from keepconf.utils.errors import ExitCode, KeepconfError
from keepconf.utils.logging import setup_logging

app = typer.Typer(
    name="keepconf",
    help="Inspect and edit persistent application configuration",
    add_completion=False,
    no_args_is_help=True,
)

_MISSING = object()


class FormatChoice(str, Enum):
    """File formats selectable on the command line."""

    JSON = "json"
    YAML = "yaml"

    def to_format(self) -> Format:
        return YamlFormat() if self is FormatChoice.YAML else JsonFormat()


@dataclass
class ConfigOptions:
    """Options shared by all commands, collected by the app callback."""

    config_dir: Path | None = None
    config_name: str = "config"
    project_name: str | None = None
    password: str | None = None
    flat: bool = False
    schema_path: Path | None = None
    file_format: FormatChoice = FormatChoice.JSON
    keep_invalid: bool = False


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        typer.echo(f"keepconf {__version__}")
        raise typer.Exit()


def _fail(message: str, exit_code: ExitCode = ExitCode.GENERAL_ERROR) -> NoReturn:
    print_error(message)
    raise typer.Exit(exit_code)


def _load_schema(path: Path) -> dict[str, Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        _fail(f"Cannot read schema file {path}: {e}", ExitCode.INVALID_ARGUMENT)


def _open_config(ctx: typer.Context) -> Config:
    """Create the Config described by the global options."""
    options: ConfigOptions = ctx.obj
    schema = _load_schema(options.schema_path) if options.schema_path else None

    try:
        project_name = options.project_name
        if options.config_dir is None and project_name is None:
            # Resolve from where the command runs, not from the installed CLI
            project_name = infer_project_name(Path.cwd())
        return Config(
            config_dir=options.config_dir,
            config_name=options.config_name,
            project_name=project_name,
            password=options.password,
            dot_notation=not options.flat,
            schema=schema,
            file_format=options.file_format.to_format(),
            clear_invalid_config=not options.keep_invalid,
        )
    except KeepconfError as e:
        _fail(str(e), e.exit_code)
    except OSError as e:
        _fail(f"Cannot access config file: {e}")


def _parse_value(raw: str) -> Any:
    """Interpret a command-line value as JSON, falling back to a plain string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_dir: Annotated[
        Path | None,
        typer.Option("--dir", "-d", help="Directory holding the config file (must exist)"),
    ] = None,
    config_name: Annotated[
        str,
        typer.Option("--name", "-n", help="Config file base name"),
    ] = "config",
    project_name: Annotated[
        str | None,
        typer.Option(
            "--project",
            "-p",
            help="Project name used to locate the config directory (default: from ./pyproject.toml)",
        ),
    ] = None,
    password: Annotated[
        str | None,
        typer.Option(
            "--password",
            envvar="KEEPCONF_PASSWORD",
            help="Password of an encrypted config",
        ),
    ] = None,
    flat: Annotated[
        bool,
        typer.Option("--flat", help="Treat dots in keys literally"),
    ] = False,
    schema_path: Annotated[
        Path | None,
        typer.Option("--schema", help="JSON Schema file the config must satisfy"),
    ] = None,
    file_format: Annotated[
        FormatChoice,
        typer.Option("--format", "-f", help="Config file format"),
    ] = FormatChoice.JSON,
    keep_invalid: Annotated[
        bool,
        typer.Option("--keep-invalid", help="Fail instead of discarding an invalid config file"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version information",
        ),
    ] = False,
) -> None:
    """Inspect and edit persistent application configuration."""
    setup_logging()
    ctx.obj = ConfigOptions(
        config_dir=config_dir,
        config_name=config_name,
        project_name=project_name,
        password=password,
        flat=flat,
        schema_path=schema_path,
        file_format=file_format,
        keep_invalid=keep_invalid,
    )


@app.command("path")
def path_command(ctx: typer.Context) -> None:
    """Print the config file path."""
    typer.echo(str(_open_config(ctx).file_path))


@app.command("get")
def get_command(
    ctx: typer.Context,
    key: Annotated[str | None, typer.Argument(help="Key to look up (all values if omitted)")] = None,
) -> None:
    """Print a value as JSON."""
    config = _open_config(ctx)
    value = config.get(key, _MISSING)
    if value is _MISSING:
        _fail(f"Key not found: {key}")
    typer.echo(json.dumps(value, indent=2, ensure_ascii=False))


@app.command("set")
def set_command(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Key to set")],
    value: Annotated[str, typer.Argument(help="Value, parsed as JSON when possible")],
) -> None:
    """Set a value."""
    config = _open_config(ctx)
    try:
        config.set(key, _parse_value(value))
    except KeepconfError as e:
        _fail(str(e), e.exit_code)
    except OSError as e:
        _fail(f"Cannot access config file: {e}")
    print_success(f"Saved {key}")


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Key to delete")],
) -> None:
    """Delete a value."""
    config = _open_config(ctx)
    try:
        config.delete(key)
    except KeepconfError as e:
        _fail(str(e), e.exit_code)
    except OSError as e:
        _fail(f"Cannot access config file: {e}")
    print_success(f"Deleted {key}")


@app.command("clear")
def clear_command(ctx: typer.Context) -> None:
    """Delete all stored values (defaults are unaffected)."""
    config = _open_config(ctx)
    try:
        config.delete()
    except KeepconfError as e:
        _fail(str(e), e.exit_code)
    except OSError as e:
        _fail(f"Cannot access config file: {e}")
    print_success("Cleared config")


@app.command("show")
def show_command(ctx: typer.Context) -> None:
    """Show the effective configuration as a table."""
    show_config(_open_config(ctx))


def main() -> None:
    """Entry point for the keepconf console script."""
    app()
