"""Shared pytest fixtures for keepconf tests."""

from pathlib import Path

import pytest

from keepconf.config.engine import Config
from keepconf.crypto import PasswordCipher


@pytest.fixture(autouse=True)
def fast_cipher(monkeypatch):
    """Use a cheap key derivation so encrypted tests stay fast."""
    monkeypatch.setattr(PasswordCipher, "KDF_ITERATIONS", 1_000)


@pytest.fixture(autouse=True)
def user_config_home(tmp_path: Path, monkeypatch) -> Path:
    """Redirect the per-user config directory into the test's tmp dir."""
    home = tmp_path / "user-config"

    def fake_user_config_dir(appname: str, appauthor: bool = False) -> str:
        return str(home / appname)

    monkeypatch.setattr("keepconf.config.paths.user_config_dir", fake_user_config_dir)
    return home


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """An existing, empty directory for config files."""
    directory = tmp_path / "conf"
    directory.mkdir()
    return directory


@pytest.fixture
def config(config_dir: Path) -> Config:
    """A dot-notation config without schema or password."""
    return Config(config_dir=config_dir)


@pytest.fixture
def flat_config(tmp_path: Path) -> Config:
    """A config with dot notation disabled."""
    directory = tmp_path / "flat"
    directory.mkdir()
    return Config(config_dir=directory, dot_notation=False)


@pytest.fixture
def nested_schema() -> dict:
    """Schema with a nested object holding numeric properties."""
    return {
        "type": "object",
        "properties": {
            "foo": {
                "type": "object",
                "properties": {
                    "bar": {"type": "number"},
                    "foobar": {"type": "number", "maximum": 100},
                },
            },
        },
    }
