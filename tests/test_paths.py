"""Tests for keepconf.config.paths module."""

from pathlib import Path
from unittest.mock import patch

import pytest

from keepconf.config.paths import (
    default_config_dir,
    infer_project_name,
    resolve_config_paths,
    sanitize_project_name,
    validate_filename,
)
from keepconf.utils.errors import InvalidArgumentError, ProjectNameError


class TestValidateFilename:
    """Tests for validate_filename."""

    @pytest.mark.parametrize("name", ["config", "my-app", "settings.v2", "Ünïcode"])
    def test_valid_names(self, name):
        validate_filename(name)

    @pytest.mark.parametrize("name", ["", None, 42])
    def test_empty_or_non_string(self, name):
        with pytest.raises(InvalidArgumentError, match="non-empty string"):
            validate_filename(name)

    @pytest.mark.parametrize("name", ["con", "NUL", "com1", "Lpt9", "aux"])
    def test_reserved_names(self, name):
        with pytest.raises(InvalidArgumentError, match="reserved device name"):
            validate_filename(name)

    @pytest.mark.parametrize("name", ["a/b", "a\\b", "a:b", "a*b", "a?b", 'a"b', "a|b", "a\nb"])
    def test_forbidden_characters(self, name):
        with pytest.raises(InvalidArgumentError, match="path separator or control"):
            validate_filename(name)

    def test_label_in_message(self):
        with pytest.raises(InvalidArgumentError, match="Invalid config name"):
            validate_filename("", "config name")


class TestSanitizeProjectName:
    """Tests for sanitize_project_name."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("my-app", "my-app"),
            ("My App!", "My-App-"),
            ("acme/tool", "acme-tool"),
            ("a___b", "a_b"),
            ("pkg.name_1", "pkg.name_1"),
        ],
    )
    def test_sanitize(self, raw, expected):
        assert sanitize_project_name(raw) == expected


class TestInferProjectName:
    """Tests for infer_project_name."""

    def test_reads_project_table(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo app"\n')
        nested = tmp_path / "src" / "demo"
        nested.mkdir(parents=True)

        assert infer_project_name(nested) == "demo-app"

    def test_falls_back_to_poetry(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[tool.poetry]\nname = "poetry-app"\n')

        assert infer_project_name(tmp_path) == "poetry-app"

    def test_missing_name(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[build-system]\nrequires = ["hatchling"]\n')

        with pytest.raises(ProjectNameError, match="Cannot find a project name"):
            infer_project_name(tmp_path)

    def test_missing_pyproject(self, tmp_path):
        with patch("keepconf.config.paths._find_up", return_value=None):
            with pytest.raises(ProjectNameError, match="Cannot find pyproject.toml"):
                infer_project_name(tmp_path)

    def test_defaults_to_calling_code(self):
        # This test module lives in the keepconf repository
        assert infer_project_name() == "keepconf"


class TestDefaultConfigDir:
    """Tests for default_config_dir."""

    def test_appends_suffix(self, user_config_home):
        assert default_config_dir("demo") == user_config_home / "demo-python"

    def test_custom_suffix(self, user_config_home):
        assert default_config_dir("demo", "nodejs") == user_config_home / "demo-nodejs"

    @pytest.mark.parametrize("suffix", [None, ""])
    def test_no_suffix(self, user_config_home, suffix):
        assert default_config_dir("demo", suffix) == user_config_home / "demo"


class TestResolveConfigPaths:
    """Tests for resolve_config_paths."""

    def test_plaintext_uses_extension(self):
        paths = resolve_config_paths(Path("/conf"), "config", "json", encrypted=False)

        assert paths.primary == Path("/conf/config.json")
        assert paths.legacy == Path("/conf/config.json")

    def test_encrypted_drops_extension(self):
        paths = resolve_config_paths(Path("/conf"), "config", "json", encrypted=True)

        assert paths.primary == Path("/conf/config")
        assert paths.legacy == Path("/conf/config.json")

    def test_empty_extension(self):
        paths = resolve_config_paths(Path("/conf"), "settings", "", encrypted=False)

        assert paths.primary == Path("/conf/settings")
