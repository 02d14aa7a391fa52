"""Tests for keepconf.config.schema module."""

import pytest

from keepconf.config.schema import (
    Violation,
    apply_schema_defaults,
    check_schema,
    collect_violations,
    validate_defaults,
    validate_document,
)
from keepconf.utils.errors import (
    InvalidConfigError,
    InvalidConfigSchemaError,
    InvalidDefaultsError,
)

REQUIRED_SCHEMA = {
    "type": "object",
    "properties": {
        "foo": {"type": "string"},
        "nested": {
            "type": "object",
            "properties": {"inner": {"type": "number"}},
            "required": ["inner"],
        },
    },
    "required": ["foo"],
}


class TestViolation:
    """Tests for the Violation record."""

    def test_top_level_required(self):
        assert Violation("foo", "'foo' is a required property", "required").is_top_level_required

    def test_nested_required_is_not_top_level(self):
        violation = Violation("a.b", "'b' is a required property", "required")
        assert not violation.is_top_level_required

    def test_other_keyword_is_not_required(self):
        assert not Violation("foo", "bad", "type").is_top_level_required


class TestCheckSchema:
    """Tests for check_schema."""

    @pytest.mark.parametrize(
        "schema",
        [{}, {"type": "string"}, {"type": "array"}, ["type", "object"], "object"],
    )
    def test_non_object_schema_rejected(self, schema):
        with pytest.raises(InvalidConfigSchemaError, match='"type": "object"'):
            check_schema(schema)

    def test_malformed_schema_rejected(self):
        schema = {"type": "object", "properties": {"a": {"type": "no-such-type"}}}

        with pytest.raises(InvalidConfigSchemaError) as exc_info:
            check_schema(schema)

        assert exc_info.value.violations
        assert str(exc_info.value).startswith("Configuration schema is not a valid JSON schema:")

    def test_valid_schema_accepted(self, nested_schema):
        check_schema(nested_schema)


class TestApplySchemaDefaults:
    """Tests for schema default filling."""

    def test_fills_nested_defaults_on_copy(self):
        schema = {
            "type": "object",
            "properties": {
                "server": {
                    "type": "object",
                    "default": {},
                    "properties": {"port": {"type": "integer", "default": 80}},
                },
            },
        }
        data = {}

        filled = apply_schema_defaults(data, schema)

        assert filled == {"server": {"port": 80}}
        assert data == {}

    def test_existing_values_win(self):
        schema = {"type": "object", "properties": {"a": {"default": 1}}}
        assert apply_schema_defaults({"a": 2}, schema) == {"a": 2}


class TestCollectViolations:
    """Tests for violation collection."""

    def test_type_violation_path(self, nested_schema):
        violations = collect_violations({"foo": {"bar": "x"}}, nested_schema)

        assert len(violations) == 1
        assert violations[0].path == "foo.bar"
        assert violations[0].keyword == "type"

    def test_required_violation_names_missing_property(self):
        violations = collect_violations({"foo": "x", "nested": {}}, REQUIRED_SCHEMA)

        assert [(v.path, v.keyword) for v in violations] == [("nested.inner", "required")]

    def test_root_violation_has_no_path(self):
        schema = {"type": "object", "maxProperties": 0}
        violations = collect_violations({"a": 1}, schema)

        assert violations[0].path is None

    def test_invalid_schema_default_is_reported(self):
        schema = {"type": "object", "properties": {"a": {"type": "number", "default": "x"}}}

        assert collect_violations({}, schema)
        assert not collect_violations({}, schema, apply_defaults=False)


class TestValidateDocument:
    """Tests for stored document validation."""

    def test_no_schema_accepts_anything(self):
        validate_document({"anything": object()}, None)

    def test_missing_top_level_required_is_tolerated(self):
        # Default values are expected to supply top-level required keys
        validate_document({}, REQUIRED_SCHEMA)

    def test_missing_nested_required_fails(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            validate_document({"foo": "x", "nested": {}}, REQUIRED_SCHEMA)

        assert exc_info.value.violations[0].path == "nested.inner"

    def test_error_lists_exempt_violations_too(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            validate_document({"nested": {"inner": "x"}}, REQUIRED_SCHEMA)

        message = str(exc_info.value)
        assert message.startswith("Configuration does not match JSON schema:")
        assert "- [nested.inner]: 'x' is not of type 'number'" in message
        assert "- [foo]: 'foo' is a required property" in message


class TestValidateDefaults:
    """Tests for strict default validation."""

    def test_no_schema(self):
        validate_defaults({"a": 1}, None)

    def test_missing_top_level_required_fails(self):
        with pytest.raises(InvalidDefaultsError, match="Default values do not match JSON schema"):
            validate_defaults({}, REQUIRED_SCHEMA)

    def test_valid_defaults(self):
        validate_defaults({"foo": "x"}, REQUIRED_SCHEMA)
