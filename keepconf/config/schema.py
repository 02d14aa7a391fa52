"""JSON Schema validation for config documents.

Validation is delegated to ``jsonschema``; this module turns its errors
into Violation records and applies the config-specific policy:

- Documents are validated with schema defaults filled in, on a copy.
- A missing *top-level* required property is tolerated in stored
  documents, because the config's default values are expected to supply
  it. Any other violation is fatal.
- Default values are validated strictly, with no exemption and no
  default filling.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError, ValidationError
from jsonschema.validators import validator_for

from keepconf.utils.errors import (
    InvalidConfigError,
    InvalidConfigSchemaError,
    InvalidDefaultsError,
)

PATH_SEPARATOR = "."


@dataclass(frozen=True)
class Violation:
    """A single schema check failure.

    Attributes:
        path: Dotted path of the offending property, None for the root
        message: Human-readable description from the validator
        keyword: JSON Schema keyword that failed (e.g. 'type', 'required')
    """

    path: str | None
    message: str
    keyword: str = ""

    @property
    def is_top_level_required(self) -> bool:
        """True for a missing required property directly on the root object."""
        return (
            self.keyword == "required"
            and self.path is not None
            and PATH_SEPARATOR not in self.path
        )


def check_schema(schema: Any) -> None:
    """Check that ``schema`` describes a JSON object and is itself valid.

    Raises:
        InvalidConfigSchemaError: If the schema is not an object schema or
            does not conform to its JSON Schema meta-schema.
    """
    if not isinstance(schema, Mapping) or schema.get("type") != "object":
        raise InvalidConfigSchemaError(
            message='Config schema is expected to be of "type": "object"'
        )

    cls = validator_for(schema, default=Draft7Validator)
    try:
        cls.check_schema(schema)
    except SchemaError as e:
        raise InvalidConfigSchemaError([_to_violation(e)]) from e


def apply_schema_defaults(data: Any, schema: Mapping[str, Any]) -> Any:
    """Return a copy of ``data`` with missing properties filled from schema defaults.

    Only ``properties`` of object schemas are followed, recursively.
    """
    filled = copy.deepcopy(data)
    _fill_defaults(filled, schema)
    return filled


def _fill_defaults(instance: Any, schema: Any) -> None:
    if not isinstance(instance, dict) or not isinstance(schema, Mapping):
        return

    properties = schema.get("properties")
    if not isinstance(properties, Mapping):
        return

    for name, subschema in properties.items():
        if not isinstance(subschema, Mapping):
            continue
        if name not in instance and "default" in subschema:
            instance[name] = copy.deepcopy(subschema["default"])
        if name in instance:
            _fill_defaults(instance[name], subschema)


def _join_path(parts: Iterable[Any]) -> str:
    return PATH_SEPARATOR.join(str(p) for p in parts)


def _missing_property(error: ValidationError) -> str | None:
    """Find the property name a 'required' error complains about."""
    if not isinstance(error.instance, Mapping):
        return None
    for name in error.validator_value or ():
        if name not in error.instance and error.message.startswith(repr(name)):
            return str(name)
    return None


def _to_violation(error: ValidationError | SchemaError) -> Violation:
    parts = list(error.absolute_path)
    keyword = str(error.validator) if error.validator is not None else ""

    if keyword == "required":
        missing = _missing_property(error)
        if missing is not None:
            parts.append(missing)

    return Violation(
        path=_join_path(parts) if parts else None,
        message=error.message,
        keyword=keyword,
    )


def collect_violations(
    data: Any,
    schema: Mapping[str, Any],
    apply_defaults: bool = True,
) -> list[Violation]:
    """Validate ``data`` against ``schema`` and return every violation.

    ``data`` itself is never modified.
    """
    instance = apply_schema_defaults(data, schema) if apply_defaults else data
    cls = validator_for(schema, default=Draft7Validator)
    validator = cls(schema)
    return [_to_violation(error) for error in validator.iter_errors(instance)]


def validate_document(data: Any, schema: Mapping[str, Any] | None) -> None:
    """Validate a stored or about-to-be-stored config document.

    Missing top-level required properties alone do not fail validation;
    when validation does fail, the error carries the full violation list,
    exempted entries included.

    Raises:
        InvalidConfigError: If any non-exempt violation is found.
    """
    if schema is None:
        return

    violations = collect_violations(data, schema)
    if any(not v.is_top_level_required for v in violations):
        raise InvalidConfigError(violations)


def validate_defaults(data: Any, schema: Mapping[str, Any] | None) -> None:
    """Validate default values strictly.

    Raises:
        InvalidDefaultsError: If any violation is found.
    """
    if schema is None:
        return

    violations = collect_violations(data, schema, apply_defaults=False)
    if violations:
        raise InvalidDefaultsError(violations)
