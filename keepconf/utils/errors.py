"""Custom exceptions and exit codes for keepconf.

Every error raised by the library derives from KeepconfError and carries
an ExitCode so the CLI can map failures to a process exit status without
inspecting exception types one by one.

Filesystem failures are not wrapped: they surface as the built-in OSError
family.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from keepconf.config.schema import Violation


class ExitCode(IntEnum):
    """Process exit codes used by the keepconf CLI."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_ARGUMENT = 2
    INVALID_CONFIG = 3
    FORMAT_ERROR = 4
    DECRYPTION_FAILED = 5


class KeepconfError(Exception):
    """Base exception for all keepconf errors.

    Subclasses set ``_default_exit_code``; callers may override it per
    instance with the ``exit_code`` keyword.
    """

    _default_exit_code: ExitCode = ExitCode.GENERAL_ERROR

    def __init__(self, message: str = "", exit_code: ExitCode | None = None) -> None:
        super().__init__(message)
        self.exit_code = exit_code if exit_code is not None else self._default_exit_code


class InvalidArgumentError(KeepconfError, ValueError):
    """Raised for bad constructor or call input."""

    _default_exit_code = ExitCode.INVALID_ARGUMENT


class ProjectNameError(KeepconfError):
    """Raised when no project name can be inferred from the calling code."""

    _default_exit_code = ExitCode.INVALID_ARGUMENT


class SchemaViolationError(KeepconfError):
    """A JSON Schema violation of some sort has occurred.

    The message lists every violation, one per line:

        Configuration does not match JSON schema:
        - [foo.bar]: 'x' is not of type 'number'
        - 'foo' is a required property

    Attributes:
        violations: The structured violations that led to this error.
    """

    _default_exit_code = ExitCode.INVALID_CONFIG
    _title = "Data does not match required JSON schema"

    def __init__(
        self,
        violations: Sequence[Violation] = (),
        message: str | None = None,
        exit_code: ExitCode | None = None,
    ) -> None:
        self.violations: list[Violation] = list(violations)
        if message is None:
            message = self._format_message(self.violations)
        super().__init__(message, exit_code=exit_code)

    @classmethod
    def _format_message(cls, violations: Sequence[Violation]) -> str:
        lines = [
            f"- [{v.path}]: {v.message}" if v.path else f"- {v.message}" for v in violations
        ]
        return f"{cls._title}:\n" + "\n".join(lines)


class InvalidConfigSchemaError(SchemaViolationError):
    """Raised when the configured schema is malformed."""

    _title = "Configuration schema is not a valid JSON schema"


class InvalidDefaultsError(SchemaViolationError):
    """Raised when the default values do not match the schema."""

    _title = "Default values do not match JSON schema"


class InvalidConfigError(SchemaViolationError):
    """Raised when a persisted or about-to-be-persisted document violates the schema."""

    _title = "Configuration does not match JSON schema"


class SerializationError(KeepconfError):
    """Raised when a format cannot serialize a document."""

    _default_exit_code = ExitCode.FORMAT_ERROR


class DeserializationError(KeepconfError):
    """Raised when a format cannot deserialize stored data."""

    _default_exit_code = ExitCode.FORMAT_ERROR


class CipherError(KeepconfError):
    """Base exception for encryption failures."""

    _default_exit_code = ExitCode.DECRYPTION_FAILED


class DecryptionError(CipherError):
    """Raised when the password is wrong or the ciphertext was modified."""


class CipherEnvironmentError(CipherError):
    """Raised when the cryptographic backend is unusable."""
