"""keepconf - Persistent, schema-governed configuration for applications.

This package keeps a nested configuration document synchronized between
memory and a file on disk, optionally encrypted with a password and
optionally validated against a JSON Schema, with default values layered
underneath explicit user values.
"""

__version__ = "1.0.0"

from keepconf.config import (  # noqa: E402
    CallableFormat,
    Config,
    Format,
    JsonFormat,
    StaticConfig,
    YamlFormat,
)
from keepconf.utils.errors import (  # noqa: E402
    CipherEnvironmentError,
    CipherError,
    DecryptionError,
    DeserializationError,
    ExitCode,
    InvalidArgumentError,
    InvalidConfigError,
    InvalidConfigSchemaError,
    InvalidDefaultsError,
    KeepconfError,
    ProjectNameError,
    SchemaViolationError,
    SerializationError,
)

__all__ = [
    "__version__",
    # Engine
    "Config",
    "StaticConfig",
    # Formats
    "Format",
    "JsonFormat",
    "YamlFormat",
    "CallableFormat",
    # Errors
    "ExitCode",
    "KeepconfError",
    "InvalidArgumentError",
    "ProjectNameError",
    "SchemaViolationError",
    "InvalidConfigSchemaError",
    "InvalidDefaultsError",
    "InvalidConfigError",
    "SerializationError",
    "DeserializationError",
    "CipherError",
    "DecryptionError",
    "CipherEnvironmentError",
]
