"""Configuration management for keepconf.

This package contains:
- engine: Config class keeping a document in sync with its file
- stores: Flat and dot-path keyed stores
- formats: JSON / YAML / callable serialization formats
- schema: JSON Schema validation policy
- paths: File name rules and config file locations
- static: StaticConfig process-wide facade
- display: Rich rendering of the effective configuration
"""

from keepconf.config.engine import Config
from keepconf.config.formats import CallableFormat, Format, JsonFormat, YamlFormat
from keepconf.config.schema import Violation
from keepconf.config.static import StaticConfig
from keepconf.config.stores import DotPathStore, KeyedStore, PlainStore

__all__ = [
    # Core classes
    "Config",
    "StaticConfig",
    # Stores
    "KeyedStore",
    "PlainStore",
    "DotPathStore",
    # Formats
    "Format",
    "JsonFormat",
    "YamlFormat",
    "CallableFormat",
    # Validation
    "Violation",
]
