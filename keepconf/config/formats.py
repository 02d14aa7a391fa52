"""Serialization formats for config files.

A Format turns a document into the bytes written to disk and back. JSON is
the default; YAML is available for hand-edited files, and CallableFormat
adapts a pair of plain functions for anything else.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

import yaml

from keepconf.utils.errors import DeserializationError, SerializationError


class Format(ABC):
    """Abstract base class for a config file format.

    Attributes:
        extension: File extension without the leading dot. An empty string
            means config files carry no extension.
    """

    extension: str = ""

    @abstractmethod
    def serialize(self, data: Any) -> str | bytes:
        """Serialize a document.

        Raises:
            SerializationError: If the document cannot be represented.
        """

    @abstractmethod
    def deserialize(self, data: bytes) -> Any:
        """Deserialize stored bytes.

        Raises:
            DeserializationError: If the input is malformed.
        """


class JsonFormat(Format):
    """Pretty-printed UTF-8 JSON."""

    extension = "json"

    def __init__(self, indent: int = 4) -> None:
        self.indent = indent

    def serialize(self, data: Any) -> str:
        try:
            return json.dumps(data, indent=self.indent, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot serialize config as JSON: {e}") from e

    def deserialize(self, data: bytes) -> Any:
        try:
            return json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DeserializationError(f"Cannot parse config as JSON: {e}") from e


class YamlFormat(Format):
    """Block-style YAML, keeping the document's key order."""

    extension = "yaml"

    def serialize(self, data: Any) -> str:
        try:
            return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
        except yaml.YAMLError as e:
            raise SerializationError(f"Cannot serialize config as YAML: {e}") from e

    def deserialize(self, data: bytes) -> Any:
        try:
            loaded = yaml.safe_load(data)
        except yaml.YAMLError as e:
            raise DeserializationError(f"Cannot parse config as YAML: {e}") from e

        # Empty files are interpreted as empty documents
        if loaded is None:
            return {}
        return loaded


class CallableFormat(Format):
    """Format built from two plain callables.

    The callables may raise SerializationError / DeserializationError
    themselves; any other exception propagates unchanged.
    """

    def __init__(
        self,
        extension: str,
        serialize: Callable[[Any], str | bytes],
        deserialize: Callable[[bytes], Any],
    ) -> None:
        self.extension = extension
        self._serialize = serialize
        self._deserialize = deserialize

    def serialize(self, data: Any) -> str | bytes:
        return self._serialize(data)

    def deserialize(self, data: bytes) -> Any:
        return self._deserialize(data)
