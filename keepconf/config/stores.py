"""Keyed stores over a configuration document.

A store holds one nested document and addresses it by key. Two addressing
modes exist:

    PlainStore    Keys are opaque strings, "a.b" is a single top-level key.
    DotPathStore  Keys are dot-separated paths, "a.b" addresses key "b"
                  inside the mapping stored under "a".

Stores perform no validation and no I/O; the Config engine decides when a
store's contents are committed to disk.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, TypeAlias

JSONValue: TypeAlias = "None | bool | int | float | str | list[JSONValue] | dict[str, JSONValue]"
Document: TypeAlias = "dict[str, JSONValue]"

PATH_SEPARATOR = "."

_MISSING = object()


def same_document(a: Any, b: Any) -> bool:
    """Compare two documents strictly.

    Unlike ``==`` this distinguishes ``1`` from ``True`` and ``1.0`` and
    treats a different key order as a change, so any edit that would alter
    the serialized file is detected.
    """
    if type(a) is not type(b):
        return False
    if isinstance(a, dict):
        return list(a) == list(b) and all(same_document(a[k], b[k]) for k in a)
    if isinstance(a, list):
        return len(a) == len(b) and all(same_document(x, y) for x, y in zip(a, b))
    return a == b


class KeyedStore(ABC):
    """Abstract base class for an addressable configuration document."""

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: Document = {}
        self.replace(data or {})

    def replace(self, data: Mapping[str, Any]) -> None:
        """Discard the current contents and adopt a copy of ``data``."""
        self._data = copy.deepcopy(dict(data))

    def all(self) -> Document:
        """Return a copy of the whole document."""
        return copy.deepcopy(self._data)

    def serialized_view(self) -> Document:
        """Return the canonical document snapshot used for change detection and persistence."""
        return copy.deepcopy(self._data)

    def clear(self) -> None:
        """Empty the store."""
        self._data = {}

    def __len__(self) -> int:
        return len(self._data)

    @abstractmethod
    def has(self, key: str) -> bool:
        """Check whether the store contains a value under ``key``."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Get the value under ``key``, or ``default`` if it is missing."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``."""

    @abstractmethod
    def merge(self, pairs: Mapping[str, Any]) -> None:
        """Set every key-value pair of ``pairs``."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key`` from the store if present."""


class PlainStore(KeyedStore):
    """A flat store where every key is an opaque top-level key."""

    def has(self, key: str) -> bool:
        return key in self._data

    def get(self, key: str, default: Any = None) -> Any:
        # A stored null counts as unset
        value = self._data.get(key)
        if value is None:
            return default
        return copy.deepcopy(value)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def merge(self, pairs: Mapping[str, Any]) -> None:
        for key, value in pairs.items():
            self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class DotPathStore(KeyedStore):
    """A nested store addressed with dot-separated paths.

    A key that literally exists at the top level always wins over its
    path interpretation, so documents loaded from disk with dotted
    top-level keys stay reachable.
    """

    def _lookup(self, key: str) -> Any:
        if key in self._data:
            return self._data[key]
        if PATH_SEPARATOR not in key:
            return _MISSING

        node: Any = self._data
        for segment in key.split(PATH_SEPARATOR):
            if not isinstance(node, dict) or segment not in node:
                return _MISSING
            node = node[segment]
        return node

    def has(self, key: str) -> bool:
        return self._lookup(key) is not _MISSING

    def get(self, key: str, default: Any = None) -> Any:
        value = self._lookup(key)
        if value is _MISSING:
            return default
        return copy.deepcopy(value)

    def set(self, key: str, value: Any) -> None:
        *parents, leaf = key.split(PATH_SEPARATOR)
        node = self._data
        for segment in parents:
            # Intermediate scalars are replaced by mappings
            if not isinstance(node.get(segment), dict):
                node[segment] = {}
            node = node[segment]
        node[leaf] = copy.deepcopy(value)

    def merge(self, pairs: Mapping[str, Any]) -> None:
        for key, value in pairs.items():
            self.set(key, value)

    def delete(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            return

        *parents, leaf = key.split(PATH_SEPARATOR)
        node: Any = self._data
        for segment in parents:
            node = node.get(segment) if isinstance(node, dict) else None
            if not isinstance(node, dict):
                return
        node.pop(leaf, None)
