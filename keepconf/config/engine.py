"""Config engine for keepconf.

This module provides the Config class, which keeps a configuration
document synchronized between memory and a single file on disk:

    1. User values (persisted, optionally encrypted)
    2. Default values (in memory only, lowest priority)

Every write is validated against the optional JSON Schema before it
reaches the disk. A write that would violate the schema is rolled back in
memory and reported, so callers never observe a document that does not
match the schema.

A Config instance holds no locks; share it between threads or processes
only behind your own mutual exclusion.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from keepconf.config.formats import Format, JsonFormat
from keepconf.config.paths import (
    default_config_dir,
    infer_project_name,
    resolve_config_paths,
    validate_filename,
)
from keepconf.config.schema import check_schema, validate_defaults, validate_document
from keepconf.config.stores import (
    PATH_SEPARATOR,
    Document,
    DotPathStore,
    KeyedStore,
    PlainStore,
    same_document,
)
from keepconf.crypto import PasswordCipher
from keepconf.utils.errors import (
    CipherError,
    DeserializationError,
    InvalidArgumentError,
    InvalidConfigError,
    SerializationError,
)
from keepconf.utils.fs import atomic_write_bytes, ensure_dir, read_bytes, remove_file

# Module-level logger
logger = logging.getLogger(__name__)


class Config:
    """Manages one persistent configuration document.

    Loading happens once, at construction:

    1. A plaintext file at the legacy (extensioned) path is read when a
       password is set and no encrypted file exists yet - this migrates
       unencrypted configs to encrypted storage on the next write.
    2. The primary file is read and, with a password, decrypted.
    3. The bytes are deserialized and validated against the schema.

    Unreadable, undecryptable or schema-violating files are deleted and
    replaced by an empty document when ``clear_invalid_config`` is true;
    otherwise the error propagates. Nothing is written during construction.

    Attributes:
        schema: The JSON Schema documents must satisfy, or None
        file_format: The Format used to (de)serialize the file
    """

    def __init__(
        self,
        *,
        defaults: Mapping[str, Any] | None = None,
        schema: Mapping[str, Any] | None = None,
        config_name: str = "config",
        project_name: str | None = None,
        project_suffix: str | None = "python",
        config_dir: str | Path | None = None,
        file_format: Format | None = None,
        password: str | None = None,
        dot_notation: bool = True,
        clear_invalid_config: bool = True,
    ) -> None:
        """Create a config and load its file.

        Raises:
            InvalidArgumentError: If a name, directory, password or format
                option is invalid.
            ProjectNameError: If neither config_dir nor project_name is given
                and no project name can be inferred.
            InvalidConfigSchemaError: If the schema is not an object schema.
            InvalidDefaultsError: If the defaults do not match the schema.
            InvalidConfigError: If the stored config does not match the
                schema and clear_invalid_config is false.
            DeserializationError: If the stored config cannot be parsed and
                clear_invalid_config is false, or parses to a non-mapping.
            CipherError: If the stored config cannot be decrypted and
                clear_invalid_config is false.
            OSError: If the config file exists but cannot be read.
        """
        validate_filename(config_name, "config name")
        if project_name is not None:
            validate_filename(project_name, "project name")

        if password is not None and (not isinstance(password, str) or not password):
            raise InvalidArgumentError("The password option must be a non-empty string")

        file_format = file_format if file_format is not None else JsonFormat()
        self._check_format(file_format)
        self.file_format = file_format

        if schema is not None:
            check_schema(schema)
        self.schema = schema

        defaults = dict(defaults) if defaults is not None else {}
        validate_defaults(defaults, self.schema)

        if config_dir is None:
            project_name = project_name or infer_project_name()
            directory = default_config_dir(project_name, project_suffix)
            ensure_dir(directory)
        else:
            directory = Path(config_dir)
            if not directory.is_dir():
                raise InvalidArgumentError(f'Configured config_dir "{directory}" does not exist')

        paths = resolve_config_paths(
            directory, config_name, file_format.extension, encrypted=password is not None
        )
        self._file_path = paths.primary
        self._legacy_file_path = paths.legacy
        self._cipher = PasswordCipher(password) if password is not None else None

        data = self._load(clear_invalid_config)

        store_class: type[KeyedStore] = DotPathStore if dot_notation else PlainStore
        self.dot_notation = dot_notation
        self._defaults = store_class(defaults)
        self._store = store_class(data)
        self._last_consistent_state: Document = self._store.serialized_view()

    @staticmethod
    def _check_format(file_format: Any) -> None:
        if not isinstance(getattr(file_format, "extension", None), str):
            raise InvalidArgumentError("The file_format.extension option must be a string")
        if not callable(getattr(file_format, "serialize", None)):
            raise InvalidArgumentError("The file_format.serialize option must be callable")
        if not callable(getattr(file_format, "deserialize", None)):
            raise InvalidArgumentError("The file_format.deserialize option must be callable")

    @property
    def file_path(self) -> Path:
        """Path of the config file."""
        return self._file_path

    @property
    def legacy_file_path(self) -> Path:
        """Extensioned path checked once for plaintext migration."""
        return self._legacy_file_path

    @property
    def password_protected(self) -> bool:
        """Whether the config file is encrypted."""
        return self._cipher is not None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _load(self, clear_invalid_config: bool) -> Document:
        """Read, decrypt, deserialize and validate the stored document."""
        raw: bytes | None = None

        if (
            self._cipher is not None
            and not self._file_path.exists()
            and self._legacy_file_path.exists()
        ):
            logger.debug(f"Migrating plaintext config from {self._legacy_file_path}")
            raw = read_bytes(self._legacy_file_path)

        if self._file_path.exists():
            raw = read_bytes(self._file_path)
            if self._cipher is not None:
                try:
                    raw = self._cipher.decrypt(raw)
                except CipherError as e:
                    if not clear_invalid_config:
                        raise
                    self._remove_invalid_config(e)
                    raw = self._encode(self.file_format.serialize({}))

        if raw is None:
            return {}

        try:
            data = self.file_format.deserialize(raw)
        except DeserializationError as e:
            if not clear_invalid_config:
                raise
            self._remove_invalid_config(e)
            data = {}

        if not isinstance(data, dict):
            raise DeserializationError(
                f"Deserialized data must be a mapping, {type(data).__name__} given"
            )

        try:
            validate_document(data, self.schema)
        except InvalidConfigError as e:
            if not clear_invalid_config:
                raise
            self._remove_invalid_config(e)
            data = {}

        logger.debug(f"Loaded config from {self._file_path} ({len(data)} keys)")
        return data

    def _remove_invalid_config(self, reason: Exception) -> None:
        logger.warning(f"Discarding invalid config file {self._file_path}: {reason}")
        remove_file(self._file_path)

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def has(self, key: str) -> bool:
        """Check whether a value exists under ``key``.

        Defaults are consulted for plain keys only; a dotted key has to be
        present in the user values.
        """
        return self._store.has(key) or (
            PATH_SEPARATOR not in key and self._defaults.has(key)
        )

    def get(self, key: str | None = None, default: Any = None) -> Any:
        """Get a value by key, or all values if ``key`` is omitted.

        Without a key, user values are layered over the defaults at the top
        level. With a key, the defaults are only consulted when the key's
        whole top-level branch is missing from the user values: a user
        value for "server" hides any default for "server.port".
        """
        if key is None:
            return {**self._defaults.all(), **self._store.all()}

        first_part = key.split(PATH_SEPARATOR)[0]
        if self._store.has(first_part):
            fallback = default
        else:
            fallback = self._defaults.get(key, default)
        return self._store.get(key, fallback)

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def set(self, key_or_data: str | Mapping[str, Any], value: Any = None) -> None:
        """Set one value, or merge a mapping of key-value pairs.

        With dot notation enabled, the keys of a merged mapping are resolved
        into nested structure like single keys are.

        Raises:
            InvalidArgumentError: If ``key_or_data`` is neither a string nor
                a mapping with string keys.
            InvalidConfigError: If the result violates the schema. The
                change is rolled back and the file is left untouched.
            SerializationError: If the format cannot serialize the document.
            OSError: If the file cannot be written.
        """
        previous = self._store.serialized_view()

        if isinstance(key_or_data, str):
            self._store.set(key_or_data, value)
        elif isinstance(key_or_data, Mapping):
            if not all(isinstance(key, str) for key in key_or_data):
                raise InvalidArgumentError("All keys passed to Config.set() must be strings")
            self._store.merge(key_or_data)
        else:
            raise InvalidArgumentError(
                "Invalid first argument for Config.set(), must be either a string or a mapping"
            )

        self._commit_if_changed(previous)

    def delete(self, key: str | None = None) -> None:
        """Delete the value under ``key``, or clear all user values if omitted.

        Defaults are never affected.

        Raises:
            InvalidConfigError: If the result violates the schema. The
                change is rolled back and the file is left untouched.
            OSError: If the file cannot be written.
        """
        previous = self._store.serialized_view()

        if key is None:
            self._store.clear()
        else:
            self._store.delete(key)

        self._commit_if_changed(previous)

    def _commit_if_changed(self, previous: Document) -> None:
        if same_document(previous, self._store.serialized_view()):
            logger.debug("Config unchanged, skipping write")
            return
        self._commit()

    def _commit(self) -> None:
        """Validate the store and write it to disk.

        On a schema violation the store is restored to the last document
        that matched the schema.
        """
        data = self._store.serialized_view()

        try:
            validate_document(data, self.schema)
        except InvalidConfigError:
            self._store.replace(self._last_consistent_state)
            raise
        self._last_consistent_state = data

        payload = self._encode(self.file_format.serialize(data))
        if self._cipher is not None:
            payload = self._cipher.encrypt(payload)

        atomic_write_bytes(self._file_path, payload)
        logger.debug(f"Saved config to {self._file_path}")

    @staticmethod
    def _encode(serialized: Any) -> bytes:
        if isinstance(serialized, str):
            return serialized.encode("utf-8")
        if isinstance(serialized, bytes):
            return serialized
        raise SerializationError(
            f"Serialized data must be a string or bytes, {type(serialized).__name__} given"
        )

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.get())

    def __iter__(self) -> Iterator[str]:
        return iter(self.get())

    def items(self) -> Iterator[tuple[str, Any]]:
        """Iterate over the effective top-level key-value pairs."""
        return iter(self.get().items())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        self.delete(key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(file_path={str(self._file_path)!r})"
