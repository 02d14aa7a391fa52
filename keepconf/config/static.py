"""Process-wide static access to a single Config.

Subclass StaticConfig and implement ``create_config``; the first call to
any accessor creates the Config, later calls reuse it:

    class AppConfig(StaticConfig):
        @classmethod
        def create_config(cls) -> Config:
            return Config(project_name="my-app", defaults={"theme": "dark"})

    AppConfig.get("theme")
    AppConfig.set("theme", "light")

Each subclass owns its own instance.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from keepconf.config.engine import Config

logger = logging.getLogger(__name__)

_instance_lock = threading.RLock()


class StaticConfig:
    """Lazily created, process-wide Config behind class methods."""

    _instance: Config | None = None

    @classmethod
    def create_config(cls) -> Config:
        """Create the Config instance used by this class."""
        raise NotImplementedError(f"{cls.__name__} must implement create_config()")

    @classmethod
    def get_instance(cls) -> Config:
        """Get the Config instance, creating it on first use."""
        with _instance_lock:
            # Look in the class's own namespace so subclasses never share
            instance = cls.__dict__.get("_instance")
            if instance is None:
                instance = cls.create_config()
                cls._instance = instance
                logger.info(f"Initialized {cls.__name__} at {instance.file_path}")
            return instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the cached instance (primarily for testing)."""
        with _instance_lock:
            cls._instance = None

    @classmethod
    def file_path(cls) -> Path:
        """Path of the config file."""
        return cls.get_instance().file_path

    @classmethod
    def has(cls, key: str) -> bool:
        """Check whether a value exists under ``key``."""
        return cls.get_instance().has(key)

    @classmethod
    def get(cls, key: str | None = None, default: Any = None) -> Any:
        """Get a value by key, or all values if ``key`` is omitted."""
        return cls.get_instance().get(key, default)

    @classmethod
    def set(cls, key_or_data: str | Mapping[str, Any], value: Any = None) -> None:
        """Set one value, or merge a mapping of key-value pairs."""
        cls.get_instance().set(key_or_data, value)

    @classmethod
    def delete(cls, key: str | None = None) -> None:
        """Delete the value under ``key``, or clear all user values if omitted."""
        cls.get_instance().delete(key)
