"""Tests for keepconf.config.static module."""

import threading

import pytest

from keepconf.config.engine import Config
from keepconf.config.static import StaticConfig


@pytest.fixture
def app_config_class(config_dir):
    """A StaticConfig subclass backed by the test config directory."""

    class AppConfig(StaticConfig):
        created = 0

        @classmethod
        def create_config(cls) -> Config:
            cls.created += 1
            return Config(config_dir=config_dir, defaults={"theme": "dark"})

    yield AppConfig
    AppConfig.reset_instance()


class TestStaticConfig:
    """Tests for the process-wide facade."""

    def test_base_class_requires_create_config(self):
        with pytest.raises(NotImplementedError, match="must implement create_config"):
            StaticConfig.get("anything")

    def test_instance_created_once(self, app_config_class):
        first = app_config_class.get_instance()
        second = app_config_class.get_instance()

        assert first is second
        assert app_config_class.created == 1

    def test_delegates_operations(self, app_config_class, config_dir):
        assert app_config_class.get("theme") == "dark"
        assert app_config_class.has("theme")

        app_config_class.set("theme", "light")
        app_config_class.set({"window.width": 800})

        assert app_config_class.get("theme") == "light"
        assert app_config_class.get() == {"theme": "light", "window": {"width": 800}}
        assert app_config_class.file_path() == config_dir / "config.json"

        app_config_class.delete("theme")
        assert app_config_class.get("theme") == "dark"
        app_config_class.delete()
        assert app_config_class.get() == {"theme": "dark"}

    def test_reset_instance(self, app_config_class):
        first = app_config_class.get_instance()
        app_config_class.reset_instance()

        assert app_config_class.get_instance() is not first
        assert app_config_class.created == 2

    def test_subclasses_do_not_share_instances(self, app_config_class, tmp_path):
        other_dir = tmp_path / "other"
        other_dir.mkdir()

        class OtherConfig(StaticConfig):
            @classmethod
            def create_config(cls) -> Config:
                return Config(config_dir=other_dir)

        try:
            assert app_config_class.get_instance() is not OtherConfig.get_instance()
            assert OtherConfig.file_path() == other_dir / "config.json"
        finally:
            OtherConfig.reset_instance()

    def test_concurrent_first_access_creates_one_instance(self, app_config_class):
        instances = []
        threads = [
            threading.Thread(target=lambda: instances.append(app_config_class.get_instance()))
            for _ in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert app_config_class.created == 1
        assert all(instance is instances[0] for instance in instances)
