"""Tests for the Config class"""

import importlib
import os
from unittest.mock import patch

import pytest

import taghooks.config as config_module


def reload_config_with_env(env_vars: dict):
    """Reload the config module with the given environment

    dotenv.load_dotenv is mocked so no .env file is read
    """
    with patch.dict(os.environ, env_vars, clear=True):
        with patch("dotenv.load_dotenv"):
            return importlib.reload(config_module)


@pytest.fixture(autouse=True)
def _restore_config():
    yield
    reload_config_with_env({})


class TestDefaults:
    def test_defaults(self):
        config = reload_config_with_env({})
        assert config.Config.DEBUG is False
        assert config.Config.LOG_LEVEL == "INFO"
        assert config.Config.LOG_PATH is None
        assert config.Config.REGISTRY_PATH is None

    def test_debug_raises_default_log_level(self):
        config = reload_config_with_env({"TAGHOOKS_DEBUG": "true"})
        assert config.Config.DEBUG is True
        assert config.Config.LOG_LEVEL == "DEBUG"

    def test_explicit_values(self):
        config = reload_config_with_env({
            "TAGHOOKS_DEBUG": "TRUE",
            "TAGHOOKS_LOG_LEVEL": "warning",
            "TAGHOOKS_LOG_PATH": "/var/log/taghooks",
            "TAGHOOKS_REGISTRY": "hooks.yaml",
        })
        assert config.Config.DEBUG is True
        assert config.Config.LOG_LEVEL == "WARNING"
        assert config.Config.LOG_PATH == "/var/log/taghooks"
        assert config.Config.REGISTRY_PATH == "hooks.yaml"

    def test_empty_registry_is_unset(self):
        config = reload_config_with_env({"TAGHOOKS_REGISTRY": ""})
        assert config.Config.REGISTRY_PATH is None


class TestParseBool:
    @pytest.mark.parametrize("value, expected", [
        ("true", True),
        ("True", True),
        ("false", False),
        ("yes", False),
        (None, False),
    ])
    def test_parse_bool(self, value, expected):
        assert config_module._parse_bool(value) is expected

    def test_default_used_for_none(self):
        assert config_module._parse_bool(None, True) is True


class TestRequireRegistryPath:
    def test_missing_raises(self):
        config = reload_config_with_env({})
        with pytest.raises(config.ConfigurationError) as exc_info:
            config.Config.require_registry_path()
        assert exc_info.value.missing_vars == ["TAGHOOKS_REGISTRY"]
        assert "TAGHOOKS_REGISTRY" in str(exc_info.value)

    def test_returns_path(self):
        config = reload_config_with_env({"TAGHOOKS_REGISTRY": "hooks.yaml"})
        assert config.Config.require_registry_path() == "hooks.yaml"
