"""Tests for core/hooks.py — Hooks facade and the default instance."""

import copy
import pickle

import pytest
import yaml

import taghooks
import taghooks.config as config_module
from taghooks.core import hooks as hooks_module
from taghooks.core.hooks import Hooks, get_hooks
from taghooks.core.registry import HookRegistry


@pytest.fixture()
def fresh_default(monkeypatch):
    """Start each test without a default Hooks instance."""
    monkeypatch.setattr(hooks_module, "_default_hooks", None)
    monkeypatch.setattr(config_module.Config, "REGISTRY_PATH", None)
    monkeypatch.setattr(config_module.Config, "DEBUG", False)


class TestHooksFacade:
    def test_shares_injected_registry(self):
        registry = HookRegistry()
        first, second = Hooks(registry), Hooks(registry)
        first.add_filter("t", str.upper)
        assert second.apply_filters("t", "abc") == "ABC"

    def test_default_registry_is_private(self):
        Hooks().add_filter("t", str.upper)
        assert Hooks().has_filter("t") is False

    def test_full_round_trip(self, hooks):
        def exclaim(value):
            return value + "!"

        assert hooks.add_filter("t", exclaim, 0) is True
        assert hooks.has_filter("t", exclaim) == 0
        assert hooks.apply_filters("t", "hi") == "hi!"
        assert hooks.apply_filters_ref_array("t", ["hi"]) == "hi!"
        assert hooks.remove_filter("t", exclaim, 0) is True
        assert hooks.has_filter("t") is False

    def test_action_aliases(self, hooks):
        calls = []
        hooks.add_action("a", calls.append)
        assert hooks.has_action("a") is True
        hooks.do_action("a", 1)
        hooks.do_action_ref_array("a", [2])
        assert calls == [1, 2]
        assert hooks.did_action("a") == 2
        assert hooks.remove_action("a", calls.append) is True
        hooks.add_action("a", calls.append)
        assert hooks.remove_all_actions("a") is True
        assert hooks.has_action("a") is False

    def test_remove_all_filters_by_priority(self, hooks):
        hooks.add_filter("t", str.upper, 1)
        hooks.add_filter("t", str.strip, 2)
        hooks.remove_all_filters("t", 1)
        assert hooks.apply_filters("t", " a ") == "a"

    def test_cannot_copy(self, hooks):
        with pytest.raises(TypeError):
            copy.copy(hooks)
        with pytest.raises(TypeError):
            copy.deepcopy(hooks)

    def test_cannot_pickle(self, hooks):
        with pytest.raises(TypeError):
            pickle.dumps(hooks)


class TestGetHooks:
    def test_returns_same_instance(self, fresh_default):
        assert get_hooks() is get_hooks()

    def test_exported_from_package(self, fresh_default):
        assert taghooks.get_hooks() is get_hooks()

    def test_loads_configured_registry(self, fresh_default, monkeypatch, tmp_path):
        path = tmp_path / "hooks.yaml"
        path.write_text(
            yaml.dump([{"tag": "path", "callback": "os.path:basename"}]),
            encoding="utf-8",
        )
        monkeypatch.setattr(config_module.Config, "REGISTRY_PATH", str(path))

        assert get_hooks().apply_filters("path", "/tmp/report.txt") == "report.txt"

    def test_debug_enables_trace(self, fresh_default, monkeypatch):
        monkeypatch.setattr(config_module.Config, "DEBUG", True)
        assert get_hooks().dispatcher.trace is True
