"""Tests for the YAML config loader."""

import pytest

from rollbox import config as cfg_mod


@pytest.fixture(autouse=True)
def _fresh_config():
    orig = cfg_mod._config
    cfg_mod.reset_config()
    yield
    cfg_mod._config = orig


def test_missing_file_uses_defaults(tmp_path):
    cfg = cfg_mod.load_config(tmp_path / "absent.yaml")
    assert cfg["server"]["port"] == cfg_mod.DEFAULTS["server"]["port"]
    assert cfg["memory"]["max_entries"] == 1000


def test_file_values_merge_over_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("server:\n  port: 9001\ndice:\n  max_expression_length: 64\n")
    cfg = cfg_mod.load_config(path)
    assert cfg["server"]["port"] == 9001
    assert cfg["server"]["host"] == cfg_mod.DEFAULTS["server"]["host"]
    assert cfg["dice"]["max_expression_length"] == 64


def test_env_vars_resolved(tmp_path, monkeypatch):
    monkeypatch.setenv("ROLLBOX_TEST_HOOK", "http://hooks.local/x")
    path = tmp_path / "config.yaml"
    path.write_text('notifier:\n  webhook_url: "${ROLLBOX_TEST_HOOK}"\n')
    assert cfg_mod.load_config(path)["notifier"]["webhook_url"] == "http://hooks.local/x"


def test_unset_env_var_becomes_empty(tmp_path, monkeypatch):
    monkeypatch.delenv("ROLLBOX_UNSET_VAR", raising=False)
    path = tmp_path / "config.yaml"
    path.write_text('notifier:\n  webhook_url: "${ROLLBOX_UNSET_VAR}"\n')
    assert cfg_mod.load_config(path)["notifier"]["webhook_url"] == ""


def test_defaults_not_mutated(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("server:\n  port: 1234\n")
    cfg_mod.load_config(path)
    assert cfg_mod.DEFAULTS["server"]["port"] != 1234


def test_get_config_caches(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("memory:\n  max_entries: 5\n")
    first = cfg_mod.load_config(path)
    assert cfg_mod.get_config() is first
