import json
from pathlib import Path

import pytest

from jsonvista import config


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr(config, "get_config_path", lambda: path)
    monkeypatch.delenv(config.DOCUMENT_ENV_VAR, raising=False)
    monkeypatch.delenv(config.AUTO_FIT_ENV_VAR, raising=False)
    return path


def test_missing_config_is_empty(config_path):
    assert config.load_config() == {}
    assert config.get_document_path() is None


def test_corrupt_config_is_empty(config_path):
    config_path.write_text("{not json", encoding="utf-8")
    assert config.load_config() == {}


def test_set_and_get_document_path(config_path):
    config.set_document_path(Path("/data/doc.json"))

    assert json.loads(config_path.read_text(encoding="utf-8")) == {"document_path": "/data/doc.json"}
    assert config.get_document_path() == Path("/data/doc.json")


def test_environment_overrides_config(config_path, monkeypatch):
    config.set_document_path(Path("/data/doc.json"))
    monkeypatch.setenv(config.DOCUMENT_ENV_VAR, "/tmp/other.json")
    assert config.get_document_path() == Path("/tmp/other.json")


def test_auto_fit_defaults_on(config_path):
    assert config.is_auto_fit_enabled() is True


def test_auto_fit_from_config(config_path):
    config.save_config({"auto_fit": False})
    assert config.is_auto_fit_enabled() is False


@pytest.mark.parametrize("value, expected", [("0", False), ("off", False), ("1", True), ("yes", True)])
def test_auto_fit_from_environment(config_path, monkeypatch, value, expected):
    monkeypatch.setenv(config.AUTO_FIT_ENV_VAR, value)
    assert config.is_auto_fit_enabled() is expected
