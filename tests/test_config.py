"""Tests for configuration helpers."""

from pathlib import Path

import pytest

from lyricsensei import config
from lyricsensei.exceptions import ConfigError


def test_defaults_are_valid():
    config.validate_config()
    assert 1 <= config.BATCH_SIZE <= config.MAX_TEXTS_PER_REQUEST


def test_invalid_batch_size(monkeypatch):
    monkeypatch.setattr(config, "BATCH_SIZE", 101)
    with pytest.raises(ConfigError):
        config.validate_config()


def test_invalid_delay(monkeypatch):
    monkeypatch.setattr(config, "LINE_DELAY", -1)
    with pytest.raises(ConfigError):
        config.validate_config()


def test_cache_dir_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("LYRICSENSEI_CACHE_DIR", str(tmp_path))
    assert config.get_cache_dir() == Path(tmp_path)


def test_default_cache_dir(monkeypatch):
    monkeypatch.delenv("LYRICSENSEI_CACHE_DIR", raising=False)
    assert config.get_cache_dir() == config.DEFAULT_CACHE_DIR


def test_azure_credentials(monkeypatch):
    monkeypatch.setenv("AZURE_TRANSLATOR_KEY", "key")
    monkeypatch.setenv("AZURE_TRANSLATOR_REGION", "westeurope")
    assert config.get_azure_credentials() == ("key", "westeurope")


def test_azure_credentials_incomplete(monkeypatch):
    monkeypatch.setenv("AZURE_TRANSLATOR_KEY", "key")
    monkeypatch.delenv("AZURE_TRANSLATOR_REGION", raising=False)
    assert config.get_azure_credentials() is None


def test_openai_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    assert config.get_openai_api_key() == "sk-test"
    monkeypatch.setenv("OPENAI_API_KEY", "")
    assert config.get_openai_api_key() is None
