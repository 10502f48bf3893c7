"""Unit tests for config.py"""

import pytest

from sitepub.config import load_config


def test_load_config_defaults(monkeypatch):
    """Settings defaults are used when no env var or CLI override exists."""
    monkeypatch.delenv("SITEPUB_OUTPUT_DIR", raising=False)
    settings = load_config()
    assert settings.content_dir == "content"
    assert settings.output_dir == "public"
    assert settings.config_file == "config.toml"
    assert settings.posts_section == "posts"
    assert settings.include_drafts is False


def test_load_config_uses_env_output_dir(monkeypatch):
    """SITEPUB_OUTPUT_DIR env var is picked up by load_config."""
    monkeypatch.setenv("SITEPUB_OUTPUT_DIR", "site")
    assert load_config().output_dir == "site"


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var."""
    monkeypatch.setenv("SITEPUB_OUTPUT_DIR", "site")
    settings = load_config(overrides={"output_dir": "cli-out"})
    assert settings.output_dir == "cli-out"


def test_load_config_none_override_ignored(monkeypatch):
    """None overrides (unset CLI options) leave the env value in place."""
    monkeypatch.setenv("SITEPUB_CONTENT_DIR", "docs")
    settings = load_config(overrides={"content_dir": None})
    assert settings.content_dir == "docs"


def test_load_config_env_coerces_types(monkeypatch):
    """Env values are coerced to the field types."""
    monkeypatch.setenv("SITEPUB_FETCH_TIMEOUT", "2.5")
    monkeypatch.setenv("SITEPUB_INCLUDE_DRAFTS", "true")
    settings = load_config()
    assert settings.fetch_timeout == 2.5
    assert settings.include_drafts is True


def test_load_config_invalid_value(monkeypatch):
    """An out-of-range value raises ValueError naming the settings."""
    monkeypatch.setenv("SITEPUB_FETCH_TIMEOUT", "0")
    with pytest.raises(ValueError, match="Invalid settings"):
        load_config()
