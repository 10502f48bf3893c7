"""Unit tests for core/site.py"""

import pytest

from sitepub.core.site import DEFAULT_TIMEFORMAT, SiteConfig, load_site_config


def test_load_site_config_full(site_dir):
    """The sample config.toml validates into typed, frozen models."""
    config = load_site_config(site_dir / "config.toml")
    assert config.title == "My Blog"
    assert config.has_taxonomy("tags")
    assert config.markdown.external_links_target_blank is True
    assert config.extra.menu[0].name == "Home"
    assert config.extra.github.username == "jane"
    assert config.extra.github.branch == "main"
    assert config.feed_path == "atom.xml"
    with pytest.raises(ValueError):
        config.title = "changed"


def test_site_config_defaults():
    """Optional keys resolve to documented defaults."""
    config = SiteConfig()
    assert config.base_url == "/"
    assert config.extra.timeformat == DEFAULT_TIMEFORMAT
    assert config.extra.timezone == "UTC"
    assert config.extra.opengraph is True
    assert config.extra.feed.path == "atom.xml"
    assert config.taxonomies == ()
    assert config.has_taxonomy("tags") is False


def test_site_config_keeps_unknown_extra_keys():
    config = SiteConfig(extra={"favicon": "f.ico"})
    assert config.extra.model_extra == {"favicon": "f.ico"}


@pytest.mark.parametrize("base_url,path,expected", [
    ("/", "/posts/x/", "/posts/x/"),
    ("/", "images/logo.png", "/images/logo.png"),
    ("https://example.com", "/posts/x/", "https://example.com/posts/x/"),
    ("https://example.com/", "images/a.png", "https://example.com/images/a.png"),
    ("https://example.com", "https://cdn.example.org/a.png", "https://cdn.example.org/a.png"),
])
def test_absolute_url(base_url, path, expected):
    assert SiteConfig(base_url=base_url).absolute_url(path) == expected


def test_load_site_config_invalid_toml(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("title = [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.toml"):
        load_site_config(path)


def test_load_site_config_invalid_shape(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('taxonomies = "tags"\n')
    with pytest.raises(ValueError, match="Invalid config.toml"):
        load_site_config(path)


def test_load_site_config_missing_file(tmp_path):
    with pytest.raises(ValueError, match="not found"):
        load_site_config(tmp_path / "config.toml")
