"""Unit tests for core/taxonomy.py"""

from datetime import datetime, timezone

from sitepub.core.site import SiteConfig
from sitepub.core.taxonomy import build_tag_index, render_tag_links, tag_url


def _date(day):
    return datetime(2024, 1, day, tzinfo=timezone.utc)


def test_tag_url_contains_tag_name():
    assert tag_url("rust") == "/tags/rust/"
    assert tag_url("Search Engines") == "/tags/search-engines/"


def test_render_tag_links_preserves_order():
    html = render_tag_links(("search", "rust"))
    assert html == 'Tags = [ <a href="/tags/search/">search</a>, <a href="/tags/rust/">rust</a> ]'


def test_render_tag_links_absolute_with_config(config):
    html = render_tag_links(["rust"], config)
    assert html == 'Tags = [ <a href="https://example.com/tags/rust/">rust</a> ]'


def test_render_tag_links_escapes_names():
    assert "&lt;b&gt;" in render_tag_links(["<b>"])


def test_render_tag_links_empty():
    assert render_tag_links(()) == ""


def test_build_tag_index(config, make_doc):
    """Each tag maps to its pages newest first; tags come out sorted."""
    a = make_doc("posts/a.md", tags=("rust", "db"), date=_date(1))
    b = make_doc("posts/b.md", tags=("rust",), date=_date(5))
    c = make_doc("posts/c.md", tags=())
    index = build_tag_index([a, b, c], config)
    assert list(index) == ["db", "rust"]
    assert index["rust"] == (b, a)
    assert index["db"] == (a,)


def test_build_tag_index_merges_same_slug(config, make_doc):
    a = make_doc("posts/a.md", tags=("Rust",), date=_date(1))
    b = make_doc("posts/b.md", tags=("rust",), date=_date(2))
    index = build_tag_index([b, a], config)
    assert list(index) == ["Rust"]
    assert index["Rust"] == (b, a)


def test_build_tag_index_is_order_independent(config, make_doc):
    a = make_doc("posts/a.md", tags=("x",), date=_date(1))
    b = make_doc("posts/b.md", tags=("x",), date=_date(1))
    assert build_tag_index([a, b], config) == build_tag_index([b, a], config)


def test_build_tag_index_requires_tags_taxonomy(make_doc):
    assert build_tag_index([make_doc(tags=("rust",))], SiteConfig()) == {}
