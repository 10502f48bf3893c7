"""Shared fixtures for core unit tests"""

import pytest

from sitepub.core.models import Document
from sitepub.core.parse import derive_url
from sitepub.core.site import SiteConfig


@pytest.fixture(name="config")
def config_fixture():
    return SiteConfig(
        base_url="https://example.com",
        title="My Blog",
        description="Projects and notes.",
        author="Jane Doe",
        taxonomies=[{"name": "tags"}],
        extra={"logo": "images/logo.png", "language_code": "en-US"},
    )


@pytest.fixture(name="make_doc")
def make_doc_fixture():
    """Factory for Documents whose url/slug follow the content path."""
    def _make(path: str = "posts/x.md", **kwargs) -> Document:
        slug, url = derive_url(path)
        fields = {
            "path": path,
            "title": "Title",
            "url": url,
            "permalink": f"https://example.com{url}",
            "markdown": "",
            "content": "",
            "slug": slug,
            "is_section": path.endswith("_index.md"),
        }
        fields.update(kwargs)
        return Document(**fields)
    return _make
