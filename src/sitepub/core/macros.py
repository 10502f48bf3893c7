"""Template helpers exposed to Jinja2 as globals, each bound to the build's SiteConfig"""

from dataclasses import replace
from datetime import datetime
from typing import Callable

from jinja2 import Environment
from markupsafe import Markup

from sitepub.core.models import Document
from sitepub.core.projects import ProjectFetcher, render_projects
from sitepub.core.seo import SeoInput, emit_seo, resolve_description, resolve_type, seo_input
from sitepub.core.site import SiteConfig
from sitepub.core.taxonomy import render_tag_links, tag_url
from sitepub.core.timestamps import format_timestamp, time_tag


def edit_link(document: Document, config: SiteConfig) -> str | None:
    """GitHub edit URL for a document's source file, when edit_page and a repo are configured."""
    github = config.extra.github
    if not config.extra.edit_page or github is None or not github.repo:
        return None
    return f"https://github.com/{github.username}/{github.repo}/edit/{github.branch}/content/{document.path}"


def build_macros(
    config: SiteConfig,
    fetcher: ProjectFetcher | None = None,
    posts_section: str = "posts",
    ) -> dict[str, Callable]:
    """Return the helper functions templates call, closed over the build's config."""

    def seo(document: Document | None = None, section: Document | None = None,
            title: str = "", title_addition: str = "", path: str | None = None,
            is_404: bool = False) -> Markup:
        """Meta tags for a document, or for a generated page described by title and path.

        A path given alongside a document replaces its URL (pager 2+ of a listing).
        """
        if document is None:
            data = SeoInput(title=title or config.title, url=config.absolute_url(path or "/"),
                            description=config.description, is_404=is_404,
                            title_addition=title_addition)
        else:
            data = seo_input(document, config, section, posts_section, title_addition)
            if path is not None:
                data = replace(data, url=config.absolute_url(path))
        return emit_seo(data, config)

    def projects(repos) -> Markup:
        if fetcher is None or not repos:
            return Markup("")
        return render_projects(fetcher.fetch_all(list(repos)))

    def timestamp(date: datetime | None):
        return format_timestamp(date, config)

    return {
        "url": config.absolute_url,
        "time_tag": lambda date: time_tag(date, config),
        "timestamp": timestamp,
        "tag_links": lambda tags: render_tag_links(tags, config),
        "tag_url": lambda tag: config.absolute_url(tag_url(tag)),
        "edit_link": lambda document: edit_link(document, config),
        "description": resolve_description,
        "page_type": lambda document: resolve_type(document, posts_section),
        "seo": seo,
        "projects": projects,
    }


def register_macros(env: Environment, config: SiteConfig, **kwargs) -> Environment:
    env.globals.update(build_macros(config, **kwargs))
    env.globals["config"] = config
    return env
