"""Jinja2 template layer: environment setup and per-output render functions"""

from datetime import datetime, timezone
from pathlib import Path

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, select_autoescape

from sitepub.core.macros import register_macros
from sitepub.core.models import Document, Pager
from sitepub.core.paginate import sort_pages
from sitepub.core.projects import ProjectFetcher
from sitepub.core.site import SiteConfig
from sitepub.core.taxonomy import tag_url


DEFAULT_TEMPLATES = Path(__file__).resolve().parent.parent / "templates"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def make_environment(
    config: SiteConfig,
    templates_dir: Path | None = None,
    fetcher: ProjectFetcher | None = None,
    posts_section: str = "posts",
    ) -> Environment:
    """Jinja2 environment: site templates first, packaged defaults second, macros registered."""
    loaders = []
    if templates_dir is not None and templates_dir.is_dir():
        loaders.append(FileSystemLoader(str(templates_dir)))
    loaders.append(FileSystemLoader(str(DEFAULT_TEMPLATES)))
    env = Environment(
        loader=ChoiceLoader(loaders),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    return register_macros(env, config, fetcher=fetcher, posts_section=posts_section)


def page_template(page: Document, section: Document | None) -> str:
    """Front-matter template, else the parent section's page_template, else page.html."""
    if page.template:
        return page.template
    if section is not None and section.page_template:
        return section.page_template
    return "page.html"


def section_template(section: Document) -> str:
    if section.template:
        return section.template
    return "index.html" if section.path == "_index.md" else "section.html"


def render_page(env: Environment, page: Document, section: Document | None = None) -> str:
    return env.get_template(page_template(page, section)).render(page=page, section=section)


def render_section(
    env: Environment,
    section: Document,
    pager: Pager,
    subsections: list[Document] | None = None,
    ) -> str:
    return env.get_template(section_template(section)).render(
        section=section,
        paginator=pager,
        subsections=subsections or [],
    )


def render_taxonomy_list(env: Environment, tag_index: dict[str, tuple[Document, ...]]) -> str:
    terms = [{"name": tag, "url": tag_url(tag), "pages": pages} for tag, pages in tag_index.items()]
    return env.get_template("taxonomy_list.html").render(terms=terms)


def render_taxonomy_single(env: Environment, tag: str, pager: Pager) -> str:
    term = {"name": tag, "url": tag_url(tag), "pages": pager.pages}
    return env.get_template("taxonomy_single.html").render(term=term, paginator=pager)


def render_404(env: Environment) -> str:
    return env.get_template("404.html").render()


def render_feed(
    env: Environment,
    pages: list[Document],
    config: SiteConfig,
    feed_url: str | None = None,
    term: str | None = None,
    ) -> str:
    """Atom feed of dated pages, newest first; `updated` is the newest page date, never now.

    feed_url and term are set for a per-tag feed; the site feed uses config.feed_url.
    """
    dated = sort_pages([p for p in pages if p.date is not None])
    if config.feed_limit:
        dated = dated[:config.feed_limit]
    updated = max(((p.updated or p.date) for p in dated), default=EPOCH)
    return env.get_template("atom.xml").render(
        pages=dated,
        updated=updated.isoformat(),
        feed_url=feed_url or config.feed_url,
        term=term,
    )
