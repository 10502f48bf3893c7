"""Build pipeline: config -> content -> taxonomy -> render -> write"""

import logging
from pathlib import Path

from sitepub.config import Settings
from sitepub.core.export import OutputWriter, output_path
from sitepub.core.models import BuildReport, Content, Document
from sitepub.core.paginate import paginate, sort_pages
from sitepub.core.parse import MD_EXTENSIONS, SECTION_FILE, load_content
from sitepub.core.projects import ProjectFetcher
from sitepub.core.render import (
    make_environment,
    render_404,
    render_feed,
    render_page,
    render_section,
    render_taxonomy_list,
    render_taxonomy_single,
)
from sitepub.core.seo import ARTICLE, resolve_type
from sitepub.core.site import SiteConfig, load_site_config
from sitepub.core.taxonomy import TAXONOMY, build_tag_index, tag_url


logger = logging.getLogger(__name__)


def _root_section(config: SiteConfig) -> Document:
    """Stand-in for a missing content/_index.md."""
    return Document(path=SECTION_FILE, title=config.title, url="/",
                    permalink=config.absolute_url("/"), markdown="", content="",
                    description=config.description or None, is_section=True)


def with_root_section(content: Content, config: SiteConfig) -> Content:
    if content.section(SECTION_FILE) is not None:
        return content
    return Content(pages=content.pages, sections=(_root_section(config), *content.sections))


def section_pages(content: Content, section: Document, posts_section: str = "posts") -> list[Document]:
    """Pages listed by a section: its own pages, or every article for the home page."""
    if section.path == SECTION_FILE:
        pages = [p for p in content.pages if resolve_type(p, posts_section) == ARTICLE]
    else:
        pages = content.pages_of(section)
    return sort_pages(pages, section.sort_by)


def run_load(settings: Settings) -> tuple[SiteConfig, Content]:
    """Load and validate the site config and every content document.

    Raises ValueError for a bad config and RuntimeError for a bad document.
    """
    config = load_site_config(Path(settings.config_file))
    content = load_content(Path(settings.content_dir), config, settings.include_drafts)
    logger.info("loaded %d page(s) and %d section(s)", len(content.pages), len(content.sections))
    return config, with_root_section(content, config)


def build_site(settings: Settings, fetcher: ProjectFetcher | None = None) -> BuildReport:
    """Run a full single-pass build and return the paths written."""
    config, content = run_load(settings)
    tag_index = build_tag_index(list(content.pages), config)

    owns_fetcher = fetcher is None
    if fetcher is None:
        github = config.extra.github
        fetcher = ProjectFetcher(settings.github_api_url, owner=github.username if github else None,
                                 timeout=settings.fetch_timeout)
    try:
        env = make_environment(config, Path(settings.templates_dir), fetcher, settings.posts_section)
        writer = OutputWriter(Path(settings.output_dir))
        writer.clean(keep=Path(settings.content_dir))
        report = BuildReport(written=writer.written)

        writer.copy_tree(Path(settings.static_dir))

        for page in content.pages:
            section = content.section(page.section_path)
            writer.write(output_path(page.url), render_page(env, page, section))
            if page.is_bundle:
                bundle_dir = Path(settings.content_dir, page.path).parent
                writer.copy_assets(bundle_dir, page.url, skip=MD_EXTENSIONS)
            report.pages += 1

        for section in content.sections:
            pages = section_pages(content, section, settings.posts_section)
            subsections = content.subsections_of(section)
            for pager in paginate(pages, section.paginate_by, section.url):
                writer.write(output_path(pager.url), render_section(env, section, pager, subsections))
            report.sections += 1

        if config.has_taxonomy(TAXONOMY):
            writer.write(output_path(f"/{TAXONOMY}/"), render_taxonomy_list(env, tag_index))
            taxonomy = config.taxonomy(TAXONOMY)
            for tag, pages in tag_index.items():
                for pager in paginate(list(pages), taxonomy.paginate_by, tag_url(tag)):
                    writer.write(output_path(pager.url), render_taxonomy_single(env, tag, pager))
                if taxonomy.feed:
                    path = f"{tag_url(tag).strip('/')}/{config.feed_filename}"
                    writer.write(path, render_feed(env, list(pages), config, config.absolute_url(path), tag))
                report.tags += 1

        writer.write("404.html", render_404(env))

        if config.generate_feeds:
            writer.write(config.feed_path, render_feed(env, list(content.pages), config))
    finally:
        if owns_fetcher:
            fetcher.close()

    logger.info("build complete: %s", report.as_dict())
    return report
