"""Tag taxonomy: the derived tag → pages index and inline tag links"""

from markupsafe import Markup

from sitepub.core.models import Document
from sitepub.core.paginate import sort_pages
from sitepub.core.site import SiteConfig
from sitepub.core.utils.slug import slugify


TAXONOMY = "tags"


def tag_url(tag: str) -> str:
    """Site-relative URL of a tag page."""
    return f"/{TAXONOMY}/{slugify(tag) or tag}/"


def build_tag_index(pages: list[Document], config: SiteConfig) -> dict[str, tuple[Document, ...]]:
    """Map each tag to the pages carrying it (newest first); tags sorted by name.

    Tags sharing a slug ('Rust', 'rust') are one tag, named by the first spelling
    met in source-path order. Empty when the site does not declare a 'tags' taxonomy.
    """
    if not config.has_taxonomy(TAXONOMY):
        return {}
    names: dict[str, str] = {}
    index: dict[str, list[Document]] = {}
    for page in sorted(pages, key=lambda p: p.path):
        for tag in page.tags:
            name = names.setdefault(tag_url(tag), tag)
            bucket = index.setdefault(name, [])
            if not bucket or bucket[-1] is not page:
                bucket.append(page)
    return {tag: tuple(sort_pages(index[tag])) for tag in sorted(index, key=lambda t: (t.casefold(), t))}


def render_tag_links(tags: tuple[str, ...] | list[str], config: SiteConfig | None = None) -> Markup:
    """Render 'Tags = [ <a>a</a>, <a>b</a> ]' in source order; '' when there are no tags."""
    if not tags:
        return Markup("")
    links = [
        Markup('<a href="{}">{}</a>').format(
            config.absolute_url(tag_url(tag)) if config else tag_url(tag), tag)
        for tag in tags
    ]
    return Markup("Tags = [ ") + Markup(", ").join(links) + Markup(" ]")
