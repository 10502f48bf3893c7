"""SEO and Open Graph metadata: description/type resolution and meta tag emission"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from markupsafe import Markup

from sitepub.core.models import Document
from sitepub.core.site import SiteConfig
from sitepub.core.utils.text import strip_tags, truncate


DESCRIPTION_LENGTH = 200
ARTICLE = "article"
WEBSITE = "website"


@dataclass(frozen=True)
class SeoInput:
    """Everything the meta tag emitter needs for one rendered page."""
    title:          str
    url:            str                         # absolute permalink
    description:    str = ""
    type:           str = WEBSITE
    title_addition: str = ""
    page_images:    Sequence[str] = ()
    section_images: Sequence[str] = ()
    date:           Optional[datetime] = None
    is_404:         bool = False


def resolve_description(document: Document) -> str:
    """Explicit front-matter description verbatim, else stripped content cut to 200 characters."""
    if document.description is not None:
        return document.description
    return truncate(strip_tags(document.content), DESCRIPTION_LENGTH)


def resolve_type(document: Document, posts_section: str = "posts") -> str:
    """'article' for pages under the posts section, 'website' for everything else."""
    if not document.is_section and document.components[:1] == (posts_section,):
        return ARTICLE
    return WEBSITE


def select_image(
    page_images: Sequence[str],
    section_images: Sequence[str],
    config: SiteConfig,
    ) -> str | None:
    """First page image, else first section image, else the site logo; absolute URL or None."""
    for images in (page_images, section_images):
        if images:
            return config.absolute_url(images[0])
    if config.extra.logo:
        return config.absolute_url(config.extra.logo)
    return None


def page_images(document: Document) -> tuple[str, ...]:
    """Page images, with a bundle's relative paths resolved against its permalink."""
    if not document.is_bundle:
        return document.extra.images
    return tuple(img if img.startswith(("/", "http://", "https://")) else document.permalink + img
                 for img in document.extra.images)


def seo_input(
    document: Document,
    config: SiteConfig,
    section: Document | None = None,
    posts_section: str = "posts",
    title_addition: str = "",
    ) -> SeoInput:
    """Build the SeoInput for a page or section document."""
    return SeoInput(
        title=document.title or config.title,
        url=document.permalink,
        description=resolve_description(document),
        type=resolve_type(document, posts_section),
        title_addition=title_addition,
        page_images=page_images(document),
        section_images=section.extra.images if section else (),
        date=document.date,
    )


def _meta(attr: str, key: str, value: str) -> Markup:
    return Markup('<meta {}="{}" content="{}">').format(Markup(attr), key, value)


def emit_seo(seo: SeoInput, config: SiteConfig) -> Markup:
    """Emit robots, canonical, description and Open Graph tags in a fixed order."""
    tags = [
        _meta("name", "robots", "noindex, nofollow" if seo.is_404 else "index, follow"),
        Markup('<link rel="canonical" href="{}">').format(seo.url),
    ]
    if seo.description:
        tags.append(_meta("name", "description", seo.description))
    if config.author:
        tags.append(_meta("name", "author", config.author))

    if config.extra.opengraph:
        tags += [
            _meta("property", "og:title", f"{seo.title}{seo.title_addition}"),
            _meta("property", "og:description", seo.description or config.description),
            _meta("property", "og:type", seo.type),
            _meta("property", "og:url", seo.url),
        ]
        image = select_image(seo.page_images, seo.section_images, config)
        if image:
            tags.append(_meta("property", "og:image", image))
        if config.title:
            tags.append(_meta("property", "og:site_name", config.title))
        tags.append(_meta("property", "og:locale", config.extra.language_code.replace("-", "_")))
        if seo.date is not None:
            tags.append(_meta("property", "article:published_time", seo.date.isoformat()))

    return Markup("\n").join(tags)
