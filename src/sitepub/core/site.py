"""Site configuration: the config.toml schema, loaded once per build and read-only afterwards"""

import tomllib
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError


DEFAULT_TIMEFORMAT = "%B %e, %Y at %H:%M %Z"
DEFAULT_TIMEZONE = "UTC"
DEFAULT_FEED_PATH = "atom.xml"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class TaxonomyConfig(_Frozen):
    name: str
    feed: bool = False
    paginate_by: Optional[int] = Field(default=None, ge=0)


class MarkdownConfig(_Frozen):
    external_links_target_blank: bool = False
    highlight_code: bool = False
    highlight_theme: str = "base16-ocean-dark"
    render_emoji: bool = False
    bottom_footnotes: bool = False


class MenuItem(_Frozen):
    url: str
    name: str


class EmailLink(_Frozen):
    address: str


class GithubLink(_Frozen):
    username: str
    repo: Optional[str] = None
    branch: str = "main"


class LinkedinLink(_Frozen):
    username: str


class MastodonLink(_Frozen):
    instance: str
    username: str

    @property
    def url(self) -> str:
        return f"https://{self.instance}/{self.username}"


class FeedLink(_Frozen):
    path: str = DEFAULT_FEED_PATH


class PgpKey(_Frozen):
    url: str
    fingerprint: str


class Bio(_Frozen):
    gender: Optional[str] = None
    employer_name: Optional[str] = None
    employer_url: Optional[str] = None
    job_title: Optional[str] = None
    links: tuple[str, ...] = ()


class SiteExtra(_Frozen):
    """Recognized [extra] keys; anything else in the table is kept as untyped extras."""
    model_config = ConfigDict(frozen=True, extra="allow")

    logo: Optional[str] = None
    menu: tuple[MenuItem, ...] = ()
    language_code: str = "en-US"
    opengraph: bool = True
    timezone: str = DEFAULT_TIMEZONE
    timeformat: str = DEFAULT_TIMEFORMAT
    cv_file: Optional[str] = None
    edit_page: bool = False
    simplified_tags: bool = False
    job_seeking: bool = False
    email: Optional[EmailLink] = None
    github: Optional[GithubLink] = None
    linkedin: Optional[LinkedinLink] = None
    mastodon: Optional[MastodonLink] = None
    feed: FeedLink = FeedLink()
    giscus: Optional[dict[str, Any]] = None
    pgp_key: Optional[PgpKey] = None
    bio: Optional[Bio] = None


class SiteConfig(_Frozen):
    base_url: str = "/"
    title: str = ""
    description: str = ""
    author: Optional[str] = None
    default_language: str = "en"
    compile_sass: bool = False
    minify_html: bool = False
    generate_feeds: bool = False
    feed_limit: Optional[int] = Field(default=None, ge=1)
    taxonomies: tuple[TaxonomyConfig, ...] = ()
    markdown: MarkdownConfig = MarkdownConfig()
    extra: SiteExtra = SiteExtra()

    def has_taxonomy(self, name: str) -> bool:
        return any(t.name == name for t in self.taxonomies)

    def taxonomy(self, name: str) -> Optional[TaxonomyConfig]:
        return next((t for t in self.taxonomies if t.name == name), None)

    def absolute_url(self, path: str) -> str:
        """Join a site-relative path (or a full URL, returned as-is) onto base_url."""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    @property
    def feed_path(self) -> str:
        return self.extra.feed.path.lstrip("/")

    @property
    def feed_url(self) -> str:
        return self.absolute_url(self.feed_path)

    @property
    def feed_filename(self) -> str:
        """Last path component of the site feed, reused for per-term feeds."""
        return self.feed_path.rsplit("/", 1)[-1]


def load_site_config(path: Path) -> SiteConfig:
    """Parse and validate a Zola-style config.toml. Raises ValueError on bad TOML or shape."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ValueError(f"Site configuration not found: {path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid {path.name}: {e}") from e
    try:
        return SiteConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid {path.name}: {e}") from e
