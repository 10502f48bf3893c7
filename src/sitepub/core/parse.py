"""File discovery, front matter extraction, and Document construction"""

import re
import tomllib
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from sitepub.core.markdown import render_markdown, render_summary
from sitepub.core.models import Content, Document, PageExtra
from sitepub.core.site import SiteConfig
from sitepub.core.utils.slug import slugify
from sitepub.core.utils.text import reading_time, strip_tags, word_count


TOML_FRONTMATTER_RE = re.compile(r'\A\+\+\+[ \t]*\r?\n(.*?)^\+\+\+[ \t]*(?:\r?\n|\Z)', re.DOTALL | re.MULTILINE)
YAML_FRONTMATTER_RE = re.compile(r'\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)', re.DOTALL | re.MULTILINE)
MD_EXTENSIONS = {'.md'}
SECTION_FILE = '_index.md'
BUNDLE_FILE = 'index.md'
SORT_KEYS = {'date', 'weight', 'title', 'none'}


def _load_toml(text: str) -> Any:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML front matter: {e}") from e


def _load_yaml(text: str) -> Any:
    try:
        return yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML front matter: {e}") from e


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Return (front_matter, body). '+++' blocks are TOML, '---' blocks are YAML."""
    for fence, pattern, load in (('+++', TOML_FRONTMATTER_RE, _load_toml),
                                 ('---', YAML_FRONTMATTER_RE, _load_yaml)):
        if not text.startswith(fence):
            continue
        m = pattern.match(text)
        if not m:
            raise ValueError(f"Unterminated front matter: missing closing '{fence}'")
        fm = load(m.group(1))
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid front matter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def _coerce_date(value: Any, name: str) -> datetime | None:
    """Normalize a TOML/YAML date, datetime or ISO string to an aware datetime (naive → UTC)."""
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError as e:
            raise ValueError(f"Invalid {name}: {value!r}") from e
    elif isinstance(value, date) and not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    elif not isinstance(value, datetime):
        raise ValueError(f"Invalid {name}: expected a date, got {type(value).__name__}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _coerce_tags(fm: dict[str, Any]) -> tuple[str, ...]:
    """Tags from [taxonomies].tags (or a top-level tags list), de-duplicated in source order."""
    taxonomies = fm.get('taxonomies') or {}
    if not isinstance(taxonomies, dict):
        raise ValueError("Invalid taxonomies: expected a table")
    tags = taxonomies.get('tags', fm.get('tags')) or []
    if isinstance(tags, str) or not isinstance(tags, list):
        raise ValueError("Invalid tags: expected a list of strings")
    return tuple(dict.fromkeys(str(t).strip() for t in tags if str(t).strip()))


def _optional_int(fm: dict[str, Any], key: str) -> int | None:
    value = fm.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Invalid {key}: expected an integer, got {value!r}")
    return value


def derive_url(rel_path: str, slug: str | None = None) -> tuple[str, str]:
    """Return (slug, site-relative url) for a content path such as 'posts/hello.md'."""
    parts = rel_path.split('/')
    name = parts[-1]
    if name == SECTION_FILE:
        dirs = parts[:-1]
        return (dirs[-1] if dirs else ''), ('/' + '/'.join(dirs) + '/' if dirs else '/')
    if name == BUNDLE_FILE and len(parts) > 1:
        dirs, stem = parts[:-2], parts[-2]
    else:
        dirs, stem = parts[:-1], Path(name).stem
    slug = slug or slugify(stem) or stem
    return slug, '/' + '/'.join((*dirs, slug)) + '/'


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS and p.is_file())


def parse_file(path: Path, root: Path, config: SiteConfig) -> Document:
    """Parse one markdown file under root into a rendered, immutable Document."""
    raw = path.read_text(encoding='utf-8')
    fm, body = split_front_matter(raw)
    rel = path.relative_to(root).as_posix()
    is_section = path.name == SECTION_FILE

    explicit_slug = fm.get('slug')
    if explicit_slug is not None and not isinstance(explicit_slug, str):
        raise ValueError(f"Invalid slug: {explicit_slug!r}")
    slug, url = derive_url(rel, None if is_section else explicit_slug)

    try:
        extra = PageExtra.model_validate(fm.get('extra') or {})
    except ValidationError as e:
        raise ValueError(f"Invalid extra: {e}") from e

    sort_by = fm.get('sort_by', 'date')
    if sort_by not in SORT_KEYS:
        raise ValueError(f"Invalid sort_by: {sort_by!r} (expected one of {sorted(SORT_KEYS)})")
    paginate_by = _optional_int(fm, 'paginate_by')
    if paginate_by is not None and paginate_by < 0:
        raise ValueError(f"Invalid paginate_by: {paginate_by}")

    content = render_markdown(body, config.markdown)
    words = word_count(strip_tags(content))
    description = fm.get('description')
    return Document(
        path=rel,
        title=str(fm.get('title') or ''),
        url=url,
        permalink=config.absolute_url(url),
        markdown=body,
        content=content,
        description=str(description) if description is not None else None,
        date=_coerce_date(fm.get('date'), 'date'),
        updated=_coerce_date(fm.get('updated'), 'updated'),
        tags=_coerce_tags(fm),
        extra=extra,
        draft=bool(fm.get('draft', False)),
        slug=slug,
        template=fm.get('template'),
        weight=_optional_int(fm, 'weight'),
        summary=render_summary(body, config.markdown),
        word_count=words,
        reading_time=reading_time(words),
        is_section=is_section,
        sort_by=sort_by,
        paginate_by=paginate_by,
        page_template=fm.get('page_template'),
    )


def load_content(root: Path, config: SiteConfig, include_drafts: bool = False) -> Content:
    """Parse every markdown file under root; drafts are dropped unless include_drafts.

    Raises RuntimeError naming the offending file when any document fails to parse.
    """
    pages, sections = [], []
    for p in discover_files(root):
        try:
            doc = parse_file(p, root, config)
        except (ValueError, OSError) as e:
            raise RuntimeError(f"Failed to parse {p}: {e}") from e
        if doc.draft and not include_drafts:
            continue
        (sections if doc.is_section else pages).append(doc)
    return Content(pages=tuple(pages), sections=tuple(sections))
