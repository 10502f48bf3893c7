"""Content data models shared by the parse, render and build steps"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class PageExtra(BaseModel):
    """Recognized [extra] keys of a document's front matter; unknown keys are kept untyped."""
    model_config = ConfigDict(frozen=True, extra="allow")

    emoji:        Optional[str] = None
    images:       tuple[str, ...] = ()
    no_page_info: bool = False
    repos:        tuple[str, ...] = ()


@dataclass(frozen=True)
class Document:
    """A page or section parsed from one markdown file; immutable once built."""
    path:         str                   # posix path relative to the content root
    title:        str
    url:          str                   # site-relative, always ends with '/'
    permalink:    str
    markdown:     str                   # body without front matter
    content:      str                   # rendered HTML
    description:  Optional[str] = None
    date:         Optional[datetime] = None
    updated:      Optional[datetime] = None
    tags:         tuple[str, ...] = ()
    extra:        PageExtra = field(default_factory=PageExtra)
    draft:        bool = False
    slug:         str = ""
    template:     Optional[str] = None
    weight:       Optional[int] = None
    summary:      Optional[str] = None  # rendered HTML before the <!-- more --> marker
    word_count:   int = 0
    reading_time: int = 0               # minutes
    is_section:   bool = False
    # section-only fields (_index.md)
    sort_by:       str = "date"
    paginate_by:   Optional[int] = None
    page_template: Optional[str] = None

    @property
    def components(self) -> tuple[str, ...]:
        """Directory components of the source path (the section chain)."""
        parts = self.path.split("/")[:-1]
        if self.is_bundle:
            parts = parts[:-1]
        return tuple(parts)

    @property
    def is_bundle(self) -> bool:
        """True for a page bundle (D/name/index.md), whose sibling files are its assets."""
        return not self.is_section and self.path.endswith("/index.md")

    @property
    def section_path(self) -> str:
        """Source path of the _index.md this document belongs to (itself for sections)."""
        if self.is_section:
            return self.path
        return "/".join((*self.components, "_index.md"))


@dataclass(frozen=True)
class Content:
    """Everything loaded from the content root, ordered by source path."""
    pages:    tuple[Document, ...]
    sections: tuple[Document, ...]

    def section(self, path: str) -> Optional[Document]:
        return next((s for s in self.sections if s.path == path), None)

    def pages_of(self, section: Document) -> list[Document]:
        """Pages whose direct parent section is the given one."""
        return [p for p in self.pages if p.section_path == section.path]

    def subsections_of(self, section: Document) -> list[Document]:
        depth = len(section.components) + 1
        return [s for s in self.sections
                if len(s.components) == depth and s.components[:-1] == section.components]


@dataclass(frozen=True)
class Pager:
    """One page of a paginated section listing."""
    index:         int                  # 1-based
    pages:         tuple[Document, ...]
    number_pagers: int
    url:           str
    previous:      Optional[str] = None
    next:          Optional[str] = None
    first:         str = ""
    last:          str = ""


@dataclass(frozen=True)
class Project:
    name:        str
    url:         str
    description: str = ""


@dataclass(frozen=True)
class Timestamp:
    display: str                        # "Posted on <formatted date>"
    iso:     str                        # ISO-8601 for the datetime attribute


@dataclass
class BuildReport:
    """Paths written by a build, in write order."""
    written: list[str] = field(default_factory=list)
    pages:   int = 0
    sections: int = 0
    tags:    int = 0

    def as_dict(self) -> dict[str, Any]:
        return {"written": len(self.written), "pages": self.pages,
                "sections": self.sections, "tags": self.tags}
