"""Page ordering and section pagination"""

from typing import Iterable

from sitepub.core.models import Document, Pager


PAGE_PATH = "page"


def sort_pages(pages: Iterable[Document], sort_by: str = "date") -> list[Document]:
    """Order pages deterministically: date newest first, weight/title ascending, 'none' by path.

    Pages missing the sort key go last; ties break on source path.
    """
    pages = sorted(pages, key=lambda p: p.path)
    if sort_by == "date":
        return sorted(pages, key=lambda p: (p.date is None, -p.date.timestamp() if p.date else 0.0))
    if sort_by == "weight":
        return sorted(pages, key=lambda p: (p.weight is None, p.weight or 0))
    if sort_by == "title":
        return sorted(pages, key=lambda p: p.title.casefold())
    return pages


def pager_url(base_url: str, index: int) -> str:
    """URL of pager `index` under a section url: 1 → the section itself, N → <section>/page/N/."""
    if index <= 1:
        return base_url
    return f"{base_url.rstrip('/')}/{PAGE_PATH}/{index}/"


def paginate(pages: list[Document], paginate_by: int | None, base_url: str) -> list[Pager]:
    """Split an ordered page list into pagers. paginate_by None/0 → one pager with everything."""
    if not paginate_by:
        chunks = [pages]
    else:
        chunks = [pages[i:i + paginate_by] for i in range(0, len(pages), paginate_by)] or [[]]

    total = len(chunks)
    first, last = pager_url(base_url, 1), pager_url(base_url, total)
    return [
        Pager(
            index=i,
            pages=tuple(chunk),
            number_pagers=total,
            url=pager_url(base_url, i),
            previous=pager_url(base_url, i - 1) if i > 1 else None,
            next=pager_url(base_url, i + 1) if i < total else None,
            first=first,
            last=last,
        )
        for i, chunk in enumerate(chunks, start=1)
    ]
