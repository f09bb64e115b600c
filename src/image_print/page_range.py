"""Page range interpretation and the per-job pagination cursor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import PageRangeError


class PageRangeKind(Enum):
    CURRENT_PAGE = "current"
    ALL_PAGES = "all"
    SOME_PAGES = "some"


_KIND_ALIASES = {
    "current": PageRangeKind.CURRENT_PAGE,
    "current_page": PageRangeKind.CURRENT_PAGE,
    "all": PageRangeKind.ALL_PAGES,
    "all_pages": PageRangeKind.ALL_PAGES,
    "some": PageRangeKind.SOME_PAGES,
    "some_pages": PageRangeKind.SOME_PAGES,
    "range": PageRangeKind.SOME_PAGES,
}


def normalize_page_range_kind(value: PageRangeKind | str | None) -> PageRangeKind:
    if isinstance(value, PageRangeKind):
        return value
    kind = (value or "all").strip().lower()
    return _KIND_ALIASES.get(kind, PageRangeKind.ALL_PAGES)


@dataclass(frozen=True, slots=True)
class PageRange:
    """Requested print range; bounds are only meaningful for SOME_PAGES."""

    kind: PageRangeKind = PageRangeKind.ALL_PAGES
    from_page: Optional[int] = None
    to_page: Optional[int] = None

    @classmethod
    def current_page(cls) -> "PageRange":
        return cls(PageRangeKind.CURRENT_PAGE)

    @classmethod
    def all_pages(cls) -> "PageRange":
        return cls(PageRangeKind.ALL_PAGES)

    @classmethod
    def some_pages(cls, from_page: int, to_page: int) -> "PageRange":
        return cls(PageRangeKind.SOME_PAGES, int(from_page), int(to_page))


@dataclass(slots=True)
class PaginationState:
    """Cursor over the 1-based pages of one job."""

    current: int
    from_page: int
    to_page: int

    @classmethod
    def reset(cls, image_count: int) -> "PaginationState":
        return cls(current=1, from_page=1, to_page=max(0, int(image_count)))

    @property
    def is_empty(self) -> bool:
        return self.from_page > self.to_page

    @property
    def page_count(self) -> int:
        return max(0, self.to_page - self.from_page + 1)


def has_next_page(current: int, to_page: int) -> bool:
    return current + 1 <= to_page


def advance_page(current: int) -> int:
    return current + 1


def resolve_page_range(
    page_range: PageRange | None,
    image_count: int,
    current_page: int = 1,
) -> PaginationState:
    """
    Derive the pagination state for a new job.

    CURRENT_PAGE prints only ``current_page``. SOME_PAGES must satisfy
    1 <= from <= to <= image_count. Any other kind, including None, prints
    every page; with zero images that is an empty job (to_page == 0).
    """
    count = max(0, int(image_count))
    kind = normalize_page_range_kind(page_range.kind if page_range else None)

    if kind is PageRangeKind.CURRENT_PAGE:
        page = int(current_page)
        if page < 1 or page > count:
            raise PageRangeError(
                f"Current page {page} is outside 1-{count}."
            )
        return PaginationState(current=page, from_page=page, to_page=page)

    if kind is PageRangeKind.SOME_PAGES:
        if page_range.from_page is None or page_range.to_page is None:
            raise PageRangeError("Page range is missing its bounds.")
        start = int(page_range.from_page)
        end = int(page_range.to_page)
        if start < 1 or end > count or start > end:
            raise PageRangeError(
                f"Page range {start}-{end} is outside 1-{count}."
            )
        return PaginationState(current=start, from_page=start, to_page=end)

    return PaginationState.reset(count)
