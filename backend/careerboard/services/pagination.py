import math
from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from careerboard.config import settings
from careerboard.errors import SourceUnavailable
from careerboard.services.listing_query import clamp_page_size, coerce_int

T = TypeVar("T")

PAGE_RANGE_RADIUS = 2


class Page(BaseModel, Generic[T]):
    items: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_prev: bool
    page_range: list[int] = []


def count_pages(total: int, page_size: int) -> int:
    return max(1, math.ceil(total / page_size))


def page_window(page: int, total_pages: int, radius: int = PAGE_RANGE_RADIUS) -> list[int]:
    start = max(1, page - radius)
    end = min(total_pages, page + radius)
    return list(range(start, end + 1))


def paginate(items: Sequence, page=1, page_size=None) -> Page:
    """Slice one page out of an already filtered and sorted sequence.

    Never raises for bad input: the page size falls back to the default and
    the page number is clamped into [1, total_pages].
    """
    size = clamp_page_size(page_size if page_size is not None else settings.default_page_size)
    total = len(items)
    total_pages = count_pages(total, size)
    current = min(coerce_int(page, 1), total_pages)
    start = (current - 1) * size
    return Page(
        items=list(items[start:start + size]),
        total=total,
        page=current,
        page_size=size,
        total_pages=total_pages,
        has_next=current < total_pages,
        has_prev=current > 1,
        page_range=page_window(current, total_pages),
    )


def relay_page(meta: Mapping[str, Any]) -> Page:
    """Check server-reported pagination metadata and pass it through as-is.

    Already-windowed data is never re-paginated here. Metadata that does not
    add up means the source is misbehaving.
    """
    try:
        page = Page.model_validate(meta)
    except ValidationError as exc:
        raise SourceUnavailable("Malformed pagination metadata from source") from exc

    problems = []
    if page.total < 0:
        problems.append("negative total")
    if page.page_size <= 0:
        problems.append("non-positive page size")
    else:
        if page.total_pages != count_pages(page.total, page.page_size):
            problems.append("total_pages does not match total")
        if len(page.items) > page.page_size:
            problems.append("more items than page size")
    if not 1 <= page.page <= page.total_pages:
        problems.append("page out of range")
    if page.has_next != (page.page < page.total_pages) or page.has_prev != (page.page > 1):
        problems.append("inconsistent next/prev flags")
    if problems:
        raise SourceUnavailable(f"Inconsistent pagination metadata: {', '.join(problems)}")
    return page
