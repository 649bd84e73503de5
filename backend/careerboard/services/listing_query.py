"""
Immutable listing query state: filter criteria, sort and page.

Everything here corrects bad input silently. An unknown sort key becomes
"newest", a page of "abc" becomes 1, "all" means no constraint.
"""
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from careerboard.config import settings
from careerboard.services.listing_fields import ListingFields

ALL = "all"
FILTER_KEYS = (
    "search", "category", "location", "type", "level",
    "status", "position", "featured", "urgent", "remote",
)
BOOLEAN_KEYS = {"featured", "urgent", "remote"}
SORT_KEYS = ("newest", "oldest", "title", "salary_high", "salary_low", "deadline")
DEFAULT_DIRECTIONS = {
    "newest": "desc",
    "oldest": "asc",
    "title": "asc",
    "salary_high": "desc",
    "salary_low": "asc",
    "deadline": "asc",
}
_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


def coerce_int(value, default: int, minimum: int = 1) -> int:
    if isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= minimum else default


def coerce_bool(value) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    return None


def normalize_criteria(raw: Mapping[str, Any] | None) -> dict[str, Any]:
    """Drop unknown keys, blanks and the "all" sentinel; parse booleans."""
    criteria: dict[str, Any] = {}
    for key, value in (raw or {}).items():
        if key not in FILTER_KEYS or value is None:
            continue
        if key in BOOLEAN_KEYS:
            flag = coerce_bool(value)
            if flag is not None:
                criteria[key] = flag
            continue
        text = str(value).strip()
        if not text or (key != "search" and text.lower() == ALL):
            continue
        criteria[key] = text
    return criteria


class SortSpec(BaseModel):
    key: str = "newest"
    direction: str = "desc"

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, key: str | None = None, direction: str | None = None) -> "SortSpec":
        key = (key or "newest").strip().lower()
        if key not in SORT_KEYS:
            key = "newest"
        direction = (direction or "").strip().lower()
        if direction not in ("asc", "desc"):
            direction = DEFAULT_DIRECTIONS[key]
        return cls(key=key, direction=direction)

    def for_fields(self, fields: ListingFields) -> "SortSpec":
        """Fall back to newest-first when the kind cannot sort by this key."""
        if self.key in fields.sort_keys:
            return self
        return SortSpec.parse("newest")


class ListQuery(BaseModel):
    criteria: dict[str, Any] = {}
    sort: SortSpec = SortSpec()
    page: int = 1
    page_size: int = settings.default_page_size

    model_config = {"frozen": True}

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "ListQuery":
        return cls(
            criteria=normalize_criteria(params),
            sort=SortSpec.parse(params.get("sort"), params.get("direction")),
            page=coerce_int(params.get("page"), 1),
            page_size=clamp_page_size(params.get("page_size")),
        )

    def with_criteria(self, **changes) -> "ListQuery":
        merged = dict(self.criteria)
        merged.update(changes)
        return self.model_copy(update={"criteria": normalize_criteria(merged), "page": 1})

    def with_sort(self, key: str, direction: str | None = None) -> "ListQuery":
        return self.model_copy(update={"sort": SortSpec.parse(key, direction), "page": 1})

    def with_page(self, page) -> "ListQuery":
        return self.model_copy(update={"page": coerce_int(page, 1)})

    def with_page_size(self, page_size) -> "ListQuery":
        return self.model_copy(update={"page_size": clamp_page_size(page_size), "page": 1})

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {}
        for key, value in self.criteria.items():
            params[key] = str(value).lower() if isinstance(value, bool) else value
        params["sort"] = self.sort.key
        params["direction"] = self.sort.direction
        params["page"] = self.page
        params["page_size"] = self.page_size
        return params


def clamp_page_size(value) -> int:
    size = coerce_int(value, settings.default_page_size)
    return min(size, settings.max_page_size)
