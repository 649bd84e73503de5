from collections.abc import Iterable

from careerboard.services.filtering import filter_records
from careerboard.services.listing_fields import ListingFields
from careerboard.services.listing_query import ListQuery
from careerboard.services.pagination import Page, paginate
from careerboard.services.sorting import sort_records


def run_listing(records: Iterable, query: ListQuery, fields: ListingFields) -> Page:
    """Filter, sort and window a collection for one listing query."""
    matched = filter_records(records, query.criteria, fields)
    ordered = sort_records(matched, query.sort, fields)
    return paginate(ordered, query.page, query.page_size)


def count_by(records: Iterable, path: str, keys: Iterable[str]) -> dict[str, int]:
    """Tally records per value of ``path``; always includes every key and "all"."""
    counts = {key: 0 for key in keys}
    counts["all"] = 0
    for record in records:
        value = getattr(record, path, None)
        counts[value] = counts.get(value, 0) + 1
        counts["all"] += 1
    return counts
