from collections.abc import Iterable, Mapping
from typing import Any

from careerboard.services.listing_fields import ListingFields, resolve


def _matches_search(record, term: str, fields: ListingFields) -> bool:
    needle = term.strip().casefold()
    if not needle:
        return True
    for path in fields.search:
        value = resolve(record, path)
        if value is not None and needle in str(value).casefold():
            return True
    return False


def _matches_equality(record, expected, paths: tuple[str, ...]) -> bool:
    # A missing relation resolves to None and never equals a criterion
    for path in paths:
        value = resolve(record, path)
        if value is not None and str(value) == str(expected):
            return True
    return False


def matches(record, criteria: Mapping[str, Any], fields: ListingFields) -> bool:
    """True when the record satisfies every active criterion.

    Criteria are expected in normalised form (see ``normalize_criteria``);
    keys the record kind does not declare are ignored.
    """
    for key, expected in criteria.items():
        if key == "search":
            if fields.search and not _matches_search(record, str(expected), fields):
                return False
        elif key in fields.equality:
            if not _matches_equality(record, expected, fields.equality[key]):
                return False
        elif key in fields.flags:
            if bool(resolve(record, fields.flags[key])) != bool(expected):
                return False
    return True


def filter_records(records: Iterable, criteria: Mapping[str, Any], fields: ListingFields) -> list:
    return [r for r in records if matches(r, criteria, fields)]
