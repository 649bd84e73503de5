from datetime import datetime, timezone
from functools import cmp_to_key
from collections.abc import Iterable

from careerboard.services.listing_fields import ListingFields, resolve
from careerboard.services.listing_query import SortSpec
from careerboard.utils.timestamps import parse_timestamp

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def _salary(value) -> float:
    try:
        return float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        return 0.0


def compare(a, b, sort: SortSpec, fields: ListingFields) -> int:
    """Three-way compare of two records under a sort spec (-1, 0 or 1)."""
    sort = sort.for_fields(fields)
    key = sort.key

    if key == "deadline":
        da = parse_timestamp(resolve(a, fields.deadline))
        db = parse_timestamp(resolve(b, fields.deadline))
        # Records without a deadline go last whatever the direction
        if da is None or db is None:
            return _cmp(da is None, db is None)
        result = _cmp(da, db)
    elif key in ("salary_high", "salary_low"):
        path = fields.salary_high if key == "salary_high" else fields.salary_low
        result = _cmp(_salary(resolve(a, path)), _salary(resolve(b, path)))
    elif key == "title":
        ta = str(resolve(a, fields.title) or "").casefold()
        tb = str(resolve(b, fields.title) or "").casefold()
        result = _cmp(ta, tb)
    else:
        ca = parse_timestamp(resolve(a, fields.created)) or _OLDEST
        cb = parse_timestamp(resolve(b, fields.created)) or _OLDEST
        result = _cmp(ca, cb)

    return -result if sort.direction == "desc" else result


def sort_records(records: Iterable, sort: SortSpec, fields: ListingFields) -> list:
    """Return a sorted copy; equal keys keep their input order."""
    sort = sort.for_fields(fields)
    return sorted(records, key=cmp_to_key(lambda a, b: compare(a, b, sort, fields)))
