import pytest

from careerboard.services.listing_fields import APPLICATION_FIELDS, POSITION_FIELDS
from careerboard.services.listing_query import SortSpec
from careerboard.services.sorting import compare, sort_records


def _rec(rid, created=None, title="", salary_max=None, salary_min=None, deadline=None):
    return {
        "id": rid,
        "title": title,
        "created_at": created,
        "salary_max": salary_max,
        "salary_min": salary_min,
        "application_deadline": deadline,
    }


def _ids(records):
    return [r["id"] for r in records]


class TestSortComparator:
    def test_newest_and_oldest(self):
        records = [
            _rec("a", "2026-01-02T10:00:00Z"),
            _rec("b", "2026-03-01T09:00:00Z"),
            _rec("c", "2025-12-31"),
        ]
        assert _ids(sort_records(records, SortSpec.parse("newest"), POSITION_FIELDS)) == ["b", "a", "c"]
        assert _ids(sort_records(records, SortSpec.parse("oldest"), POSITION_FIELDS)) == ["c", "a", "b"]

    def test_title_is_case_insensitive(self):
        records = [_rec("1", title="banana"), _rec("2", title="Apple"), _rec("3", title="cherry")]
        assert _ids(sort_records(records, SortSpec.parse("title"), POSITION_FIELDS)) == ["2", "1", "3"]

    def test_explicit_direction_overrides_default(self):
        records = [_rec("1", title="b"), _rec("2", title="a")]
        assert _ids(sort_records(records, SortSpec.parse("title", "desc"), POSITION_FIELDS)) == ["1", "2"]

    def test_missing_salary_counts_as_zero(self):
        records = [_rec("none"), _rec("low", salary_max=50_000, salary_min=40_000),
                   _rec("high", salary_max=150_000, salary_min=120_000)]
        high = sort_records(records, SortSpec.parse("salary_high"), POSITION_FIELDS)
        low = sort_records(records, SortSpec.parse("salary_low"), POSITION_FIELDS)
        assert _ids(high) == ["high", "low", "none"]
        assert _ids(low) == ["none", "low", "high"]

    @pytest.mark.parametrize("direction", ["asc", "desc"])
    def test_missing_deadline_sorts_last_in_both_directions(self, direction):
        records = [_rec("open-ended"), _rec("june", deadline="2026-06-01"), _rec("may", deadline="2026-05-01")]
        ordered = _ids(sort_records(records, SortSpec.parse("deadline", direction), POSITION_FIELDS))
        assert ordered[-1] == "open-ended"
        expected = ["may", "june"] if direction == "asc" else ["june", "may"]
        assert ordered[:2] == expected

    def test_compare_is_three_way(self):
        spec = SortSpec.parse("salary_low")
        a, b = _rec("a", salary_min=1), _rec("b", salary_min=2)
        assert compare(a, b, spec, POSITION_FIELDS) == -1
        assert compare(b, a, spec, POSITION_FIELDS) == 1
        assert compare(a, a, spec, POSITION_FIELDS) == 0

    def test_unsupported_key_falls_back_to_newest(self):
        apps = [
            {"id": "old", "full_name": "Z", "applied_at": "2026-01-01T00:00:00Z"},
            {"id": "new", "full_name": "A", "applied_at": "2026-02-01T00:00:00Z"},
        ]
        ordered = sort_records(apps, SortSpec.parse("salary_high"), APPLICATION_FIELDS)
        assert _ids(ordered) == ["new", "old"]

    def test_unknown_key_is_parsed_as_newest(self):
        assert SortSpec.parse("popularity") == SortSpec(key="newest", direction="desc")


class TestSortProperties:
    def _records(self):
        return [
            _rec("a", "2026-01-01", "x", salary_max=100),
            _rec("b", "2026-01-01", "x", salary_max=None),
            _rec("c", "2026-01-02", "y", salary_max=100),
            _rec("d", "2026-01-01", "X", salary_max=0),
            _rec("e", None, "w", salary_max=100),
        ]

    @pytest.mark.parametrize("key", ["newest", "oldest", "title", "salary_high", "salary_low", "deadline"])
    def test_sorting_is_stable(self, key):
        ordered = sort_records(self._records(), SortSpec.parse(key), POSITION_FIELDS)
        spec = SortSpec.parse(key)
        original = _ids(self._records())
        for i, left in enumerate(ordered):
            for right in ordered[i + 1:]:
                if compare(left, right, spec, POSITION_FIELDS) == 0:
                    assert original.index(left["id"]) < original.index(right["id"])

    @pytest.mark.parametrize("key", ["newest", "oldest", "title", "salary_high", "salary_low", "deadline"])
    def test_sorting_twice_is_a_fixed_point(self, key):
        spec = SortSpec.parse(key)
        once = sort_records(self._records(), spec, POSITION_FIELDS)
        assert sort_records(once, spec, POSITION_FIELDS) == once

    def test_sort_does_not_mutate_input(self):
        records = self._records()
        before = list(records)
        sort_records(records, SortSpec.parse("title"), POSITION_FIELDS)
        assert records == before

    def test_equal_salaries_keep_input_order(self):
        ordered = sort_records(self._records(), SortSpec.parse("salary_high"), POSITION_FIELDS)
        assert _ids(ordered) == ["a", "c", "e", "b", "d"]
