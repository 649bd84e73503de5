import pytest

from careerboard.errors import SourceUnavailable
from careerboard.services.listing import count_by, run_listing
from careerboard.services.listing_fields import POSITION_FIELDS
from careerboard.services.listing_query import ListQuery
from careerboard.services.pagination import count_pages, page_window, paginate, relay_page


class TestPaginate:
    def test_pages_cover_the_sequence_exactly_once(self):
        items = list(range(23))
        first = paginate(items, 1, 10)
        pages = [paginate(items, n, 10) for n in range(1, first.total_pages + 1)]
        assert [i for p in pages for i in p.items] == items
        assert first.total_pages == 3

    def test_metadata_on_middle_page(self):
        page = paginate(list(range(50)), 3, 10)
        assert page.items == list(range(20, 30))
        assert page.total == 50
        assert page.has_next is True
        assert page.has_prev is True
        assert page.page_range == [1, 2, 3, 4, 5]

    def test_page_zero_is_clamped_to_first(self):
        page = paginate(list(range(5)), 0, 2)
        assert page.page == 1
        assert page.items == [0, 1]

    def test_page_past_end_is_clamped_to_last(self):
        page = paginate(list(range(5)), 99, 2)
        assert page.page == 3
        assert page.items == [4]
        assert page.has_next is False

    def test_empty_collection_still_has_one_page(self):
        page = paginate([], 3, 10)
        assert page.total == 0
        assert page.total_pages == 1
        assert page.page == 1
        assert page.items == []
        assert page.has_next is False
        assert page.has_prev is False

    @pytest.mark.parametrize("raw", ["abc", None, -4, 0])
    def test_bad_page_numbers_fall_back_to_one(self, raw):
        assert paginate(list(range(30)), raw, 10).page == 1

    @pytest.mark.parametrize("raw, expected", [(None, 12), (0, 12), ("x", 12), (500, 100), ("25", 25)])
    def test_page_size_is_defaulted_and_capped(self, raw, expected):
        assert paginate(list(range(300)), 1, raw).page_size == expected

    def test_count_pages(self):
        assert count_pages(0, 10) == 1
        assert count_pages(10, 10) == 1
        assert count_pages(11, 10) == 2

    def test_page_window_is_trimmed_at_edges(self):
        assert page_window(1, 10) == [1, 2, 3]
        assert page_window(10, 10) == [8, 9, 10]
        assert page_window(1, 1) == [1]


class TestRelayPage:
    def test_consistent_metadata_is_passed_through(self):
        meta = paginate(list(range(30)), 2, 12).model_dump()
        page = relay_page(meta)
        assert page.model_dump() == meta

    def test_items_are_not_resliced(self):
        meta = {
            "items": ["a", "b"], "total": 40, "page": 4, "page_size": 2,
            "total_pages": 20, "has_next": True, "has_prev": True,
        }
        assert relay_page(meta).items == ["a", "b"]

    @pytest.mark.parametrize("patch", [
        {"total_pages": 7},
        {"page": 9},
        {"has_next": False},
        {"has_prev": False},
        {"page_size": 0},
        {"items": list(range(20))},
    ])
    def test_inconsistent_metadata_is_rejected(self, patch):
        meta = paginate(list(range(30)), 2, 12).model_dump()
        meta.update(patch)
        with pytest.raises(SourceUnavailable):
            relay_page(meta)

    def test_missing_fields_are_rejected(self):
        with pytest.raises(SourceUnavailable):
            relay_page({"items": [], "total": 0})


class TestRunListing:
    def _positions(self):
        records = []
        for i in range(25):
            records.append({
                "id": f"p{i}",
                "title": f"Product Designer {i}" if i % 4 == 3 else f"Senior Software Engineer {i}",
                "summary": "Join our engineering team" if i == 3 else None,
                "description": "",
                "status": "closed" if i % 5 == 0 else "open",
                "salary_max": None if i % 6 == 0 else i * 1000,
                "created_at": f"2026-01-{i + 1:02d}T09:00:00Z",
            })
        return records

    def test_open_engineer_positions_by_highest_salary(self):
        records = self._positions()
        query = ListQuery.from_params({
            "status": "open", "search": "engineer", "sort": "salary_high", "page_size": "12",
        })
        expected = [
            r for r in records
            if r["status"] == "open"
            and ("engineer" in r["title"].lower() or "engineer" in (r["summary"] or "").lower())
        ]
        expected = sorted(expected, key=lambda r: r["salary_max"] or 0, reverse=True)

        first = run_listing(records, query, POSITION_FIELDS)
        second = run_listing(records, query.with_page(2), POSITION_FIELDS)

        assert first.total == len(expected) == 16
        assert first.total_pages == 2
        assert [r["id"] for r in first.items] == [r["id"] for r in expected[:12]]
        assert [r["id"] for r in second.items] == [r["id"] for r in expected[12:]]
        assert second.has_next is False

    def test_filter_change_resets_to_first_page(self):
        query = ListQuery.from_params({"page": "2"}).with_criteria(status="open")
        assert query.page == 1

    def test_count_by_always_reports_every_key(self):
        class Row:
            def __init__(self, status):
                self.status = status

        counts = count_by([Row("open"), Row("open"), Row("draft")], "status", ["draft", "open", "closed"])
        assert counts == {"draft": 1, "open": 2, "closed": 0, "all": 3}
