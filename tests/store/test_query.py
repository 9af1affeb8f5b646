"""Unit tests for the shared sort and pagination helpers."""

from albumnote.store.query import (
    compare_locale,
    compare_text,
    contains_text,
    paginate,
    resolve_order,
    sort_items,
)


def by_first(a, b):
    return compare_text(a[0], b[0])


class TestSortItems:
    def test_ascending(self):
        assert sort_items([("b", 1), ("a", 2)], by_first, "asc") == [("a", 2), ("b", 1)]

    def test_descending_is_default(self):
        assert sort_items([("a", 1), ("b", 2)], by_first, None) == [("b", 2), ("a", 1)]

    def test_ties_keep_input_order_in_both_directions(self):
        items = [("a", 1), ("a", 2), ("b", 3), ("a", 4)]

        assert sort_items(items, by_first, "asc") == [("a", 1), ("a", 2), ("a", 4), ("b", 3)]
        assert sort_items(items, by_first, "desc") == [("b", 3), ("a", 1), ("a", 2), ("a", 4)]

    def test_unknown_order_means_desc(self):
        assert resolve_order("sideways") == "desc"
        assert resolve_order("asc") == "asc"


class TestCompare:
    def test_iso_timestamps_compare_lexicographically(self):
        assert compare_text("2024-01-01T00:00:01.000Z", "2024-01-01T00:00:02.000Z") == -1
        assert compare_text("x", "x") == 0

    def test_locale_compare_ignores_case_first(self):
        assert compare_locale("apple.jpg", "Banana.jpg") < 0
        assert compare_locale("Banana.jpg", "apple.jpg") > 0

    def test_locale_compare_folds_accents(self):
        assert compare_locale("éclair.jpg", "zebra.jpg") < 0
        assert compare_locale("eclair.jpg", "éclair.jpg") < 0
        assert compare_locale("Émile", "émile") != 0
        assert compare_locale("café", "café") == 0


class TestPaginate:
    def test_slices_and_reports_total(self):
        page = paginate(list(range(10)), page=2, limit=3)

        assert page.items == [3, 4, 5]
        assert page.total == 10
        assert page.page == 2
        assert page.limit == 3

    def test_out_of_range_page_is_empty(self):
        page = paginate([1, 2, 3, 4], page=99, limit=10)

        assert page.items == []
        assert page.total == 4

    def test_max_limit_caps(self):
        assert paginate(list(range(300)), page=1, limit=200, max_limit=100).limit == 100

    def test_no_cap_without_max_limit(self):
        page = paginate(list(range(300)), page=1, limit=200)

        assert page.limit == 200
        assert len(page.items) == 200

    def test_page_and_limit_clamped_to_one(self):
        page = paginate([1, 2, 3], page=0, limit=0)

        assert page.page == 1
        assert page.limit == 1
        assert page.items == [1]


def test_contains_text():
    assert contains_text("Sunset Beach", "beach")
    assert not contains_text(None, "beach")
