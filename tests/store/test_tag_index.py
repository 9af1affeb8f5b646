"""Unit tests for the tag index and tag normalization."""

from albumnote.store.tag_index import TagIndex
from albumnote.store.tags import find_overlong, normalize_tag, normalize_tags


class TestTagIndex:
    """Test suite for TagIndex."""

    def test_add_creates_bucket(self):
        index = TagIndex()
        index.add("n_000001", "work")

        assert "work" in index
        assert index.bucket_for("work") == {"n_000001"}

    def test_add_is_idempotent(self):
        index = TagIndex()
        index.add("n_000001", "work")
        index.add("n_000001", "work")

        assert index.count("work") == 1
        assert len(index) == 1

    def test_remove_prunes_empty_bucket(self):
        index = TagIndex()
        index.add("n_000001", "solo")
        index.remove("n_000001", "solo")

        assert "solo" not in index
        assert len(index) == 0
        assert list(index.distinct_tags()) == []

    def test_remove_keeps_bucket_with_other_members(self):
        index = TagIndex()
        index.add("n_000001", "shared")
        index.add("n_000002", "shared")
        index.remove("n_000001", "shared")

        assert index.bucket_for("shared") == {"n_000002"}

    def test_remove_unknown_tag_is_noop(self):
        index = TagIndex()
        index.remove("n_000001", "missing")

        assert len(index) == 0

    def test_bucket_for_unknown_tag_is_empty(self):
        assert TagIndex().bucket_for("nothing") == frozenset()

    def test_bucket_for_returns_snapshot(self):
        index = TagIndex()
        index.add(1, "cats")
        bucket = index.bucket_for("cats")
        index.add(2, "cats")

        assert bucket == {1}

    def test_distinct_tags_is_restartable(self):
        index = TagIndex()
        index.add("a", "x")
        index.add("b", "y")

        assert sorted(index.distinct_tags()) == ["x", "y"]
        index.remove("a", "x")
        assert sorted(index.distinct_tags()) == ["y"]

    def test_clear(self):
        index = TagIndex()
        index.add("a", "x")
        index.clear()

        assert len(index) == 0


class TestNormalization:
    """Test suite for tag normalization helpers."""

    def test_normalize_tag_trims_and_lowercases(self):
        assert normalize_tag("  MyTag ") == "mytag"

    def test_normalize_tags_dedupes_preserving_first_occurrence(self):
        assert normalize_tags(["Work", "todo", " WORK ", "Idea", "TODO"]) == ["work", "todo", "idea"]

    def test_normalize_tags_drops_blank_entries(self):
        assert normalize_tags(["   ", "", "valid"]) == ["valid"]

    def test_find_overlong_boundary(self):
        assert find_overlong(["a" * 32]) is None
        assert find_overlong(["ok", "b" * 33]) == "b" * 33
