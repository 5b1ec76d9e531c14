"""
Tests for the wait-upload selection.
"""

import pytest

from bookmark_uploader.core.selection import (
    SelectionEngine,
    SelectionSummary,
    default_checked_keys,
    is_category_selected,
    wait_upload_bookmarks,
)
from bookmark_uploader.core.tree_index import flatten_bookmarks


def _names(bookmarks):
    return [b.name for b in bookmarks]


class TestWaitUploadBookmarks:
    """Selection is evaluated per category, without inheritance."""

    def test_default_selection_is_everything(self, sample_tree):
        keys = default_checked_keys(sample_tree)

        assert keys == {"0", "1", "3"}
        assert wait_upload_bookmarks(sample_tree, keys) == flatten_bookmarks(sample_tree)

    def test_nothing_checked(self, sample_tree):
        assert wait_upload_bookmarks(sample_tree, set()) == []

    def test_direct_bookmarks_key(self, sample_tree):
        assert _names(wait_upload_bookmarks(sample_tree, {"1@"})) == ["Alpha"]

    def test_plain_and_direct_key_are_equivalent(self, sample_tree):
        assert wait_upload_bookmarks(sample_tree, {"1"}) == wait_upload_bookmarks(
            sample_tree, {"1@"}
        )

    def test_root_direct_bookmarks(self, sample_tree):
        assert _names(wait_upload_bookmarks(sample_tree, {"0@"})) == ["Gamma"]

    def test_unchecked_parent_does_not_hide_checked_child(self, sample_tree):
        assert _names(wait_upload_bookmarks(sample_tree, {"0", "3"})) == ["Beta", "Gamma"]

    def test_checked_parent_does_not_pull_in_child(self, sample_tree):
        assert _names(wait_upload_bookmarks(sample_tree, {"1"})) == ["Alpha"]

    def test_result_follows_document_order(self, sample_tree):
        assert _names(wait_upload_bookmarks(sample_tree, {"3", "0", "1"})) == [
            "Alpha",
            "Beta",
            "Gamma",
        ]

    @pytest.mark.parametrize(
        "category_id,keys,expected",
        [
            ("1", {"1"}, True),
            ("1", {"1@"}, True),
            ("1", {"3", "3@"}, False),
            ("1", set(), False),
        ],
    )
    def test_is_category_selected(self, category_id, keys, expected):
        assert is_category_selected(category_id, keys) is expected


class TestSelectionEngine:
    """Selection queries bound to one tree."""

    def test_known_keys(self, sample_tree):
        engine = SelectionEngine(sample_tree)

        assert engine.known_keys() == {"0", "1", "3", "0@", "1@", "3@"}

    def test_normalize_drops_unknown_keys(self, sample_tree):
        engine = SelectionEngine(sample_tree)

        assert engine.normalize(["1", "nope", "2"]) == {"1"}

    def test_summary(self, sample_tree):
        engine = SelectionEngine(sample_tree)

        summary = engine.summary({"1"})

        assert summary == SelectionSummary(selected=1, total=3)
        assert str(summary) == "1 of 3 bookmarks will be imported"

    def test_default_keys_match_module_function(self, sample_tree):
        engine = SelectionEngine(sample_tree)

        assert engine.default_checked_keys() == default_checked_keys(sample_tree)
