"""
Tests for terminal rendering of the selection.
"""

from rich.tree import Tree

from bookmark_uploader.core.data_models import TagOption
from bookmark_uploader.core.tree_index import build_display_tree
from bookmark_uploader.utils.tree_render import (
    build_selection_tree,
    build_tag_table,
    render_selection,
)


class TestTreeRender:
    """Rich rendering of the display tree and tag checklist."""

    def test_selection_tree_mirrors_display_tree(self, sample_tree):
        display = build_display_tree(sample_tree)

        tree = build_selection_tree(display, {"0", "1"})

        assert isinstance(tree, Tree)
        assert [str(child.label) for child in tree.children] == [
            "[x] Bookmarks-bar  (1)",
            "[ ] (bookmarks in this folder)  (0@)",
        ]
        assert str(tree.children[0].children[0].label) == "[ ] Work-Notes  (3)"

    def test_tag_table_rows(self):
        table = build_tag_table(
            [
                TagOption(name="Other", checked=True, disabled=True),
                TagOption(name="Work", checked=False, disabled=False),
            ]
        )

        assert table.row_count == 2

    def test_render_selection(self, sample_tree):
        display = build_display_tree(sample_tree)
        options = [TagOption(name="Other", checked=True, disabled=True)]

        output = render_selection(display, {"0"}, options, summary="1 of 3 bookmarks will be imported")

        assert "Bookmarks-bar" in output
        assert "always attached" in output
        assert "1 of 3 bookmarks will be imported" in output

    def test_titles_are_not_markup(self, sample_tree):
        display = build_display_tree(sample_tree)
        display.children[0].title = "[bold]Not markup[/bold]"

        output = render_selection(display, set(), [])

        assert "[bold]Not markup[/bold]" in output
