"""
Tests for the browser bookmark export parser.
"""

import codecs

import pytest

from bookmark_uploader.core.bookmark_html_parser import BookmarkHTMLParser
from bookmark_uploader.core.data_models import ROOT_ID, ROOT_NAME, BookmarkNode, CategoryNode
from bookmark_uploader.core.tree_index import flatten_bookmarks, flatten_categories
from bookmark_uploader.utils.error_handler import (
    MissingRootError,
    ParseError,
    StructuralError,
)
from conftest import (
    FIREFOX_EXPORT_HTML,
    MALFORMED_ENTRY_HTML,
    NO_ROOT_HTML,
    SAMPLE_EXPORT_HTML,
    FakeNode,
    fake_document,
    fake_folder,
    fake_link,
    sequential_ids,
)


class TestBookmarkHTMLParser:
    """Parsing real export markup with both tree builders."""

    def test_root_wraps_top_level_entries(self, parser):
        tree = parser.parse_html(SAMPLE_EXPORT_HTML)

        assert tree.id == ROOT_ID
        assert tree.name == ROOT_NAME
        assert [type(n) for n in tree.nodes] == [CategoryNode, BookmarkNode]
        assert tree.nodes[0].name == "Bookmarks-bar"
        assert tree.nodes[1].name == "Gamma"

    def test_folder_names_are_sanitized(self, parser):
        tree = parser.parse_html(SAMPLE_EXPORT_HTML)

        names = [c.name for c in flatten_categories(tree)]
        assert names == ["Bookmarks-bar", "Work-Notes"]

    def test_empty_folders_are_pruned(self, parser):
        tree = parser.parse_html(SAMPLE_EXPORT_HTML)

        assert "Empty" not in [c.name for c in flatten_categories(tree)]

    def test_bookmarks_in_document_order(self, parser):
        tree = parser.parse_html(SAMPLE_EXPORT_HTML)

        bookmarks = flatten_bookmarks(tree)
        assert [b.name for b in bookmarks] == ["Alpha", "Beta", "Gamma"]
        assert [b.url for b in bookmarks] == [
            "https://alpha.example.com/",
            "https://beta.example.com/",
            "https://gamma.example.com/",
        ]

    def test_ancestor_chain_outermost_first(self, parser):
        tree = parser.parse_html(SAMPLE_EXPORT_HTML)

        chains = {b.name: [c.name for c in b.categories] for b in flatten_bookmarks(tree)}
        assert chains == {
            "Alpha": ["Bookmarks-bar"],
            "Beta": ["Bookmarks-bar", "Work-Notes"],
            "Gamma": [],
        }

    def test_chain_ids_match_tree_categories(self, parser):
        tree = parser.parse_html(SAMPLE_EXPORT_HTML)

        category_ids = {c.id for c in flatten_categories(tree)}
        for bookmark in flatten_bookmarks(tree):
            assert {c.id for c in bookmark.categories} <= category_ids

    def test_ids_are_unique(self, markup_parser):
        parser = BookmarkHTMLParser(markup_parser=markup_parser)
        tree = parser.parse_html(SAMPLE_EXPORT_HTML)

        ids = [c.id for c in flatten_categories(tree)] + [
            b.id for b in flatten_bookmarks(tree)
        ]
        assert len(ids) == len(set(ids))
        assert ROOT_ID not in ids

    def test_firefox_descriptions_and_separators(self, parser):
        tree = parser.parse_html(FIREFOX_EXPORT_HTML)

        assert [c.name for c in flatten_categories(tree)] == [
            "Mozilla-Firefox",
            "Bookmarks-Toolbar",
        ]
        chains = {b.name: [c.name for c in b.categories] for b in flatten_bookmarks(tree)}
        assert chains == {
            "Getting Started": [],
            "Get Help": ["Mozilla-Firefox"],
            "News": ["Bookmarks-Toolbar"],
        }

    def test_firefox_export_same_tree_with_both_builders(self):
        trees = [
            BookmarkHTMLParser(markup_parser=features, id_factory=sequential_ids())
            .parse_html(FIREFOX_EXPORT_HTML)
            for features in ("lxml", "html.parser")
        ]

        assert trees[0] == trees[1]

    def test_missing_root_list(self, parser):
        with pytest.raises(MissingRootError):
            parser.parse_html(NO_ROOT_HTML, source="broken.html")

    def test_missing_root_mentions_source(self, parser):
        with pytest.raises(MissingRootError, match="broken.html"):
            parser.parse_html(NO_ROOT_HTML, source="broken.html")

    def test_entry_without_folder_or_link(self, parser):
        with pytest.raises(StructuralError):
            parser.parse_html(MALFORMED_ENTRY_HTML)

    def test_structural_error_is_parse_error(self):
        assert issubclass(StructuralError, ParseError)
        assert issubclass(MissingRootError, ParseError)

    def test_all_folders_empty_gives_empty_root(self, parser):
        html = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<DL><p>
    <DT><H3>Nothing</H3>
    <DL><p>
        <DT><H3>Still nothing</H3>
        <DL><p>
        </DL><p>
    </DL><p>
</DL><p>
"""
        tree = parser.parse_html(html)

        assert tree.nodes == []

    def test_missing_doctype_still_parses(self, parser, caplog):
        html = SAMPLE_EXPORT_HTML.replace("<!DOCTYPE NETSCAPE-Bookmark-file-1>", "")

        tree = parser.parse_html(html)

        assert len(flatten_bookmarks(tree)) == 3
        assert "DOCTYPE" in caplog.text


class TestParserWithMarkupNodes:
    """Driving the parser through the MarkupNode protocol directly."""

    def setup_method(self):
        self.parser = BookmarkHTMLParser(id_factory=sequential_ids())

    def test_bookmark_fields(self):
        document = fake_document(fake_link("Example", "https://example.com"))

        tree = self.parser.parse(document)

        assert tree.nodes == [
            BookmarkNode(id="1", name="Example", url="https://example.com", categories=[])
        ]

    def test_link_without_href(self):
        document = fake_document(fake_link("No target", ""))

        tree = self.parser.parse(document)

        assert tree.nodes[0].url == ""

    def test_whitespace_and_plus_in_names(self):
        document = fake_document(
            fake_folder("Read later + misc", fake_link("x", "https://x.example"))
        )

        tree = self.parser.parse(document)

        assert tree.nodes[0].name == "Read-later---misc"

    def test_deep_nesting_does_not_recurse(self):
        depth = 5000
        entry = fake_link("deep", "https://deep.example")
        for level in reversed(range(depth)):
            entry = fake_folder(f"level{level}", entry)

        tree = self.parser.parse(fake_document(entry))

        bookmarks = flatten_bookmarks(tree)
        assert len(bookmarks) == 1
        assert len(bookmarks[0].categories) == depth
        assert bookmarks[0].categories[0].name == "level0"
        assert bookmarks[0].categories[-1].name == f"level{depth - 1}"

    def test_pruning_keeps_siblings(self):
        document = fake_document(
            fake_folder("empty"),
            fake_folder("kept", fake_link("a", "https://a.example")),
            fake_folder("outer", fake_folder("inner-empty")),
        )

        tree = self.parser.parse(document)

        assert [n.name for n in tree.nodes] == ["kept"]

    def test_document_without_list(self):
        with pytest.raises(MissingRootError):
            self.parser.parse(FakeNode("#document"))


class TestParserFiles:
    """Reading export files from disk."""

    def setup_method(self):
        self.parser = BookmarkHTMLParser(markup_parser="html.parser")

    def test_parse_file(self, sample_file):
        tree = self.parser.parse_file(sample_file)

        assert len(flatten_bookmarks(tree)) == 3

    def test_parse_file_not_found(self, tmp_path):
        with pytest.raises(ParseError, match="File not found"):
            self.parser.parse_file(tmp_path / "missing.html")

    def test_utf16_file_with_bom(self, tmp_path):
        path = tmp_path / "utf16.html"
        path.write_bytes(codecs.BOM_UTF16_LE + SAMPLE_EXPORT_HTML.encode("utf-16-le"))

        tree = self.parser.parse_file(path)

        assert [b.name for b in flatten_bookmarks(tree)] == ["Alpha", "Beta", "Gamma"]

    def test_latin1_file(self, tmp_path):
        path = tmp_path / "latin1.html"
        html = SAMPLE_EXPORT_HTML.replace("Gamma</A>", "Café</A>")
        path.write_bytes(html.encode("iso-8859-1"))

        tree = self.parser.parse_file(path)

        assert flatten_bookmarks(tree)[-1].name == "Café"

    def test_utf8_bom_is_stripped(self, tmp_path):
        path = tmp_path / "bom.html"
        path.write_bytes(codecs.BOM_UTF8 + SAMPLE_EXPORT_HTML.encode("utf-8"))

        tree = self.parser.parse_file(path)

        assert len(flatten_bookmarks(tree)) == 3
