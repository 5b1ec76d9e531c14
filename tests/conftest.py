"""
Pytest configuration and shared fixtures for bookmark uploader tests.

This module provides sample bookmark exports, deterministic parsers and
in-memory markup documents shared across multiple test modules.
"""

import itertools
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from bookmark_uploader.config.pydantic_config import ENV_FALLBACK_TAG, ENV_LOG_LEVEL
from bookmark_uploader.core.bookmark_html_parser import BookmarkHTMLParser
from bookmark_uploader.core.data_models import CategoryNode
from bookmark_uploader.core.session import ImportSession

# ============================================================================
# Sample Data
# ============================================================================

# Ids are assigned in document order by the sequential id factory:
#   1 Bookmarks bar, 2 Alpha, 3 Work/Notes, 4 Beta, 5 Empty (pruned), 6 Gamma
SAMPLE_EXPORT_HTML = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<!-- This is an automatically generated file.
     It will be read and overwritten.
     DO NOT EDIT! -->
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks</H1>
<DL><p>
    <DT><H3 ADD_DATE="1715434444" PERSONAL_TOOLBAR_FOLDER="true">Bookmarks bar</H3>
    <DL><p>
        <DT><A HREF="https://alpha.example.com/" ADD_DATE="1717175221">Alpha</A>
        <DT><H3 ADD_DATE="1717175257">Work/Notes</H3>
        <DL><p>
            <DT><A HREF="https://beta.example.com/" ADD_DATE="1717175261">Beta</A>
        </DL><p>
        <DT><H3 ADD_DATE="1717175300">Empty</H3>
        <DL><p>
        </DL><p>
    </DL><p>
    <DT><A HREF="https://gamma.example.com/" ADD_DATE="1634868593">Gamma</A>
</DL><p>
"""

# Firefox writes <DD> descriptions after links and folder headers, and <HR>
# separators between entries.
FIREFOX_EXPORT_HTML = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<!-- This is an automatically generated file.
     It will be read and overwritten.
     DO NOT EDIT! -->
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<meta http-equiv="Content-Security-Policy"
      content="default-src 'self'; script-src 'none'; img-src data: *; object-src 'none'"></meta>
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks Menu</H1>

<DL><p>
    <DT><A HREF="https://www.mozilla.org/en-US/firefox/central/" ADD_DATE="1700000000">Getting Started</A>
    <DD>Firefox help and tips
    <HR>
    <DT><H3 ADD_DATE="1700000001">Mozilla Firefox</H3>
    <DL><p>
        <DT><A HREF="https://support.mozilla.org/" ADD_DATE="1700000002">Get Help</A>
    </DL><p>
    <DT><H3 ADD_DATE="1700000003" PERSONAL_TOOLBAR_FOLDER="true">Bookmarks Toolbar</H3>
<DD>Add bookmarks to this folder to see them displayed on the Bookmarks Toolbar
    <DL><p>
        <DT><A HREF="https://news.example.com/" ADD_DATE="1700000004">News</A>
    </DL><p>
</DL>
"""

NO_ROOT_HTML = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks</H1>
<p>Nothing here</p>
"""

MALFORMED_ENTRY_HTML = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<DL><p>
    <DT><A HREF="https://ok.example.com/">Fine</A>
    <DT>Just some text
</DL><p>
"""


def sequential_ids():
    """Id factory yielding "1", "2", ... in call order."""
    counter = itertools.count(1)
    return lambda: str(next(counter))


# ============================================================================
# In-memory markup
# ============================================================================


class FakeNode:
    """Minimal MarkupNode used to drive the parser without an HTML builder."""

    def __init__(
        self,
        name: str,
        children: Optional[List["FakeNode"]] = None,
        text: str = "",
        attributes: Optional[Dict[str, str]] = None,
    ):
        self.name = name
        self._children = children or []
        self._text = text
        self._attributes = attributes or {}

    def children(self, node_type: str) -> List["FakeNode"]:
        return [c for c in self._children if c.name == node_type]

    def text(self) -> str:
        return self._text

    def attribute(self, name: str) -> str:
        return self._attributes.get(name, "")


def fake_link(title: str, href: str) -> FakeNode:
    return FakeNode("dt", [FakeNode("a", text=title, attributes={"href": href})])


def fake_folder(name: str, *entries: FakeNode) -> FakeNode:
    return FakeNode("dt", [FakeNode("h3", text=name), FakeNode("dl", list(entries))])


def fake_document(*entries: FakeNode) -> FakeNode:
    return FakeNode("#document", [FakeNode("dl", list(entries))])


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep user configuration and environment overrides out of the tests."""
    monkeypatch.delenv(ENV_FALLBACK_TAG, raising=False)
    monkeypatch.delenv(ENV_LOG_LEVEL, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_EXPORT_HTML


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "bookmarks.html"
    path.write_text(SAMPLE_EXPORT_HTML, encoding="utf-8")
    return path


@pytest.fixture(params=["lxml", "html.parser"])
def markup_parser(request) -> str:
    """Both supported BeautifulSoup tree builders."""
    return request.param


@pytest.fixture
def parser(markup_parser: str) -> BookmarkHTMLParser:
    return BookmarkHTMLParser(markup_parser=markup_parser, id_factory=sequential_ids())


@pytest.fixture
def sample_tree() -> CategoryNode:
    parser = BookmarkHTMLParser(markup_parser="html.parser", id_factory=sequential_ids())
    return parser.parse_html(SAMPLE_EXPORT_HTML, source="bookmarks.html")


@pytest.fixture
def session() -> ImportSession:
    parser = BookmarkHTMLParser(markup_parser="html.parser", id_factory=sequential_ids())
    return ImportSession(parser=parser)


@pytest.fixture
def loaded_session(session: ImportSession) -> ImportSession:
    session.load_html(SAMPLE_EXPORT_HTML, source_name="bookmarks.html")
    return session
