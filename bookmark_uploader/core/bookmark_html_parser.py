"""
Browser bookmark export parser module.

This module turns a Netscape bookmark file (the HTML export produced by
Chrome, Edge, Firefox and friends) into a CategoryNode tree wrapped in one
synthetic root. Folders without any bookmark in their subtree are pruned.
"""

import codecs
import logging
import re
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple, Union

from ..utils.error_handler import MissingRootError, ParseError, StructuralError
from .data_models import (
    ROOT_ID,
    ROOT_NAME,
    BookmarkNode,
    Category,
    CategoryNode,
    TreeNode,
    sanitize_category_name,
)
from .markup import MarkupNode, load_document


def _random_id() -> str:
    return uuid.uuid4().hex


@dataclass
class _ListFrame:
    """One <DL> being walked; ``category`` is None for the top-level list."""

    entries: Iterator[MarkupNode]
    chain: Tuple[Category, ...]
    category: Optional[Category] = None
    nodes: List[TreeNode] = field(default_factory=list)


class BookmarkHTMLParser:
    """
    Parser for browser bookmark HTML exports.

    Each <DT> under a <DL> is either a folder (<H3> followed by a nested <DL>)
    or a bookmark (<A>). Anything else aborts the whole parse.
    """

    DOCTYPE_PATTERN = r"<!DOCTYPE\s+NETSCAPE-Bookmark-file-1>"
    SUPPORTED_ENCODINGS = ["utf-8", "utf-16", "iso-8859-1"]
    SUPPORTED_EXTENSIONS = [".html", ".htm"]

    def __init__(
        self,
        markup_parser: str = "lxml",
        id_factory: Optional[Callable[[], str]] = None,
    ):
        """
        Initialize the parser.

        Args:
            markup_parser: BeautifulSoup tree builder used for raw HTML
            id_factory: Callable producing unique node ids (uuid4 by default)
        """
        self.logger = logging.getLogger(__name__)
        self.markup_parser = markup_parser
        self._id_factory = id_factory or _random_id

    def parse_file(self, file_path: Union[str, Path]) -> CategoryNode:
        """
        Parse a bookmark export file.

        Args:
            file_path: Path to the exported HTML file

        Returns:
            Root CategoryNode of the pruned tree

        Raises:
            ParseError: If the file cannot be read
            MissingRootError: If the top-level <DL> is absent
            StructuralError: If an entry is neither a folder nor a link
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise ParseError("File not found", source=str(file_path))

        html_content = self._read_html_file(file_path)
        return self.parse_html(html_content, source=file_path.name)

    def parse_html(self, html_content: str, source: Optional[str] = None) -> CategoryNode:
        """Parse raw export markup. See parse_file for the raised errors."""
        if not re.search(self.DOCTYPE_PATTERN, html_content, re.IGNORECASE):
            self.logger.warning(
                "Expected <!DOCTYPE NETSCAPE-Bookmark-file-1> header not found"
            )
        document = load_document(html_content, self.markup_parser)
        return self.parse(document, source=source)

    def parse(self, document: MarkupNode, source: Optional[str] = None) -> CategoryNode:
        """
        Build the category tree from a markup document.

        Args:
            document: Parsed document exposing the MarkupNode capabilities
            source: Optional file name used in error messages

        Returns:
            Synthetic root CategoryNode holding the top-level entries
        """
        top_lists = document.children("dl")
        if not top_lists:
            raise MissingRootError(
                "No bookmark data found (missing top-level <DL> element)",
                source=source,
            )

        stack = [_ListFrame(entries=iter(top_lists[0].children("dt")), chain=())]
        bookmark_count = 0
        pruned_count = 0

        while True:
            frame = stack[-1]
            entry = next(frame.entries, None)

            if entry is None:
                stack.pop()
                if not stack:
                    break
                # Post-order: the folder is only kept once its content is known
                if frame.nodes:
                    stack[-1].nodes.append(
                        CategoryNode(
                            id=frame.category.id,
                            name=frame.category.name,
                            nodes=frame.nodes,
                        )
                    )
                else:
                    pruned_count += 1
                    self.logger.debug(f"Pruned empty folder: {frame.category.name}")
                continue

            header = self._first(entry.children("h3"))
            nested = self._first(entry.children("dl")) if header is not None else None
            link = self._first(entry.children("a"))

            if header is not None and nested is not None:
                category = Category(
                    id=self._id_factory(),
                    name=sanitize_category_name(header.text()),
                )
                stack.append(
                    _ListFrame(
                        entries=iter(nested.children("dt")),
                        chain=frame.chain + (category,),
                        category=category,
                    )
                )
            elif link is not None:
                frame.nodes.append(
                    BookmarkNode(
                        id=self._id_factory(),
                        name=link.text(),
                        url=link.attribute("href"),
                        categories=list(frame.chain),
                    )
                )
                bookmark_count += 1
            else:
                raise StructuralError(
                    "Entry is neither a folder (<H3> with <DL>) nor a link (<A>)",
                    source=source,
                )

        self.logger.info(
            f"Parsed {bookmark_count} bookmarks"
            + (f" from {source}" if source else "")
            + f", pruned {pruned_count} empty folders"
        )
        return CategoryNode(id=ROOT_ID, name=ROOT_NAME, nodes=frame.nodes)

    @staticmethod
    def _first(nodes: List[MarkupNode]) -> Optional[MarkupNode]:
        return nodes[0] if nodes else None

    def _read_html_file(self, file_path: Path) -> str:
        """
        Read HTML file trying the supported encodings in order.

        UTF-16 is only attempted when the file starts with a byte order mark.

        Args:
            file_path: Path to the HTML file

        Returns:
            HTML content as string

        Raises:
            ParseError: If file cannot be read
        """
        try:
            raw = file_path.read_bytes()
        except OSError as e:
            raise ParseError(f"Error reading file: {e}", source=str(file_path)) from e

        has_utf16_bom = raw.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE))
        last_error: Optional[Exception] = None
        for encoding in self.SUPPORTED_ENCODINGS:
            if encoding == "utf-16" and not has_utf16_bom:
                continue
            if encoding != "utf-16" and has_utf16_bom:
                continue
            try:
                content = raw.decode(encoding)
            except UnicodeError as e:
                last_error = e
                continue
            if encoding != self.SUPPORTED_ENCODINGS[0]:
                self.logger.info(f"Read {file_path.name} as {encoding}")
            return content.lstrip("\ufeff")

        raise ParseError(
            f"Unable to read file with supported encodings: {last_error}",
            source=str(file_path),
        )
