"""
Markup access layer for bookmark exports.

The parser only needs three capabilities from a document node: find the
entries it owns, read its text and read an attribute. This module defines
that protocol and implements it on top of BeautifulSoup.
"""

from typing import List, Optional, Protocol, Set, runtime_checkable

from bs4 import BeautifulSoup, Tag


@runtime_checkable
class MarkupNode(Protocol):
    """
    Minimal read-only view of a markup element.

    Implementations must return owned nodes in document order.
    """

    def children(self, node_type: str) -> List["MarkupNode"]:
        """Nodes of the given tag name that belong to this node."""
        ...

    def text(self) -> str:
        """Text content of the node."""
        ...

    def attribute(self, name: str) -> str:
        """Attribute value, or an empty string when absent."""
        ...


def _element_children(tag: Tag) -> List[Tag]:
    return [child for child in tag.children if isinstance(child, Tag)]


def _collect(start: Tag, node_type: str, stop_names: Set[str]) -> List[Tag]:
    """
    Pre-order walk below ``start`` collecting ``node_type`` elements.

    The walk does not descend into elements named in ``stop_names``: those
    subtrees belong to another entry or list.
    """
    found = []
    stack = list(reversed(_element_children(start)))
    while stack:
        element = stack.pop()
        name = (element.name or "").lower()
        if name == node_type:
            found.append(element)
        if name in stop_names:
            continue
        stack.extend(reversed(_element_children(element)))
    return found


class SoupNode:
    """
    MarkupNode backed by a BeautifulSoup Tag.

    Netscape exports never close <DT> and <p>, so tree builders disagree on
    nesting. Ownership is therefore resolved structurally: an element belongs
    to the nearest enclosing element of this node's own tag name, and a
    <DT> whose folder list was hoisted to a following sibling still owns it.
    """

    # Tags some tree builders move out of an unclosed <DT>, possibly into a <DD>
    HOISTABLE = {"dl"}

    def __init__(self, tag: Tag):
        self._tag = tag

    @property
    def name(self) -> str:
        return (self._tag.name or "").lower()

    def children(self, node_type: str) -> List["SoupNode"]:
        node_type = node_type.lower()
        found = _collect(self._tag, node_type, {self.name})
        if not found and node_type in self.HOISTABLE:
            hoisted = self._following_sibling(node_type)
            if hoisted is not None:
                found = [hoisted]
        return [SoupNode(tag) for tag in found]

    def _following_sibling(self, node_type: str) -> Optional[Tag]:
        sibling = self._tag.find_next_sibling()
        while sibling is not None:
            sibling_name = (sibling.name or "").lower()
            if sibling_name == node_type:
                return sibling
            if sibling_name == "dd":
                # lxml nests a folder list under the description that precedes it
                described = sibling.find(node_type, recursive=False)
                if described is not None:
                    return described
            if sibling_name == self.name:
                # The next entry starts, nothing was hoisted from this one
                return None
            sibling = sibling.find_next_sibling()
        return None

    def text(self) -> str:
        return self._tag.get_text()

    def attribute(self, name: str) -> str:
        value = self._tag.get(name.lower())
        if value is None:
            return ""
        if isinstance(value, list):
            return " ".join(value)
        return value

    def __repr__(self) -> str:
        return f"SoupNode(<{self.name}>)"


class SoupDocument:
    """MarkupNode for a whole parsed document; owns top-level elements."""

    def __init__(self, soup: BeautifulSoup):
        self._soup = soup

    def children(self, node_type: str) -> List[SoupNode]:
        node_type = node_type.lower()
        return [
            SoupNode(tag) for tag in _collect(self._soup, node_type, {node_type})
        ]

    def text(self) -> str:
        return self._soup.get_text()

    def attribute(self, name: str) -> str:
        return ""


def load_document(markup: str, features: str = "lxml") -> SoupDocument:
    """
    Parse raw markup into a MarkupNode document.

    Args:
        markup: Bookmark export HTML
        features: BeautifulSoup tree builder ("lxml" or "html.parser")

    Returns:
        SoupDocument wrapping the parsed tree
    """
    return SoupDocument(BeautifulSoup(markup, features))
