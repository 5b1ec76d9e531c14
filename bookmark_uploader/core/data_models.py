"""
Data models for the Bookmark Uploader.

This module defines the in-memory tree built from a browser bookmark export
and the payload handed to the upload collaborator.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Union

# Id of the synthetic root category wrapping every parsed tree
ROOT_ID = "0"
ROOT_NAME = "(Root)"

# Appended to a category id to address only the bookmarks directly inside it
DIRECT_BOOKMARKS_SUFFIX = "@"

# Category names end up in a URL path segment and in "+"-joined tag queries
_UNSAFE_NAME_CHARS = re.compile(r"[/+\s]")
NAME_PLACEHOLDER = "-"


def sanitize_category_name(name: str) -> str:
    """
    Replace path separators, tag delimiters and whitespace in a folder name.

    Args:
        name: Raw folder name from the export

    Returns:
        Name safe to use as a tag
    """
    return _UNSAFE_NAME_CHARS.sub(NAME_PLACEHOLDER, name)


def direct_bookmarks_key(category_id: str) -> str:
    """Selection key meaning "only the bookmarks directly in this folder"."""
    return category_id + DIRECT_BOOKMARKS_SUFFIX


class LinkTagStrategy(str, Enum):
    """Policy deciding which ancestor folders become tags of a bookmark."""

    FOLDER_PATH = "folder_path"  # every folder on the path
    CLOSED_FOLDER = "closed_folder"  # innermost folder only
    OTHER = "other"  # fallback tag only


@dataclass(frozen=True)
class Category:
    """A sanitized folder name plus its identity."""

    id: str
    name: str

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name}


@dataclass
class BookmarkNode:
    """
    A link found in the export.

    ``categories`` holds the ancestor folders ordered outermost to innermost,
    without the synthetic root.
    """

    id: str
    name: str
    url: str
    categories: List[Category] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "url": self.url,
            "categories": [c.to_dict() for c in self.categories],
        }


@dataclass
class CategoryNode:
    """A folder and its ordered children (sub-folders and bookmarks)."""

    id: str
    name: str
    nodes: List[Union["CategoryNode", BookmarkNode]] = field(default_factory=list)

    def as_category(self) -> Category:
        return Category(id=self.id, name=self.name)

    @property
    def is_root(self) -> bool:
        return self.id == ROOT_ID

    def direct_bookmarks(self) -> List[BookmarkNode]:
        """Bookmarks that are immediate children of this folder."""
        return [n for n in self.nodes if isinstance(n, BookmarkNode)]

    def subcategories(self) -> List["CategoryNode"]:
        return [n for n in self.nodes if isinstance(n, CategoryNode)]


TreeNode = Union[CategoryNode, BookmarkNode]


@dataclass
class DisplayNode:
    """
    Generic label/children node of the selectable tree.

    Virtual nodes stand for "bookmarks directly in this folder" and are keyed
    with the category id plus DIRECT_BOOKMARKS_SUFFIX.
    """

    key: str
    title: str
    children: List["DisplayNode"] = field(default_factory=list)
    virtual: bool = False

    def iter_keys(self) -> List[str]:
        """All keys of this subtree in pre-order."""
        keys = []
        stack = [self]
        while stack:
            node = stack.pop()
            keys.append(node.key)
            stack.extend(reversed(node.children))
        return keys


@dataclass
class TagOption:
    """One entry of the linkable-tag checklist."""

    name: str
    checked: bool
    disabled: bool


@dataclass
class UploadItem:
    """A wait-upload bookmark together with the tags attached to it."""

    bookmark: BookmarkNode
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result = self.bookmark.to_dict()
        result["tags"] = list(self.tags)
        return result


@dataclass
class UploadPayload:
    """
    Everything the upload collaborator needs.

    Attributes:
        tag_names: Checked tag names, in display order
        items: Wait-upload bookmarks with their effective tags
        link_tag_strategy: Strategy the tags were derived with
    """

    tag_names: List[str]
    items: List[UploadItem]
    link_tag_strategy: LinkTagStrategy

    @property
    def bookmarks(self) -> List[BookmarkNode]:
        return [item.bookmark for item in self.items]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tag_names": list(self.tag_names),
            "bookmarks": [item.to_dict() for item in self.items],
            "link_tag_strategy": self.link_tag_strategy.value,
        }
