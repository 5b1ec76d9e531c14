"""
Stateless traversals over a parsed bookmark tree.

Every function here is pure and iterative: nothing mutates the tree, and
deeply nested exports cannot exhaust the interpreter stack.
"""

from typing import Iterator, List, Optional, Tuple

from .data_models import (
    BookmarkNode,
    Category,
    CategoryNode,
    DisplayNode,
    TreeNode,
    direct_bookmarks_key,
)

DIRECT_BOOKMARKS_TITLE = "(bookmarks in this folder)"


def walk(tree: CategoryNode) -> Iterator[Tuple[TreeNode, CategoryNode]]:
    """
    Yield every node below ``tree`` in pre-order with its parent category.

    The root itself is not yielded.
    """
    stack = [(node, tree) for node in reversed(tree.nodes)]
    while stack:
        node, parent = stack.pop()
        yield node, parent
        if isinstance(node, CategoryNode):
            stack.extend((child, node) for child in reversed(node.nodes))


def iter_category_nodes(tree: CategoryNode) -> Iterator[CategoryNode]:
    """All category nodes in pre-order, root first."""
    yield tree
    for node, _ in walk(tree):
        if isinstance(node, CategoryNode):
            yield node


def flatten_categories(tree: CategoryNode) -> List[Category]:
    """Every category in pre-order, root excluded."""
    return [
        node.as_category() for node, _ in walk(tree) if isinstance(node, CategoryNode)
    ]


def flatten_bookmarks(tree: CategoryNode) -> List[BookmarkNode]:
    """Every bookmark in pre-order (document order)."""
    return [node for node, _ in walk(tree) if isinstance(node, BookmarkNode)]


def find_categories_by_name(tree: CategoryNode, name: str) -> List[CategoryNode]:
    """Categories whose sanitized name equals ``name``; names are not unique."""
    return [node for node in iter_category_nodes(tree) if node.name == name]


def find_category(tree: CategoryNode, category_id: str) -> Optional[CategoryNode]:
    for node in iter_category_nodes(tree):
        if node.id == category_id:
            return node
    return None


def build_display_tree(tree: CategoryNode) -> DisplayNode:
    """
    Build the selectable tree shown to the user.

    Mirrors the category structure, root included. A category with at least
    one direct bookmark gets a trailing virtual leaf so its own bookmarks can
    be selected independently of its sub-folders.

    Args:
        tree: Root of a parsed tree

    Returns:
        Display node for the root
    """
    root = DisplayNode(key=tree.id, title=tree.name)
    stack = [(tree, root)]
    while stack:
        category, display = stack.pop()
        for child in category.subcategories():
            child_display = DisplayNode(key=child.id, title=child.name)
            display.children.append(child_display)
            stack.append((child, child_display))
        if category.direct_bookmarks():
            display.children.append(
                DisplayNode(
                    key=direct_bookmarks_key(category.id),
                    title=DIRECT_BOOKMARKS_TITLE,
                    virtual=True,
                )
            )
    return root
