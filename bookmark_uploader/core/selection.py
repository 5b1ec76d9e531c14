"""
Selection of the bookmarks that will be uploaded.

The selection state is a set of checked keys. A key is either a category id
or a category id followed by DIRECT_BOOKMARKS_SUFFIX. A category contributes
its direct bookmarks when either of its keys is checked.

Selection is evaluated per category and is not inherited: unchecking a parent
never hides the bookmarks of a child that is checked on its own, and checking
a parent does not pull in the bookmarks of its sub-folders.
"""

import logging
from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, Iterable, List

from .data_models import BookmarkNode, CategoryNode, direct_bookmarks_key
from .tree_index import build_display_tree, flatten_bookmarks, iter_category_nodes, walk

logger = logging.getLogger(__name__)


def default_checked_keys(tree: CategoryNode) -> FrozenSet[str]:
    """
    Full default selection: every category id, root included.

    Direct-bookmark keys start unchecked; the plain key already implies them.
    """
    return frozenset(node.id for node in iter_category_nodes(tree))


def is_category_selected(category_id: str, checked_keys: AbstractSet[str]) -> bool:
    return (
        category_id in checked_keys
        or direct_bookmarks_key(category_id) in checked_keys
    )


def wait_upload_bookmarks(
    tree: CategoryNode, checked_keys: AbstractSet[str]
) -> List[BookmarkNode]:
    """
    Bookmarks currently selected for upload.

    Args:
        tree: Root of a parsed tree
        checked_keys: Checked category / direct-bookmark keys

    Returns:
        Selected bookmarks in the same order as flatten_bookmarks
    """
    selected = []
    selected_ids = {tree.id} if is_category_selected(tree.id, checked_keys) else set()

    # Categories are yielded before their children, so a parent's verdict is
    # known by the time its bookmarks come up
    for node, parent in walk(tree):
        if isinstance(node, CategoryNode):
            if is_category_selected(node.id, checked_keys):
                selected_ids.add(node.id)
        elif parent.id in selected_ids:
            selected.append(node)
    return selected


@dataclass(frozen=True)
class SelectionSummary:
    """Counts shown next to the tree ("N of M bookmarks")."""

    selected: int
    total: int

    def __str__(self) -> str:
        return f"{self.selected} of {self.total} bookmarks will be imported"


class SelectionEngine:
    """Selection queries bound to one parsed tree."""

    def __init__(self, tree: CategoryNode):
        self.tree = tree
        self._all_bookmarks = flatten_bookmarks(tree)
        self._known_keys = frozenset(build_display_tree(tree).iter_keys())

    def default_checked_keys(self) -> FrozenSet[str]:
        return default_checked_keys(self.tree)

    def known_keys(self) -> FrozenSet[str]:
        """Every key the display tree offers."""
        return self._known_keys

    def normalize(self, keys: Iterable[str]) -> FrozenSet[str]:
        """Drop keys that do not address a node of this tree."""
        keys = frozenset(keys)
        unknown = keys - self._known_keys
        if unknown:
            logger.debug(f"Ignoring {len(unknown)} unknown selection keys")
        return keys & self._known_keys

    def wait_upload_bookmarks(self, checked_keys: AbstractSet[str]) -> List[BookmarkNode]:
        return wait_upload_bookmarks(self.tree, checked_keys)

    def summary(self, checked_keys: AbstractSet[str]) -> SelectionSummary:
        return SelectionSummary(
            selected=len(self.wait_upload_bookmarks(checked_keys)),
            total=len(self._all_bookmarks),
        )
