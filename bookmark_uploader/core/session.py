"""
Import session: the state behind the "import browser bookmarks" flow.

The authoritative state is {tree, checked keys, checked tags, strategy}.
Every mutation recomputes all derived views in a fixed order:

    tree -> flat categories, flat bookmarks, display tree
         -> wait-upload bookmarks -> candidate tags -> checked tags

Nothing is patched incrementally.
"""

import logging
import warnings
from enum import Enum
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Sequence, Union

from ..utils.error_handler import EmptySelectionWarning
from .bookmark_html_parser import BookmarkHTMLParser
from .data_models import (
    BookmarkNode,
    Category,
    CategoryNode,
    DisplayNode,
    LinkTagStrategy,
    TagOption,
    UploadPayload,
)
from .selection import SelectionEngine, SelectionSummary
from .tag_deriver import TagDeriver, TagRules
from .tree_index import build_display_tree, flatten_bookmarks, flatten_categories


class SessionState(str, Enum):
    """Stages of the import flow."""

    IDLE = "idle"  # no file
    TREE_BUILT = "tree_built"  # fresh tree, full default selection
    SELECTING = "selecting"  # user edited selection, strategy or tags
    SUBMITTED = "submitted"  # payload handed off


class ImportSession:
    """
    Single-writer state machine for one bookmark import.

    Example:
        >>> session = ImportSession()
        >>> session.open_file("bookmarks.html")
        >>> session.set_strategy(LinkTagStrategy.CLOSED_FOLDER)
        >>> payload = session.submit()
    """

    def __init__(
        self,
        parser: Optional[BookmarkHTMLParser] = None,
        tag_rules: Optional[TagRules] = None,
        default_strategy: LinkTagStrategy = LinkTagStrategy.FOLDER_PATH,
    ):
        self.logger = logging.getLogger(__name__)
        self.parser = parser or BookmarkHTMLParser()
        self.deriver = TagDeriver(tag_rules)
        self.default_strategy = LinkTagStrategy(default_strategy)
        self._clear()

    def _clear(self) -> None:
        self.state = SessionState.IDLE
        self.source_name: Optional[str] = None
        self.tree: Optional[CategoryNode] = None
        self.strategy = self.default_strategy
        self.checked_keys: FrozenSet[str] = frozenset()
        self.checked_tags: List[str] = []

        self._engine: Optional[SelectionEngine] = None
        self.categories: List[Category] = []
        self.bookmarks: List[BookmarkNode] = []
        self.display_tree: Optional[DisplayNode] = None
        self.wait_upload: List[BookmarkNode] = []
        self.candidate_tags: List[str] = []

    # ------------------------------------------------------------------
    # File selection
    # ------------------------------------------------------------------

    def select_files(self, paths: Sequence[Union[str, Path]]) -> bool:
        """
        Handle a file picker result.

        Anything other than exactly one HTML file is ignored.

        Returns:
            True if a file was loaded
        """
        if len(paths) != 1:
            self.logger.debug(f"Ignoring selection of {len(paths)} files")
            return False
        path = Path(paths[0])
        if path.suffix.lower() not in BookmarkHTMLParser.SUPPORTED_EXTENSIONS:
            self.logger.debug(f"Ignoring non-HTML file: {path.name}")
            return False
        self.open_file(path)
        return True

    def open_file(self, path: Union[str, Path]) -> CategoryNode:
        """
        Parse a bookmark export and install it as the current tree.

        Parse errors propagate and leave the previous state untouched.
        """
        path = Path(path)
        tree = self.parser.parse_file(path)
        self.install_tree(tree, source_name=path.name)
        return tree

    def load_html(self, html_content: str, source_name: Optional[str] = None) -> CategoryNode:
        tree = self.parser.parse_html(html_content, source=source_name)
        self.install_tree(tree, source_name=source_name)
        return tree

    def install_tree(self, tree: CategoryNode, source_name: Optional[str] = None) -> None:
        """Replace everything with a freshly parsed tree and full selection."""
        self._clear()
        self.tree = tree
        self.source_name = source_name
        self._engine = SelectionEngine(tree)
        self.categories = flatten_categories(tree)
        self.bookmarks = flatten_bookmarks(tree)
        self.display_tree = build_display_tree(tree)
        self.checked_keys = self._engine.default_checked_keys()
        self._recompute_selection()
        self.state = SessionState.TREE_BUILT
        self.logger.info(
            f"Loaded {len(self.bookmarks)} bookmarks in "
            f"{len(self.categories)} folders"
            + (f" from {source_name}" if source_name else "")
        )

    def reset(self) -> None:
        """Forget the current file ("choose again")."""
        self._clear()

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def set_checked_keys(self, keys: Iterable[str]) -> None:
        self._require_tree()
        self.checked_keys = self._engine.normalize(keys)
        self._recompute_selection()
        self.state = SessionState.SELECTING

    def check(self, *keys: str) -> None:
        self.set_checked_keys(self.checked_keys | set(keys))

    def uncheck(self, *keys: str) -> None:
        self.set_checked_keys(self.checked_keys - set(keys))

    def set_strategy(self, strategy: LinkTagStrategy) -> None:
        self._require_tree()
        self.strategy = LinkTagStrategy(strategy)
        self._recompute_tags()
        self.state = SessionState.SELECTING

    def set_checked_tags(self, names: Iterable[str]) -> None:
        """Manual edit of the tag checklist; candidates stay as they are."""
        self._require_tree()
        self.checked_tags = self.deriver.apply_manual_selection(self.candidate_tags, names)
        self.state = SessionState.SELECTING

    def uncheck_tags(self, *names: str) -> None:
        self.set_checked_tags(t for t in self.checked_tags if t not in names)

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def _recompute_selection(self) -> None:
        self.wait_upload = self._engine.wait_upload_bookmarks(self.checked_keys)
        self._recompute_tags()

    def _recompute_tags(self) -> None:
        # Replaces any manual tag edit
        self.candidate_tags = self.deriver.candidate_tags(self.strategy, self.wait_upload)
        self.checked_tags = self.deriver.default_checked_tags(self.candidate_tags)

    def tag_options(self) -> List[TagOption]:
        return self.deriver.tag_options(self.candidate_tags, self.checked_tags)

    def summary(self) -> SelectionSummary:
        self._require_tree()
        return self._engine.summary(self.checked_keys)

    def build_payload(self) -> UploadPayload:
        return UploadPayload(
            tag_names=list(self.checked_tags),
            items=self.deriver.upload_items(
                self.wait_upload, self.strategy, self.checked_tags
            ),
            link_tag_strategy=self.strategy,
        )

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit(self) -> Optional[UploadPayload]:
        """
        Confirm the configuration and produce the upload payload.

        With nothing selected an EmptySelectionWarning is emitted, no payload
        is produced and the session stays in the selection stage.
        """
        self._require_tree()
        if not self.wait_upload:
            message = "No bookmarks to upload, check the import configuration"
            self.logger.warning(message)
            warnings.warn(message, EmptySelectionWarning, stacklevel=2)
            self.state = SessionState.SELECTING
            return None

        payload = self.build_payload()
        self.state = SessionState.SUBMITTED
        self.logger.info(
            f"Submitting {len(payload.items)} bookmarks with "
            f"{len(payload.tag_names)} tags ({self.strategy.value})"
        )
        return payload

    def cancel_submission(self) -> None:
        """Leave the upload preview and return to editing."""
        if self.state == SessionState.SUBMITTED:
            self.state = SessionState.SELECTING

    def _require_tree(self) -> None:
        if self.tree is None:
            raise RuntimeError("No bookmark file loaded")

    @property
    def has_tree(self) -> bool:
        return self.tree is not None

    def is_checked(self, key: str) -> bool:
        return key in self.checked_keys
