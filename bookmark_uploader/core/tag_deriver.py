"""
Tag derivation for wait-upload bookmarks.

Folders of the export become tags. The linking strategy decides which
ancestor folders of a bookmark are offered; the tag rules decide which of
those are checked by default and which cannot be checked at all.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .data_models import (
    BookmarkNode,
    LinkTagStrategy,
    TagOption,
    UploadItem,
    sanitize_category_name,
)

DEFAULT_FALLBACK_TAG = "Other"
DEFAULT_MAX_TAG_NAME_LENGTH = 20
DEFAULT_RESERVED_TAG_NAME = "Bookmarks bar"


@dataclass(frozen=True)
class TagRules:
    """
    Fixed inputs of tag derivation.

    Attributes:
        fallback_tag: Tag every bookmark gets; always checked, never removable
        max_tag_name_length: Longer names are shown but cannot be checked
        reserved_tag_name: Folder name never checked by default
    """

    fallback_tag: str = DEFAULT_FALLBACK_TAG
    max_tag_name_length: int = DEFAULT_MAX_TAG_NAME_LENGTH
    reserved_tag_name: str = DEFAULT_RESERVED_TAG_NAME

    def __post_init__(self):
        # Compare against folder names the way the parser stores them
        object.__setattr__(
            self, "reserved_tag_name", sanitize_category_name(self.reserved_tag_name)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fallback_tag": self.fallback_tag,
            "max_tag_name_length": self.max_tag_name_length,
            "reserved_tag_name": self.reserved_tag_name,
        }


def _unique(names: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(names))


class TagDeriver:
    """Computes candidate, checked and per-bookmark tags for a strategy."""

    def __init__(self, rules: Optional[TagRules] = None):
        self.rules = rules or TagRules()
        self.logger = logging.getLogger(__name__)

    @property
    def fallback_tag(self) -> str:
        return self.rules.fallback_tag

    def bookmark_tag_names(
        self, bookmark: BookmarkNode, strategy: LinkTagStrategy
    ) -> List[str]:
        """
        Folder names a single bookmark links to, fallback not included.

        Args:
            bookmark: Bookmark whose ancestor chain is inspected
            strategy: Linking strategy

        Returns:
            Names ordered outermost to innermost, without duplicates
        """
        if strategy == LinkTagStrategy.OTHER or not bookmark.categories:
            return []
        if strategy == LinkTagStrategy.CLOSED_FOLDER:
            return [bookmark.categories[-1].name]
        return _unique(c.name for c in bookmark.categories)

    def candidate_tags(
        self, strategy: LinkTagStrategy, bookmarks: Sequence[BookmarkNode]
    ) -> List[str]:
        """
        Every tag the strategy can produce for the given bookmarks.

        The fallback comes first, folder names follow in first-seen order.
        """
        names = [self.fallback_tag]
        for bookmark in bookmarks:
            names.extend(self.bookmark_tag_names(bookmark, strategy))
        candidates = _unique(names)
        self.logger.debug(
            f"{len(candidates)} candidate tags for {len(bookmarks)} bookmarks "
            f"({strategy.value})"
        )
        return candidates

    def is_too_long(self, name: str) -> bool:
        return len(name) > self.rules.max_tag_name_length

    def is_disabled(self, name: str) -> bool:
        """Disabled tags keep their checked state: the fallback stays on, long names stay off."""
        return name == self.fallback_tag or self.is_too_long(name)

    def default_checked_tags(self, candidates: Sequence[str]) -> List[str]:
        """
        Candidates checked after every strategy or selection change.

        Drops the reserved folder name and names over the length limit; the
        fallback tag is always kept.
        """
        return [
            name
            for name in candidates
            if name == self.fallback_tag
            or (name != self.rules.reserved_tag_name and not self.is_too_long(name))
        ]

    def apply_manual_selection(
        self, candidates: Sequence[str], requested: Iterable[str]
    ) -> List[str]:
        """
        Checked tags after the user edited the checklist.

        Only enabled candidates can be toggled; the fallback cannot be
        removed. The result follows candidate order.
        """
        requested = set(requested)
        return [
            name
            for name in candidates
            if name == self.fallback_tag
            or (name in requested and not self.is_disabled(name))
        ]

    def tag_options(
        self, candidates: Sequence[str], checked: Iterable[str]
    ) -> List[TagOption]:
        """Full candidate list as shown to the user, excluded entries included."""
        checked = set(checked)
        return [
            TagOption(name=name, checked=name in checked, disabled=self.is_disabled(name))
            for name in candidates
        ]

    def effective_tags(
        self,
        bookmark: BookmarkNode,
        strategy: LinkTagStrategy,
        checked: Iterable[str],
    ) -> List[str]:
        """
        Tags actually attached to a bookmark on upload.

        (bookmark's own strategy names + fallback) intersected with the
        checked tags.
        """
        checked = set(checked)
        own = _unique([self.fallback_tag] + self.bookmark_tag_names(bookmark, strategy))
        return [name for name in own if name in checked]

    def upload_items(
        self,
        bookmarks: Sequence[BookmarkNode],
        strategy: LinkTagStrategy,
        checked: Iterable[str],
    ) -> List[UploadItem]:
        checked = list(checked)
        return [
            UploadItem(bookmark=b, tags=self.effective_tags(b, strategy, checked))
            for b in bookmarks
        ]
