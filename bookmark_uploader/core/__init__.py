"""
Core bookmark import modules.

This package contains the parsing of browser bookmark exports into a
category tree, the selection model over that tree and the tag derivation
that produces the upload payload.
"""

from .bookmark_html_parser import BookmarkHTMLParser
from .data_models import (
    DIRECT_BOOKMARKS_SUFFIX,
    ROOT_ID,
    BookmarkNode,
    Category,
    CategoryNode,
    DisplayNode,
    LinkTagStrategy,
    TagOption,
    UploadItem,
    UploadPayload,
)
from .selection import SelectionEngine, wait_upload_bookmarks
from .session import ImportSession, SessionState
from .tag_deriver import TagDeriver, TagRules
from .tree_index import build_display_tree, flatten_bookmarks, flatten_categories

__all__ = [
    'BookmarkHTMLParser',
    'DIRECT_BOOKMARKS_SUFFIX',
    'ROOT_ID',
    'BookmarkNode',
    'Category',
    'CategoryNode',
    'DisplayNode',
    'LinkTagStrategy',
    'TagOption',
    'UploadItem',
    'UploadPayload',
    'SelectionEngine',
    'wait_upload_bookmarks',
    'ImportSession',
    'SessionState',
    'TagDeriver',
    'TagRules',
    'build_display_tree',
    'flatten_bookmarks',
    'flatten_categories',
]
