"""
Utility modules for the bookmark uploader.

This package contains the exception hierarchy, logging setup, input
validation and terminal rendering.
"""

from .error_handler import (
    BookmarkUploaderError,
    ConfigurationError,
    EmptySelectionWarning,
    MissingRootError,
    ParseError,
    StructuralError,
    UploadError,
    ValidationError,
)

__all__ = [
    "BookmarkUploaderError",
    "ConfigurationError",
    "EmptySelectionWarning",
    "MissingRootError",
    "ParseError",
    "StructuralError",
    "UploadError",
    "ValidationError",
]
