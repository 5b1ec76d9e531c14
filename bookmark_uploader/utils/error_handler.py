"""
Unified exception hierarchy for the Bookmark Uploader.

All custom exceptions for the bookmark uploader project are defined here.
Import these exceptions from bookmark_uploader.utils.error_handler
"""

from typing import Optional


class BookmarkUploaderError(Exception):
    """Base exception for all bookmark uploader errors."""

    pass


# ============================================================================
# Validation Errors
# ============================================================================


class ValidationError(BookmarkUploaderError):
    """Invalid user input (command-line arguments, selected files)."""

    pass


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(BookmarkUploaderError):
    """Configuration-related errors."""

    pass


# ============================================================================
# Parse Errors
# ============================================================================


class ParseError(BookmarkUploaderError):
    """
    Fatal error while turning a bookmark export into a category tree.

    Attributes:
        message: Error description
        source: Name of the file being parsed, if known
    """

    def __init__(self, message: str, source: Optional[str] = None):
        self.message = message
        self.source = source
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.source:
            return f"{self.message} (file: {self.source})"
        return self.message


class MissingRootError(ParseError):
    """The top-level <DL> folder container is absent from the document."""

    pass


class StructuralError(ParseError):
    """A <DT> entry is neither a folder (<H3> + <DL>) nor a link (<A>)."""

    pass


# ============================================================================
# Upload Errors
# ============================================================================


class UploadError(BookmarkUploaderError):
    """
    Raised by an upload collaborator when the hand-off fails.

    Attributes:
        message: Error description
        uploader_name: Name of the collaborator
        original_error: Underlying exception if any
    """

    def __init__(
        self,
        message: str,
        uploader_name: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.uploader_name = uploader_name
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = []
        if self.uploader_name:
            parts.append(f"[{self.uploader_name}]")
        parts.append(self.message)
        if self.original_error:
            parts.append(
                f"Caused by: {type(self.original_error).__name__}: {self.original_error}"
            )
        return " ".join(parts)


# ============================================================================
# Warnings
# ============================================================================


class EmptySelectionWarning(UserWarning):
    """
    Submitting was attempted while no bookmark is selected for upload.

    This is not an error: the session stays in the selection stage and no
    payload is produced.
    """

    pass
