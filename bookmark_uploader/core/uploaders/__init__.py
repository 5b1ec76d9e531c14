"""
Upload collaborators.

The core produces an UploadPayload; these classes hand it off.
"""

from .base import BookmarkUploader, UploadError, UploadResult
from .json_writer import JSONPayloadWriter

__all__ = [
    "BookmarkUploader",
    "UploadResult",
    "UploadError",
    "JSONPayloadWriter",
]
