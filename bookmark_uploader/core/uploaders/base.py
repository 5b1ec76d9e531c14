"""
Base classes for upload collaborators.

An upload collaborator receives a confirmed UploadPayload and is responsible
for the actual submission. The core never talks to the network itself.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

from ...utils.error_handler import UploadError
from ..data_models import UploadPayload

__all__ = ["BookmarkUploader", "UploadResult", "UploadError"]


@dataclass
class UploadResult:
    """
    Result of handing a payload off.

    Attributes:
        count: Number of bookmarks handed off
        uploader_name: Name of the collaborator used
        destination: Human-readable target (path, URL, stream name)
        uploaded_at: Timestamp of the hand-off
        additional_info: Collaborator-specific details
        warnings: Non-fatal issues noticed during the hand-off
    """

    count: int
    uploader_name: str
    destination: str
    uploaded_at: datetime = field(default_factory=datetime.now)
    additional_info: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return (
            f"UploadResult(uploader={self.uploader_name}, "
            f"count={self.count}, destination={self.destination})"
        )


class BookmarkUploader(ABC):
    """
    Abstract base class for upload collaborators.

    Example:
        >>> uploader = JSONPayloadWriter(Path("payload.json"))
        >>> result = uploader.upload(payload)
        >>> print(f"Handed off {result.count} bookmarks to {result.destination}")
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def upload(self, payload: UploadPayload) -> UploadResult:
        """
        Submit a confirmed payload.

        Args:
            payload: Wait-upload bookmarks, checked tags and strategy

        Returns:
            UploadResult with details about the hand-off

        Raises:
            UploadError: If the hand-off fails
        """
        pass

    @property
    @abstractmethod
    def uploader_name(self) -> str:
        """Human-readable name of the collaborator."""
        pass

    def check_payload(self, payload: UploadPayload) -> List[str]:
        """
        Refuse empty payloads and collect warnings for the rest.

        Raises:
            UploadError: If the payload holds no bookmark
        """
        if not payload.items:
            raise UploadError("No bookmarks to upload", uploader_name=self.uploader_name)

        warnings = []
        untitled = sum(1 for item in payload.items if not item.bookmark.name.strip())
        if untitled:
            warnings.append(f"{untitled} bookmark(s) have no title")
        return warnings
