"""
JSON payload writer.

Hands the upload payload off as a JSON document, either to a file or to a
text stream such as stdout, for a separate submission step to pick up.
"""

import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Union

from ...utils.error_handler import UploadError
from ..data_models import UploadPayload
from .base import BookmarkUploader, UploadResult


class JSONPayloadWriter(BookmarkUploader):
    """
    Write the payload as JSON.

    Example:
        >>> writer = JSONPayloadWriter(Path("payload.json"))
        >>> result = writer.upload(payload)
    """

    def __init__(
        self,
        output: Optional[Union[str, Path, TextIO]] = None,
        indent: Optional[int] = 2,
        ensure_ascii: bool = False,
    ):
        """
        Initialize the writer.

        Args:
            output: Target file path or open text stream (stdout if None)
            indent: Number of spaces for indentation (None for compact output)
            ensure_ascii: Whether to escape non-ASCII characters
        """
        super().__init__()
        if isinstance(output, str):
            output = Path(output)
        self.output = output if output is not None else sys.stdout
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    @property
    def uploader_name(self) -> str:
        return "JSON"

    def upload(self, payload: UploadPayload) -> UploadResult:
        warnings = self.check_payload(payload)
        document = self.build_document(payload)

        if isinstance(self.output, Path):
            destination = str(self.output)
            try:
                self.output.parent.mkdir(parents=True, exist_ok=True)
                with open(self.output, "w", encoding="utf-8") as f:
                    self._dump(document, f)
            except OSError as e:
                raise UploadError(
                    f"Failed to write payload to {self.output}",
                    uploader_name=self.uploader_name,
                    original_error=e,
                ) from e
        else:
            destination = getattr(self.output, "name", "<stream>")
            self._dump(document, self.output)
            self.output.write("\n")

        self.logger.info(f"Handed off {len(payload.items)} bookmarks to {destination}")
        return UploadResult(
            count=len(payload.items),
            uploader_name=self.uploader_name,
            destination=destination,
            additional_info={"tag_count": len(payload.tag_names)},
            warnings=warnings,
        )

    def build_document(self, payload: UploadPayload) -> Dict[str, Any]:
        document = payload.to_dict()
        document["export_info"] = {
            "exported_at": datetime.now().isoformat(),
            "total_bookmarks": len(payload.items),
            "format_version": "1.0",
            "generator": "bookmark-uploader",
        }
        return document

    def _dump(self, document: Dict[str, Any], stream: TextIO) -> None:
        json.dump(document, stream, indent=self.indent, ensure_ascii=self.ensure_ascii)
