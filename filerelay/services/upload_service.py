"""
FileRelay: Upload Validation Service
======================================

What:  Validates an uploaded file's declared MIME type and size, and turns
       accepted bytes into the inline-data part sent to the generative model.
How:   Pure synchronous checks against the allowed type set and the size
       limit from settings. Nothing is written to disk.
Who:   Called by the /read-file route before any external API call.
When:  Immediately after the multipart upload is received.

Validation order:
    1. MIME type check:  declared Content-Type of the `file` part
    2. Size check:       declared part size, when the parser reports one
    3. Size re-check:    actual byte count after a bounded read
"""

import base64
import logging
from typing import Any, Dict, Optional

from filerelay.config import settings
from filerelay.exceptions import ValidationError
from filerelay.schemas.upload import Upload

logger = logging.getLogger(__name__)

# ── Allowed File Types ────────────────────────────────────────────────────
ALLOWED_MIME_TYPES = frozenset({
    "image/jpeg",
    "image/png",
    "application/pdf",
})


class UploadService:
    """
    Accepts or rejects uploads before they reach the generative API.

    Every rejection raises ValidationError, which the global handler turns
    into HTTP 400.
    """

    def __init__(self, max_file_size: Optional[int] = None):
        """
        Args:
            max_file_size: Override the configured limit (used in tests).
                           If None, uses settings.max_file_size.
        """
        self.max_file_size = max_file_size or settings.max_file_size

    def validate_mime_type(self, mime_type: Optional[str]) -> str:
        """
        Check the declared MIME type against the allowed set.

        Returns: The accepted MIME type.
        Raises:  ValidationError("Invalid file type") otherwise, including
                 when the part carries no Content-Type at all.
        """
        if mime_type not in ALLOWED_MIME_TYPES:
            raise ValidationError(
                message="Invalid file type",
                field="file",
                context={
                    "mime_type": mime_type,
                    "allowed": sorted(ALLOWED_MIME_TYPES),
                },
            )
        return mime_type

    def validate_size(self, size: Optional[int]) -> None:
        """
        Check a byte count against the configured maximum (inclusive).

        Args:
            size: Declared or actual size. None means unknown and passes;
                  the actual byte count is checked again in build_upload().

        Raises:
            ValidationError("File too large")
        """
        if size is not None and size > self.max_file_size:
            raise ValidationError(
                message="File too large",
                field="file",
                context={"max_size": self.max_file_size, "size": size},
            )

    def validate(self, mime_type: Optional[str], size: Optional[int]) -> str:
        """
        Run both checks on the declared metadata. Fails fast on the first.

        Returns: The accepted MIME type.
        """
        accepted = self.validate_mime_type(mime_type)
        self.validate_size(size)
        return accepted

    def build_upload(
        self,
        filename: Optional[str],
        mime_type: Optional[str],
        content: bytes,
    ) -> Upload:
        """
        Validate the received bytes and wrap them in an Upload.

        The declared size may be missing or wrong, so the actual byte count
        is checked here as well.
        """
        accepted = self.validate(mime_type, len(content))
        upload = Upload(
            content=content,
            mime_type=accepted,
            size=len(content),
            filename=filename,
        )
        logger.debug(
            "Accepted upload: filename=%s, type=%s, size=%d bytes",
            filename or "unknown",
            accepted,
            upload.size,
        )
        return upload

    @staticmethod
    def to_generative_part(upload: Upload) -> Dict[str, Any]:
        """
        Convert an upload into the inline-data part the model accepts.

        Returns:
            {"mime_type": "image/png", "data": "<base64 of the bytes>"}
        """
        return {
            "mime_type": upload.mime_type,
            "data": base64.b64encode(upload.content).decode("ascii"),
        }


# ── Singleton Instance ────────────────────────────────────────────────────
upload_service = UploadService()
