from __future__ import annotations

import io
import logging
from typing import Optional, Sequence

from PIL import Image

from ..core.constants import MIME_EXTENSION_MAP
from ..core.enums import ErrorCode
from ..core.exceptions import ConfigurationError, UpstreamError, ValidationError
from .model import UploadedFile
from .repository import StorageRepository

logger = logging.getLogger(__name__)


class BucketService:
    """Uploads, signs and removes objects of one bucket with its own limits."""

    def __init__(
        self,
        storage: StorageRepository,
        *,
        bucket: str,
        label: str,
        signed_url_ttl: int,
        allowed_types: Sequence[str],
        max_size: int,
    ):
        self._storage = storage
        self.bucket = bucket
        self.label = label
        self.signed_url_ttl = int(signed_url_ttl)
        self.allowed_types = [t.lower() for t in allowed_types]
        self.max_size = int(max_size)

    def validate(self, file: UploadedFile) -> str:
        """Check type, size and content of `file`; returns the object extension."""
        mime = (file.content_type or "").lower()
        if mime not in self.allowed_types:
            raise ValidationError(
                f"Invalid file type. Allowed: {', '.join(self.allowed_types)}",
                code=ErrorCode.INVALID_FILE_TYPE,
            )
        if file.size > self.max_size:
            raise ValidationError(
                f"File too large. Max {self.max_size // 1024 // 1024}MB",
                code=ErrorCode.FILE_TOO_LARGE,
            )
        if mime.startswith("image/") and not _looks_like_image(file.data):
            raise ValidationError("File content is not a valid image", code=ErrorCode.INVALID_FILE_TYPE)
        if mime == "application/pdf" and not file.data.startswith(b"%PDF-"):
            raise ValidationError("File content is not a valid PDF", code=ErrorCode.INVALID_FILE_TYPE)
        return MIME_EXTENSION_MAP.get(mime, "dat")

    def upload(self, path: str, file: UploadedFile) -> str:
        if not self.bucket:
            raise ConfigurationError(f"{self.label} bucket not configured")
        self._storage.upload(
            bucket=self.bucket,
            path=path,
            data=file.data,
            content_type=file.content_type or "application/octet-stream",
            upsert=False,
        )
        logger.info("uploaded %s/%s (%d bytes)", self.bucket, path, file.size)
        return path

    def sign(self, path: Optional[str]) -> Optional[str]:
        if not path or not self.bucket:
            return None
        return self._storage.create_signed_url(bucket=self.bucket, path=path, expires_in=self.signed_url_ttl)

    def remove(self, path: Optional[str]) -> None:
        if path and self.bucket:
            self._storage.remove(bucket=self.bucket, paths=[path])

    def discard(self, path: Optional[str]) -> None:
        """Best-effort `remove` for cleanup paths; failures are only logged."""
        try:
            self.remove(path)
        except UpstreamError as e:
            logger.warning("could not remove %s/%s: %s", self.bucket, path, e.message)


def _looks_like_image(data: bytes) -> bool:
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError):
        return False
    return True


def timestamp_slug(now) -> str:
    """ISO timestamp usable in object paths (':' and '.' replaced by '-')."""
    return now.isoformat(timespec="milliseconds").replace(":", "-").replace(".", "-").replace("+", "-")
