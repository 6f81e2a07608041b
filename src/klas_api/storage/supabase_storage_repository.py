from __future__ import annotations

import logging
from typing import Optional, Sequence

from supabase import StorageException

from ..core.constants import UPLOAD_CACHE_CONTROL
from ..database.connection import SupabaseConnection
from ..database.supabase_base import upstream_errors
from .repository import StorageRepository

logger = logging.getLogger(__name__)


class SupabaseStorageRepository(StorageRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def upload(self, *, bucket: str, path: str, data: bytes, content_type: str, upsert: bool = False) -> None:
        with upstream_errors(f"upload {bucket}/{path}"):
            self._conn.admin().storage.from_(bucket).upload(
                path=path,
                file=data,
                file_options={
                    "content-type": content_type or "application/octet-stream",
                    "cache-control": UPLOAD_CACHE_CONTROL,
                    "upsert": "true" if upsert else "false",
                },
            )

    def create_signed_url(self, *, bucket: str, path: str, expires_in: int) -> Optional[str]:
        try:
            data = self._conn.admin().storage.from_(bucket).create_signed_url(path, int(expires_in))
        except StorageException as e:
            logger.warning("signing %s/%s failed: %s", bucket, path, e)
            return None
        if not data:
            return None
        return data.get("signedURL") or data.get("signedUrl")

    def remove(self, *, bucket: str, paths: Sequence[str]) -> None:
        if not paths:
            return
        with upstream_errors(f"remove from {bucket}"):
            self._conn.admin().storage.from_(bucket).remove(list(paths))
