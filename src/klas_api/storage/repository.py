from __future__ import annotations

from typing import Optional, Protocol, Sequence


class StorageRepository(Protocol):
    """Object storage (buckets) interface."""

    def upload(self, *, bucket: str, path: str, data: bytes, content_type: str, upsert: bool = False) -> None:
        raise NotImplementedError

    def create_signed_url(self, *, bucket: str, path: str, expires_in: int) -> Optional[str]:
        """Signed download URL, or None when the provider refuses to sign."""

        raise NotImplementedError

    def remove(self, *, bucket: str, paths: Sequence[str]) -> None:
        raise NotImplementedError
