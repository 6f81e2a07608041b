from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from supabase import PostgrestAPIError, StorageException

from ..core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


@contextmanager
def upstream_errors(action: str) -> Iterator[None]:
    """Re-raise Supabase table/storage failures as `UpstreamError`.

    The provider message is passed through verbatim.
    """
    try:
        yield
    except PostgrestAPIError as e:
        message = getattr(e, "message", None) or str(e)
        logger.warning("%s failed: %s", action, message)
        raise UpstreamError(message, details=getattr(e, "details", None)) from e
    except StorageException as e:
        message = _storage_message(e)
        logger.warning("%s failed: %s", action, message)
        raise UpstreamError(message) from e


def _storage_message(e: StorageException) -> str:
    payload = e.args[0] if e.args else None
    if isinstance(payload, dict):
        return str(payload.get("message") or payload.get("error") or payload)
    return str(e)


def fetchall(query, *, action: str) -> List[Dict[str, Any]]:
    with upstream_errors(action):
        response = query.execute()
    return list(response.data or [])


def fetchone(query, *, action: str) -> Optional[Dict[str, Any]]:
    rows = fetchall(query.limit(1), action=action)
    return rows[0] if rows else None
