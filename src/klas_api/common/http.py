from __future__ import annotations

from typing import Any, Optional

from flask import request
from werkzeug.datastructures import FileStorage

from ..core.enums import ErrorCode
from ..core.exceptions import AuthenticationError, ValidationError
from ..storage.model import UploadedFile

BEARER_PREFIX = "Bearer "


def bearer_token() -> str:
    """Access token from `Authorization: Bearer <token>`."""
    header = request.headers.get("Authorization", "")
    if not header.startswith(BEARER_PREFIX):
        raise AuthenticationError("Authorization header with Bearer token is required")
    token = header[len(BEARER_PREFIX):].strip()
    if not token:
        raise AuthenticationError("Authorization header with Bearer token is required")
    return token


def json_body() -> Any:
    body = request.get_json(silent=True)
    if body is None:
        raise ValidationError("Invalid JSON body", code=ErrorCode.INVALID_JSON)
    return body


def json_object() -> dict:
    body = json_body()
    if not isinstance(body, dict):
        raise ValidationError("JSON body must be an object", code=ErrorCode.INVALID_JSON)
    return body


def uploaded_file(*field_names: str) -> Optional[UploadedFile]:
    """First non-empty multipart file among `field_names`."""
    for name in field_names:
        storage: Optional[FileStorage] = request.files.get(name)
        if storage is None or not storage.filename:
            continue
        return UploadedFile(
            filename=storage.filename,
            content_type=(storage.mimetype or "").lower(),
            data=storage.read(),
        )
    return None
