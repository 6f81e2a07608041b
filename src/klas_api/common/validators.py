from __future__ import annotations

from typing import Any, Optional

from ..core.enums import ErrorCode
from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required", code=ErrorCode.MISSING_FIELD)
    return str(value).strip()


def optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def coerce_id(value: Any) -> int | str:
    """Send numeric ids as integers, everything else as-is (uuid, codes)."""
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        return text


def parse_int_ids(values: list) -> list[int]:
    """Keep the entries of `values` that parse as integers, in order, without duplicates."""
    ids: list[int] = []
    for v in values:
        try:
            parsed = int(str(v).strip())
        except (TypeError, ValueError):
            continue
        if parsed not in ids:
            ids.append(parsed)
    return ids
