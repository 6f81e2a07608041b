from __future__ import annotations

from typing import Any, Optional

from .enums import ErrorCode


def error_body(code: ErrorCode | str, message: str, details: Optional[Any] = None) -> dict:
    """Build the `{"error": {code, message, details?}}` envelope."""
    error = {
        "code": code.value if isinstance(code, ErrorCode) else str(code),
        "message": message,
    }
    if details is not None:
        error["details"] = details
    return {"error": error}
