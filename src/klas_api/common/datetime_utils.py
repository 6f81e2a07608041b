from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.constants import DAY_NAMES
from ..core.enums import ErrorCode
from ..core.exceptions import ValidationError

_INDONESIAN_DAYS = {name.lower(): name for name in DAY_NAMES.values()}


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD", code=ErrorCode.INVALID_DATE)


def now_local(tz_name: str) -> datetime:
    """Current time in the school timezone.

    Note: Wrapped so tests can patch it or pass `now` explicitly.
    """
    return datetime.now(ZoneInfo(tz_name))


def day_name(now: datetime, override: Optional[str] = None) -> str:
    """Indonesian weekday name for `now`, or the normalised override.

    The override accepts English or Indonesian names in any case. Unknown
    values are returned unchanged.
    """
    if override:
        key = override.strip().lower()
        return DAY_NAMES.get(key) or _INDONESIAN_DAYS.get(key) or override
    english = now.strftime("%A").lower()
    return DAY_NAMES.get(english, english)


def normalize_hhmm(value: str) -> str:
    """Zero-pad a `H:M` style value into `HH:MM`; missing parts become 00."""
    parts = value.strip().split(":")
    hh = parts[0] or "0"
    mm = parts[1] if len(parts) > 1 and parts[1] else "0"
    if not (hh.isdigit() and mm.isdigit()) or int(hh) > 23 or int(mm) > 59:
        raise ValidationError(f"Invalid time {value!r}, expected HH:MM")
    return f"{int(hh):02d}:{int(mm):02d}"


def format_hhmm(now: datetime) -> str:
    return now.strftime("%H:%M")
