from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from ..core.enums import AttendanceStatus

logger = logging.getLogger(__name__)


def parse_stored_status(value: Any) -> Union[AttendanceStatus, str]:
    """Known statuses become `AttendanceStatus`; anything else is kept as stored text."""
    text = str(value or "").strip()
    try:
        return AttendanceStatus(text.upper())
    except ValueError:
        logger.warning("unknown attendance status %r kept as-is", value)
        return text


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's attendance row for one day.

    Rows written outside this API can hold statuses outside the enum; those
    are carried as plain strings.
    """

    id: Optional[int]
    student_id: int
    date: str
    status: Union[AttendanceStatus, str]
    attachment_path: Optional[str] = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "AttendanceRecord":
        return cls(
            id=row.get("id"),
            student_id=int(row["student_id"]),
            date=str(row.get("date")),
            status=parse_stored_status(row.get("status")),
            attachment_path=row.get("attachment_path"),
            raw=dict(row),
        )

    @property
    def status_value(self) -> str:
        return self.status.value if isinstance(self.status, AttendanceStatus) else self.status

    @property
    def is_leave(self) -> bool:
        return isinstance(self.status, AttendanceStatus) and self.status.is_leave

    def to_dict(self) -> dict[str, Any]:
        if self.raw:
            return dict(self.raw)
        return {
            "id": self.id,
            "student_id": self.student_id,
            "date": self.date,
            "status": self.status_value,
            "attachment_path": self.attachment_path,
        }


@dataclass(frozen=True)
class HistoryFilter:
    class_id: Optional[str] = None
    student_id: Optional[str] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    limit: Optional[int] = None
