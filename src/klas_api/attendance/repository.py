from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, HistoryFilter


class AttendanceRepository(Protocol):
    def get_for_student_and_date(self, student_id: int, day: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        student_id: int,
        day: str,
        status: AttendanceStatus,
        attachment_path: Optional[str] = None,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def list_for_students_on_date(self, student_ids: Sequence[int], day: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def set_status_for_students(self, student_ids: Sequence[int], day: str, status: AttendanceStatus) -> list[int]:
        """Update existing rows; returns the student ids actually updated."""

        raise NotImplementedError

    def create_many(self, student_ids: Sequence[int], day: str, status: AttendanceStatus) -> list[int]:
        """Insert one row per student; returns the student ids inserted."""

        raise NotImplementedError

    def history(self, flt: HistoryFilter) -> Sequence[dict[str, Any]]:
        """Rows newest first, each with an embedded `students` object."""

        raise NotImplementedError
