from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import UpstreamError
from ..database.connection import SupabaseConnection
from ..database.supabase_base import fetchall, fetchone
from .model import AttendanceRecord, HistoryFilter
from .repository import AttendanceRepository

HISTORY_SELECT = "*, students(nama, nisn, kelas, class(class_name))"
HISTORY_SELECT_BY_CLASS = "*, students!inner(nama, nisn, kelas, class(class_name))"


class SupabaseAttendanceRepository(AttendanceRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def _table(self):
        return self._conn.admin().table("attendances")

    def get_for_student_and_date(self, student_id: int, day: str) -> Optional[AttendanceRecord]:
        row = fetchone(
            self._table().select("*").eq("student_id", student_id).eq("date", day),
            action="attendance duplicate check",
        )
        return AttendanceRecord.from_row(row) if row else None

    def create(
        self,
        *,
        student_id: int,
        day: str,
        status: AttendanceStatus,
        attachment_path: Optional[str] = None,
    ) -> AttendanceRecord:
        record = {"student_id": student_id, "date": day, "status": status.value}
        if attachment_path:
            record["attachment_path"] = attachment_path
        rows = fetchall(self._table().insert([record]), action="insert attendance")
        if not rows:
            raise UpstreamError("Attendance insert returned no row")
        return AttendanceRecord.from_row(rows[0])

    def list_for_students_on_date(self, student_ids: Sequence[int], day: str) -> Sequence[AttendanceRecord]:
        if not student_ids:
            return []
        rows = fetchall(
            self._table()
            .select("id, student_id, status, date, attachment_path")
            .in_("student_id", list(student_ids))
            .eq("date", day),
            action="attendances for students",
        )
        return [AttendanceRecord.from_row(r) for r in rows]

    def set_status_for_students(self, student_ids: Sequence[int], day: str, status: AttendanceStatus) -> list[int]:
        if not student_ids:
            return []
        rows = fetchall(
            self._table().update({"status": status.value}).in_("student_id", list(student_ids)).eq("date", day),
            action="update attendance status",
        )
        return [int(r["student_id"]) for r in rows]

    def create_many(self, student_ids: Sequence[int], day: str, status: AttendanceStatus) -> list[int]:
        if not student_ids:
            return []
        records = [{"student_id": sid, "date": day, "status": status.value} for sid in student_ids]
        rows = fetchall(self._table().insert(records), action="insert attendances")
        return [int(r["student_id"]) for r in rows]

    def history(self, flt: HistoryFilter) -> Sequence[dict[str, Any]]:
        select = HISTORY_SELECT_BY_CLASS if flt.class_id else HISTORY_SELECT
        query = self._table().select(select)
        if flt.class_id:
            query = query.eq("students.kelas", flt.class_id)
        if flt.student_id:
            query = query.eq("student_id", flt.student_id)
        if flt.date_from:
            query = query.gte("date", flt.date_from)
        if flt.date_to:
            query = query.lte("date", flt.date_to)
        query = query.order("date", desc=True)
        if flt.limit:
            query = query.limit(flt.limit)
        return fetchall(query, action="attendance history")
