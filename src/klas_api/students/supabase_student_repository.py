from __future__ import annotations

from typing import Any, Optional, Sequence

from ..database.connection import SupabaseConnection
from ..database.supabase_base import fetchall, fetchone
from .model import Student
from .repository import StudentRepository

STUDENT_COLUMNS = "id, nisn, nama, kelas, user_id, avatar_path, last_status, last_date"


class SupabaseStudentRepository(StudentRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def _table(self):
        return self._conn.admin().table("students")

    def get_by_user_id(self, user_id: str) -> Optional[Student]:
        row = fetchone(
            self._table().select(STUDENT_COLUMNS).eq("user_id", user_id),
            action="students by user",
        )
        return Student.from_row(row) if row else None

    def get_by_name(self, nama: str) -> Optional[Student]:
        row = fetchone(self._table().select("*").eq("nama", nama), action="students by name")
        return Student.from_row(row) if row else None

    def list_all(self) -> Sequence[dict[str, Any]]:
        return fetchall(self._conn.client().table("students").select("*"), action="list students")

    def list_by_class(self, class_id: Any) -> Sequence[Student]:
        rows = fetchall(
            self._table().select("id, nisn, nama, kelas, avatar_path").eq("kelas", class_id).order("nama"),
            action="students by class",
        )
        return [Student.from_row(r) for r in rows]

    def link_user(self, *, student_id: int, user_id: str) -> Optional[Student]:
        rows = fetchall(
            self._table().update({"user_id": user_id}).eq("id", student_id),
            action="link student",
        )
        return Student.from_row(rows[0]) if rows else None

    def update_last_status(self, *, student_id: int, status: str, day: str) -> None:
        fetchall(
            self._table().update({"last_status": status, "last_date": day}).eq("id", student_id),
            action="update student cache",
        )

    def update_avatar_path(self, *, student_id: int, avatar_path: str) -> Optional[Student]:
        rows = fetchall(
            self._table().update({"avatar_path": avatar_path}).eq("id", student_id),
            action="update avatar path",
        )
        return Student.from_row(rows[0]) if rows else None
