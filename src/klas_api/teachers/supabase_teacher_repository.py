from __future__ import annotations

from typing import Any, Optional, Sequence

from ..database.connection import SupabaseConnection
from ..database.supabase_base import fetchall, fetchone
from .model import Teacher
from .repository import TeacherRepository


class SupabaseTeacherRepository(TeacherRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def get_by_user_id(self, user_id: str) -> Optional[Teacher]:
        row = fetchone(
            self._conn.admin().table("teachers").select("*").eq("user_id", user_id),
            action="teacher by user",
        )
        return Teacher.from_row(row) if row else None

    def list_classes(self) -> Sequence[dict[str, Any]]:
        return fetchall(self._conn.client().table("class").select("*").order("class_name"), action="list classes")
