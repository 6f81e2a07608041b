from __future__ import annotations

from typing import Any, Sequence

from ..database.connection import SupabaseConnection
from ..database.supabase_base import fetchall
from .repository import ScheduleRepository

SUBJECT_COLUMNS = "id, subject, start_time, end_time, teacher"


class SupabaseScheduleRepository(ScheduleRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def _table(self, name: str):
        return self._conn.client().table(name)

    def list_subjects(self) -> Sequence[dict[str, Any]]:
        return fetchall(self._table("subjects_schedule").select("*").order("id"), action="subjects schedule")

    def list_duty(self) -> Sequence[dict[str, Any]]:
        return fetchall(self._table("duty_schedule").select("*").order("id"), action="duty schedule")

    def subjects_for_day(self, day: str) -> Sequence[dict[str, Any]]:
        return fetchall(
            self._table("subjects_full").select(SUBJECT_COLUMNS).eq("day", day).order("id"),
            action="today schedule",
        )

    def ongoing_subjects(self, day: str, hhmm: str) -> Sequence[dict[str, Any]]:
        return fetchall(
            self._table("subjects_full")
            .select(SUBJECT_COLUMNS)
            .eq("day", day)
            .lte("start_time", hhmm)
            .gt("end_time", hhmm)
            .order("id"),
            action="ongoing subjects",
        )

    def duty_for_day(self, day: str) -> Sequence[dict[str, Any]]:
        return fetchall(
            self._table("duty_schedule").select("id, student_name").eq("day", day).order("id"),
            action="today duty",
        )
