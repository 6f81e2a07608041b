from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Optional

from ..common.datetime_utils import day_name, format_hhmm, normalize_hhmm, now_local
from .repository import ScheduleRepository


def group_by_day(rows: Iterable[dict[str, Any]], field: str) -> dict[str, list[dict[str, Any]]]:
    """`{day: [{"id", field}, ...]}` keeping row order inside each day."""
    grouped: dict[str, list[dict[str, Any]]] = {}
    for row in rows:
        grouped.setdefault(row["day"], []).append({"id": row["id"], field: row.get(field)})
    return grouped


class ScheduleService:
    def __init__(self, schedules: ScheduleRepository, *, timezone: str):
        self._schedules = schedules
        self._timezone = timezone

    def _now(self, now: Optional[datetime]) -> datetime:
        return now or now_local(self._timezone)

    def weekly_subjects(self) -> dict[str, list[dict[str, Any]]]:
        return group_by_day(self._schedules.list_subjects(), "subject")

    def weekly_duty(self) -> dict[str, list[dict[str, Any]]]:
        return group_by_day(self._schedules.list_duty(), "student_name")

    def today_schedule(self, day: Optional[str] = None, *, now: datetime | None = None) -> dict[str, Any]:
        today = day_name(self._now(now), day)
        return {"today": today, "schedule": list(self._schedules.subjects_for_day(today))}

    def ongoing(
        self,
        day: Optional[str] = None,
        at: Optional[str] = None,
        *,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        current = self._now(now)
        today = day_name(current, day)
        hhmm = normalize_hhmm(at) if at else format_hhmm(current)
        return {"today": today, "time": hhmm, "ongoing": list(self._schedules.ongoing_subjects(today, hhmm))}

    def today_duty(self, day: Optional[str] = None, *, now: datetime | None = None) -> dict[str, Any]:
        today = day_name(self._now(now), day)
        return {"today": today, "duty": list(self._schedules.duty_for_day(today))}
