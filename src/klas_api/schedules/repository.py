from __future__ import annotations

from typing import Any, Protocol, Sequence


class ScheduleRepository(Protocol):
    """Read-only access to the weekly subject and duty timetables."""

    def list_subjects(self) -> Sequence[dict[str, Any]]:
        raise NotImplementedError

    def list_duty(self) -> Sequence[dict[str, Any]]:
        raise NotImplementedError

    def subjects_for_day(self, day: str) -> Sequence[dict[str, Any]]:
        raise NotImplementedError

    def ongoing_subjects(self, day: str, hhmm: str) -> Sequence[dict[str, Any]]:
        """Subjects of `day` with start_time <= hhmm < end_time."""

        raise NotImplementedError

    def duty_for_day(self, day: str) -> Sequence[dict[str, Any]]:
        raise NotImplementedError
