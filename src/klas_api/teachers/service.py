from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from ..attendance.model import HistoryFilter
from ..attendance.qr import QrToken, QrTokenService
from ..attendance.repository import AttendanceRepository
from ..auth.service import AuthService
from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import optional_str, parse_int_ids
from ..core.enums import AttendanceStatus, ErrorCode
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..storage.service import BucketService
from ..students.repository import StudentRepository
from .model import Teacher
from .repository import TeacherRepository

logger = logging.getLogger(__name__)

# Status reported for students who have no row yet today.
NOT_RECORDED_STATUS = AttendanceStatus.ALFA


def _require(value: Any, field_name: str) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required", code=ErrorCode.MISSING_FIELD)
    return value.strip() if isinstance(value, str) else value


class TeacherService:
    """Use cases for teachers: rosters, attendance overrides, history, QR tokens."""

    def __init__(
        self,
        teachers: TeacherRepository,
        students: StudentRepository,
        attendance: AttendanceRepository,
        auth: AuthService,
        avatars: BucketService,
        attachments: BucketService,
        qr_tokens: QrTokenService,
        *,
        timezone: str,
        history_limit: int = 100,
    ):
        self._teachers = teachers
        self._students = students
        self._attendance = attendance
        self._auth = auth
        self._avatars = avatars
        self._attachments = attachments
        self._qr = qr_tokens
        self._timezone = timezone
        self._history_limit = int(history_limit)

    def get_for_token(self, access_token: str) -> Teacher:
        user = self._auth.resolve_user(access_token)
        teacher = self._teachers.get_by_user_id(user.id)
        if not teacher:
            raise AuthorizationError("Teacher profile not found")
        return teacher

    def list_classes(self) -> Sequence[dict[str, Any]]:
        return self._teachers.list_classes()

    def generate_qr(self, teacher: Teacher, class_id: Any, *, now: datetime | None = None) -> QrToken:
        class_id = _require(class_id, "class_id")
        token = self._qr.issue(class_id=class_id, teacher_id=teacher.id, now=now)
        logger.info("teacher %s issued QR token for class %s", teacher.id, class_id)
        return token

    def render_qr(self, token: QrToken) -> bytes:
        return self._qr.render_png(token.token)

    def _today(self, now: datetime | None) -> str:
        return (now or now_local(self._timezone)).strftime("%Y-%m-%d")

    def mark_alfa(
        self,
        *,
        class_id: Any,
        student_ids: Any,
        date: Any = None,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        class_id = _require(class_id, "class_id")
        if not isinstance(student_ids, list) or not student_ids:
            raise ValidationError("student_ids is required", code=ErrorCode.MISSING_FIELD)

        if isinstance(date, str) and date.strip():
            target_date = parse_iso_date(date).isoformat()
        else:
            target_date = self._today(now)

        students = self._students.list_by_class(class_id)
        if not students:
            raise NotFoundError("No students found for the given class")

        requested = set(parse_int_ids(student_ids))
        ids = [s.id for s in students if s.id in requested]
        if not ids:
            raise NotFoundError("Provided student_ids are not in this class")

        existing = {r.student_id: r for r in self._attendance.list_for_students_on_date(ids, target_date)}
        to_update = [sid for sid in ids if sid in existing and existing[sid].is_leave]
        to_insert = [sid for sid in ids if sid not in existing]

        updated = self._attendance.set_status_for_students(to_update, target_date, AttendanceStatus.ALFA)
        inserted = self._attendance.create_many(to_insert, target_date, AttendanceStatus.ALFA)
        skipped = [sid for sid in ids if sid not in updated and sid not in inserted]

        logger.info(
            "mark-alfa class=%s date=%s updated=%d inserted=%d skipped=%d",
            class_id, target_date, len(updated), len(inserted), len(skipped),
        )
        return {
            "message": "Status ALFA berhasil diterapkan",
            "updated_count": len(updated),
            "inserted_count": len(inserted),
            "updated_student_ids": updated,
            "inserted_student_ids": inserted,
            "skipped_student_ids": skipped,
            "date": target_date,
        }

    def today_roster(self, class_id: Any, *, now: datetime | None = None) -> dict[str, Any]:
        class_id = _require(class_id, "class_id")
        today = self._today(now)

        students = self._students.list_by_class(class_id)
        records = {
            r.student_id: r
            for r in self._attendance.list_for_students_on_date([s.id for s in students], today)
        }

        rows = []
        for s in students:
            record = records.get(s.id)
            rows.append(
                {
                    "student": {
                        "id": s.id,
                        "nisn": s.nisn,
                        "nama": s.nama,
                        "avatar_path": s.avatar_path,
                        "avatar_url": self._avatars.sign(s.avatar_path),
                    },
                    "status": record.status_value if record else NOT_RECORDED_STATUS.value,
                    "is_present": record is not None,
                    "attachment_url": self._attachments.sign(record.attachment_path if record else None),
                }
            )

        return {"date": today, "class_id": class_id, "students": rows}

    def history(
        self,
        *,
        class_id: Optional[str] = None,
        student_id: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        date_from = optional_str(date_from)
        date_to = optional_str(date_to)
        if date_from:
            date_from = parse_iso_date(date_from).isoformat()
        if date_to:
            date_to = parse_iso_date(date_to).isoformat()

        flt = HistoryFilter(
            class_id=optional_str(class_id),
            student_id=optional_str(student_id),
            date_from=date_from,
            date_to=date_to,
            limit=None if (date_from or date_to) else self._history_limit,
        )
        rows = self._attendance.history(flt)
        return [{**row, "attachment_url": self._attachments.sign(row.get("attachment_path"))} for row in rows]
