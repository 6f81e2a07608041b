from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import now_local
from ..core.enums import AttendanceStatus, ErrorCode
from ..core.exceptions import AuthorizationError, ConflictError, UpstreamError, ValidationError
from ..storage.model import UploadedFile
from ..storage.service import BucketService, timestamp_slug
from ..students.model import Student
from ..students.repository import StudentRepository
from ..students.service import StudentService
from .model import AttendanceRecord
from .qr import QrTokenService
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckInResult:
    attendance: AttendanceRecord
    attachment_url: Optional[str] = None
    cache_error: Optional[str] = None

    def to_response(self) -> dict[str, Any]:
        if self.cache_error:
            body = {
                "message": "Attendance recorded, but failed updating student cache",
                "details": self.cache_error,
            }
        else:
            body = {"message": "Attendance recorded"}
        body["attendance"] = self.attendance.to_dict()
        if self.attachment_url:
            body["attachment_url"] = self.attachment_url
        return body


def parse_status(value: Any) -> AttendanceStatus:
    if value is None or not str(value).strip():
        raise ValidationError("Status is required (body or ?status=)", code=ErrorCode.MISSING_FIELD)
    try:
        return AttendanceStatus(str(value).strip().upper())
    except ValueError:
        raise ValidationError(
            f"Invalid status. Allowed: {', '.join(AttendanceStatus.values())}",
            code=ErrorCode.INVALID_STATUS,
        )


class AttendanceService:
    """Use cases for a student recording their own attendance."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        student_service: StudentService,
        attachments: BucketService,
        qr_tokens: QrTokenService,
        *,
        timezone: str,
        require_leave_attachment: bool = True,
    ):
        self._attendance = attendance
        self._students = students
        self._student_service = student_service
        self._attachments = attachments
        self._qr = qr_tokens
        self._timezone = timezone
        self._require_leave_attachment = bool(require_leave_attachment)

    def check_in(
        self,
        access_token: str,
        status: Any,
        attachment: Optional[UploadedFile] = None,
        *,
        now: datetime | None = None,
    ) -> CheckInResult:
        student = self._student_service.get_for_token(access_token)
        parsed = parse_status(status)

        extension = None
        if attachment is not None:
            extension = self._attachments.validate(attachment)
        elif parsed.is_leave and self._require_leave_attachment:
            raise ValidationError(
                f"An attachment is required for {parsed.value}",
                code=ErrorCode.MISSING_FIELD,
            )

        return self._record(student, parsed, attachment, extension, now=now)

    def check_in_with_qr(self, access_token: str, qr_token: Any, *, now: datetime | None = None) -> CheckInResult:
        student = self._student_service.get_for_token(access_token)
        claims = self._qr.verify(qr_token)
        if str(claims.class_id) != str(student.kelas):
            raise AuthorizationError("QR code belongs to another class", code=ErrorCode.CLASS_MISMATCH)
        return self._record(student, AttendanceStatus.HADIR, None, None, now=now)

    def today_for(self, access_token: str, *, now: datetime | None = None) -> dict[str, Any]:
        student = self._student_service.get_for_token(access_token)
        today = self._today(now)
        record = self._attendance.get_for_student_and_date(student.id, today)
        return {"date": today, "attendance": record.to_dict() if record else None}

    def _today(self, now: datetime | None) -> str:
        return (now or now_local(self._timezone)).strftime("%Y-%m-%d")

    def _record(
        self,
        student: Student,
        status: AttendanceStatus,
        attachment: Optional[UploadedFile],
        extension: Optional[str],
        *,
        now: datetime | None,
    ) -> CheckInResult:
        now = now or now_local(self._timezone)
        today = now.strftime("%Y-%m-%d")

        # Read-then-write: the store has no unique constraint we rely on here.
        if self._attendance.get_for_student_and_date(student.id, today):
            raise ConflictError("Attendance already recorded for today", code=ErrorCode.ATTENDANCE_ALREADY_EXISTS)

        attachment_path = None
        if attachment is not None:
            attachment_path = self._attachments.upload(
                f"{student.id}/{today}-{timestamp_slug(now)}.{extension}",
                attachment,
            )

        try:
            record = self._attendance.create(
                student_id=student.id,
                day=today,
                status=status,
                attachment_path=attachment_path,
            )
        except UpstreamError:
            self._attachments.discard(attachment_path)
            raise
        logger.info("attendance %s recorded for student %s on %s", status.value, student.id, today)

        cache_error = None
        try:
            self._students.update_last_status(student_id=student.id, status=status.value, day=today)
        except UpstreamError as e:
            logger.warning("student cache update failed for %s: %s", student.id, e.message)
            cache_error = e.message

        return CheckInResult(
            attendance=record,
            attachment_url=self._attachments.sign(attachment_path),
            cache_error=cache_error,
        )
