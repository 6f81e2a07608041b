from __future__ import annotations

import io
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from PIL import Image

from klas_api.admin.service import AdminService
from klas_api.attendance.model import AttendanceRecord, HistoryFilter
from klas_api.attendance.qr import QrTokenService
from klas_api.attendance.service import AttendanceService
from klas_api.auth.model import AuthUser
from klas_api.auth.service import AuthService
from klas_api.container import Container
from klas_api.core.constants import ADMIN_ALLOWED_TABLES
from klas_api.core.enums import AttendanceStatus, ErrorCode
from klas_api.core.exceptions import UpstreamError
from klas_api.schedules.service import ScheduleService
from klas_api.storage.model import UploadedFile
from klas_api.storage.service import BucketService
from klas_api.students.model import Student
from klas_api.students.service import StudentService
from klas_api.teachers.model import Teacher
from klas_api.teachers.service import TeacherService


class FakeAuth:
    VALID_OTP = "123456"

    def __init__(self, users_by_token: dict[str, AuthUser]):
        self.users_by_token = users_by_token
        self.sent: list[str] = []

    def send_otp(self, *, email: str) -> None:
        if "@" not in email:
            raise UpstreamError("Unable to validate email address", code=ErrorCode.AUTH_PROVIDER_ERROR, status_code=400)
        self.sent.append(email)

    def verify_otp(self, *, email: str, token: str) -> dict[str, Any]:
        if token != self.VALID_OTP:
            raise UpstreamError("Token has expired or is invalid", code=ErrorCode.AUTH_PROVIDER_ERROR, status_code=400)
        return {"user": {"id": f"user-{email}", "email": email}, "session": {"access_token": "session-token"}}

    def get_user(self, access_token: str) -> Optional[AuthUser]:
        return self.users_by_token.get(access_token)


class InMemoryStudents:
    def __init__(self, students: list[Student]):
        self._by_id = {s.id: s for s in students}
        self.fail_cache_update = False
        self.fail_avatar_update = False
        self.cache_updates: list[tuple[int, str, str]] = []

    def get(self, student_id: int) -> Student:
        return self._by_id[student_id]

    def get_by_user_id(self, user_id: str) -> Optional[Student]:
        return next((s for s in self._by_id.values() if s.user_id == user_id), None)

    def get_by_name(self, nama: str) -> Optional[Student]:
        return next((s for s in self._by_id.values() if s.nama == nama), None)

    def list_all(self):
        return [s.to_dict() for s in self._by_id.values()]

    def list_by_class(self, class_id: Any):
        items = [s for s in self._by_id.values() if str(s.kelas) == str(class_id)]
        return sorted(items, key=lambda s: s.nama or "")

    def link_user(self, *, student_id: int, user_id: str) -> Optional[Student]:
        self._by_id[student_id] = replace(self._by_id[student_id], user_id=user_id)
        return self._by_id[student_id]

    def update_last_status(self, *, student_id: int, status: str, day: str) -> None:
        if self.fail_cache_update:
            raise UpstreamError("column students.last_status does not exist")
        self.cache_updates.append((student_id, status, day))
        self._by_id[student_id] = replace(self._by_id[student_id], last_status=status, last_date=day)

    def update_avatar_path(self, *, student_id: int, avatar_path: str) -> Optional[Student]:
        if self.fail_avatar_update:
            raise UpstreamError("update on students violates row level security")
        self._by_id[student_id] = replace(self._by_id[student_id], avatar_path=avatar_path)
        return self._by_id[student_id]


class InMemoryAttendance:
    def __init__(self, records: Optional[list[AttendanceRecord]] = None):
        self.records: list[AttendanceRecord] = list(records or [])
        self._id = len(self.records)
        self.fail_insert = False
        self.last_filter: Optional[HistoryFilter] = None
        self.history_rows: list[dict[str, Any]] = []

    def get_for_student_and_date(self, student_id: int, day: str) -> Optional[AttendanceRecord]:
        return next((r for r in self.records if r.student_id == student_id and r.date == day), None)

    def create(self, *, student_id: int, day: str, status: AttendanceStatus, attachment_path=None) -> AttendanceRecord:
        if self.fail_insert:
            raise UpstreamError("insert rejected")
        self._id += 1
        record = AttendanceRecord(
            id=self._id,
            student_id=student_id,
            date=day,
            status=status,
            attachment_path=attachment_path,
        )
        self.records.append(record)
        return record

    def list_for_students_on_date(self, student_ids, day: str):
        return [r for r in self.records if r.student_id in student_ids and r.date == day]

    def set_status_for_students(self, student_ids, day: str, status: AttendanceStatus) -> list[int]:
        updated = []
        for i, r in enumerate(self.records):
            if r.student_id in student_ids and r.date == day:
                self.records[i] = replace(r, status=status)
                updated.append(r.student_id)
        return updated

    def create_many(self, student_ids, day: str, status: AttendanceStatus) -> list[int]:
        for sid in student_ids:
            self.create(student_id=sid, day=day, status=status)
        return list(student_ids)

    def history(self, flt: HistoryFilter):
        self.last_filter = flt
        return list(self.history_rows)


class InMemoryTeachers:
    def __init__(self, teachers: list[Teacher], classes: list[dict[str, Any]]):
        self._teachers = {t.user_id: t for t in teachers}
        self._classes = classes

    def get_by_user_id(self, user_id: str) -> Optional[Teacher]:
        return self._teachers.get(user_id)

    def list_classes(self):
        return sorted(self._classes, key=lambda c: c["class_name"])


class InMemorySchedules:
    def __init__(self, subjects: list[dict[str, Any]], duty: list[dict[str, Any]]):
        self._subjects = subjects
        self._duty = duty
        self.queried: list[tuple] = []

    def list_subjects(self):
        return sorted(self._subjects, key=lambda r: r["id"])

    def list_duty(self):
        return sorted(self._duty, key=lambda r: r["id"])

    def subjects_for_day(self, day: str):
        self.queried.append(("subjects", day))
        return [_subject_view(r) for r in self.list_subjects() if r["day"] == day]

    def ongoing_subjects(self, day: str, hhmm: str):
        self.queried.append(("ongoing", day, hhmm))
        return [
            _subject_view(r)
            for r in self.list_subjects()
            if r["day"] == day and r["start_time"] <= hhmm < r["end_time"]
        ]

    def duty_for_day(self, day: str):
        self.queried.append(("duty", day))
        return [{"id": r["id"], "student_name": r["student_name"]} for r in self.list_duty() if r["day"] == day]


def _subject_view(row: dict[str, Any]) -> dict[str, Any]:
    return {k: row[k] for k in ("id", "subject", "start_time", "end_time", "teacher")}


class InMemoryAdmin:
    def __init__(self, tables: dict[str, list[dict[str, Any]]], admin_user_ids: set[str]):
        self.tables = tables
        self.admin_user_ids = admin_user_ids
        self.reject_writes = False
        self.fail_lookup = False

    def is_admin(self, user_id: str) -> bool:
        if self.fail_lookup:
            raise UpstreamError("relation \"admin\" does not exist")
        return user_id in self.admin_user_ids

    def list_rows(self, table: str):
        return list(self.tables.get(table, []))

    def get_row(self, table: str, row_id):
        return next((r for r in self.tables.get(table, []) if r.get("id") == row_id), None)

    def insert_rows(self, table: str, rows):
        if self.reject_writes:
            raise UpstreamError('null value in column "nama" violates not-null constraint')
        stored = self.tables.setdefault(table, [])
        out = []
        for row in rows:
            new = {"id": len(stored) + 1, **row}
            stored.append(new)
            out.append(new)
        return out

    def update_rows(self, table: str, row_id, values):
        out = []
        for row in self.tables.get(table, []):
            if row.get("id") == row_id:
                row.update(values)
                out.append(dict(row))
        return out

    def delete_rows(self, table: str, row_id):
        rows = self.tables.get(table, [])
        removed = [r for r in rows if r.get("id") == row_id]
        self.tables[table] = [r for r in rows if r.get("id") != row_id]
        return removed


class InMemoryStorage:
    def __init__(self):
        self.objects: dict[tuple[str, str], bytes] = {}
        self.removed: list[tuple[str, str]] = []
        self.refuse_signing = False
        self.fail_remove = False

    def upload(self, *, bucket: str, path: str, data: bytes, content_type: str, upsert: bool = False) -> None:
        if (bucket, path) in self.objects and not upsert:
            raise UpstreamError("The resource already exists")
        self.objects[(bucket, path)] = data

    def create_signed_url(self, *, bucket: str, path: str, expires_in: int) -> Optional[str]:
        if self.refuse_signing or (bucket, path) not in self.objects:
            return None
        return f"https://storage.test/{bucket}/{path}?expires_in={expires_in}"

    def remove(self, *, bucket: str, paths) -> None:
        if self.fail_remove:
            raise UpstreamError("storage unavailable")
        for path in paths:
            self.objects.pop((bucket, path), None)
            self.removed.append((bucket, path))


JAKARTA = timezone(timedelta(hours=7))
# Monday
NOW = datetime(2026, 10, 19, 8, 15, tzinfo=JAKARTA)
TODAY = "2026-10-19"

STUDENT_TOKEN = "student-token"
CLASSMATE_TOKEN = "classmate-token"
TEACHER_TOKEN = "teacher-token"
ADMIN_TOKEN = "admin-token"
STRANGER_TOKEN = "stranger-token"

QR_SECRET = "test-qr-secret"


def png_bytes(size=(4, 4)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color=(200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()


def png_upload(name="photo.png") -> UploadedFile:
    return UploadedFile(filename=name, content_type="image/png", data=png_bytes())


@dataclass
class World:
    auth_repo: FakeAuth
    students: InMemoryStudents
    attendance: InMemoryAttendance
    teachers: InMemoryTeachers
    schedules: InMemorySchedules
    admin: InMemoryAdmin
    storage: InMemoryStorage
    avatars: BucketService
    attachments: BucketService
    qr: QrTokenService
    container: Container


def build_world(*, require_leave_attachment: bool = True) -> World:
    auth_repo = FakeAuth(
        {
            STUDENT_TOKEN: AuthUser(id="user-budi", email="budi@example.com"),
            CLASSMATE_TOKEN: AuthUser(id="user-citra", email="citra@example.com"),
            TEACHER_TOKEN: AuthUser(id="user-teacher", email="guru@example.com"),
            ADMIN_TOKEN: AuthUser(id="user-admin", email="admin@example.com"),
            STRANGER_TOKEN: AuthUser(id="user-stranger", email="x@example.com"),
        }
    )
    students = InMemoryStudents(
        [
            Student(id=1, nama="Budi", nisn="001", kelas=10, user_id="user-budi"),
            Student(id=2, nama="Citra", nisn="002", kelas=10, user_id="user-citra"),
            Student(id=3, nama="Andi", nisn="003", kelas=10),
            Student(id=4, nama="Dewi", nisn="004", kelas=11),
        ]
    )
    attendance = InMemoryAttendance()
    teachers = InMemoryTeachers(
        [Teacher(id=7, user_id="user-teacher")],
        [{"id": 11, "class_name": "XI IPA"}, {"id": 10, "class_name": "X IPA"}],
    )
    schedules = InMemorySchedules(
        subjects=[
            {"id": 1, "day": "Senin", "subject": "Matematika", "start_time": "07:00", "end_time": "08:30", "teacher": "Bu Sari"},
            {"id": 2, "day": "Senin", "subject": "Fisika", "start_time": "08:30", "end_time": "10:00", "teacher": "Pak Joko"},
            {"id": 3, "day": "Selasa", "subject": "Kimia", "start_time": "07:00", "end_time": "08:30", "teacher": "Bu Rina"},
        ],
        duty=[
            {"id": 1, "day": "Senin", "student_name": "Budi"},
            {"id": 2, "day": "Selasa", "student_name": "Citra"},
            {"id": 3, "day": "Senin", "student_name": "Andi"},
        ],
    )
    admin = InMemoryAdmin(
        {"class": [{"id": 10, "class_name": "X IPA"}, {"id": 11, "class_name": "XI IPA"}]},
        {"user-admin"},
    )
    storage = InMemoryStorage()
    avatars = BucketService(
        storage,
        bucket="student-avatars",
        label="Avatar",
        signed_url_ttl=3600,
        allowed_types=["image/png", "image/jpeg", "image/jpg", "image/webp"],
        max_size=2_097_152,
    )
    attachments = BucketService(
        storage,
        bucket="attendance-attachments",
        label="Attachment",
        signed_url_ttl=86400,
        allowed_types=["image/png", "image/jpeg", "image/jpg", "image/webp", "application/pdf"],
        max_size=5_242_880,
    )
    qr = QrTokenService(secret=QR_SECRET, ttl_seconds=60)

    auth_service = AuthService(auth_repo, students)
    student_service = StudentService(students, auth_service, avatars, timezone="Asia/Jakarta")
    container = Container(
        auth_service=auth_service,
        student_service=student_service,
        attendance_service=AttendanceService(
            attendance,
            students,
            student_service,
            attachments,
            qr,
            timezone="Asia/Jakarta",
            require_leave_attachment=require_leave_attachment,
        ),
        teacher_service=TeacherService(
            teachers,
            students,
            attendance,
            auth_service,
            avatars,
            attachments,
            qr,
            timezone="Asia/Jakarta",
            history_limit=100,
        ),
        schedule_service=ScheduleService(schedules, timezone="Asia/Jakarta"),
        admin_service=AdminService(admin, auth_service, allowed_tables=ADMIN_ALLOWED_TABLES),
    )
    return World(
        auth_repo=auth_repo,
        students=students,
        attendance=attendance,
        teachers=teachers,
        schedules=schedules,
        admin=admin,
        storage=storage,
        avatars=avatars,
        attachments=attachments,
        qr=qr,
        container=container,
    )


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
