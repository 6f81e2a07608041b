from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType

from .admin.service import AdminService
from .admin.supabase_admin_repository import SupabaseAdminRepository
from .attendance.qr import QrTokenService
from .attendance.service import AttendanceService
from .attendance.supabase_attendance_repository import SupabaseAttendanceRepository
from .auth.service import AuthService
from .auth.supabase_auth_repository import SupabaseAuthRepository
from .core.constants import ADMIN_ALLOWED_TABLES
from .database.connection import SupabaseConfig, SupabaseConnection
from .schedules.service import ScheduleService
from .schedules.supabase_schedule_repository import SupabaseScheduleRepository
from .storage.service import BucketService
from .storage.supabase_storage_repository import SupabaseStorageRepository
from .students.service import StudentService
from .students.supabase_student_repository import SupabaseStudentRepository
from .teachers.service import TeacherService
from .teachers.supabase_teacher_repository import SupabaseTeacherRepository


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    student_service: StudentService
    attendance_service: AttendanceService
    teacher_service: TeacherService
    schedule_service: ScheduleService
    admin_service: AdminService


def build_container(*, settings: ModuleType) -> Container:
    conn = SupabaseConnection.get_instance(
        SupabaseConfig(
            url=str(settings.SUPABASE_URL),
            anon_key=str(settings.SUPABASE_ANON_KEY),
            service_role_key=str(settings.SUPABASE_SERVICE_ROLE_KEY),
        )
    )
    tz = settings.SCHOOL_TIMEZONE

    auth_repo = SupabaseAuthRepository(conn)
    students_repo = SupabaseStudentRepository(conn)
    teachers_repo = SupabaseTeacherRepository(conn)
    attendance_repo = SupabaseAttendanceRepository(conn)
    schedules_repo = SupabaseScheduleRepository(conn)
    admin_repo = SupabaseAdminRepository(conn)
    storage_repo = SupabaseStorageRepository(conn)

    avatars = BucketService(
        storage_repo,
        bucket=settings.STUDENT_AVATAR_BUCKET,
        label="Avatar",
        signed_url_ttl=settings.STUDENT_AVATAR_SIGNED_URL_TTL,
        allowed_types=settings.STUDENT_AVATAR_ALLOWED_TYPES,
        max_size=settings.STUDENT_AVATAR_MAX_SIZE,
    )
    attachments = BucketService(
        storage_repo,
        bucket=settings.ATTENDANCE_ATTACHMENT_BUCKET,
        label="Attachment",
        signed_url_ttl=settings.ATTENDANCE_ATTACHMENT_SIGNED_URL_TTL,
        allowed_types=settings.ATTENDANCE_ATTACHMENT_ALLOWED_TYPES,
        max_size=settings.ATTENDANCE_ATTACHMENT_MAX_SIZE,
    )
    qr_tokens = QrTokenService(secret=settings.QR_SECRET, ttl_seconds=settings.QR_TOKEN_TTL)

    auth_service = AuthService(auth_repo, students_repo)
    student_service = StudentService(students_repo, auth_service, avatars, timezone=tz)
    attendance_service = AttendanceService(
        attendance_repo,
        students_repo,
        student_service,
        attachments,
        qr_tokens,
        timezone=tz,
        require_leave_attachment=settings.ATTENDANCE_REQUIRE_LEAVE_ATTACHMENT,
    )
    teacher_service = TeacherService(
        teachers_repo,
        students_repo,
        attendance_repo,
        auth_service,
        avatars,
        attachments,
        qr_tokens,
        timezone=tz,
        history_limit=settings.HISTORY_DEFAULT_LIMIT,
    )
    schedule_service = ScheduleService(schedules_repo, timezone=tz)
    admin_service = AdminService(admin_repo, auth_service, allowed_tables=ADMIN_ALLOWED_TABLES)

    return Container(
        auth_service=auth_service,
        student_service=student_service,
        attendance_service=attendance_service,
        teacher_service=teacher_service,
        schedule_service=schedule_service,
        admin_service=admin_service,
    )
