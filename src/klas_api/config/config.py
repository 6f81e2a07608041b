"""Settings shared by every environment.

Environment modules star-import this one and override what differs.
"""

import os

from ..core.constants import (
    DEFAULT_ATTACHMENT_MAX_SIZE,
    DEFAULT_ATTACHMENT_SIGNED_URL_TTL,
    DEFAULT_AVATAR_MAX_SIZE,
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_QR_TOKEN_TTL_SECONDS,
    DEFAULT_SIGNED_URL_TTL,
    DEFAULT_TIMEZONE,
)


def _csv(value: str) -> list:
    return [item.strip().lower() for item in value.split(",") if item.strip()]


SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
SUPABASE_JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET", "")

# QR attendance tokens are signed with this secret
QR_SECRET = os.getenv("QR_SECRET") or SUPABASE_JWT_SECRET or SUPABASE_SERVICE_ROLE_KEY or "default-secret"
QR_TOKEN_TTL = int(os.getenv("QR_TOKEN_TTL", DEFAULT_QR_TOKEN_TTL_SECONDS))

SCHOOL_TIMEZONE = os.getenv("SCHOOL_TIMEZONE", DEFAULT_TIMEZONE)

STUDENT_AVATAR_BUCKET = os.getenv("STUDENT_AVATAR_BUCKET", "student-avatars")
STUDENT_AVATAR_MAX_SIZE = int(os.getenv("STUDENT_AVATAR_MAX_SIZE", DEFAULT_AVATAR_MAX_SIZE))
STUDENT_AVATAR_SIGNED_URL_TTL = int(os.getenv("STUDENT_AVATAR_SIGNED_URL_TTL", DEFAULT_SIGNED_URL_TTL))
STUDENT_AVATAR_ALLOWED_TYPES = _csv(
    os.getenv("STUDENT_AVATAR_ALLOWED_TYPES", "image/png,image/jpeg,image/jpg,image/webp")
)

ATTENDANCE_ATTACHMENT_BUCKET = os.getenv("ATTENDANCE_ATTACHMENT_BUCKET", "attendance-attachments")
ATTENDANCE_ATTACHMENT_SIGNED_URL_TTL = int(os.getenv("ATTENDANCE_ATTACHMENT_SIGNED_URL_TTL", DEFAULT_ATTACHMENT_SIGNED_URL_TTL))
ATTENDANCE_ATTACHMENT_MAX_SIZE = int(os.getenv("ATTENDANCE_ATTACHMENT_MAX_SIZE", DEFAULT_ATTACHMENT_MAX_SIZE))
ATTENDANCE_ATTACHMENT_ALLOWED_TYPES = _csv(
    os.getenv("ATTENDANCE_ATTACHMENT_ALLOWED_TYPES", "image/png,image/jpeg,image/jpg,image/webp,application/pdf")
)
ATTENDANCE_REQUIRE_LEAVE_ATTACHMENT = bool(int(os.getenv("ATTENDANCE_REQUIRE_LEAVE_ATTACHMENT", "1")))

HISTORY_DEFAULT_LIMIT = int(os.getenv("HISTORY_DEFAULT_LIMIT", DEFAULT_HISTORY_LIMIT))

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(10 * 1024 * 1024)))
