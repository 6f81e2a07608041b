from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Daily attendance status stored in `attendances.status`."""

    HADIR = "HADIR"
    IZIN = "IZIN"
    SAKIT = "SAKIT"
    ALFA = "ALFA"

    @property
    def is_leave(self) -> bool:
        return self in (AttendanceStatus.IZIN, AttendanceStatus.SAKIT)

    @classmethod
    def values(cls) -> list[str]:
        return [s.value for s in cls]


class ErrorCode(str, Enum):
    """Machine-readable codes returned in the error envelope."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_JSON = "INVALID_JSON"
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_DATE = "INVALID_DATE"
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    STUDENT_NOT_FOUND = "STUDENT_NOT_FOUND"
    STUDENT_NOT_LINKED = "STUDENT_NOT_LINKED"
    STUDENT_ALREADY_LINKED = "STUDENT_ALREADY_LINKED"
    ATTENDANCE_ALREADY_EXISTS = "ATTENDANCE_ALREADY_EXISTS"
    INVALID_STATUS = "INVALID_STATUS"
    TABLE_NOT_ALLOWED = "TABLE_NOT_ALLOWED"
    INVALID_FILE_TYPE = "INVALID_FILE_TYPE"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    INVALID_QR_TOKEN = "INVALID_QR_TOKEN"
    QR_TOKEN_EXPIRED = "QR_TOKEN_EXPIRED"
    CLASS_MISMATCH = "CLASS_MISMATCH"
    AUTH_PROVIDER_ERROR = "AUTH_PROVIDER_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
