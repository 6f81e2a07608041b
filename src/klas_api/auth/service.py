from __future__ import annotations

import logging
from typing import Any

from ..common.validators import require_non_empty
from ..core.enums import ErrorCode
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, UpstreamError, ValidationError
from ..students.repository import StudentRepository
from .model import AuthUser
from .repository import AuthRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use cases: email OTP sign-in, token resolution, linking a login to a student."""

    def __init__(self, auth: AuthRepository, students: StudentRepository):
        self._auth = auth
        self._students = students

    def send_otp(self, email: Any) -> None:
        email = require_non_empty(email, "Email")
        self._auth.send_otp(email=email)

    def verify_otp(self, email: Any, token: Any) -> dict[str, Any]:
        if not email or not token:
            raise ValidationError("Email and token are required", code=ErrorCode.MISSING_FIELD)
        return self._auth.verify_otp(email=str(email).strip(), token=str(token).strip())

    def resolve_user(self, access_token: str) -> AuthUser:
        user = self._auth.get_user(access_token)
        if not user:
            raise AuthenticationError("Invalid token or user not found", code=ErrorCode.INVALID_TOKEN)
        return user

    def link_student(self, access_token: str, nama: Any) -> dict[str, Any]:
        user = self.resolve_user(access_token)
        nama = require_non_empty(nama, "Name")

        student = self._students.get_by_name(nama)
        if not student:
            raise NotFoundError("Student not found", code=ErrorCode.STUDENT_NOT_FOUND)
        if student.user_id and student.user_id != user.id:
            raise ConflictError(
                "Student is already linked to another account",
                code=ErrorCode.STUDENT_ALREADY_LINKED,
            )

        linked = self._students.link_user(student_id=student.id, user_id=user.id)
        if not linked:
            raise UpstreamError("Failed to link student", status_code=400)
        logger.info("student %s linked to user %s", student.id, user.id)
        return linked.to_dict()
