from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from ..auth.service import AuthService
from ..common.datetime_utils import now_local
from ..core.enums import ErrorCode
from ..core.exceptions import NotFoundError, UpstreamError, ValidationError
from ..storage.model import UploadedFile
from ..storage.service import BucketService, timestamp_slug
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentService:
    """Use cases: resolve the caller's student row, list students, profile pictures."""

    def __init__(
        self,
        students: StudentRepository,
        auth: AuthService,
        avatars: BucketService,
        *,
        timezone: str,
    ):
        self._students = students
        self._auth = auth
        self._avatars = avatars
        self._timezone = timezone

    def get_for_token(self, access_token: str) -> Student:
        user = self._auth.resolve_user(access_token)
        student = self._students.get_by_user_id(user.id)
        if not student:
            raise NotFoundError("Student not linked to this user", code=ErrorCode.STUDENT_NOT_LINKED)
        return student

    def list_students(self) -> Sequence[dict[str, Any]]:
        return self._students.list_all()

    def upload_avatar(
        self,
        access_token: str,
        file: Optional[UploadedFile],
        *,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        student = self.get_for_token(access_token)
        if file is None:
            raise ValidationError("avatar file is required", code=ErrorCode.MISSING_FIELD)

        extension = self._avatars.validate(file)
        now = now or now_local(self._timezone)
        object_path = f"{student.id}/avatar-{timestamp_slug(now)}.{extension}"
        self._avatars.upload(object_path, file)

        try:
            updated = self._students.update_avatar_path(student_id=student.id, avatar_path=object_path)
        except UpstreamError:
            self._avatars.discard(object_path)
            raise
        if not updated:
            self._avatars.discard(object_path)
            raise UpstreamError("Failed to update avatar")
        logger.info("student %s avatar set to %s", student.id, object_path)

        signed_url = self._avatars.sign(object_path)

        if student.avatar_path and student.avatar_path != object_path:
            self._avatars.discard(student.avatar_path)

        return {
            "message": "Profile picture updated",
            "avatar_path": updated.avatar_path,
            "avatar_url": signed_url,
        }

    def get_avatar(self, access_token: str) -> dict[str, Any]:
        student = self.get_for_token(access_token)
        if not student.avatar_path:
            raise NotFoundError("Profile picture not set")

        signed_url = self._avatars.sign(student.avatar_path)
        if not signed_url:
            raise UpstreamError("Failed to create signed URL")

        return {
            "avatar_path": student.avatar_path,
            "avatar_url": signed_url,
            "expires_in": self._avatars.signed_url_ttl,
        }
