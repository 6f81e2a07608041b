from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Repository interface for `students`.

    Services depend on this interface, not on Supabase directly.
    """

    def get_by_user_id(self, user_id: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_name(self, nama: str) -> Optional[Student]:
        raise NotImplementedError

    def list_all(self) -> Sequence[dict[str, Any]]:
        raise NotImplementedError

    def list_by_class(self, class_id: Any) -> Sequence[Student]:
        """Students of a class ordered by name."""

        raise NotImplementedError

    def link_user(self, *, student_id: int, user_id: str) -> Optional[Student]:
        raise NotImplementedError

    def update_last_status(self, *, student_id: int, status: str, day: str) -> None:
        raise NotImplementedError

    def update_avatar_path(self, *, student_id: int, avatar_path: str) -> Optional[Student]:
        raise NotImplementedError
