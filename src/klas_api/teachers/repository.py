from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .model import Teacher


class TeacherRepository(Protocol):
    def get_by_user_id(self, user_id: str) -> Optional[Teacher]:
        raise NotImplementedError

    def list_classes(self) -> Sequence[dict[str, Any]]:
        """Rows of `class` ordered by `class_name`."""

        raise NotImplementedError
