from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence


class AdminRepository(Protocol):
    """Generic row access over a table name, plus the admin membership lookup."""

    def is_admin(self, user_id: str) -> bool:
        raise NotImplementedError

    def list_rows(self, table: str) -> Sequence[dict[str, Any]]:
        raise NotImplementedError

    def get_row(self, table: str, row_id: int | str) -> Optional[dict[str, Any]]:
        raise NotImplementedError

    def insert_rows(self, table: str, rows: list[dict[str, Any]]) -> Sequence[dict[str, Any]]:
        raise NotImplementedError

    def update_rows(self, table: str, row_id: int | str, values: dict[str, Any]) -> Sequence[dict[str, Any]]:
        raise NotImplementedError

    def delete_rows(self, table: str, row_id: int | str) -> Sequence[dict[str, Any]]:
        raise NotImplementedError
