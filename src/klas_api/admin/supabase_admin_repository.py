from __future__ import annotations

from typing import Any, Optional, Sequence

from ..database.connection import SupabaseConnection
from ..database.supabase_base import fetchall, fetchone
from .repository import AdminRepository


class SupabaseAdminRepository(AdminRepository):
    """Uses the service role client; callers must check the allow-list first."""

    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def _table(self, table: str):
        return self._conn.admin().table(table)

    def is_admin(self, user_id: str) -> bool:
        return fetchone(self._table("admin").select("*").eq("user_id", user_id), action="admin lookup") is not None

    def list_rows(self, table: str) -> Sequence[dict[str, Any]]:
        return fetchall(self._table(table).select("*"), action=f"list {table}")

    def get_row(self, table: str, row_id: int | str) -> Optional[dict[str, Any]]:
        return fetchone(self._table(table).select("*").eq("id", row_id), action=f"get {table}")

    def insert_rows(self, table: str, rows: list[dict[str, Any]]) -> Sequence[dict[str, Any]]:
        return fetchall(self._table(table).insert(rows), action=f"insert {table}")

    def update_rows(self, table: str, row_id: int | str, values: dict[str, Any]) -> Sequence[dict[str, Any]]:
        return fetchall(self._table(table).update(values).eq("id", row_id), action=f"update {table}")

    def delete_rows(self, table: str, row_id: int | str) -> Sequence[dict[str, Any]]:
        return fetchall(self._table(table).delete().eq("id", row_id), action=f"delete {table}")
