from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

from ..auth.service import AuthService
from ..common.validators import coerce_id
from ..core.enums import ErrorCode
from ..core.exceptions import AuthorizationError, NotFoundError, UpstreamError, ValidationError
from .repository import AdminRepository

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors_as_bad_request() -> Iterator[None]:
    # Store rejections on admin writes are client errors (bad columns, constraint violations).
    try:
        yield
    except UpstreamError as e:
        raise ValidationError(e.message, code=ErrorCode.UPSTREAM_ERROR, details=e.details) from e


class AdminService:
    """Generic CRUD proxy over an allow-listed set of tables."""

    def __init__(self, admin: AdminRepository, auth: AuthService, *, allowed_tables: Sequence[str]):
        self._admin = admin
        self._auth = auth
        self.allowed_tables = tuple(allowed_tables)

    def check_table(self, table: str) -> str:
        if table not in self.allowed_tables:
            logger.info("admin access to table %r refused", table)
            raise ValidationError("Table not allowed", code=ErrorCode.TABLE_NOT_ALLOWED)
        return table

    def require_admin(self, access_token: str) -> str:
        user = self._auth.resolve_user(access_token)
        try:
            is_admin = self._admin.is_admin(user.id)
        except UpstreamError as e:
            logger.warning("admin lookup for %s failed: %s", user.id, e.message)
            is_admin = False
        if not is_admin:
            logger.info("user %s is not admin", user.id)
            raise AuthorizationError("Not admin")
        return user.id

    def list_rows(self, table: str) -> list[dict[str, Any]]:
        with _store_errors_as_bad_request():
            rows = list(self._admin.list_rows(self.check_table(table)))
        logger.info("admin fetched %d rows from %s", len(rows), table)
        return rows

    def get_row(self, table: str, row_id: str) -> dict[str, Any]:
        with _store_errors_as_bad_request():
            row = self._admin.get_row(self.check_table(table), coerce_id(row_id))
        if not row:
            raise NotFoundError(f"No row with id {row_id} in {table}")
        return row

    def create_rows(self, table: str, body: Any) -> list[dict[str, Any]]:
        self.check_table(table)
        if isinstance(body, dict):
            rows = [body]
        elif isinstance(body, list) and body and all(isinstance(r, dict) for r in body):
            rows = body
        else:
            raise ValidationError("Body must be an object or a list of objects", code=ErrorCode.INVALID_JSON)
        with _store_errors_as_bad_request():
            return list(self._admin.insert_rows(table, rows))

    def update_row(self, table: str, row_id: str, body: Any) -> list[dict[str, Any]]:
        self.check_table(table)
        if not isinstance(body, dict) or not body:
            raise ValidationError("Body must be a non-empty object", code=ErrorCode.INVALID_JSON)
        with _store_errors_as_bad_request():
            rows = list(self._admin.update_rows(table, coerce_id(row_id), body))
        if not rows:
            raise NotFoundError(f"No row with id {row_id} in {table}")
        return rows

    def delete_row(self, table: str, row_id: str) -> list[dict[str, Any]]:
        self.check_table(table)
        with _store_errors_as_bad_request():
            rows = list(self._admin.delete_rows(table, coerce_id(row_id)))
        if not rows:
            raise NotFoundError(f"No row with id {row_id} in {table}")
        return rows
