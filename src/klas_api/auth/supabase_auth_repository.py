from __future__ import annotations

import logging
from typing import Any, Optional

from supabase import AuthError

from ..core.enums import ErrorCode
from ..core.exceptions import UpstreamError
from ..database.connection import SupabaseConnection
from .model import AuthUser
from .repository import AuthRepository

logger = logging.getLogger(__name__)


def _dump(obj: Any) -> Optional[dict]:
    if obj is None:
        return None
    return obj.model_dump(mode="json")


def _provider_error(e: AuthError) -> UpstreamError:
    return UpstreamError(
        getattr(e, "message", None) or str(e),
        code=ErrorCode.AUTH_PROVIDER_ERROR,
        status_code=400,
    )


class SupabaseAuthRepository(AuthRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def send_otp(self, *, email: str) -> None:
        try:
            self._conn.client().auth.sign_in_with_otp({"email": email})
        except AuthError as e:
            logger.info("OTP request for %s rejected: %s", email, e)
            raise _provider_error(e) from e

    def verify_otp(self, *, email: str, token: str) -> dict[str, Any]:
        try:
            res = self._conn.client().auth.verify_otp({"email": email, "token": token, "type": "email"})
        except AuthError as e:
            logger.info("OTP verification for %s rejected: %s", email, e)
            raise _provider_error(e) from e
        return {"user": _dump(res.user), "session": _dump(res.session)}

    def get_user(self, access_token: str) -> Optional[AuthUser]:
        try:
            res = self._conn.admin().auth.get_user(access_token)
        except AuthError as e:
            logger.info("token lookup failed: %s", e)
            return None
        if not res or not res.user:
            return None
        return AuthUser(id=str(res.user.id), email=res.user.email, raw=_dump(res.user) or {})
