from __future__ import annotations

from typing import Any, Optional, Protocol

from .model import AuthUser


class AuthRepository(Protocol):
    """Identity provider interface (email OTP sign-in, token lookup)."""

    def send_otp(self, *, email: str) -> None:
        raise NotImplementedError

    def verify_otp(self, *, email: str, token: str) -> dict[str, Any]:
        """Returns `{"user": {...}, "session": {...}}`."""

        raise NotImplementedError

    def get_user(self, access_token: str) -> Optional[AuthUser]:
        """None when the token is invalid, expired or unknown."""

        raise NotImplementedError
