from __future__ import annotations

import io
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
import qrcode

from ..core.constants import QR_TOKEN_TYPE
from ..core.enums import ErrorCode
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class QrToken:
    token: str
    expires_in: int
    class_id: Any


@dataclass(frozen=True)
class QrClaims:
    class_id: Any
    teacher_id: Any
    generated_at: int


class QrTokenService:
    """Short-lived, stateless QR attendance tokens (HS256 JWT).

    A token names the class it was issued for and the issuing teacher; any
    student of that class can redeem it until it expires.
    """

    ALGORITHM = "HS256"

    def __init__(self, *, secret: str, ttl_seconds: int = 60):
        self._secret = secret
        self.ttl_seconds = int(ttl_seconds)

    def issue(self, *, class_id: Any, teacher_id: Any, now: Optional[datetime] = None) -> QrToken:
        now = now or datetime.now(timezone.utc)
        payload = {
            "type": QR_TOKEN_TYPE,
            "class_id": class_id,
            "teacher_id": teacher_id,
            "generated_at": int(now.timestamp() * 1000),
            "nonce": secrets.token_urlsafe(6),
            "iat": now,
            "exp": now + timedelta(seconds=self.ttl_seconds),
        }
        token = jwt.encode(payload, self._secret, algorithm=self.ALGORITHM)
        return QrToken(token=token, expires_in=self.ttl_seconds, class_id=class_id)

    def verify(self, token: Any) -> QrClaims:
        if not token or not isinstance(token, str):
            raise ValidationError("QR token is required", code=ErrorCode.MISSING_FIELD)
        try:
            payload = jwt.decode(
                token.strip(),
                self._secret,
                algorithms=[self.ALGORITHM],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise ValidationError("QR code has expired", code=ErrorCode.QR_TOKEN_EXPIRED)
        except jwt.InvalidTokenError:
            raise ValidationError("Invalid QR code", code=ErrorCode.INVALID_QR_TOKEN)

        if payload.get("type") != QR_TOKEN_TYPE or payload.get("class_id") in (None, ""):
            raise ValidationError("Invalid QR code", code=ErrorCode.INVALID_QR_TOKEN)

        return QrClaims(
            class_id=payload["class_id"],
            teacher_id=payload.get("teacher_id"),
            generated_at=int(payload.get("generated_at") or 0),
        )

    @staticmethod
    def render_png(data: str) -> bytes:
        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=2,
        )
        qr.add_data(data)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()
