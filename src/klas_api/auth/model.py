from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class AuthUser:
    """Identity resolved from a Supabase access token."""

    id: str
    email: Optional[str] = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return dict(self.raw) if self.raw else {"id": self.id, "email": self.email}
