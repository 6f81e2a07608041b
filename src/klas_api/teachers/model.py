from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Teacher:
    id: Any
    user_id: str
    raw: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Teacher":
        return cls(id=row["id"], user_id=str(row.get("user_id")), raw=dict(row))
