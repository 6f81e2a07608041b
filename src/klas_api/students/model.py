from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a row of `students`.

    `raw` keeps the full row so responses can echo columns this layer does not model.
    """

    id: int
    nama: Optional[str] = None
    nisn: Optional[str] = None
    kelas: Optional[Any] = None
    user_id: Optional[str] = None
    avatar_path: Optional[str] = None
    last_status: Optional[str] = None
    last_date: Optional[str] = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Student":
        return cls(
            id=int(row["id"]),
            nama=row.get("nama"),
            nisn=row.get("nisn"),
            kelas=row.get("kelas"),
            user_id=row.get("user_id"),
            avatar_path=row.get("avatar_path"),
            last_status=row.get("last_status"),
            last_date=row.get("last_date"),
            raw=dict(row),
        )

    def to_dict(self) -> dict[str, Any]:
        if self.raw:
            return dict(self.raw)
        return {
            "id": self.id,
            "nama": self.nama,
            "nisn": self.nisn,
            "kelas": self.kelas,
            "user_id": self.user_id,
            "avatar_path": self.avatar_path,
        }
