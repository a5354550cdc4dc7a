from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class Notification:
    id: str
    user_id: str
    type: str
    message: str
    created_at: str
    is_read: bool = False
    link_to: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Notification":
        return cls(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            type=str(data.get("type") or "info"),
            message=str(data.get("message") or ""),
            created_at=str(data.get("created_at") or ""),
            is_read=bool(data.get("is_read", False)),
            link_to=data.get("link_to"),
        )
