from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class Organization:
    """A client site that employees are deployed to."""

    id: str
    short_name: str
    full_name: str
    address: str = ""
    manpower_approved_count: Optional[int] = None
    provisional_creation_date: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Organization":
        count = data.get("manpower_approved_count")
        return cls(
            id=str(data["id"]),
            short_name=str(data.get("short_name") or data["id"]),
            full_name=str(data.get("full_name") or data.get("short_name") or data["id"]),
            address=str(data.get("address") or ""),
            manpower_approved_count=int(count) if count is not None else None,
            provisional_creation_date=data.get("provisional_creation_date"),
        )
