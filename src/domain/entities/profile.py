"""Profile domain entity."""

from dataclasses import dataclass, field
from typing import Any

from domain.entities.clock import utc_now_iso


@dataclass
class Profile:
    """Role and display attributes for an identity (synced from Supabase)."""

    id: str
    is_admin: bool = False
    full_name: str | None = None
    avatar_url: str | None = None
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Profile":
        """Build a profile from a ``profiles`` table row."""
        return cls(
            id=str(row["id"]),
            is_admin=bool(row.get("is_admin", False)),
            full_name=row.get("full_name"),
            avatar_url=row.get("avatar_url"),
            created_at=row.get("created_at") or utc_now_iso(),
            updated_at=row.get("updated_at") or utc_now_iso(),
        )
