"""Project domain entity."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from domain.entities.clock import utc_now_iso


class ProjectStatus(StrEnum):
    """Lifecycle status of an installation."""

    ACTIVE = "active"
    COMPLETED = "completed"
    PENDING = "pending"


@dataclass
class Project:
    """Domain entity for a solar installation shown in the catalogue."""

    id: str
    title: str
    description: str
    capacity_kw: float
    address: str
    city: str
    state: str
    latitude: float
    longitude: float
    images: list[str] = field(default_factory=list)
    installation_date: str | None = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    tags: list[str] = field(default_factory=list)
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Project":
        """Build a project from a ``projects`` table row."""
        return cls(
            id=str(row["id"]),
            title=row["title"],
            description=row.get("description") or "",
            capacity_kw=row["capacity_kw"],
            address=row.get("address") or "",
            city=row.get("city") or "",
            state=row.get("state") or "",
            latitude=row.get("latitude") or 0.0,
            longitude=row.get("longitude") or 0.0,
            images=list(row.get("images") or []),
            installation_date=row.get("installation_date"),
            status=ProjectStatus(row.get("status") or ProjectStatus.ACTIVE),
            tags=list(row.get("tags") or []),
            created_at=row.get("created_at") or utc_now_iso(),
            updated_at=row.get("updated_at") or utc_now_iso(),
        )
