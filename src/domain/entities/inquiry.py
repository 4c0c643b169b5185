"""Inquiry domain entity."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from domain.entities.clock import utc_now_iso


class InquiryStatus(StrEnum):
    """Workflow status of a customer inquiry."""

    NEW = "new"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    ARCHIVED = "archived"


@dataclass
class InquiryProject:
    """Project fields joined onto an inquiry."""

    title: str


@dataclass
class Inquiry:
    """Domain entity for a contact/quote inquiry."""

    id: str
    name: str
    email: str
    phone: str
    message: str
    project_id: str | None = None
    status: InquiryStatus = InquiryStatus.NEW
    notes: str | None = None
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)
    project: InquiryProject | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Inquiry":
        """Build an inquiry from an ``inquiries`` row, with optional embedded project."""
        joined = row.get("project")
        return cls(
            id=str(row["id"]),
            project_id=str(row["project_id"]) if row.get("project_id") else None,
            name=row["name"],
            email=row["email"],
            phone=row.get("phone") or "",
            message=row.get("message") or "",
            status=InquiryStatus(row.get("status") or InquiryStatus.NEW),
            notes=row.get("notes"),
            created_at=row.get("created_at") or utc_now_iso(),
            updated_at=row.get("updated_at") or utc_now_iso(),
            project=InquiryProject(title=joined["title"]) if joined else None,
        )
