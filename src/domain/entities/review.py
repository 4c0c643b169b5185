"""Review domain entity."""

from dataclasses import dataclass, field
from typing import Any

from domain.entities.clock import utc_now_iso


@dataclass
class ReviewProject:
    """Project fields joined onto a review."""

    title: str
    city: str


@dataclass
class Review:
    """Domain entity for a customer review.

    Reviews are created unapproved; approval is a separate transition that
    may set ``admin_response`` at the same time.
    """

    id: str
    reviewer_name: str
    rating: int
    comment: str
    project_id: str | None = None
    is_approved: bool = False
    admin_response: str | None = None
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)
    project: ReviewProject | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Review":
        """Build a review from a ``reviews`` row, with optional embedded project."""
        joined = row.get("project")
        return cls(
            id=str(row["id"]),
            project_id=str(row["project_id"]) if row.get("project_id") else None,
            reviewer_name=row["reviewer_name"],
            rating=int(row["rating"]),
            comment=row.get("comment") or "",
            is_approved=bool(row.get("is_approved", False)),
            admin_response=row.get("admin_response"),
            created_at=row.get("created_at") or utc_now_iso(),
            updated_at=row.get("updated_at") or utc_now_iso(),
            project=ReviewProject(title=joined["title"], city=joined.get("city") or "")
            if joined
            else None,
        )
