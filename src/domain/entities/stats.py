"""Dashboard statistics (derived, never stored)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DashboardStats:
    """Aggregates shown on the admin dashboard."""

    total_projects: int = 0
    total_capacity: float = 0
    pending_inquiries: int = 0
    pending_reviews: int = 0
    total_inquiries: int = 0
    approved_reviews: int = 0
