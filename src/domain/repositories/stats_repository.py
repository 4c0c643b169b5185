"""Dashboard statistics repository protocol."""

from typing import Protocol

from domain.entities.stats import DashboardStats


class IStatsRepository(Protocol):
    """Computes dashboard aggregates from one consistent read pass."""

    async def compute(self) -> DashboardStats:
        """Count/sum across projects, reviews and inquiries."""
        ...
