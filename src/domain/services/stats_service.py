"""Dashboard statistics service."""

from domain.entities.stats import DashboardStats
from domain.repositories.stats_repository import IStatsRepository
from domain.services.entity_service import log_failure


class StatsService:
    """Computes dashboard stats, falling back to the last good value."""

    def __init__(self, repository: IStatsRepository) -> None:
        self._repository = repository
        self.current = DashboardStats()

    async def compute(self) -> DashboardStats:
        try:
            self.current = await self._repository.compute()
        except Exception as e:
            log_failure("stats", "compute", e)
        return self.current
