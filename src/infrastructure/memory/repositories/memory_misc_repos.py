"""In-memory settings, stats and profile repositories."""

import copy
from dataclasses import asdict
from typing import Any

from domain.entities.clock import utc_now_iso
from domain.entities.inquiry import InquiryStatus
from domain.entities.profile import Profile
from domain.entities.site_settings import SETTINGS_ID, SiteSettings
from domain.entities.stats import DashboardStats
from infrastructure.memory.dataset import InMemoryDataset


class InMemorySettingsRepository:
    """In-memory implementation of ISettingsRepository."""

    def __init__(self, dataset: InMemoryDataset) -> None:
        self._dataset = dataset

    async def get(self) -> SiteSettings | None:
        """Get the settings singleton."""
        return copy.deepcopy(self._dataset.settings)

    async def update(self, changes: dict[str, Any]) -> SiteSettings | None:
        """Merge changes onto the singleton."""
        row = asdict(self._dataset.settings)
        row.update(changes)
        row["id"] = SETTINGS_ID
        row["updated_at"] = changes.get("updated_at") or utc_now_iso()
        self._dataset.settings = SiteSettings.from_row(row)
        return copy.deepcopy(self._dataset.settings)


class InMemoryStatsRepository:
    """Dashboard aggregates computed from a single snapshot of the dataset."""

    def __init__(self, dataset: InMemoryDataset) -> None:
        self._dataset = dataset

    async def compute(self) -> DashboardStats:
        """Aggregate without suspending, so no mutation can interleave."""
        projects = list(self._dataset.projects.values())
        reviews = list(self._dataset.reviews.values())
        inquiries = list(self._dataset.inquiries.values())

        return DashboardStats(
            total_projects=len(projects),
            total_capacity=sum(p.capacity_kw or 0 for p in projects),
            pending_inquiries=sum(1 for i in inquiries if i.status == InquiryStatus.NEW),
            pending_reviews=sum(1 for r in reviews if not r.is_approved),
            total_inquiries=len(inquiries),
            approved_reviews=sum(1 for r in reviews if r.is_approved),
        )


class InMemoryProfileRepository:
    """Profiles held in the dataset; empty unless a test seeds one."""

    def __init__(self, dataset: InMemoryDataset) -> None:
        self._dataset = dataset

    async def get(self, identity_id: str) -> Profile | None:
        """Get the profile for an identity."""
        profile = self._dataset.profiles.get(identity_id)
        return copy.deepcopy(profile) if profile is not None else None
