"""Supabase settings, stats and profile repositories."""

import asyncio
from typing import Any

from domain.entities.inquiry import InquiryStatus
from domain.entities.profile import Profile
from domain.entities.site_settings import SETTINGS_ID, SiteSettings
from domain.entities.stats import DashboardStats
from infrastructure.supabase.client import SupabaseClient


class SupabaseSettingsRepository:
    """Supabase implementation of ISettingsRepository."""

    table = "settings"

    def __init__(self, client: SupabaseClient) -> None:
        self._client = client

    async def get(self) -> SiteSettings | None:
        """Get the settings singleton."""
        rows = await self._client.select(
            self.table, [("select", "*"), ("id", f"eq.{SETTINGS_ID}"), ("limit", "1")]
        )
        return SiteSettings.from_row(rows[0]) if rows else None

    async def update(self, changes: dict[str, Any]) -> SiteSettings | None:
        """Patch the settings singleton."""
        rows = await self._client.update(self.table, [("id", f"eq.{SETTINGS_ID}")], changes)
        return SiteSettings.from_row(rows[0]) if rows else None


class SupabaseStatsRepository:
    """Dashboard aggregates from concurrent count queries."""

    def __init__(self, client: SupabaseClient) -> None:
        self._client = client

    async def compute(self) -> DashboardStats:
        """Issue all count/sum queries at once and combine the results."""
        (
            total_projects,
            capacities,
            pending_inquiries,
            pending_reviews,
            total_inquiries,
            approved_reviews,
        ) = await asyncio.gather(
            self._client.count("projects"),
            self._client.select("projects", [("select", "capacity_kw")]),
            self._client.count("inquiries", [("status", f"eq.{InquiryStatus.NEW.value}")]),
            self._client.count("reviews", [("is_approved", "eq.false")]),
            self._client.count("inquiries"),
            self._client.count("reviews", [("is_approved", "eq.true")]),
        )

        return DashboardStats(
            total_projects=total_projects,
            total_capacity=sum(row.get("capacity_kw") or 0 for row in capacities),
            pending_inquiries=pending_inquiries,
            pending_reviews=pending_reviews,
            total_inquiries=total_inquiries,
            approved_reviews=approved_reviews,
        )


class SupabaseProfileRepository:
    """Supabase implementation of IProfileRepository."""

    table = "profiles"

    def __init__(self, client: SupabaseClient) -> None:
        self._client = client

    async def get(self, identity_id: str) -> Profile | None:
        """Get the profile row for an identity."""
        rows = await self._client.select(
            self.table, [("select", "*"), ("id", f"eq.{identity_id}"), ("limit", "1")]
        )
        return Profile.from_row(rows[0]) if rows else None
