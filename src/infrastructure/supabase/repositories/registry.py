"""Supabase repository registry."""

from infrastructure.supabase.client import SupabaseClient
from infrastructure.supabase.repositories.supabase_inquiry_repo import SupabaseInquiryRepository
from infrastructure.supabase.repositories.supabase_misc_repos import (
    SupabaseProfileRepository,
    SupabaseSettingsRepository,
    SupabaseStatsRepository,
)
from infrastructure.supabase.repositories.supabase_project_repo import SupabaseProjectRepository
from infrastructure.supabase.repositories.supabase_review_repo import SupabaseReviewRepository


class SupabaseRepositories:
    """IRepositories backed by one shared :class:`SupabaseClient`."""

    def __init__(self, client: SupabaseClient) -> None:
        self.client = client
        self.projects = SupabaseProjectRepository(client)
        self.reviews = SupabaseReviewRepository(client)
        self.inquiries = SupabaseInquiryRepository(client)
        self.settings = SupabaseSettingsRepository(client)
        self.stats = SupabaseStatsRepository(client)
        self.profiles = SupabaseProfileRepository(client)
