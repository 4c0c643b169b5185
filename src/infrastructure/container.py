"""Wiring: builds the backend, repositories and services once per process."""

from dataclasses import dataclass
from typing import Optional

import httpx

from core.config import Settings, get_settings
from domain.repositories.registry import IRepositories
from domain.services.inquiry_service import InquiryService
from domain.services.profile_resolver import ProfileResolver
from domain.services.project_service import ProjectService
from domain.services.review_service import ReviewService
from domain.services.session_manager import SessionManager
from domain.services.settings_service import SettingsService
from domain.services.stats_service import StatsService
from infrastructure.backend import Backend, create_backend
from infrastructure.memory.dataset import InMemoryDataset
from infrastructure.memory.repositories.registry import InMemoryRepositories
from infrastructure.storage.local_store import IKeyValueStore, LocalStore
from infrastructure.supabase.repositories.registry import SupabaseRepositories


@dataclass
class SiteContext:
    """Everything a front-end needs, sharing one backend."""

    backend: Backend
    repositories: IRepositories
    session: SessionManager
    projects: ProjectService
    reviews: ReviewService
    inquiries: InquiryService
    settings: SettingsService
    stats: StatsService

    async def aclose(self) -> None:
        self.session.close()
        await self.backend.aclose()


def build_repositories(
    backend: Backend, dataset: Optional[InMemoryDataset] = None
) -> IRepositories:
    """Pick the repository implementation matching the backend mode.

    Raises:
        ValueError: If a remote backend carries no REST client
    """
    if backend.is_remote:
        if backend.rest is None:
            raise ValueError("Remote backend has no REST client")
        return SupabaseRepositories(backend.rest)
    return InMemoryRepositories(dataset)


def create_site_context(
    settings: Optional[Settings] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    store: Optional[IKeyValueStore] = None,
    dataset: Optional[InMemoryDataset] = None,
) -> SiteContext:
    """Create the backend and every service on top of it."""
    settings = settings or get_settings()
    store = store if store is not None else LocalStore(settings.local_storage_path)

    backend = create_backend(settings, store, transport=transport)
    repositories = build_repositories(backend, dataset)

    resolver = ProfileResolver(
        repositories.profiles if backend.is_remote else None,
        timeout=settings.profile_fetch_timeout_seconds,
    )
    session = SessionManager(
        backend.auth,
        store,
        resolver,
        sign_in_timeout=settings.sign_in_timeout_seconds,
    )

    return SiteContext(
        backend=backend,
        repositories=repositories,
        session=session,
        projects=ProjectService(repositories.projects),
        reviews=ReviewService(repositories.reviews),
        inquiries=InquiryService(repositories.inquiries),
        settings=SettingsService(repositories.settings),
        stats=StatsService(repositories.stats),
    )
