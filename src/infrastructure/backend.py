"""Backend selection: remote Supabase or the in-memory substitute."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

import httpx
import structlog

from core.config import Settings
from infrastructure.auth.supabase_auth import SupabaseAuthClient
from infrastructure.storage.local_store import IKeyValueStore
from infrastructure.supabase.client import SupabaseClient

logger = structlog.get_logger()


class BackendMode(StrEnum):
    """Which persistence service the process talks to."""

    REMOTE = "remote"
    MEMORY = "memory"


@dataclass(frozen=True)
class Backend:
    """Mode flag plus client handles, built once at start-up and then read-only."""

    settings: Settings
    mode: BackendMode
    http: Optional[httpx.AsyncClient] = None
    rest: Optional[SupabaseClient] = None
    auth: Optional[SupabaseAuthClient] = None

    @property
    def is_remote(self) -> bool:
        return self.mode == BackendMode.REMOTE

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool, if any."""
        if self.http is not None:
            await self.http.aclose()


def create_backend(
    settings: Settings,
    store: IKeyValueStore,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Backend:
    """
    Select the backend from configuration.

    Remote mode needs both the Supabase URL and the anon key; if either is
    missing the in-memory substitute is used.

    Args:
        settings: Application settings
        store: Local store for the persisted auth session
        transport: Optional httpx transport (tests pass a mock)
    """
    if not settings.has_remote_backend:
        logger.warning(
            "memory_backend_selected",
            reason="SUPABASE_URL or SUPABASE_ANON_KEY not configured",
        )
        return Backend(settings=settings, mode=BackendMode.MEMORY)

    http = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        transport=transport,
    )
    rest = SupabaseClient(http, settings.supabase_rest_url, settings.supabase_anon_key)
    auth = SupabaseAuthClient(
        http,
        settings.supabase_auth_url,
        settings.supabase_anon_key,
        store,
        rest_client=rest,
    )
    logger.info("remote_backend_selected", supabase_url=settings.supabase_url)
    return Backend(settings=settings, mode=BackendMode.REMOTE, http=http, rest=rest, auth=auth)
