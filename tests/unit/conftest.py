"""Shared fixtures for unit tests."""

from typing import Any, Optional
from unittest.mock import AsyncMock

import pytest

from domain.entities.profile import Profile
from domain.services.profile_resolver import ProfileResolver
from infrastructure.auth.provider import (
    AuthChangeEvent,
    AuthSession,
    AuthStateListener,
    AuthSubscription,
    AuthUser,
)


class MemoryKeyValueStore:
    """Dict-backed key/value store."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self.items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class FakeAuthClient:
    """Auth client double with AsyncMock operations and real listener plumbing.

    ``emit`` pushes a session change to subscribers the way the remote
    client does.
    """

    def __init__(self) -> None:
        self.get_session = AsyncMock(return_value=None)
        self.sign_in_with_password = AsyncMock()
        self.sign_out = AsyncMock(return_value=None)
        self.listeners: list[AuthStateListener] = []

    def on_auth_state_change(self, listener: AuthStateListener) -> AuthSubscription:
        self.listeners.append(listener)
        return AuthSubscription(lambda: self.listeners.remove(listener))

    def emit(self, event: AuthChangeEvent, session: Optional[AuthSession]) -> None:
        for listener in list(self.listeners):
            listener(event, session)


def make_session(
    user_id: str = "user-1",
    email: str = "owner@example.com",
    full_name: Optional[str] = "Site Owner",
) -> AuthSession:
    metadata: dict[str, Any] = {"full_name": full_name} if full_name else {}
    return AuthSession(
        access_token="access-token",
        refresh_token="refresh-token",
        expires_at=4_102_444_800,
        user=AuthUser(id=user_id, email=email, user_metadata=metadata),
    )


def make_profile(user_id: str = "user-1", is_admin: bool = False) -> Profile:
    return Profile(id=user_id, is_admin=is_admin, full_name="Site Owner")


@pytest.fixture
def kv_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def auth_client() -> FakeAuthClient:
    return FakeAuthClient()


@pytest.fixture
def profiles() -> AsyncMock:
    """Profile repository mock; returns no profile unless configured."""
    repo = AsyncMock()
    repo.get.return_value = None
    return repo


@pytest.fixture
def resolver(profiles: AsyncMock) -> ProfileResolver:
    return ProfileResolver(profiles, timeout=0.2)
