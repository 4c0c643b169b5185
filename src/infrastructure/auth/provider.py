"""Authentication client protocol and session types."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Optional, Protocol


@dataclass
class AuthUser:
    """Represents the user attached to an auth session."""

    id: str
    email: str
    user_metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def full_name(self) -> Optional[str]:
        return self.user_metadata.get("full_name") or None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "AuthUser":
        return cls(
            id=str(payload["id"]),
            email=payload.get("email") or "",
            user_metadata=dict(payload.get("user_metadata") or {}),
        )


@dataclass
class AuthSession:
    """Tokens plus user for a signed-in caller."""

    access_token: str
    refresh_token: str
    expires_at: int
    user: AuthUser

    def to_payload(self) -> dict[str, Any]:
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "expires_at": self.expires_at,
            "user": {
                "id": self.user.id,
                "email": self.user.email,
                "user_metadata": self.user.user_metadata,
            },
        }


class AuthChangeEvent(StrEnum):
    """Session change notifications pushed to subscribers."""

    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


AuthStateListener = Callable[[AuthChangeEvent, Optional[AuthSession]], None]


class AuthSubscription:
    """Handle returned by ``on_auth_state_change``."""

    def __init__(self, unsubscribe: Callable[[], None]) -> None:
        self._unsubscribe = unsubscribe
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._unsubscribe()


class IAuthClient(Protocol):
    """Protocol for remote authentication clients."""

    async def get_session(self) -> Optional[AuthSession]:
        """
        Return the persisted session, refreshing it if expired.

        Returns:
            AuthSession if one is available, None otherwise
        """
        ...

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """
        Exchange credentials for a session.

        Raises:
            InvalidCredentialsError: the pair was rejected
            RemoteServiceError: the service could not be reached
        """
        ...

    async def sign_out(self) -> None:
        """End the current session locally and remotely."""
        ...

    def on_auth_state_change(self, listener: AuthStateListener) -> AuthSubscription:
        """
        Register a synchronous listener for session changes.

        Args:
            listener: Called with the event and the new session (or None)

        Returns:
            Subscription whose ``unsubscribe`` removes the listener
        """
        ...
