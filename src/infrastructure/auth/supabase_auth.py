"""Supabase (GoTrue) authentication client.

Sessions are persisted in the local store under ``SESSION_STORAGE_KEY`` as
JSON. Access tokens are Supabase-issued JWTs:

    {
        "sub": "user-uuid",
        "email": "user@example.com",
        "role": "authenticated",
        "exp": 1234567890,
        "user_metadata": { "full_name": "Jane" }
    }

Only the ``exp`` claim is read here (unverified); signature checks are the
service's job.
"""

import json
import time
from typing import Any, Optional

import httpx
import structlog
from jose import JWTError, jwt

from core.exceptions import (
    ErrorCode,
    InvalidCredentialsError,
    RemoteServiceError,
    SessionExpiredError,
)
from infrastructure.auth.provider import (
    AuthChangeEvent,
    AuthSession,
    AuthStateListener,
    AuthSubscription,
    AuthUser,
)
from infrastructure.storage.local_store import IKeyValueStore
from infrastructure.supabase.client import SupabaseClient

logger = structlog.get_logger()

SESSION_STORAGE_KEY = "sb-auth-token"

# Refresh a little before the token actually expires
EXPIRY_MARGIN_SECONDS = 10


def _token_expiry(access_token: str) -> int:
    """``exp`` claim of an access token, or 0 when it cannot be read."""
    try:
        claims = jwt.get_unverified_claims(access_token)
    except JWTError:
        return 0
    exp = claims.get("exp")
    return int(exp) if isinstance(exp, (int, float)) else 0


def session_from_payload(payload: dict[str, Any]) -> AuthSession:
    """Build a session from a GoTrue token response or a stored payload."""
    access_token = payload["access_token"]
    expires_at = payload.get("expires_at")
    if not expires_at:
        expires_in = payload.get("expires_in")
        expires_at = int(time.time()) + int(expires_in) if expires_in else _token_expiry(access_token)
    return AuthSession(
        access_token=access_token,
        refresh_token=payload.get("refresh_token") or "",
        expires_at=int(expires_at),
        user=AuthUser.from_payload(payload["user"]),
    )


class SupabaseAuthClient:
    """GoTrue client with persisted sessions and local change events.

    Listeners are called synchronously, in registration order, right after
    the session changes.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        auth_url: str,
        anon_key: str,
        store: IKeyValueStore,
        rest_client: SupabaseClient | None = None,
    ) -> None:
        self._http = http
        self._auth_url = auth_url.rstrip("/")
        self._anon_key = anon_key
        self._store = store
        self._rest_client = rest_client
        self._listeners: list[AuthStateListener] = []
        self._session: AuthSession | None = None

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def on_auth_state_change(self, listener: AuthStateListener) -> AuthSubscription:
        """Register a synchronous session change listener."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return AuthSubscription(_remove)

    def _emit(self, event: AuthChangeEvent, session: Optional[AuthSession]) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, session)
            except Exception:
                logger.exception("auth_listener_failed", auth_event=event.value)

    # ------------------------------------------------------------------
    # Session persistence
    # ------------------------------------------------------------------

    def _install(self, session: Optional[AuthSession]) -> None:
        self._session = session
        if session is None:
            self._store.remove_item(SESSION_STORAGE_KEY)
        else:
            self._store.set_item(SESSION_STORAGE_KEY, json.dumps(session.to_payload()))
        if self._rest_client is not None:
            self._rest_client.set_access_token(session.access_token if session else None)

    def _load_persisted(self) -> Optional[AuthSession]:
        raw = self._store.get_item(SESSION_STORAGE_KEY)
        if not raw:
            return None
        try:
            return session_from_payload(json.loads(raw))
        except (KeyError, TypeError, ValueError):
            logger.warning("persisted_session_unreadable")
            self._store.remove_item(SESSION_STORAGE_KEY)
            return None

    # ------------------------------------------------------------------
    # GoTrue calls
    # ------------------------------------------------------------------

    async def _post(
        self,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
        access_token: str | None = None,
    ) -> httpx.Response:
        headers = {
            "apikey": self._anon_key,
            "Authorization": f"Bearer {access_token or self._anon_key}",
        }
        try:
            return await self._http.post(
                f"{self._auth_url}/{path}", params=params, json=json, headers=headers
            )
        except httpx.HTTPError as e:
            raise RemoteServiceError(
                f"Auth request {path} failed: {e}",
                error_code=ErrorCode.TRANSPORT_ERROR,
            ) from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.reason_phrase
        if not isinstance(body, dict):
            return response.reason_phrase
        return str(
            body.get("error_description")
            or body.get("msg")
            or body.get("message")
            or body.get("error")
            or response.reason_phrase
        )

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Exchange email/password for a session and announce SIGNED_IN."""
        response = await self._post(
            "token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        if response.status_code in (400, 401, 422):
            raise InvalidCredentialsError(self._error_message(response))
        if response.status_code >= 400:
            raise RemoteServiceError(
                self._error_message(response), status_code=response.status_code
            )

        session = session_from_payload(response.json())
        self._install(session)
        logger.info("auth_signed_in", user_id=session.user.id)
        self._emit(AuthChangeEvent.SIGNED_IN, session)
        return session

    async def refresh_session(self) -> AuthSession:
        """Trade the refresh token for a new session and announce TOKEN_REFRESHED."""
        current = self._session or self._load_persisted()
        if current is None or not current.refresh_token:
            raise SessionExpiredError("No refresh token available")

        response = await self._post(
            "token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": current.refresh_token},
        )
        if 400 <= response.status_code < 500:
            raise SessionExpiredError(self._error_message(response))
        if response.status_code >= 400:
            raise RemoteServiceError(
                self._error_message(response), status_code=response.status_code
            )

        session = session_from_payload(response.json())
        self._install(session)
        self._emit(AuthChangeEvent.TOKEN_REFRESHED, session)
        return session

    async def get_session(self) -> Optional[AuthSession]:
        """Persisted session, refreshed first when its token has expired."""
        session = self._session or self._load_persisted()
        if session is None:
            return None

        if session.expires_at - EXPIRY_MARGIN_SECONDS > time.time():
            self._install(session)
            return session

        self._session = session
        try:
            return await self.refresh_session()
        except SessionExpiredError:
            logger.info("persisted_session_expired", user_id=session.user.id)
            self._install(None)
            return None

    async def sign_out(self) -> None:
        """Revoke the session remotely, then clear it locally and announce SIGNED_OUT.

        Local state is cleared even when the remote call fails; that failure
        is re-raised afterwards.
        """
        session = self._session or self._load_persisted()
        try:
            if session is not None:
                response = await self._post("logout", access_token=session.access_token)
                # 401/404 mean the token is already gone
                if response.status_code >= 400 and response.status_code not in (401, 403, 404):
                    raise RemoteServiceError(
                        self._error_message(response), status_code=response.status_code
                    )
        finally:
            self._install(None)
            logger.info("auth_signed_out")
            self._emit(AuthChangeEvent.SIGNED_OUT, None)
