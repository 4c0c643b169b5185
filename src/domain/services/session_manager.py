"""Session manager: the caller's identity, role and profile."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Optional

import structlog

from core.concurrency import race_with_timeout
from core.exceptions import AppException, AuthenticationError, InvalidCredentialsError
from domain.entities.clock import utc_now_iso
from domain.entities.identity import Identity
from domain.entities.profile import Profile
from domain.services.profile_resolver import ProfileResolver
from infrastructure.auth.provider import (
    AuthChangeEvent,
    AuthSession,
    AuthSubscription,
    AuthUser,
    IAuthClient,
)
from infrastructure.storage.local_store import IKeyValueStore

logger = structlog.get_logger()

DEMO_ADMIN_ID = "mock-admin"
DEMO_ADMIN_EMAIL = "admin@solarsystems.in"
DEMO_ADMIN_PASSWORD = "admin123"
DEMO_ADMIN_NAME = "Demo Admin"
DEMO_SESSION_KEY = "mock_admin_session"

DEFAULT_SIGN_IN_TIMEOUT_SECONDS = 15.0

SessionListener = Callable[[], None]


class SessionState(StrEnum):
    """Lifecycle of the caller's session."""

    BOOTING = "booting"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING_PROFILE = "authenticating_profile"
    AUTHENTICATED = "authenticated"
    SIGNED_OUT = "signed_out"


@dataclass(frozen=True)
class SignInResult:
    """Outcome of ``sign_in``. Errors are returned here, never raised."""

    error: Optional[AppException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _identity_from_user(user: AuthUser) -> Identity:
    # Provisional until the profile resolves
    return Identity(id=user.id, email=user.email, is_admin=False, full_name=user.full_name)


def _demo_identity() -> Identity:
    return Identity(
        id=DEMO_ADMIN_ID, email=DEMO_ADMIN_EMAIL, is_admin=True, full_name=DEMO_ADMIN_NAME
    )


def _demo_profile() -> Profile:
    now = utc_now_iso()
    return Profile(
        id=DEMO_ADMIN_ID,
        is_admin=True,
        full_name=DEMO_ADMIN_NAME,
        avatar_url=None,
        created_at=now,
        updated_at=now,
    )


class SessionManager:
    """Owns the caller's Identity and Profile.

    With an auth client the session comes from the remote service and the
    profile is resolved in the background after every identity change.
    Without one (``auth=None``) a single demo admin account is accepted and
    remembered through a flag in the local store.

    Profile results are tagged with the identity generation current when
    the lookup started. A result arriving after the identity changed is
    dropped.
    """

    def __init__(
        self,
        auth: Optional[IAuthClient],
        store: IKeyValueStore,
        resolver: ProfileResolver,
        sign_in_timeout: float = DEFAULT_SIGN_IN_TIMEOUT_SECONDS,
    ) -> None:
        self._auth = auth
        self._store = store
        self._resolver = resolver
        self._sign_in_timeout = sign_in_timeout

        self._identity: Optional[Identity] = None
        self._profile: Optional[Profile] = None
        self._state = SessionState.BOOTING
        self._is_loading = True

        self._generation = 0
        self._resolved_for: Optional[str] = None
        # (identity id, generation) whose profile lookup has been applied
        self._profile_applied_for: Optional[tuple[str, int]] = None
        self._background: set[asyncio.Task[None]] = set()
        self._listeners: list[SessionListener] = []
        self._subscription: Optional[AuthSubscription] = None

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def profile(self) -> Optional[Profile]:
        return self._profile

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_admin(self) -> bool:
        """True only when the identity or a resolved profile says so."""
        identity_admin = self._identity is not None and self._identity.is_admin
        profile_admin = self._profile is not None and self._profile.is_admin
        return identity_admin or profile_admin

    @property
    def is_remote(self) -> bool:
        return self._auth is not None

    @property
    def generation(self) -> int:
        return self._generation

    def add_listener(self, listener: SessionListener) -> Callable[[], None]:
        """Call ``listener`` after every state change; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("session_listener_failed")

    # ------------------------------------------------------------------
    # Identity bookkeeping (synchronous)
    # ------------------------------------------------------------------

    def _install_identity(self, identity: Identity) -> None:
        """Record the identity; a different id starts a new generation."""
        current = self._identity
        if current is not None and current.id == identity.id:
            self._identity = replace(
                identity, is_admin=current.is_admin or identity.is_admin
            )
        else:
            self._generation += 1
            self._identity = identity
            self._profile = None

        if self._profile is None and not identity.is_admin:
            self._state = SessionState.AUTHENTICATING_PROFILE
        else:
            self._state = SessionState.AUTHENTICATED

    def _clear_identity(self, state: SessionState) -> None:
        self._generation += 1
        self._identity = None
        self._profile = None
        self._resolved_for = None
        self._state = state
        self._is_loading = False

    def _install_demo_session(self) -> None:
        self._generation += 1
        self._identity = _demo_identity()
        self._profile = _demo_profile()
        self._resolved_for = DEMO_ADMIN_ID
        self._state = SessionState.AUTHENTICATED
        self._is_loading = False

    def _apply_profile(
        self, identity_id: str, generation: int, profile: Optional[Profile]
    ) -> bool:
        """Apply a resolved profile unless the identity moved on meanwhile."""
        identity = self._identity
        if generation != self._generation or identity is None or identity.id != identity_id:
            logger.info(
                "stale_profile_discarded",
                identity_id=identity_id,
                generation=generation,
                current_generation=self._generation,
            )
            return False

        self._profile_applied_for = (identity_id, generation)
        self._profile = profile
        self._identity = replace(identity, is_admin=profile.is_admin if profile else False)
        self._state = SessionState.AUTHENTICATED
        self._is_loading = False
        self._notify()
        return True

    def _handle_auth_event(
        self, event: AuthChangeEvent, session: Optional[AuthSession]
    ) -> None:
        """Auth change listener. Runs to completion without awaiting."""
        logger.debug("auth_event_received", auth_event=event.value)
        if session is None:
            state = (
                SessionState.SIGNED_OUT
                if event == AuthChangeEvent.SIGNED_OUT
                else SessionState.UNAUTHENTICATED
            )
            self._clear_identity(state)
            self._notify()
            return

        self._install_identity(_identity_from_user(session.user))
        self._resolved_for = None
        self._schedule_profile_resolution(session.user.id)
        self._notify()

    def _schedule_profile_resolution(self, identity_id: str) -> None:
        """Start a background lookup unless one already ran for this identity."""
        if self._resolved_for == identity_id:
            return
        self._resolved_for = identity_id

        task = asyncio.get_running_loop().create_task(
            self._resolve_in_background(identity_id, self._generation)
        )
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _resolve_in_background(self, identity_id: str, generation: int) -> None:
        profile = await self._resolver.resolve(identity_id)
        self._apply_profile(identity_id, generation, profile)

    async def wait_for_profile(self) -> None:
        """Wait until every scheduled background lookup has settled."""
        while self._background:
            await asyncio.wait(set(self._background))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def bootstrap(self) -> None:
        """Restore the session at start-up and subscribe to auth changes."""
        if self._auth is None:
            if self._store.get_item(DEMO_SESSION_KEY) == "1":
                self._install_demo_session()
            else:
                self._clear_identity(SessionState.UNAUTHENTICATED)
            logger.info("session_bootstrapped", mode="memory", state=self._state.value)
            self._notify()
            return

        if self._subscription is None:
            self._subscription = self._auth.on_auth_state_change(self._handle_auth_event)

        try:
            session = await self._auth.get_session()
        except Exception as e:
            logger.warning("session_restore_failed", error=str(e), error_type=type(e).__name__)
            session = None

        if session is None:
            if self._identity is None:
                self._clear_identity(SessionState.UNAUTHENTICATED)
                self._notify()
        else:
            self._install_identity(_identity_from_user(session.user))
            self._schedule_profile_resolution(session.user.id)
            self._notify()
            await self.wait_for_profile()

        self._is_loading = False
        logger.info("session_bootstrapped", mode="remote", state=self._state.value)
        self._notify()

    async def sign_in(self, email: str, password: str) -> SignInResult:
        """Sign in with email and password. Never raises."""
        if self._auth is None:
            valid = (
                email.strip().lower() == DEMO_ADMIN_EMAIL and password == DEMO_ADMIN_PASSWORD
            )
            if not valid:
                return self._sign_in_failed(InvalidCredentialsError())
            self._install_demo_session()
            self._store.set_item(DEMO_SESSION_KEY, "1")
            logger.info("sign_in_succeeded", identity_id=DEMO_ADMIN_ID, mode="memory")
            self._notify()
            return SignInResult()

        self._is_loading = True
        self._notify()

        try:
            session = await race_with_timeout(
                self._auth.sign_in_with_password(email, password),
                self._sign_in_timeout,
                name="sign in",
            )
        except AppException as e:
            return self._sign_in_failed(e)
        except Exception as e:
            logger.exception("sign_in_unexpected_error")
            return self._sign_in_failed(AuthenticationError(str(e)))

        user = session.user
        if self._profile_applied_for == (user.id, self._generation):
            # The SIGNED_IN event already resolved and applied this profile
            applied = True
            self._is_loading = False
        else:
            self._install_identity(_identity_from_user(user))
            # Join the lookup the SIGNED_IN event may already have started
            self._resolved_for = user.id
            generation = self._generation
            profile = await self._resolver.resolve(user.id)
            applied = self._apply_profile(user.id, generation, profile)

        if not applied:
            return self._sign_in_failed(
                AuthenticationError("Sign-in was superseded by another session change")
            )

        logger.info(
            "sign_in_succeeded", identity_id=user.id, mode="remote", is_admin=self.is_admin
        )
        return SignInResult()

    def _sign_in_failed(self, error: AppException) -> SignInResult:
        logger.warning(
            "sign_in_failed", error_code=error.error_code.value, error=error.message
        )
        if self._identity is None:
            self._state = SessionState.UNAUTHENTICATED
        self._is_loading = False
        self._notify()
        return SignInResult(error=error)

    async def sign_out(self) -> None:
        """End the session. Local state is cleared even if the remote call fails."""
        if self._auth is None:
            self._store.remove_item(DEMO_SESSION_KEY)
        else:
            try:
                await self._auth.sign_out()
            except Exception as e:
                logger.warning("sign_out_failed", error=str(e), error_type=type(e).__name__)

        self._clear_identity(SessionState.SIGNED_OUT)
        logger.info("signed_out")
        self._notify()

    async def refresh_profile(self) -> Optional[Profile]:
        """Re-fetch the current identity's profile, bypassing single-flight."""
        identity = self._identity
        if identity is None or self._auth is None:
            return self._profile

        self._resolved_for = identity.id
        generation = self._generation
        profile = await self._resolver.resolve(identity.id, force=True)
        self._apply_profile(identity.id, generation, profile)
        return self._profile

    def close(self) -> None:
        """Stop listening to auth changes."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
