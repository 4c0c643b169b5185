"""Profile lookup bounded by a timeout and de-duplicated per identity."""

from typing import Optional

import structlog

from core.concurrency import SingleFlight, race_with_timeout
from core.exceptions import OperationTimeoutError
from domain.entities.profile import Profile
from domain.repositories.profile_repository import IProfileRepository

logger = structlog.get_logger()

DEFAULT_PROFILE_TIMEOUT_SECONDS = 10.0


class ProfileResolver:
    """Resolves the Profile for an identity, or None when it cannot be had.

    Concurrent resolutions for the same identity share one lookup. A slow
    or failing lookup resolves to None after ``timeout`` seconds; it is
    never cancelled and its late result is dropped.
    """

    def __init__(
        self,
        profiles: Optional[IProfileRepository],
        timeout: float = DEFAULT_PROFILE_TIMEOUT_SECONDS,
    ) -> None:
        self._profiles = profiles
        self._timeout = timeout
        self._in_flight: SingleFlight[Optional[Profile]] = SingleFlight()

    @property
    def timeout(self) -> float:
        return self._timeout

    def is_resolving(self, identity_id: str) -> bool:
        """Whether a lookup for this identity is still running."""
        return identity_id in self._in_flight

    async def resolve(
        self,
        identity_id: str,
        timeout: Optional[float] = None,
        *,
        force: bool = False,
    ) -> Optional[Profile]:
        """
        Resolve a profile.

        Args:
            identity_id: Identity whose profile to load
            timeout: Upper bound in seconds (defaults to the resolver's)
            force: Start a new lookup even if one is already running

        Returns:
            The Profile, or None on timeout, failure or missing row
        """
        profiles = self._profiles
        if profiles is None:
            return None

        limit = self._timeout if timeout is None else timeout
        task = self._in_flight.start(
            identity_id, lambda: profiles.get(identity_id), force=force
        )

        try:
            return await race_with_timeout(task, limit, name="profile fetch")
        except OperationTimeoutError:
            logger.warning(
                "profile_fetch_timed_out", identity_id=identity_id, timeout=limit
            )
            return None
        except Exception as e:
            logger.warning(
                "profile_fetch_failed",
                identity_id=identity_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None
