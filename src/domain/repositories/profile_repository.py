"""Profile repository protocol."""

from typing import Protocol

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for identity profiles."""

    async def get(self, identity_id: str) -> Profile | None:
        """Get the profile for an identity, or None if there is none."""
        ...
