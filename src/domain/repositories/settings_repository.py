"""Settings repository protocol."""

from typing import Any, Protocol

from domain.entities.site_settings import SiteSettings


class ISettingsRepository(Protocol):
    """Repository interface for the settings singleton."""

    async def get(self) -> SiteSettings | None:
        """Get the settings row."""
        ...

    async def update(self, changes: dict[str, Any]) -> SiteSettings | None:
        """Update the settings row and return it."""
        ...
