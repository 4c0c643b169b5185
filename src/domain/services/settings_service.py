"""Settings service for the site-wide singleton."""

from typing import Optional

import structlog
from pydantic import ValidationError

from domain.entities.site_settings import SiteSettings
from domain.repositories.settings_repository import ISettingsRepository
from domain.schemas.site_settings import SiteSettingsUpdate
from domain.services.entity_service import Payload, changes_from, log_failure, validate_payload

logger = structlog.get_logger()


class SettingsService:
    """Reads and updates the settings row; ``current`` mirrors the last value seen."""

    def __init__(self, repository: ISettingsRepository) -> None:
        self._repository = repository
        self.current: Optional[SiteSettings] = None

    async def get(self) -> Optional[SiteSettings]:
        """Fetch the settings; keeps the previous value on failure."""
        try:
            settings = await self._repository.get()
        except Exception as e:
            log_failure("settings", "get", e)
            return self.current

        if settings is not None:
            self.current = settings
        return self.current

    async def update(self, data: Payload) -> Optional[SiteSettings]:
        """Apply a partial update; None on validation or remote failure."""
        try:
            payload = validate_payload(SiteSettingsUpdate, data)
        except ValidationError as e:
            logger.warning(
                "entity_validation_failed",
                entity="settings",
                operation="update",
                errors=e.error_count(),
            )
            return None

        try:
            updated = await self._repository.update(changes_from(payload))
        except Exception as e:
            log_failure("settings", "update", e)
            return None

        if updated is not None:
            self.current = updated
        return updated
