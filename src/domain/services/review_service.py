"""Review service: submissions, moderation and public testimonials."""

from typing import Any, Optional

import structlog
from pydantic import BaseModel

from domain.entities.clock import utc_now_iso
from domain.entities.review import Review
from domain.repositories.filters import ListFilters
from domain.repositories.review_repository import IReviewRepository
from domain.schemas.review import ReviewCreate, ReviewFilters, ReviewUpdate
from domain.services.entity_service import EntityService, Payload, log_failure

logger = structlog.get_logger()


class ReviewService(EntityService[Review]):
    """Service layer for Review business logic.

    ``approved_items`` mirrors the approved reviews shown publicly, next to
    the admin-side ``items`` mirror.
    """

    entity_name = "review"
    create_schema = ReviewCreate
    update_schema = ReviewUpdate
    filter_schema = ReviewFilters
    nullable_fields = frozenset({"admin_response"})

    def __init__(self, repository: IReviewRepository) -> None:
        super().__init__(repository)
        self.approved_items: list[Review] = []

    def _create_values(self, payload: BaseModel) -> dict[str, Any]:
        values = super()._create_values(payload)
        # New reviews wait for moderation
        values["is_approved"] = False
        values["admin_response"] = None
        return values

    async def fetch_approved(self) -> list[Review]:
        """Refresh the approved-reviews mirror."""
        try:
            self.approved_items = await self._repository.list(
                ListFilters(equals={"is_approved": True})
            )
        except Exception as e:
            log_failure(self.entity_name, "list_approved", e)
        return self.approved_items

    async def update(self, id: str, data: Payload) -> Review | None:
        updated = await super().update(id, data)
        if updated is not None:
            await self.fetch_approved()
        return updated

    async def delete(self, id: str) -> bool:
        deleted = await super().delete(id)
        if deleted:
            await self.fetch_approved()
        return deleted

    async def approve(self, id: str, response: Optional[str] = None) -> Review | None:
        """
        Approve a review, setting the admin response in the same mutation.

        Args:
            id: Review ID
            response: Optional public reply from the admin; blank text counts as none

        Returns:
            The approved review, or None if missing or on failure
        """
        if response is not None and not response.strip():
            response = None
        changes = {
            "is_approved": True,
            "admin_response": response,
            "updated_at": utc_now_iso(),
        }
        approved = await self._apply_changes(id, changes, "approve")
        if approved is not None:
            logger.info("review_approved", id=id, has_response=response is not None)
            await self.fetch_approved()
        return approved
