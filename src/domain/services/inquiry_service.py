"""Inquiry service: public submissions and the admin workflow."""

from typing import Any

from pydantic import BaseModel

from domain.entities.inquiry import Inquiry, InquiryStatus
from domain.repositories.inquiry_repository import IInquiryRepository
from domain.schemas.inquiry import InquiryCreate, InquiryFilters, InquiryUpdate
from domain.services.entity_service import EntityService


class InquiryService(EntityService[Inquiry]):
    """Service layer for Inquiry business logic."""

    entity_name = "inquiry"
    create_schema = InquiryCreate
    update_schema = InquiryUpdate
    filter_schema = InquiryFilters
    nullable_fields = frozenset({"notes"})

    def __init__(self, repository: IInquiryRepository) -> None:
        super().__init__(repository)

    def _create_values(self, payload: BaseModel) -> dict[str, Any]:
        values = super()._create_values(payload)
        values["status"] = InquiryStatus.NEW.value
        values["notes"] = None
        return values

    async def set_status(self, id: str, status: InquiryStatus) -> Inquiry | None:
        """Move an inquiry through the workflow."""
        return await self.update(id, InquiryUpdate(status=status))
