"""Pydantic schemas for Inquiry input and filtering."""

from pydantic import BaseModel, Field

from domain.entities.inquiry import InquiryStatus
from domain.repositories.filters import ListFilters, SearchFields

INQUIRY_SEARCH_FIELDS = SearchFields(text=("name", "email", "message"))


class InquiryCreate(BaseModel):
    """Schema for submitting an Inquiry. New inquiries always start as ``new``."""

    project_id: str | None = None
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    phone: str = Field(..., max_length=50)
    message: str = Field(..., min_length=1, max_length=5000)


class InquiryUpdate(BaseModel):
    """Schema for the admin-side inquiry workflow."""

    status: InquiryStatus | None = None
    notes: str | None = None


class InquiryFilters(BaseModel):
    """Inquiry list filters."""

    query: str | None = None
    status: InquiryStatus | None = None
    project_id: str | None = None

    def to_list_filters(self) -> ListFilters:
        filters = ListFilters(query=self.query)
        if self.status is not None:
            filters.equals["status"] = self.status.value
        if self.project_id:
            filters.equals["project_id"] = self.project_id
        return filters
