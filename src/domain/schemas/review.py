"""Pydantic schemas for Review input and filtering."""

from pydantic import BaseModel, Field

from domain.repositories.filters import ListFilters, SearchFields

REVIEW_SEARCH_FIELDS = SearchFields(text=("reviewer_name", "comment"))


class ReviewCreate(BaseModel):
    """Schema for submitting a Review.

    Approval state is not accepted here: every new review starts
    unapproved with no admin response.
    """

    project_id: str | None = None
    reviewer_name: str = Field(..., min_length=1, max_length=255)
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1, max_length=5000)


class ReviewUpdate(BaseModel):
    """Schema for updating a Review (all fields optional)."""

    reviewer_name: str | None = Field(None, min_length=1, max_length=255)
    rating: int | None = Field(None, ge=1, le=5)
    comment: str | None = Field(None, min_length=1, max_length=5000)
    is_approved: bool | None = None
    admin_response: str | None = None


class ReviewFilters(BaseModel):
    """Review list filters."""

    query: str | None = None
    approved: bool | None = None
    project_id: str | None = None
    min_rating: int | None = Field(None, ge=1, le=5)
    max_rating: int | None = Field(None, ge=1, le=5)

    def to_list_filters(self) -> ListFilters:
        filters = ListFilters(query=self.query)
        if self.approved is not None:
            filters.equals["is_approved"] = self.approved
        if self.project_id:
            filters.equals["project_id"] = self.project_id
        if self.min_rating is not None:
            filters.minimum["rating"] = self.min_rating
        if self.max_rating is not None:
            filters.maximum["rating"] = self.max_rating
        return filters
