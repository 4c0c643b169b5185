"""Pydantic schemas for Project input and filtering."""

from pydantic import BaseModel, Field

from domain.entities.project import ProjectStatus
from domain.repositories.filters import ListFilters, SearchFields

PROJECT_SEARCH_FIELDS = SearchFields(text=("title", "city"), numeric=("capacity_kw",))


class ProjectBase(BaseModel):
    """Base schema for Project."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., max_length=5000)
    capacity_kw: float = Field(..., gt=0)
    address: str
    city: str = Field(..., min_length=1)
    state: str
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class ProjectCreate(ProjectBase):
    """Schema for creating a Project. Omitted optionals get their defaults."""

    images: list[str] = Field(default_factory=list)
    installation_date: str | None = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    tags: list[str] = Field(default_factory=list)


class ProjectUpdate(BaseModel):
    """Schema for updating a Project (all fields optional)."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=5000)
    capacity_kw: float | None = Field(None, gt=0)
    address: str | None = None
    city: str | None = Field(None, min_length=1)
    state: str | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    images: list[str] | None = None
    installation_date: str | None = None
    status: ProjectStatus | None = None
    tags: list[str] | None = None


class ProjectFilters(BaseModel):
    """Catalogue search filters. Empty values mean "no filter"."""

    query: str | None = None
    city: str | None = None
    status: ProjectStatus | None = None
    min_capacity: float | None = None
    max_capacity: float | None = None
    tags: list[str] = Field(default_factory=list)

    def to_list_filters(self) -> ListFilters:
        filters = ListFilters(query=self.query)
        if self.city:
            filters.equals["city"] = self.city
        if self.status is not None:
            filters.equals["status"] = self.status.value
        if self.min_capacity is not None:
            filters.minimum["capacity_kw"] = self.min_capacity
        if self.max_capacity is not None:
            filters.maximum["capacity_kw"] = self.max_capacity
        if self.tags:
            filters.contains["tags"] = list(self.tags)
        return filters
