"""Project service: catalogue CRUD."""

from domain.entities.project import Project
from domain.repositories.project_repository import IProjectRepository
from domain.schemas.project import ProjectCreate, ProjectFilters, ProjectUpdate
from domain.services.entity_service import EntityService


class ProjectService(EntityService[Project]):
    """Service layer for Project business logic."""

    entity_name = "project"
    create_schema = ProjectCreate
    update_schema = ProjectUpdate
    filter_schema = ProjectFilters
    nullable_fields = frozenset({"installation_date"})

    def __init__(self, repository: IProjectRepository) -> None:
        super().__init__(repository)
