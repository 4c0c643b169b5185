"""In-memory implementation of Project repository."""

from typing import Any

from domain.entities.project import Project
from domain.schemas.project import PROJECT_SEARCH_FIELDS
from infrastructure.memory.repositories.memory_base_repo import InMemoryTableRepository


class InMemoryProjectRepository(InMemoryTableRepository[Project]):
    """In-memory implementation of IProjectRepository."""

    search_fields = PROJECT_SEARCH_FIELDS

    def _table(self) -> dict[str, Project]:
        return self._dataset.projects

    def _to_entity(self, row: dict[str, Any]) -> Project:
        return Project.from_row(row)
