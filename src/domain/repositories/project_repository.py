"""Project repository protocol."""

from typing import Protocol

from domain.entities.project import Project
from domain.repositories.entity_repository import IEntityRepository


class IProjectRepository(IEntityRepository[Project], Protocol):
    """Repository interface for Project entities."""
