"""Review repository protocol."""

from typing import Protocol

from domain.entities.review import Review
from domain.repositories.entity_repository import IEntityRepository


class IReviewRepository(IEntityRepository[Review], Protocol):
    """Repository interface for Review entities (rows carry the joined project)."""
