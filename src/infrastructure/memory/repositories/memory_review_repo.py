"""In-memory implementation of Review repository."""

import copy
from typing import Any

from domain.entities.review import Review, ReviewProject
from domain.schemas.review import REVIEW_SEARCH_FIELDS
from infrastructure.memory.repositories.memory_base_repo import InMemoryTableRepository


class InMemoryReviewRepository(InMemoryTableRepository[Review]):
    """In-memory implementation of IReviewRepository."""

    search_fields = REVIEW_SEARCH_FIELDS

    def _table(self) -> dict[str, Review]:
        return self._dataset.reviews

    def _to_entity(self, row: dict[str, Any]) -> Review:
        # The joined project is resolved on read, never stored.
        row = {**row, "project": None}
        return Review.from_row(row)

    def _present(self, record: Review) -> Review:
        review = copy.deepcopy(record)
        project = self._dataset.projects.get(review.project_id) if review.project_id else None
        review.project = ReviewProject(title=project.title, city=project.city) if project else None
        return review
