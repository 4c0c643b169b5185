"""Supabase implementation of Review repository."""

from typing import Any

from domain.entities.review import Review
from domain.schemas.review import REVIEW_SEARCH_FIELDS
from infrastructure.supabase.repositories.supabase_base_repo import SupabaseTableRepository


class SupabaseReviewRepository(SupabaseTableRepository[Review]):
    """Supabase implementation of IReviewRepository."""

    table = "reviews"
    select = "*,project:projects(title,city)"
    search_fields = REVIEW_SEARCH_FIELDS

    def _to_entity(self, row: dict[str, Any]) -> Review:
        return Review.from_row(row)
