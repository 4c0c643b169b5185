"""Supabase implementation of Project repository."""

from typing import Any

from domain.entities.project import Project
from domain.schemas.project import PROJECT_SEARCH_FIELDS
from infrastructure.supabase.repositories.supabase_base_repo import SupabaseTableRepository


class SupabaseProjectRepository(SupabaseTableRepository[Project]):
    """Supabase implementation of IProjectRepository."""

    table = "projects"
    search_fields = PROJECT_SEARCH_FIELDS

    def _to_entity(self, row: dict[str, Any]) -> Project:
        return Project.from_row(row)
