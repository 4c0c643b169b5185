"""Shared CRUD logic for the Supabase table repositories."""

from typing import Any, Generic, TypeVar

from domain.repositories.filters import ListFilters, SearchFields
from infrastructure.supabase.client import SupabaseClient
from infrastructure.supabase.query import encode_filters

T = TypeVar("T")


class SupabaseTableRepository(Generic[T]):
    """CRUD over one PostgREST table.

    Every mutation is a single request; the returned representation is the
    row as stored, including any embedded join named in ``select``.
    """

    table: str = ""
    select: str = "*"
    search_fields: SearchFields = SearchFields()

    def __init__(self, client: SupabaseClient) -> None:
        self._client = client

    def _to_entity(self, row: dict[str, Any]) -> T:
        raise NotImplementedError

    async def get(self, id: str) -> T | None:
        """Get a row by ID."""
        rows = await self._client.select(
            self.table, [("select", self.select), ("id", f"eq.{id}"), ("limit", "1")]
        )
        return self._to_entity(rows[0]) if rows else None

    async def create(self, values: dict[str, Any]) -> T:
        """Insert a row; the database assigns id and timestamps."""
        row = await self._client.insert(self.table, values, select=self.select)
        return self._to_entity(row)

    async def update(self, id: str, changes: dict[str, Any]) -> T | None:
        """Patch a row; None when no row has this ID."""
        rows = await self._client.update(
            self.table, [("id", f"eq.{id}")], changes, select=self.select
        )
        return self._to_entity(rows[0]) if rows else None

    async def delete(self, id: str) -> bool:
        """Delete a row and report whether it existed."""
        rows = await self._client.delete(self.table, [("id", f"eq.{id}")])
        return bool(rows)

    async def list(self, filters: ListFilters | None = None) -> list[T]:
        """List rows matching the filters, newest first."""
        params = [
            ("select", self.select),
            *encode_filters(filters, self.search_fields),
            ("order", "created_at.desc"),
        ]
        rows = await self._client.select(self.table, params)
        return [self._to_entity(row) for row in rows]
