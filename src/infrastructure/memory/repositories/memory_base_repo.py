"""Shared CRUD logic for the in-memory repositories."""

import copy
from dataclasses import asdict
from typing import Any, Generic, TypeVar
from uuid import uuid4

from domain.entities.clock import utc_now_iso
from domain.repositories.filters import ListFilters, SearchFields
from infrastructure.memory.dataset import InMemoryDataset
from infrastructure.memory.filtering import filter_and_sort

T = TypeVar("T")


class InMemoryTableRepository(Generic[T]):
    """CRUD over one dict-backed table of an :class:`InMemoryDataset`.

    Mutations complete without suspending, so the next ``list`` sees them
    and concurrent writers simply land in order (last write wins).
    """

    search_fields: SearchFields = SearchFields()

    def __init__(self, dataset: InMemoryDataset) -> None:
        self._dataset = dataset

    def _table(self) -> dict[str, T]:
        raise NotImplementedError

    def _to_entity(self, row: dict[str, Any]) -> T:
        raise NotImplementedError

    def _present(self, record: T) -> T:
        """Copy of a stored record as handed to callers."""
        return copy.deepcopy(record)

    async def list(self, filters: ListFilters | None = None) -> list[T]:
        """List records matching the filters, newest first."""
        selected = filter_and_sort(self._table().values(), filters, self.search_fields)
        return [self._present(record) for record in selected]

    async def get(self, id: str) -> T | None:
        """Get a record by ID."""
        record = self._table().get(id)
        return self._present(record) if record is not None else None

    async def create(self, values: dict[str, Any]) -> T:
        """Insert a record, generating the id and timestamps."""
        now = utc_now_iso()
        row = {**values, "id": str(uuid4()), "created_at": now, "updated_at": now}
        record = self._to_entity(row)
        self._table()[row["id"]] = record
        return self._present(record)

    async def update(self, id: str, changes: dict[str, Any]) -> T | None:
        """Merge changes onto the stored record and refresh ``updated_at``."""
        table = self._table()
        record = table.get(id)
        if record is None:
            return None

        row = asdict(record)  # type: ignore[call-overload]
        row.update(changes)
        row["id"] = id
        row["updated_at"] = changes.get("updated_at") or utc_now_iso()
        updated = self._to_entity(row)
        table[id] = updated
        return self._present(updated)

    async def delete(self, id: str) -> bool:
        """Delete a record and report whether it existed."""
        return self._table().pop(id, None) is not None
