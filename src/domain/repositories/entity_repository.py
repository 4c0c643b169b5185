"""Generic CRUD repository protocol shared by the catalogue entities."""

from typing import Any, Protocol, TypeVar

from domain.repositories.filters import ListFilters

T = TypeVar("T")


class IEntityRepository(Protocol[T]):
    """Repository interface implemented once per backend.

    Implementations raise ``RemoteServiceError`` on transport failures and
    return ``None``/``False`` when the target row does not exist.
    """

    async def list(self, filters: ListFilters | None = None) -> list[T]:
        """Rows matching all filters, newest first by ``created_at``."""
        ...

    async def get(self, id: str) -> T | None:
        """Get a row by ID."""
        ...

    async def create(self, values: dict[str, Any]) -> T:
        """Insert a row built from validated values and return it."""
        ...

    async def update(self, id: str, changes: dict[str, Any]) -> T | None:
        """Apply changes as a single mutation; None if the row is missing."""
        ...

    async def delete(self, id: str) -> bool:
        """Delete a row and report whether it existed."""
        ...
