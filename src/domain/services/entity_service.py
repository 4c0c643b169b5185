"""Generic CRUD facade shared by the catalogue entity services."""

from collections.abc import Mapping
from typing import Any, ClassVar, Generic, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from core.exceptions import AppException
from domain.entities.clock import utc_now_iso
from domain.repositories.entity_repository import IEntityRepository
from domain.repositories.filters import ListFilters

logger = structlog.get_logger()

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)

Payload = BaseModel | Mapping[str, Any]


def log_failure(entity: str, operation: str, error: Exception, **context: Any) -> None:
    """Log a failure absorbed at the service boundary."""
    if isinstance(error, AppException):
        logger.warning(
            "entity_operation_failed",
            entity=entity,
            operation=operation,
            error_code=error.error_code.value,
            error=error.message,
            **context,
        )
    else:
        logger.exception(
            "entity_operation_failed", entity=entity, operation=operation, **context
        )


def validate_payload(schema: type[ModelT], data: Payload) -> ModelT:
    """Accept a schema instance as-is, validate anything else against it."""
    if isinstance(data, schema):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    return schema.model_validate(data)


def changes_from(
    payload: BaseModel, nullable: frozenset[str] = frozenset()
) -> dict[str, Any]:
    """Fields the caller actually set, minus ``None`` for non-nullable columns."""
    changes = {
        key: value
        for key, value in payload.model_dump(mode="json", exclude_unset=True).items()
        if value is not None or key in nullable
    }
    changes["updated_at"] = utc_now_iso()
    return changes


class EntityService(Generic[T]):
    """Service layer for one entity type over an injected repository.

    Failures never escape: they are logged and turned into ``None``,
    ``False`` or the unchanged ``items`` mirror. Every successful mutation
    re-fetches ``items`` with the filters of the last fetch.
    """

    entity_name: ClassVar[str] = "entity"
    create_schema: ClassVar[type[BaseModel]]
    update_schema: ClassVar[type[BaseModel]]
    filter_schema: ClassVar[type[BaseModel] | None] = None
    # Columns that may be explicitly cleared with None
    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, repository: IEntityRepository[T]) -> None:
        self._repository = repository
        self.items: list[T] = []
        self.is_loading = False
        self._last_filters: ListFilters | None = None

    def _list_filters(self, filters: Any) -> ListFilters | None:
        if filters is None or isinstance(filters, ListFilters):
            return filters
        if isinstance(filters, Mapping) and self.filter_schema is not None:
            filters = self.filter_schema.model_validate(filters)
        return filters.to_list_filters()

    def _create_values(self, payload: BaseModel) -> dict[str, Any]:
        """Column values for a new row; subclasses force server-side defaults."""
        return payload.model_dump(mode="json")

    async def fetch(self, filters: Any = None) -> list[T]:
        """
        Fetch rows into ``items``.

        Args:
            filters: A filter model, a mapping for ``filter_schema``,
                a ListFilters or None

        Returns:
            The refreshed mirror, or the previous one if the fetch failed
        """
        try:
            list_filters = self._list_filters(filters)
        except ValidationError as e:
            log_failure(self.entity_name, "list", e)
            return self.items

        self.is_loading = True
        try:
            self.items = await self._repository.list(list_filters)
            self._last_filters = list_filters
        except Exception as e:
            log_failure(self.entity_name, "list", e)
        finally:
            self.is_loading = False
        return self.items

    async def refresh(self) -> None:
        """Re-fetch the mirror with the last filters used."""
        await self.fetch(self._last_filters)

    async def get_by_id(self, id: str) -> T | None:
        """Get a row by ID; None if missing or on failure."""
        try:
            return await self._repository.get(id)
        except Exception as e:
            log_failure(self.entity_name, "get", e, id=id)
            return None

    async def create(self, data: Payload) -> T | None:
        """Validate and insert a row; None on validation or remote failure."""
        try:
            payload = validate_payload(self.create_schema, data)
        except ValidationError as e:
            logger.warning(
                "entity_validation_failed",
                entity=self.entity_name,
                operation="create",
                errors=e.error_count(),
            )
            return None

        try:
            created = await self._repository.create(self._create_values(payload))
        except Exception as e:
            log_failure(self.entity_name, "create", e)
            return None

        logger.info("entity_created", entity=self.entity_name, id=getattr(created, "id", None))
        await self.refresh()
        return created

    async def _apply_changes(self, id: str, changes: dict[str, Any], operation: str) -> T | None:
        try:
            updated = await self._repository.update(id, changes)
        except Exception as e:
            log_failure(self.entity_name, operation, e, id=id)
            return None

        if updated is None:
            logger.info("entity_not_found", entity=self.entity_name, operation=operation, id=id)
            return None

        await self.refresh()
        return updated

    async def update(self, id: str, data: Payload) -> T | None:
        """Merge the fields set in ``data`` onto a row; None if missing or on failure."""
        try:
            payload = validate_payload(self.update_schema, data)
        except ValidationError as e:
            logger.warning(
                "entity_validation_failed",
                entity=self.entity_name,
                operation="update",
                id=id,
                errors=e.error_count(),
            )
            return None

        return await self._apply_changes(id, changes_from(payload, self.nullable_fields), "update")

    async def delete(self, id: str) -> bool:
        """Delete a row; True only if it existed."""
        try:
            deleted = await self._repository.delete(id)
        except Exception as e:
            log_failure(self.entity_name, "delete", e, id=id)
            return False

        if deleted:
            logger.info("entity_deleted", entity=self.entity_name, id=id)
            await self.refresh()
        return deleted

    async def list(self, filters: Any = None):
        """Alias of :meth:`fetch`."""
        return await self.fetch(filters)
