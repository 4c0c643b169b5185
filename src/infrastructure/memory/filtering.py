"""Evaluate ListFilters against in-memory entities."""

from collections.abc import Iterable
from typing import Any, TypeVar

from domain.entities.clock import parse_timestamp
from domain.repositories.filters import ListFilters, SearchFields, normalize_query, numeric_query

T = TypeVar("T")


def _matches_query(record: Any, query: str, fields: SearchFields) -> bool:
    needle = query.lower()
    for name in fields.text:
        value = getattr(record, name, None)
        if value is not None and needle in str(value).lower():
            return True

    number = numeric_query(query)
    if number is None:
        return False
    for name in fields.numeric:
        value = getattr(record, name, None)
        if value is not None and float(value) == number:
            return True
    return False


def matches(record: Any, filters: ListFilters, fields: SearchFields) -> bool:
    """True when the record satisfies every filter group."""
    query = normalize_query(filters.query)
    if query is not None and not _matches_query(record, query, fields):
        return False

    for name, expected in filters.equals.items():
        if getattr(record, name, None) != expected:
            return False

    for name, bound in filters.minimum.items():
        value = getattr(record, name, None)
        if value is None or value < bound:
            return False

    for name, bound in filters.maximum.items():
        value = getattr(record, name, None)
        if value is None or value > bound:
            return False

    for name, required in filters.contains.items():
        value = getattr(record, name, None) or []
        if not set(required).issubset(value):
            return False

    return True


def filter_and_sort(
    records: Iterable[T], filters: ListFilters | None, fields: SearchFields
) -> list[T]:
    """Apply filters, then order newest-first by ``created_at``."""
    selected = [r for r in records if filters is None or matches(r, filters, fields)]
    selected.sort(key=lambda r: parse_timestamp(getattr(r, "created_at", None)), reverse=True)
    return selected
